# medimatch/repos/base.py
from typing import List, Optional, Protocol


class RecordStore(Protocol):
    """Data access used by the API; one instance per process.

    Records are plain dicts with at least `id`, `medicine_name`, `status`,
    `created_at` and `updated_at`.
    """

    async def create(self, table: str, fields: dict) -> dict: ...

    async def list_all(self, table: str) -> List[dict]:
        """All rows of `table`, newest first."""
        ...

    async def find_open(self, table: str, medicine_name: str) -> List[dict]:
        """Open rows with exactly this medicine name, oldest first."""
        ...

    async def update_status(
        self, table: str, record_id: str, status: str, expected: Optional[str] = None
    ) -> Optional[dict]:
        """Set `status` on one row; None if no row matched id (and `expected`)."""
        ...

    async def close(self) -> None: ...
