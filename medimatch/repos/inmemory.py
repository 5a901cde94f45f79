# medimatch/repos/inmemory.py
import itertools
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from ..core.exceptions import StoreError
from ..core.states import OPEN_STATUS, TABLES, ensure_transition


def _id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryStore:
    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self.clock = clock
        self.tables: Dict[str, Dict[str, dict]] = {t: {} for t in TABLES}
        self._seq = itertools.count(1)

    def _table(self, table: str) -> Dict[str, dict]:
        try:
            return self.tables[table]
        except KeyError:
            raise StoreError(f"Unknown table {table!r}") from None

    @staticmethod
    def _public(doc: dict) -> dict:
        return {k: v for k, v in doc.items() if k != "_seq"}

    async def create(self, table: str, fields: dict) -> dict:
        rows = self._table(table)
        now = self.clock()
        doc = {
            **fields,
            "id": _id(),
            "status": OPEN_STATUS[table],
            "created_at": now,
            "updated_at": now,
            "_seq": next(self._seq),
        }
        rows[doc["id"]] = doc
        return self._public(doc)

    async def list_all(self, table: str) -> List[dict]:
        rows = sorted(self._table(table).values(), key=lambda d: (d["created_at"], d["_seq"]), reverse=True)
        return [self._public(d) for d in rows]

    async def find_open(self, table: str, medicine_name: str) -> List[dict]:
        open_status = OPEN_STATUS[table]
        rows = [
            d for d in self._table(table).values()
            if d["medicine_name"] == medicine_name and d["status"] == open_status
        ]
        rows.sort(key=lambda d: (d["created_at"], d["_seq"]))
        return [self._public(d) for d in rows]

    async def update_status(
        self, table: str, record_id: str, status: str, expected: Optional[str] = None
    ) -> Optional[dict]:
        ensure_transition(table, status)
        doc = self._table(table).get(record_id)
        if doc is None or (expected is not None and doc["status"] != expected):
            return None
        doc["status"] = status
        doc["updated_at"] = self.clock()
        return self._public(doc)

    async def close(self) -> None:
        return None
