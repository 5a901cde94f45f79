# medimatch/repos/supabase.py
import logging
from typing import List, Optional

import httpx

from ..core.exceptions import StoreError
from ..core.states import OPEN_STATUS, ensure_transition

logger = logging.getLogger(__name__)


class SupabaseStore:
    """Tables served by a hosted Supabase project through its PostgREST API.

    Every call is a single HTTP round trip; the project owns ids, default
    statuses and timestamps (see sql/schema.sql).
    """

    def __init__(self, url: str, anon_key: str, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.client = httpx.AsyncClient(
            base_url=f"{url.rstrip('/')}/rest/v1",
            headers={
                "apikey": anon_key,
                "Authorization": f"Bearer {anon_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def _send(self, method: str, table: str, *, params=None, json=None,
                    prefer: Optional[str] = None) -> list:
        headers = {"Prefer": prefer} if prefer else None
        try:
            r = await self.client.request(method, f"/{table}", params=params, json=json, headers=headers)
            r.raise_for_status()
            rows = r.json()
        except httpx.HTTPStatusError as ex:
            raise StoreError(f"{method} {table}: {ex.response.status_code} {ex.response.text}") from ex
        except httpx.HTTPError as ex:
            raise StoreError(f"{method} {table}: {ex}") from ex
        except ValueError as ex:
            raise StoreError(f"{method} {table}: invalid JSON") from ex
        logger.debug("%s %s -> %s", method, table, r.status_code)
        return rows

    async def create(self, table: str, fields: dict) -> dict:
        rows = await self._send(
            "POST", table, params={"select": "*"}, json=[_jsonable(fields)],
            prefer="return=representation",
        )
        if not rows:
            raise StoreError(f"POST {table}: no row returned")
        return rows[0]

    async def list_all(self, table: str) -> List[dict]:
        return await self._send("GET", table, params={"select": "*", "order": "created_at.desc"})

    async def find_open(self, table: str, medicine_name: str) -> List[dict]:
        params = {
            "select": "*",
            "medicine_name": f"eq.{medicine_name}",
            "status": f"eq.{OPEN_STATUS[table]}",
            "order": "created_at.asc",
        }
        return await self._send("GET", table, params=params)

    async def update_status(
        self, table: str, record_id: str, status: str, expected: Optional[str] = None
    ) -> Optional[dict]:
        ensure_transition(table, status)
        params = {"select": "*", "id": f"eq.{record_id}"}
        if expected is not None:
            params["status"] = f"eq.{expected}"
        rows = await self._send(
            "PATCH", table, params=params, json={"status": status},
            prefer="return=representation",
        )
        return rows[0] if rows else None

    async def close(self) -> None:
        await self.client.aclose()


def _jsonable(fields: dict) -> dict:
    return {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in fields.items()}
