# medimatch/repos/mongo.py
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from ..core.exceptions import StoreError
from ..core.states import OPEN_STATUS, TABLES, ensure_transition


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _oid(s: str) -> Optional[ObjectId]:
    return ObjectId(s) if isinstance(s, str) and ObjectId.is_valid(s) else None


def _serialize(doc: dict) -> dict:
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return doc


def _storable(fields: dict) -> dict:
    # BSON has datetime but no date
    out = {}
    for k, v in fields.items():
        if hasattr(v, "isoformat") and not isinstance(v, datetime):
            v = v.isoformat()
        out[k] = v
    return out


class MongoStore:
    def __init__(self, uri: str, db_name: str, client: Optional[AsyncIOMotorClient] = None):
        self.client = client if client is not None else AsyncIOMotorClient(uri, tz_aware=True)
        self.db = self.client[db_name]

    def _col(self, table: str):
        if table not in TABLES:
            raise StoreError(f"Unknown table {table!r}")
        return self.db[table]

    async def ensure_indexes(self) -> None:
        for table in TABLES:
            col = self._col(table)
            existing = [ix["name"] async for ix in col.list_indexes()]
            if "open_lookup" not in existing:
                await col.create_index(
                    [("medicine_name", ASCENDING), ("status", ASCENDING), ("created_at", ASCENDING)],
                    name="open_lookup",
                )
            if "created_at_-1" not in existing:
                await col.create_index([("created_at", DESCENDING)], name="created_at_-1")

    async def create(self, table: str, fields: dict) -> dict:
        now = _utcnow()
        doc = {**_storable(fields), "status": OPEN_STATUS[table], "created_at": now, "updated_at": now}
        try:
            res = await self._col(table).insert_one(doc)
        except PyMongoError as ex:
            raise StoreError(f"insert {table}: {ex}") from ex
        doc["_id"] = res.inserted_id
        return _serialize(doc)

    async def list_all(self, table: str) -> List[dict]:
        try:
            cur = self._col(table).find().sort("created_at", DESCENDING)
            return [_serialize(d) async for d in cur]
        except PyMongoError as ex:
            raise StoreError(f"find {table}: {ex}") from ex

    async def find_open(self, table: str, medicine_name: str) -> List[dict]:
        query = {"medicine_name": medicine_name, "status": OPEN_STATUS[table]}
        try:
            cur = self._col(table).find(query).sort("created_at", ASCENDING)
            return [_serialize(d) async for d in cur]
        except PyMongoError as ex:
            raise StoreError(f"find {table}: {ex}") from ex

    async def update_status(
        self, table: str, record_id: str, status: str, expected: Optional[str] = None
    ) -> Optional[dict]:
        ensure_transition(table, status)
        _id = _oid(record_id)
        if _id is None:
            return None
        query = {"_id": _id}
        if expected is not None:
            query["status"] = expected
        try:
            doc = await self._col(table).find_one_and_update(
                query,
                {"$set": {"status": status, "updated_at": _utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as ex:
            raise StoreError(f"update {table}: {ex}") from ex
        return _serialize(doc) if doc else None

    async def close(self) -> None:
        self.client.close()
