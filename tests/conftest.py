# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from medimatch.core.exceptions import StoreError
from medimatch.main import create_app
from medimatch.repos import InMemoryStore


class TickClock:
    """Each reading is one second after the previous one."""

    def __init__(self):
        self.now = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class FlakyStore(InMemoryStore):
    """In-memory store whose operations can be told to fail."""

    def __init__(self, clock):
        super().__init__(clock=clock)
        self.fail_create = False
        self.fail_find = False
        self.fail_update = set()  # tables

    async def create(self, table, fields):
        if self.fail_create:
            raise StoreError("connection refused")
        return await super().create(table, fields)

    async def find_open(self, table, medicine_name):
        if self.fail_find:
            raise StoreError("timeout")
        return await super().find_open(table, medicine_name)

    async def update_status(self, table, record_id, status, expected=None):
        if table in self.fail_update:
            raise StoreError("503 from store")
        return await super().update_status(table, record_id, status, expected=expected)


@pytest.fixture
def anyio_backend():
    # keep AnyIO on asyncio
    return "asyncio"


@pytest.fixture
def clock():
    return TickClock()


@pytest.fixture
def store(clock):
    return FlakyStore(clock)


@pytest.fixture
async def test_client(store):
    app = create_app(store=store)
    async with LifespanManager(app):
        transport = ASGITransport(app=app, raise_app_exceptions=True)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
