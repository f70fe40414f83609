import os
import sys
from pathlib import Path

import fakeredis.aioredis
import pytest
from httpx import ASGITransport, AsyncClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("REDIS_URL", "redis://redis:6379/0")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")

from tiffin.app.db import create_test_session  # noqa: E402
from tiffin.app.deps.store import get_db_session  # noqa: E402
from tiffin.app.main import app  # noqa: E402
from tiffin.app.repos.memory_store import InMemoryRecordStore  # noqa: E402
from tiffin.app.repos_sqlalchemy import RecordStoreSQL  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def memory_store():
    return InMemoryRecordStore()


@pytest.fixture
async def sql_store():
    factory, engine = await create_test_session()
    async with factory() as session:
        yield RecordStoreSQL(session)
    await engine.dispose()


@pytest.fixture(params=["memory", "sql"])
async def store(request):
    """Run a test against both record store implementations."""
    if request.param == "memory":
        yield InMemoryRecordStore()
        return
    factory, engine = await create_test_session()
    async with factory() as session:
        yield RecordStoreSQL(session)
    await engine.dispose()


@pytest.fixture
async def client():
    factory, engine = await create_test_session()

    async def _session():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _session
    app.state.redis = fakeredis.aioredis.FakeRedis(decode_responses=True)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    await engine.dispose()
