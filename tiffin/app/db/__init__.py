from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ..models import Base
from ..obs import add_query_logger
from .session import dispose_engine, get_engine, get_session, init_models, ping, run_migrations

# Helpers to initialise an in-memory database for tests. The returned engine
# and session factory are not exposed until tests explicitly request them.


async def create_test_session() -> tuple[async_sessionmaker[AsyncSession], AsyncEngine]:
    """Return a session factory and engine for tests.

    The database uses an in-memory SQLite engine with a static pool so that
    multiple sessions share the same data.
    """

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    add_query_logger(engine, "test")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    return factory, engine


__all__ = [
    "create_test_session",
    "dispose_engine",
    "get_engine",
    "get_session",
    "init_models",
    "ping",
    "run_migrations",
]
