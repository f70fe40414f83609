"""Async engine and session management for the application database.

The DSN comes from ``Settings.database_url`` (``DATABASE_URL`` in the
environment), for example::

    sqlite+aiosqlite:///./tiffin.db
    postgresql+asyncpg://u:p@host:5432/tiffin
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from alembic import command
from alembic.config import Config
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from config import get_settings

from ..models import Base
from ..obs import add_query_logger

logger = logging.getLogger("obs")

_engine: AsyncEngine | None = None
_sessionmaker: sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Return a singleton async engine for the configured database."""
    global _engine, _sessionmaker
    if _engine is None:
        _engine = create_async_engine(get_settings().database_url, future=True)
        add_query_logger(_engine, "main")
        _sessionmaker = sessionmaker(
            _engine, expire_on_commit=False, class_=AsyncSession
        )
    return _engine


async def dispose_engine() -> None:
    global _engine, _sessionmaker
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _sessionmaker = None


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session and ensure it is closed afterwards."""
    if _sessionmaker is None:
        get_engine()
    assert _sessionmaker is not None  # for type checkers
    session = _sessionmaker()
    try:
        yield session
    finally:
        await session.close()


async def init_models(engine: AsyncEngine | None = None) -> None:
    """Create missing tables directly from the ORM metadata."""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping(session: AsyncSession) -> None:
    """Round-trip ``SELECT 1``; raises if the database is unreachable."""
    await session.execute(text("SELECT 1"))


async def run_migrations(dsn: str | None = None) -> None:
    """Upgrade the database at ``dsn`` to the latest Alembic revision."""

    dsn = dsn or get_settings().database_url
    cfg = Config()
    cfg.set_main_option(
        "script_location",
        str(Path(__file__).resolve().parents[2] / "alembic"),
    )
    cfg.set_main_option("sqlalchemy.url", dsn)
    try:
        # env.py runs its own event loop, so the upgrade happens off this one
        await asyncio.to_thread(command.upgrade, cfg, "head")
    except Exception as exc:
        logger.error("Failed to run migrations: %s", exc)
        raise
