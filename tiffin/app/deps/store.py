"""Request-scoped dependencies for the record store and the menu cache."""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends, Request
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..repos.store import RecordStore
from ..repos_sqlalchemy import RecordStoreSQL


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an ``AsyncSession`` for the application database."""

    async with get_session() as session:
        yield session


async def get_store(session: AsyncSession = Depends(get_db_session)) -> RecordStore:
    return RecordStoreSQL(session)


def get_redis(request: Request) -> Redis:
    return request.app.state.redis
