"""Health check and dashboard statistics."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .db import ping
from .deps.store import get_db_session, get_store
from .repos.store import RecordStore
from .utils.responses import ok

router = APIRouter(prefix="/api")
logger = logging.getLogger("api")


@router.get("/health")
async def health(session: AsyncSession = Depends(get_db_session)):
    """Report whether the database answers a trivial query."""

    try:
        await ping(session)
    except (SQLAlchemyError, OSError) as exc:
        logger.error("health check failed: %s", exc)
        return JSONResponse(
            {"status": "Error", "database": "Disconnected", "error": str(exc)},
            status_code=503,
        )
    return {"status": "OK", "database": "Connected"}


@router.get("/stats")
async def stats(store: RecordStore = Depends(get_store)) -> dict:
    """Return record counts for the dashboard."""

    return ok(await store.stats(date.today()))
