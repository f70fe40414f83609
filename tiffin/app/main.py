# main.py

"""FastAPI application for tiffin subscription billing."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis.asyncio import from_url
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings

from .db import dispose_engine, init_models
from .domain.errors import NotFoundError, StoreUnavailable, TiffinError, ValidationError
from .middlewares import (
    LoggingMiddleware,
    PrometheusMiddleware,
    RequestIdMiddleware,
)
from .obs import capture_exception, init_sentry
from .obs.logging import configure_logging
from .routes_advance import router as advance_router
from .routes_customers import router as customers_router
from .routes_extras import router as extras_router
from .routes_health import router as health_router
from .routes_invoices import router as invoices_router
from .routes_menu import router as menu_router
from .routes_metrics import router as metrics_router
from .utils.responses import err, error_response

settings = get_settings()
configure_logging(settings.log_level.upper())
init_sentry(settings.error_dsn, settings.app_env)

logger = logging.getLogger("api")

app = FastAPI(title="Tiffin API")
app.state.redis = from_url(settings.redis_url, decode_responses=True)

app.add_middleware(PrometheusMiddleware)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(LoggingMiddleware)

_STATUS_FOR = {
    ValidationError: 422,
    NotFoundError: 404,
    StoreUnavailable: 503,
}


@app.exception_handler(TiffinError)
async def domain_error_handler(request: Request, exc: TiffinError):
    status = next(
        (code for cls, code in _STATUS_FOR.items() if isinstance(exc, cls)), 400
    )
    log_fn = logger.error if status >= 500 else logger.warning
    log_fn(exc.message, extra={"status": status, "route": request.url.path})
    return error_response(exc, status)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(
        exc.detail, extra={"status": exc.status_code, "route": request.url.path}
    )
    return JSONResponse(err(exc.status_code, exc.detail), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        err(
            "VALIDATION",
            "Invalid request",
            details={"errors": jsonable_encoder(exc.errors())},
        ),
        status_code=422,
    )


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception):
    logger.exception(
        "unhandled_error", extra={"status": 500, "route": request.url.path}
    )
    capture_exception(exc)
    return JSONResponse(err(500, "Internal Server Error"), status_code=500)


@app.on_event("startup")
async def create_schema() -> None:
    """Create missing tables when no migration step runs before the app."""

    if settings.auto_create_schema:
        await init_models()


@app.on_event("shutdown")
async def close_connections() -> None:
    await app.state.redis.aclose()
    await dispose_engine()


app.include_router(health_router)
app.include_router(customers_router)
app.include_router(menu_router)
app.include_router(extras_router)
app.include_router(advance_router)
app.include_router(invoices_router)
app.include_router(metrics_router)
