"""Response envelopes shared by routes and error handlers."""

from __future__ import annotations

from typing import Any

from starlette.responses import JSONResponse

from ..domain.errors import TiffinError


def ok(data: Any) -> dict[str, Any]:
    """Return a success envelope."""
    return {"ok": True, "data": data}


def err(
    code: int | str,
    message: str,
    *,
    details: dict[str, Any] | None = None,
    hint: str | None = None,
) -> dict[str, Any]:
    """Return an error envelope tagged with the current request id."""
    from ..middlewares.request_id import request_id_ctx

    error: dict[str, Any] = {"code": code, "message": message}
    error.update({k: v for k, v in (("hint", hint), ("details", details)) if v})
    return {"ok": False, "request_id": request_id_ctx.get(), "error": error}


def error_response(exc: TiffinError, status_code: int) -> JSONResponse:
    return JSONResponse(
        err(exc.code, exc.message, hint=exc.hint), status_code=status_code
    )
