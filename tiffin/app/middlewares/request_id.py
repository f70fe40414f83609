"""Request correlation ids.

An inbound ``X-Request-ID`` is reused only when it looks like an id; anything
else is replaced so arbitrary header text never reaches the logs.
"""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

HEADER = "X-Request-ID"
_VALID_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# read by the log filter and the error envelope
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def resolve_request_id(candidate: str | None) -> str:
    if candidate and _VALID_ID.match(candidate):
        return candidate
    return uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # reuse an id already assigned by an outer middleware
        req_id = getattr(request.state, "request_id", None) or resolve_request_id(
            request.headers.get(HEADER)
        )
        request.state.request_id = req_id
        token = request_id_ctx.set(req_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers[HEADER] = req_id
        return response
