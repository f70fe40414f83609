"""Prometheus middleware for HTTP request and error metrics."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..routes_metrics import http_errors_total, http_requests_total

UNMATCHED = "unmatched"


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Count every request by route template and every 4xx/5xx by status."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        # customer and item ids in raw paths would explode label cardinality
        route = request.scope.get("route")
        status = str(response.status_code)
        http_requests_total.labels(
            path=route.path if route else UNMATCHED,
            method=request.method,
            status=status,
        ).inc()
        if response.status_code >= 400:
            http_errors_total.labels(status=status).inc()
        return response
