# routes_metrics.py

"""Prometheus metrics and /metrics endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

# Counters
http_requests_total = Counter(
    "http_requests_total", "Total HTTP requests", ["path", "method", "status"]
)

http_errors_total = Counter("http_errors_total", "Total HTTP errors", ["status"])

extras_admitted_total = Counter(
    "extras_admitted_total",
    "Daily extras written, split by whether a slot was created or overwritten",
    ["outcome"],
)
for _outcome in ("created", "overwritten"):
    extras_admitted_total.labels(outcome=_outcome).inc(0)

invoices_generated_total = Counter(
    "invoices_generated_total", "Total invoices generated", ["period"]
)
for _period in ("daily", "monthly"):
    invoices_generated_total.labels(period=_period).inc(0)

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Expose Prometheus metrics."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
