import fakeredis.aioredis
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tiffin.app.middlewares.prometheus import PrometheusMiddleware
from tiffin.app.routes_metrics import router as metrics_router


def test_metrics_expose_counters():
    app = FastAPI()
    app.add_middleware(PrometheusMiddleware)
    app.include_router(metrics_router)
    app.state.redis = fakeredis.aioredis.FakeRedis()
    client = TestClient(app)
    client.get("/missing")
    resp = client.get("/metrics")
    text = resp.text
    assert "http_requests_total" in text
    assert 'status="404"' in text
    assert 'http_errors_total{status="404"}' in text
    assert 'path="unmatched"' in text
    assert 'extras_admitted_total{outcome="overwritten"}' in text
    assert 'invoices_generated_total{period="monthly"}' in text
