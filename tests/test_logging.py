import json
import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.responses import JSONResponse

from tiffin.app.middlewares.logging import LoggingMiddleware
from tiffin.app.middlewares.request_id import RequestIdMiddleware
from tiffin.app.obs.logging import JsonFormatter


def _api_messages(caplog):
    return [r.getMessage() for r in caplog.records if r.name == "api"]


def _make_app():
    test_app = FastAPI()
    test_app.add_middleware(RequestIdMiddleware)
    test_app.add_middleware(LoggingMiddleware)

    @test_app.get("/health")
    async def health():
        return {"ok": True}

    @test_app.post("/echo")
    async def echo(data: dict):
        return data

    @test_app.get("/boom")
    async def boom():
        raise RuntimeError("boom")

    @test_app.post("/fail")
    async def fail():
        return JSONResponse({}, status_code=400)

    return test_app


def test_request_id_propagation(monkeypatch, caplog):
    monkeypatch.setattr("tiffin.app.middlewares.logging.LOG_SAMPLE_2XX", 1)
    client = TestClient(_make_app())
    with caplog.at_level(logging.INFO, logger="api"):
        resp = client.get("/health", headers={"X-Request-ID": "abc"})
    assert resp.headers["X-Request-ID"] == "abc"
    data = json.loads(_api_messages(caplog)[1])
    assert data["req_id"] == "abc"


def test_request_id_generation(monkeypatch, caplog):
    monkeypatch.setattr("tiffin.app.middlewares.logging.LOG_SAMPLE_2XX", 1)
    client = TestClient(_make_app())
    with caplog.at_level(logging.INFO, logger="api"):
        resp = client.get("/health")
    rid = resp.headers["X-Request-ID"]
    assert rid
    assert json.loads(_api_messages(caplog)[1])["req_id"] == rid


def test_body_redaction(monkeypatch, caplog):
    monkeypatch.setattr("tiffin.app.middlewares.logging.LOG_SAMPLE_2XX", 1)
    client = TestClient(_make_app())
    payload = {
        "name": "Ramesh Kumar",
        "mobile": "9876543210",
        "address": "123 Main Street",
        "nested": {"mobile": "9876543211"},
    }
    with caplog.at_level(logging.INFO, logger="api"):
        client.post("/echo", json=payload, params={"mobile": "9876543210"})
    inbound = json.loads(_api_messages(caplog)[0])
    assert inbound["body"]["mobile"] == "***"
    assert inbound["body"]["address"] == "***"
    assert inbound["body"]["nested"]["mobile"] == "***"
    assert inbound["body"]["name"] == "Ramesh Kumar"
    assert inbound["query"]["mobile"] == "***"


def test_unhandled_error_returns_envelope(caplog):
    client = TestClient(_make_app())
    with caplog.at_level(logging.INFO, logger="api"):
        resp = client.get("/boom")
    assert resp.status_code == 500
    body = resp.json()
    assert body["ok"] is False
    assert body["error_id"]


def test_sampling_skips_successful_requests(monkeypatch, caplog):
    monkeypatch.setattr("tiffin.app.middlewares.logging.LOG_SAMPLE_2XX", 0)
    client = TestClient(_make_app())
    with caplog.at_level(logging.INFO, logger="api"):
        client.get("/health")
        client.post("/fail")
    assert len(_api_messages(caplog)) == 2
    assert json.loads(_api_messages(caplog)[1])["status"] == 400


def test_json_formatter_redacts_mobile_numbers():
    record = logging.LogRecord(
        "billing", logging.INFO, __file__, 1, "customer %s", ("9876543210",), None
    )
    data = json.loads(JsonFormatter().format(record))
    assert data["msg"] == "customer ***"
    assert data["level"] == "INFO"
    assert data["logger"] == "billing"


def test_malformed_request_id_is_replaced(monkeypatch, caplog):
    monkeypatch.setattr("tiffin.app.middlewares.logging.LOG_SAMPLE_2XX", 1)
    client = TestClient(_make_app())
    with caplog.at_level(logging.INFO, logger="api"):
        resp = client.get("/health", headers={"X-Request-ID": "bad id with spaces"})
    rid = resp.headers["X-Request-ID"]
    assert rid != "bad id with spaces"
    assert json.loads(_api_messages(caplog)[1])["req_id"] == rid
