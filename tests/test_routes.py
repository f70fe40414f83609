import pytest
from sqlalchemy.exc import OperationalError

from tiffin.app.deps.store import get_db_session
from tiffin.app.main import app


async def _customer(client, **overrides):
    payload = {"name": "Ramesh Kumar", "mobile": "9876543210", **overrides}
    resp = await client.post("/api/customers", json=payload)
    assert resp.status_code == 200
    return resp.json()["data"]


async def _menu_item(client, name="Veg Thali", category="lunch", price=80):
    resp = await client.post(
        "/api/menu", json={"name": name, "category": category, "price": price}
    )
    assert resp.status_code == 200
    return resp.json()["data"]


@pytest.mark.anyio
async def test_health(client):
    resp = await client.get("/api/health", headers={"X-Request-ID": "abc"})
    assert resp.status_code == 200
    assert resp.json() == {"status": "OK", "database": "Connected"}
    assert resp.headers["X-Request-ID"] == "abc"


@pytest.mark.anyio
async def test_health_reports_disconnected(client):
    class DownSession:
        async def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("unable to open"))

    async def _down():
        yield DownSession()

    app.dependency_overrides[get_db_session] = _down
    resp = await client.get("/api/health")
    assert resp.status_code == 503
    assert resp.json()["database"] == "Disconnected"


@pytest.mark.anyio
async def test_not_found_returns_err(client):
    resp = await client.get("/api/customers/missing")
    assert resp.status_code == 404
    body = resp.json()
    assert body["ok"] is False
    assert body["error"] == {"code": 404, "message": "Customer not found"}


@pytest.mark.anyio
async def test_customer_defaults_and_update(client):
    created = await _customer(client)
    assert created["subscription_type"] == "daily"
    assert created["daily_amount"] == 300.0
    assert created["status"] == "active"

    resp = await client.put(
        f"/api/customers/{created['id']}",
        json={"status": "paused", "daily_amount": 250},
    )
    updated = resp.json()["data"]
    assert (updated["status"], updated["daily_amount"]) == ("paused", 250.0)
    assert updated["name"] == "Ramesh Kumar"

    listed = (await client.get("/api/customers", params={"status": "paused"})).json()
    assert [c["id"] for c in listed["data"]] == [created["id"]]


@pytest.mark.anyio
async def test_invalid_mobile_rejected(client):
    resp = await client.post("/api/customers", json={"name": "A", "mobile": "12345"})
    assert resp.status_code == 422
    body = resp.json()
    assert body["ok"] is False
    assert body["error"]["code"] == "VALIDATION"


@pytest.mark.anyio
async def test_menu_category_listing(client):
    await _menu_item(client)
    poha = await _menu_item(client, name="Poha", category="breakfast", price=40)
    resp = await client.get("/api/menu/category/breakfast")
    assert [i["id"] for i in resp.json()["data"]] == [poha["id"]]

    await client.put(f"/api/menu/{poha['id']}", json={"available": False})
    resp = await client.get("/api/menu/category/breakfast")
    assert resp.json()["data"] == []

    resp = await client.get("/api/menu/category/brunch")
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_extra_admission_flow(client):
    customer = await _customer(client)
    thali = await _menu_item(client)
    body = {
        "customer_id": customer["id"],
        "date": "2026-01-05",
        "meal_slot": "lunch",
        "menu_item_id": thali["id"],
        "notes": "extra spicy",
    }

    first = (await client.post("/api/extras", json=body)).json()["data"]
    assert first["display"] == "Veg Thali – ₹80 (extra spicy)"
    assert first["overwritten"] is False

    second = (
        await client.post("/api/extras", json={**body, "price": 45, "notes": ""})
    ).json()["data"]
    assert second["overwritten"] is True
    assert second["id"] == first["id"]
    assert second["display"] == "Veg Thali – ₹45"

    listed = (await client.get("/api/extras", params={"date": "2026-01-05"})).json()
    assert len(listed["data"]) == 1

    slots = await client.get(
        "/api/extras/slots",
        params={"customer_id": customer["id"], "date": "2026-01-05"},
    )
    assert slots.json()["data"]["taken"] == ["lunch"]

    found = await client.get(
        "/api/extras/find",
        params={
            "customer_id": customer["id"],
            "date": "2026-01-05",
            "meal_slot": "dinner",
        },
    )
    assert found.json()["data"] is None

    removed = await client.delete(
        "/api/extras", params={"customer_id": customer["id"], "date": "2026-01-05"}
    )
    assert removed.json()["data"] == {"removed": 1}


@pytest.mark.anyio
async def test_extra_admission_errors(client):
    customer = await _customer(client)
    thali = await _menu_item(client)
    body = {
        "customer_id": customer["id"],
        "date": "2026-01-05",
        "meal_slot": "lunch",
        "menu_item_id": thali["id"],
    }

    resp = await client.post("/api/extras", json={**body, "price": -1})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION"

    resp = await client.post("/api/extras", json={**body, "meal_slot": "brunch"})
    assert resp.status_code == 422
    assert "hint" in resp.json()["error"]

    resp = await client.post("/api/extras", json={**body, "customer_id": "nobody"})
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.anyio
async def test_monthly_invoice_route(client):
    customer = await _customer(client, daily_amount=300)
    thali = await _menu_item(client)
    await client.post(
        "/api/extras",
        json={
            "customer_id": customer["id"],
            "date": "2026-04-05",
            "meal_slot": "lunch",
            "menu_item_id": thali["id"],
        },
    )
    resp = await client.post(
        "/api/advance",
        json={"customer_id": customer["id"], "amount": 500, "year": 2026, "month": 4},
    )
    assert resp.status_code == 200

    resp = await client.get(
        f"/api/invoices/monthly/{customer['id']}", params={"year": 2026, "month": 4}
    )
    data = resp.json()["data"]
    assert data["summary"]["grandTotal"] == 8580.0
    assert data["dateWiseData"][4]["lunch"] == "Veg Thali – ₹80"

    resp = await client.get(
        f"/api/invoices/daily/{customer['id']}", params={"date": "2026-04-05"}
    )
    assert resp.json()["data"]["summary"]["grandTotal"] == 380.0

    resp = await client.get(
        "/api/invoices/monthly/nobody", params={"year": 2026, "month": 4}
    )
    assert resp.status_code == 404

    resp = await client.get(
        f"/api/invoices/monthly/{customer['id']}", params={"year": 2026, "month": 13}
    )
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_advance_routes(client):
    resp = await client.post(
        "/api/advance",
        json={"customer_id": "nobody", "amount": 500, "year": 2026, "month": 4},
    )
    assert resp.status_code == 404

    customer = await _customer(client)
    payment = (
        await client.post(
            "/api/advance",
            json={"customer_id": customer["id"], "amount": 500, "year": 2026, "month": 4},
        )
    ).json()["data"]
    listed = await client.get(
        "/api/advance", params={"customer_id": customer["id"], "year": 2026}
    )
    assert [p["id"] for p in listed.json()["data"]] == [payment["id"]]

    assert (await client.delete(f"/api/advance/{payment['id']}")).status_code == 200
    assert (await client.delete(f"/api/advance/{payment['id']}")).status_code == 404


@pytest.mark.anyio
async def test_stats_route(client):
    await _customer(client)
    await _menu_item(client)
    data = (await client.get("/api/stats")).json()["data"]
    assert data["total_customers"] == 1
    assert data["total_menu_items"] == 1
    assert data["today_extras"] == 0
