from datetime import date
from decimal import Decimal

import pytest

from tests._seed import add_advance, add_customer, add_menu_item
from tiffin.app.billing import InvoiceAggregator, PeriodType
from tiffin.app.domain import MealSlot, StoreUnavailable, SubscriptionType, ValidationError
from tiffin.app.repos.memory_store import InMemoryRecordStore
from tiffin.app.services.extras import ExtrasAdmission, ExtraWrite


async def _admit(store, customer_id, on, slot, item, price=None, notes=None):
    return await ExtrasAdmission(store).admit_extra(
        ExtraWrite(customer_id, on, slot, item.id, price=price, notes=notes)
    )


@pytest.mark.anyio
async def test_daily_subscriber_month_with_extra_and_advance(store):
    customer = await add_customer(store, daily_amount=300)
    thali = await add_menu_item(store)
    await _admit(store, customer.id, date(2026, 4, 5), "lunch", thali, price=80)
    await add_advance(store, customer.id, 500, 2026, 4)
    await add_advance(store, customer.id, 700, 2026, 5)

    invoice = await InvoiceAggregator(store).generate_monthly_invoice(
        customer.id, 2026, 4
    )

    s = invoice.summary
    assert s.days_in_month == 30
    assert s.subscription_total == Decimal("9000")
    assert s.extras_total == Decimal("80")
    assert s.total_advance == Decimal("500")
    assert s.grand_total == Decimal("8580")
    assert len(invoice.rows) == 30
    assert invoice.rows[4].day == 5
    assert invoice.rows[4].lunch == "Veg Thali – ₹80"
    assert invoice.rows[4].breakfast == "-"
    assert invoice.rows[0].lunch == "-"
    assert invoice.month_name == "April"


@pytest.mark.anyio
async def test_monthly_subscriber_pays_flat_fee(store):
    customer = await add_customer(
        store, subscription_type=SubscriptionType.MONTHLY, daily_amount=9000
    )
    invoice = await InvoiceAggregator(store).generate_monthly_invoice(
        customer.id, 2026, 4
    )
    assert invoice.summary.subscription_total == Decimal("9000")
    assert invoice.summary.extras_total == Decimal("0")
    assert invoice.summary.grand_total == Decimal("9000")
    assert all(
        (r.breakfast, r.lunch, r.dinner) == ("-", "-", "-") for r in invoice.rows
    )


@pytest.mark.anyio
async def test_extras_total_decomposes_per_slot(store):
    customer = await add_customer(store)
    poha = await add_menu_item(store, name="Poha", category=MealSlot.BREAKFAST, price=40)
    thali = await add_menu_item(store)
    dinner = await add_menu_item(store, name="Roti Sabzi", category=MealSlot.DINNER, price=70)
    await _admit(store, customer.id, date(2026, 1, 3), "breakfast", poha)
    await _admit(store, customer.id, date(2026, 1, 3), "lunch", thali, price="80.50")
    await _admit(store, customer.id, date(2026, 1, 20), "dinner", dinner)
    await _admit(store, customer.id, date(2026, 1, 31), "breakfast", poha, price=45)
    # outside the month
    await _admit(store, customer.id, date(2025, 12, 31), "lunch", thali)
    await _admit(store, customer.id, date(2026, 2, 1), "lunch", thali)

    invoice = await InvoiceAggregator(store).generate_monthly_invoice(
        customer.id, 2026, 1
    )
    s = invoice.summary
    assert s.breakfast_total == Decimal("85")
    assert s.lunch_total == Decimal("80.5")
    assert s.dinner_total == Decimal("70")
    assert s.extras_total == s.breakfast_total + s.lunch_total + s.dinner_total
    assert s.grand_total == s.subscription_total + s.extras_total - s.total_advance
    assert s.subscription_total == Decimal("300") * 31
    assert invoice.rows[2].lunch == "Veg Thali – ₹80.5"
    assert invoice.rows[30].breakfast == "Poha – ₹45"


@pytest.mark.anyio
async def test_overwrite_counts_once(store):
    customer = await add_customer(store)
    thali = await add_menu_item(store)
    await _admit(store, customer.id, date(2026, 1, 10), "lunch", thali, price=40)
    await _admit(store, customer.id, date(2026, 1, 10), "lunch", thali, price=45)

    invoice = await InvoiceAggregator(store).generate_monthly_invoice(
        customer.id, 2026, 1
    )
    assert invoice.summary.lunch_total == Decimal("45")
    assert invoice.rows[9].lunch == "Veg Thali – ₹45"


@pytest.mark.anyio
@pytest.mark.parametrize("year, days", [(2024, 29), (2026, 28), (2100, 28)])
async def test_february_length(store, year, days):
    customer = await add_customer(store, daily_amount=100)
    invoice = await InvoiceAggregator(store).generate_monthly_invoice(
        customer.id, year, 2
    )
    assert invoice.summary.days_in_month == days
    assert len(invoice.rows) == days
    assert invoice.summary.subscription_total == Decimal(100 * days)


@pytest.mark.anyio
async def test_captured_price_and_missing_menu_item(store):
    customer = await add_customer(store)
    thali = await add_menu_item(store)
    await _admit(store, customer.id, date(2026, 1, 5), "lunch", thali, notes="extra spicy")
    await store.delete_menu_item(thali.id)

    invoice = await InvoiceAggregator(store).generate_monthly_invoice(
        customer.id, 2026, 1
    )
    assert invoice.rows[4].lunch == "Item – ₹80 (extra spicy)"
    assert invoice.summary.lunch_total == Decimal("80")


@pytest.mark.anyio
async def test_unknown_customer_returns_none(store):
    aggregator = InvoiceAggregator(store)
    assert await aggregator.generate_monthly_invoice("nobody", 2026, 1) is None
    assert await aggregator.generate_daily_invoice("nobody", "2026-01-01") is None


@pytest.mark.anyio
async def test_month_out_of_range(store):
    customer = await add_customer(store)
    with pytest.raises(ValidationError):
        await InvoiceAggregator(store).generate_monthly_invoice(customer.id, 2026, 13)


@pytest.mark.anyio
async def test_daily_invoice_skips_advances(store):
    customer = await add_customer(store, daily_amount=300)
    other = await add_customer(store, name="Sunita Sharma", mobile="9876543211")
    thali = await add_menu_item(store)
    await _admit(store, customer.id, date(2026, 4, 5), "lunch", thali)
    await _admit(store, other.id, date(2026, 4, 5), "lunch", thali)
    await add_advance(store, customer.id, 500, 2026, 4)

    invoice = await InvoiceAggregator(store).generate_daily_invoice(
        customer.id, "2026-04-05T12:00:00"
    )
    assert invoice.period_type is PeriodType.DAILY
    assert invoice.date == date(2026, 4, 5)
    assert len(invoice.rows) == 1
    assert invoice.summary.subscription_total == Decimal("300")
    assert invoice.summary.extras_total == Decimal("80")
    assert invoice.summary.total_advance == Decimal("0")
    assert invoice.summary.grand_total == Decimal("380")


@pytest.mark.anyio
async def test_daily_invoice_for_monthly_subscriber(store):
    customer = await add_customer(
        store, subscription_type=SubscriptionType.MONTHLY, daily_amount=9000
    )
    invoice = await InvoiceAggregator(store).generate_daily_invoice(
        customer.id, date(2026, 4, 5)
    )
    assert invoice.summary.subscription_total == Decimal("0")
    assert invoice.summary.grand_total == Decimal("0")


@pytest.mark.anyio
async def test_invoice_dict_shape(memory_store):
    customer = await add_customer(memory_store)
    monthly = await InvoiceAggregator(memory_store).generate_monthly_invoice(
        customer.id, 2026, 4
    )
    data = monthly.to_dict()
    assert data["periodType"] == "monthly"
    assert (data["month"], data["year"], data["monthName"]) == (4, 2026, "April")
    assert data["summary"]["grandTotal"] == 9000.0
    assert data["dateWiseData"][0] == {
        "date": "2026-04-01",
        "day": 1,
        "breakfast": "-",
        "lunch": "-",
        "dinner": "-",
    }

    daily = await InvoiceAggregator(memory_store).generate_daily_invoice(
        customer.id, "2026-04-05"
    )
    data = daily.to_dict()
    assert data["periodType"] == "daily"
    assert data["date"] == "2026-04-05"
    assert "month" not in data


class BrokenStore(InMemoryRecordStore):
    async def list_extras_for_customer_in_month(self, customer_id, year, month):
        raise StoreUnavailable("record store unavailable")


@pytest.mark.anyio
async def test_store_failure_propagates():
    store = BrokenStore()
    customer = await add_customer(store)
    with pytest.raises(StoreUnavailable):
        await InvoiceAggregator(store).generate_monthly_invoice(customer.id, 2026, 1)
