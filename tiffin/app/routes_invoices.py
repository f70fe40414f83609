"""Invoice routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from .billing import InvoiceAggregator
from .deps.store import get_store
from .repos.store import RecordStore
from .routes_metrics import invoices_generated_total
from .utils.responses import ok

router = APIRouter(prefix="/api/invoices")


@router.get("/monthly/{customer_id}")
async def monthly_invoice(
    customer_id: str,
    year: int,
    month: int,
    store: RecordStore = Depends(get_store),
) -> dict:
    """Return the statement for a calendar month (``month`` is 1-12)."""

    invoice = await InvoiceAggregator(store).generate_monthly_invoice(
        customer_id, year, month
    )
    if invoice is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    invoices_generated_total.labels(period="monthly").inc()
    return ok(invoice.to_dict())


@router.get("/daily/{customer_id}")
async def daily_invoice(
    customer_id: str, date: str, store: RecordStore = Depends(get_store)
) -> dict:
    """Return the statement for a single day."""

    invoice = await InvoiceAggregator(store).generate_daily_invoice(customer_id, date)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    invoices_generated_total.labels(period="daily").inc()
    return ok(invoice.to_dict())
