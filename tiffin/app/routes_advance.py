"""Advance payment routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from .deps.store import get_store
from .domain.entities import AdvancePayment, new_id
from .repos.store import RecordStore
from .schemas import AdvanceIn
from .utils.responses import ok

router = APIRouter(prefix="/api/advance")
logger = logging.getLogger("api")


@router.post("")
async def add_advance(payload: AdvanceIn, store: RecordStore = Depends(get_store)) -> dict:
    """Record a prepaid amount against one month of a customer's billing."""

    if await store.get_customer(payload.customer_id) is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    payment = await store.add_advance_payment(
        AdvancePayment(
            id=new_id(),
            customer_id=payload.customer_id,
            amount=payload.amount,
            year=payload.year,
            month=payload.month,
            paid_on=payload.paid_on,
            notes=payload.notes.strip(),
        )
    )
    logger.info(
        "advance recorded customer=%s period=%04d-%02d amount=%s",
        payment.customer_id,
        payment.year,
        payment.month,
        payment.amount,
    )
    return ok(payment.to_dict())


@router.get("")
async def list_advances(
    customer_id: str, year: int, store: RecordStore = Depends(get_store)
) -> dict:
    payments = await store.list_advance_payments(customer_id, year)
    return ok([p.to_dict() for p in payments])


@router.delete("/{payment_id}")
async def delete_advance(payment_id: str, store: RecordStore = Depends(get_store)) -> dict:
    if not await store.delete_advance_payment(payment_id):
        raise HTTPException(status_code=404, detail="Advance payment not found")
    return ok({"deleted": payment_id})
