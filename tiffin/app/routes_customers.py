"""Customer management routes."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException

from config import get_settings

from .deps.store import get_store
from .domain.entities import Customer, new_id
from .domain.enums import CustomerStatus, SubscriptionType
from .repos.store import RecordStore
from .schemas import CustomerIn, CustomerUpdate
from .utils.responses import ok

router = APIRouter(prefix="/api/customers")
logger = logging.getLogger("api")


async def _existing(store: RecordStore, customer_id: str) -> Customer:
    customer = await store.get_customer(customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("")
async def list_customers(
    status: CustomerStatus | None = None,
    q: str | None = None,
    store: RecordStore = Depends(get_store),
) -> dict:
    """Return customers, optionally only ``active``/``paused`` ones or those matching ``q``."""

    customers = await store.list_customers(status=status, query=q)
    return ok([c.to_dict() for c in customers])


@router.post("")
async def create_customer(
    payload: CustomerIn, store: RecordStore = Depends(get_store)
) -> dict:
    settings = get_settings()
    customer = Customer(
        id=new_id(),
        name=payload.name.strip(),
        mobile=payload.mobile,
        address=payload.address.strip(),
        subscription_type=payload.subscription_type
        or SubscriptionType(settings.default_subscription_type.value),
        daily_amount=(
            payload.daily_amount
            if payload.daily_amount is not None
            else Decimal(str(settings.default_daily_amount))
        ),
        start_date=payload.start_date or date.today(),
        status=payload.status,
    )
    saved = await store.add_customer(customer)
    logger.info("customer created id=%s", saved.id)
    return ok(saved.to_dict())


@router.get("/{customer_id}")
async def get_customer(customer_id: str, store: RecordStore = Depends(get_store)) -> dict:
    return ok((await _existing(store, customer_id)).to_dict())


@router.put("/{customer_id}")
async def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    store: RecordStore = Depends(get_store),
) -> dict:
    """Apply the supplied fields to a customer."""

    current = await _existing(store, customer_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes:
        changes["name"] = changes["name"].strip()
    updated = await store.update_customer(replace(current, **changes))
    if updated is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return ok(updated.to_dict())


@router.delete("/{customer_id}")
async def delete_customer(customer_id: str, store: RecordStore = Depends(get_store)) -> dict:
    """Delete a customer. Its extras and advances are left in place."""

    if not await store.delete_customer(customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
    logger.info("customer deleted id=%s", customer_id)
    return ok({"deleted": customer_id})
