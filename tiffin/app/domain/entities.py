"""Immutable record shapes exchanged with the record store.

Rows coming out of any store are converted into these dataclasses at the
store boundary; the billing core never sees ORM objects or loose dicts.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from .enums import CustomerStatus, MealSlot, SubscriptionType


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Customer:
    """A subscriber of the food service."""

    id: str
    name: str
    mobile: str
    address: str
    subscription_type: SubscriptionType
    daily_amount: Decimal
    start_date: date
    status: CustomerStatus = CustomerStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "mobile": self.mobile,
            "address": self.address,
            "subscription_type": self.subscription_type.value,
            "daily_amount": float(self.daily_amount),
            "start_date": self.start_date.isoformat(),
            "status": self.status.value,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass(frozen=True)
class MenuItem:
    """Catalogue entry used as a name and price lookup for extras."""

    id: str
    name: str
    category: MealSlot
    price: Decimal
    description: str = ""
    available: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "price": float(self.price),
            "description": self.description,
            "available": self.available,
        }


@dataclass(frozen=True)
class DailyExtra:
    """One extra item for a (customer, date, meal slot) triple.

    ``price`` is captured when the entry is written and never follows later
    menu price changes.
    """

    id: str
    customer_id: str
    date: date
    meal_slot: MealSlot
    menu_item_id: str
    price: Decimal
    notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def slot_key(self) -> tuple[str, date, MealSlot]:
        return (self.customer_id, self.date, self.meal_slot)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "date": self.date.isoformat(),
            "meal_slot": self.meal_slot.value,
            "menu_item_id": self.menu_item_id,
            "price": float(self.price),
            "notes": self.notes,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass(frozen=True)
class AdvancePayment:
    """Prepaid credit applied against one month's invoice."""

    id: str
    customer_id: str
    amount: Decimal
    year: int
    month: int
    paid_on: date | None = None
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "amount": float(self.amount),
            "year": self.year,
            "month": self.month,
            "paid_on": _iso(self.paid_on),
            "notes": self.notes,
        }


def new_id() -> str:
    """Return a fresh opaque record identity."""

    return str(uuid.uuid4())
