# schemas.py

"""Pydantic models for API payloads."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from .domain.enums import CustomerStatus, MealSlot, SubscriptionType

MOBILE_PATTERN = r"^\d{10}$"
# matches the NUMERIC(10, 2) money columns
MONEY = {"max_digits": 10, "decimal_places": 2}


class CustomerIn(BaseModel):
    """Input schema for creating a customer.

    Omitted subscription fields fall back to the configured defaults and the
    start date to today.
    """

    name: str = Field(min_length=1)
    mobile: str = Field(pattern=MOBILE_PATTERN)
    address: str = ""
    subscription_type: Optional[SubscriptionType] = None
    daily_amount: Optional[Decimal] = Field(default=None, ge=0, **MONEY)
    start_date: Optional[date] = None
    status: CustomerStatus = CustomerStatus.ACTIVE


class CustomerUpdate(BaseModel):
    """Partial update; only supplied fields change."""

    name: Optional[str] = Field(default=None, min_length=1)
    mobile: Optional[str] = Field(default=None, pattern=MOBILE_PATTERN)
    address: Optional[str] = None
    subscription_type: Optional[SubscriptionType] = None
    daily_amount: Optional[Decimal] = Field(default=None, ge=0, **MONEY)
    start_date: Optional[date] = None
    status: Optional[CustomerStatus] = None


class MenuItemIn(BaseModel):
    name: str = Field(min_length=1)
    category: MealSlot
    price: Decimal = Field(ge=0, **MONEY)
    description: str = ""
    available: bool = True


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[MealSlot] = None
    price: Optional[Decimal] = Field(default=None, ge=0, **MONEY)
    description: Optional[str] = None
    available: Optional[bool] = None


class ExtraIn(BaseModel):
    """Proposed extra entry.

    ``date`` and ``meal_slot`` are plain strings here and are validated by the
    admission engine, which also rejects negative prices. Leaving ``price``
    out uses the menu item's current price.
    """

    customer_id: str
    date: str
    meal_slot: str
    menu_item_id: str
    price: Optional[Decimal] = None
    notes: Optional[str] = None


class AdvanceIn(BaseModel):
    customer_id: str
    amount: Decimal = Field(gt=0, **MONEY)
    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)
    paid_on: Optional[date] = None
    notes: str = ""
