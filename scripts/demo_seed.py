#!/usr/bin/env python3
"""Seed demo customers and menu items.

Each table is only seeded when it is empty, so running the script twice does
not duplicate records. Pass ``--reset`` to purge customers, menu items, extras
and advance payments first.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from datetime import date
from decimal import Decimal

from sqlalchemy import delete

from tiffin.app.db import get_session, init_models
from tiffin.app.domain import (
    Customer,
    CustomerStatus,
    MealSlot,
    MenuItem,
    SubscriptionType,
)
from tiffin.app.domain.entities import new_id
from tiffin.app.models import AdvancePayment, Customer as CustomerRow, DailyExtra
from tiffin.app.models import MenuItem as MenuItemRow
from tiffin.app.repos.store import RecordStore
from tiffin.app.repos_sqlalchemy import RecordStoreSQL

CUSTOMERS = [
    ("Ramesh Kumar", "9876543210", "123 Main Street, Sector 15", SubscriptionType.DAILY, 300),
    ("Sunita Sharma", "9876543211", "456 Park Road, Block B", SubscriptionType.MONTHLY, 280),
]

MENU_ITEMS = [
    ("Poha", MealSlot.BREAKFAST, 40, "Flattened rice with vegetables"),
    ("Upma", MealSlot.BREAKFAST, 40, "Semolina preparation"),
    ("Paratha (2 pcs)", MealSlot.BREAKFAST, 50, "Stuffed flatbread with curd"),
    ("Veg Thali", MealSlot.LUNCH, 80, "Rice, Dal, Sabzi, Roti, Salad"),
    ("Special Thali", MealSlot.LUNCH, 120, "Premium thali with paneer"),
    ("Rice & Dal", MealSlot.LUNCH, 60, "Simple rice and dal combo"),
    ("Roti Sabzi", MealSlot.DINNER, 70, "4 Rotis with seasonal vegetable"),
    ("Light Meal", MealSlot.DINNER, 50, "Khichdi or simple preparation"),
    ("Full Dinner", MealSlot.DINNER, 90, "Complete dinner set"),
]

START_DATE = date(2026, 1, 1)


async def seed(store: RecordStore) -> dict[str, list[str]]:
    """Insert demo records into empty tables and return the created ids."""

    created: dict[str, list[str]] = {"customers": [], "menu_items": []}
    if not await store.list_customers():
        for name, mobile, address, sub_type, amount in CUSTOMERS:
            customer = await store.add_customer(
                Customer(
                    id=new_id(),
                    name=name,
                    mobile=mobile,
                    address=address,
                    subscription_type=sub_type,
                    daily_amount=Decimal(amount),
                    start_date=START_DATE,
                    status=CustomerStatus.ACTIVE,
                )
            )
            created["customers"].append(customer.id)
    if not await store.list_menu_items():
        for name, category, price, description in MENU_ITEMS:
            item = await store.add_menu_item(
                MenuItem(
                    id=new_id(),
                    name=name,
                    category=category,
                    price=Decimal(price),
                    description=description,
                )
            )
            created["menu_items"].append(item.id)
    return created


async def main(reset: bool) -> None:
    await init_models()
    async with get_session() as session:
        if reset:
            for model in (DailyExtra, AdvancePayment, MenuItemRow, CustomerRow):
                await session.execute(delete(model))
            await session.commit()
        data = await seed(RecordStoreSQL(session))
    print(json.dumps(data))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo customers and menu")
    parser.add_argument(
        "--reset", action="store_true", help="Purge existing data before seeding"
    )
    args = parser.parse_args()
    asyncio.run(main(args.reset))
