"""In-process record store.

Stands in for the database in the offline variant and in unit tests. Each
store instance owns its collections; nothing is shared between instances.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from ..domain.entities import AdvancePayment, Customer, DailyExtra, MenuItem
from ..domain.enums import CustomerStatus, MealSlot
from .store import RecordStore

_SLOT_ORDER = {slot: i for i, slot in enumerate(MealSlot)}


def _matches(query: str, *fields: str) -> bool:
    needle = query.strip().lower()
    return any(needle in (value or "").lower() for value in fields)


class InMemoryRecordStore(RecordStore):
    """Dict-backed :class:`RecordStore`."""

    def __init__(self) -> None:
        self.customers: dict[str, Customer] = {}
        self.menu_items: dict[str, MenuItem] = {}
        self.extras: dict[tuple[str, date, MealSlot], DailyExtra] = {}
        self.advances: dict[str, AdvancePayment] = {}

    async def list_customers(
        self, status: CustomerStatus | None = None, query: str | None = None
    ) -> list[Customer]:
        result = list(self.customers.values())
        if status is not None:
            result = [c for c in result if c.status is status]
        if query:
            result = [c for c in result if _matches(query, c.name, c.mobile, c.address)]
        return sorted(result, key=lambda c: c.name.lower())

    async def get_customer(self, customer_id: str) -> Customer | None:
        return self.customers.get(customer_id)

    async def add_customer(self, customer: Customer) -> Customer:
        self.customers[customer.id] = customer
        return customer

    async def update_customer(self, customer: Customer) -> Customer | None:
        if customer.id not in self.customers:
            return None
        self.customers[customer.id] = customer
        return customer

    async def delete_customer(self, customer_id: str) -> bool:
        return self.customers.pop(customer_id, None) is not None

    async def list_menu_items(self) -> list[MenuItem]:
        return sorted(
            self.menu_items.values(),
            key=lambda m: (_SLOT_ORDER[m.category], m.name.lower()),
        )

    async def get_menu_item(self, item_id: str) -> MenuItem | None:
        return self.menu_items.get(item_id)

    async def get_menu_items_by_category(self, category: MealSlot) -> list[MenuItem]:
        return sorted(
            (m for m in self.menu_items.values() if m.category is category and m.available),
            key=lambda m: m.name.lower(),
        )

    async def add_menu_item(self, item: MenuItem) -> MenuItem:
        self.menu_items[item.id] = item
        return item

    async def update_menu_item(self, item: MenuItem) -> MenuItem | None:
        if item.id not in self.menu_items:
            return None
        self.menu_items[item.id] = item
        return item

    async def delete_menu_item(self, item_id: str) -> bool:
        return self.menu_items.pop(item_id, None) is not None

    async def find_extra(
        self, customer_id: str, on: date, meal_slot: MealSlot
    ) -> DailyExtra | None:
        return self.extras.get((customer_id, on, meal_slot))

    async def upsert_extra(self, entry: DailyExtra) -> DailyExtra:
        existing = self.extras.get(entry.slot_key)
        if existing is not None:
            entry = replace(entry, id=existing.id, created_at=existing.created_at)
        self.extras[entry.slot_key] = entry
        return entry

    async def list_extras_for_customer_in_month(
        self, customer_id: str, year: int, month: int
    ) -> list[DailyExtra]:
        found = [
            e
            for e in self.extras.values()
            if e.customer_id == customer_id
            and e.date.year == year
            and e.date.month == month
        ]
        return sorted(found, key=lambda e: (e.date, _SLOT_ORDER[e.meal_slot]))

    async def list_extras_for_date(self, on: date) -> list[DailyExtra]:
        found = [e for e in self.extras.values() if e.date == on]
        return sorted(found, key=lambda e: (e.customer_id, _SLOT_ORDER[e.meal_slot]))

    async def delete_extras(
        self, customer_id: str, on: date, meal_slot: MealSlot | None = None
    ) -> int:
        doomed = [
            key
            for key in self.extras
            if key[0] == customer_id
            and key[1] == on
            and (meal_slot is None or key[2] is meal_slot)
        ]
        for key in doomed:
            del self.extras[key]
        return len(doomed)

    async def add_advance_payment(self, payment: AdvancePayment) -> AdvancePayment:
        self.advances[payment.id] = payment
        return payment

    async def list_advance_payments(
        self, customer_id: str, year: int
    ) -> list[AdvancePayment]:
        found = [
            p
            for p in self.advances.values()
            if p.customer_id == customer_id and p.year == year
        ]
        return sorted(found, key=lambda p: p.month)

    async def delete_advance_payment(self, payment_id: str) -> bool:
        return self.advances.pop(payment_id, None) is not None

    async def stats(self, today: date) -> dict:
        return {
            "total_customers": len(self.customers),
            "active_customers": sum(
                1 for c in self.customers.values() if c.status is CustomerStatus.ACTIVE
            ),
            "total_menu_items": len(self.menu_items),
            "available_menu_items": sum(1 for m in self.menu_items.values() if m.available),
            "today_extras": sum(1 for e in self.extras.values() if e.date == today),
            "total_extras": len(self.extras),
        }
