"""Admission of daily extras.

A (customer, date, meal slot) triple holds at most one extra. Writing to an
occupied slot overwrites it in place: the entry keeps its identity and
creation time, takes the new menu item, price and notes, and is stamped with
an update time. Overwritten content is not kept anywhere.

Referential integrity is checked here: admitting an extra for an unknown
customer or menu item raises :class:`NotFoundError` before anything is
written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Callable

from ..domain.entities import DailyExtra, new_id
from ..domain.enums import MealSlot
from ..domain.errors import NotFoundError
from ..repos.store import RecordStore
from ..utils.dates import as_calendar_date
from ..utils.money import to_money

logger = logging.getLogger("billing")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ExtraWrite:
    """A proposed extra entry.

    ``price`` may be ``None`` to take the menu item's current price.
    """

    customer_id: str
    date: date | datetime | str
    meal_slot: MealSlot | str
    menu_item_id: str
    price: Decimal | float | int | str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class Admission:
    """Outcome of :meth:`ExtrasAdmission.admit_extra`."""

    extra: DailyExtra
    overwritten: bool


class ExtrasAdmission:
    """Create, overwrite, query and remove per-slot extras."""

    def __init__(
        self, store: RecordStore, clock: Callable[[], datetime] = _utcnow
    ) -> None:
        self.store = store
        self.clock = clock

    async def admit_extra(self, write: ExtraWrite) -> Admission:
        on = as_calendar_date(write.date)
        slot = MealSlot.parse(write.meal_slot)
        price = (
            to_money(write.price, field="price") if write.price is not None else None
        )
        notes = (write.notes or "").strip()

        if await self.store.get_customer(write.customer_id) is None:
            raise NotFoundError(f"customer {write.customer_id} not found")
        menu_item = await self.store.get_menu_item(write.menu_item_id)
        if menu_item is None:
            raise NotFoundError(f"menu item {write.menu_item_id} not found")
        if price is None:
            price = menu_item.price

        now = self.clock()
        existing = await self.store.find_extra(write.customer_id, on, slot)
        if existing is not None:
            entry = DailyExtra(
                id=existing.id,
                customer_id=existing.customer_id,
                date=on,
                meal_slot=slot,
                menu_item_id=menu_item.id,
                price=price,
                notes=notes,
                created_at=existing.created_at,
                updated_at=now,
            )
        else:
            entry = DailyExtra(
                id=new_id(),
                customer_id=write.customer_id,
                date=on,
                meal_slot=slot,
                menu_item_id=menu_item.id,
                price=price,
                notes=notes,
                created_at=now,
            )
        saved = await self.store.upsert_extra(entry)
        logger.info(
            "extra %s customer=%s date=%s slot=%s price=%s",
            "overwritten" if existing is not None else "created",
            write.customer_id,
            on.isoformat(),
            slot.value,
            price,
        )
        return Admission(extra=saved, overwritten=existing is not None)

    async def find_extra(
        self, customer_id: str, on: date | datetime | str, meal_slot: MealSlot | str
    ) -> DailyExtra | None:
        return await self.store.find_extra(
            customer_id, as_calendar_date(on), MealSlot.parse(meal_slot)
        )

    async def extras_for_date(self, on: date | datetime | str) -> list[DailyExtra]:
        return await self.store.list_extras_for_date(as_calendar_date(on))

    async def taken_slots(
        self, customer_id: str, on: date | datetime | str
    ) -> list[MealSlot]:
        """Return the slots already holding an extra for the customer on ``on``.

        Informational only; admitting into a taken slot overwrites it.
        """

        taken = {
            e.meal_slot
            for e in await self.extras_for_date(on)
            if e.customer_id == customer_id
        }
        return [slot for slot in MealSlot if slot in taken]

    async def remove_extra(
        self,
        customer_id: str,
        on: date | datetime | str,
        meal_slot: MealSlot | str | None = None,
    ) -> int:
        """Remove one slot, or every slot of the day when ``meal_slot`` is omitted."""

        on = as_calendar_date(on)
        slot = MealSlot.parse(meal_slot) if meal_slot is not None else None
        removed = await self.store.delete_extras(customer_id, on, slot)
        logger.info(
            "extras removed customer=%s date=%s slot=%s count=%d",
            customer_id,
            on.isoformat(),
            slot.value if slot else "*",
            removed,
        )
        return removed
