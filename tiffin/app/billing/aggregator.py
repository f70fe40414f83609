"""Derive daily and monthly billing statements from stored records.

The aggregator only reads. It walks the billing period in ascending date
order and, within a day, breakfast then lunch then dinner, so every sum is
accumulated in the same order for the same inputs.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable

from ..domain.entities import AdvancePayment, Customer, DailyExtra, MenuItem
from ..domain.enums import MealSlot, SubscriptionType
from ..repos.store import RecordStore
from ..utils.dates import as_calendar_date, check_month, days_in_month, month_name
from .display import format_extra_display, join_cell
from .invoice import DayRow, InvoiceData, InvoiceSummary, PeriodType

logger = logging.getLogger("billing")

ZERO = Decimal("0")


def subscription_charge(customer: Customer, days: int, period: PeriodType) -> Decimal:
    """Return the subscription part of an invoice.

    Monthly subscribers pay ``daily_amount`` once per month (the field holds
    the flat fee) and nothing on an ad-hoc daily invoice. Daily subscribers
    pay ``daily_amount`` per billed day.
    """

    if customer.subscription_type is SubscriptionType.MONTHLY:
        return customer.daily_amount if period is PeriodType.MONTHLY else ZERO
    return customer.daily_amount * days


def advance_total(payments: Iterable[AdvancePayment], year: int, month: int) -> Decimal:
    return sum(
        (p.amount for p in payments if p.year == year and p.month == month), ZERO
    )


class InvoiceAggregator:
    """Build :class:`InvoiceData` for one customer.

    Returns ``None`` instead of raising when the customer does not exist.
    Store failures propagate unchanged and abort the whole computation.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def generate_monthly_invoice(
        self, customer_id: str, year: int, month: int
    ) -> InvoiceData | None:
        check_month(year, month)
        customer = await self.store.get_customer(customer_id)
        if customer is None:
            logger.info("invoice requested for unknown customer %s", customer_id)
            return None

        extras = await self.store.list_extras_for_customer_in_month(
            customer_id, year, month
        )
        total_days = days_in_month(year, month)
        first = date(year, month, 1)
        days = [first + timedelta(days=i) for i in range(total_days)]
        rows, totals = await self._tabulate(days, extras)

        payments = await self.store.list_advance_payments(customer_id, year)
        summary = InvoiceSummary(
            days_in_month=total_days,
            daily_amount=customer.daily_amount,
            subscription_total=subscription_charge(
                customer, total_days, PeriodType.MONTHLY
            ),
            breakfast_total=totals[MealSlot.BREAKFAST],
            lunch_total=totals[MealSlot.LUNCH],
            dinner_total=totals[MealSlot.DINNER],
            total_advance=advance_total(payments, year, month),
        )
        logger.info(
            "monthly invoice customer=%s period=%04d-%02d extras=%s advance=%s grand_total=%s",
            customer_id,
            year,
            month,
            summary.extras_total,
            summary.total_advance,
            summary.grand_total,
        )
        return InvoiceData(
            period_type=PeriodType.MONTHLY,
            customer=customer,
            year=year,
            month=month,
            month_name=month_name(month),
            summary=summary,
            rows=rows,
        )

    async def generate_daily_invoice(
        self, customer_id: str, on: date | datetime | str
    ) -> InvoiceData | None:
        """Bill a single calendar day; advances are not deducted here."""

        on = as_calendar_date(on)
        customer = await self.store.get_customer(customer_id)
        if customer is None:
            logger.info("invoice requested for unknown customer %s", customer_id)
            return None

        extras = [
            e for e in await self.store.list_extras_for_date(on)
            if e.customer_id == customer_id
        ]
        rows, totals = await self._tabulate([on], extras)
        summary = InvoiceSummary(
            days_in_month=days_in_month(on.year, on.month),
            daily_amount=customer.daily_amount,
            subscription_total=subscription_charge(customer, 1, PeriodType.DAILY),
            breakfast_total=totals[MealSlot.BREAKFAST],
            lunch_total=totals[MealSlot.LUNCH],
            dinner_total=totals[MealSlot.DINNER],
        )
        logger.info(
            "daily invoice customer=%s date=%s extras=%s grand_total=%s",
            customer_id,
            on.isoformat(),
            summary.extras_total,
            summary.grand_total,
        )
        return InvoiceData(
            period_type=PeriodType.DAILY,
            customer=customer,
            year=on.year,
            month=on.month,
            month_name=month_name(on.month),
            summary=summary,
            rows=rows,
            date=on,
        )

    async def _menu_lookup(self, extras: list[DailyExtra]) -> dict[str, MenuItem | None]:
        lookup: dict[str, MenuItem | None] = {}
        for extra in extras:
            if extra.menu_item_id not in lookup:
                lookup[extra.menu_item_id] = await self.store.get_menu_item(
                    extra.menu_item_id
                )
        return lookup

    async def _tabulate(
        self, days: list[date], extras: list[DailyExtra]
    ) -> tuple[list[DayRow], dict[MealSlot, Decimal]]:
        # a slot normally holds one extra; more only if a writer bypassed admission
        cells: dict[tuple[date, MealSlot], list[DailyExtra]] = defaultdict(list)
        for extra in sorted(extras, key=lambda e: e.date):
            cells[(extra.date, extra.meal_slot)].append(extra)
        menu = await self._menu_lookup(extras)

        totals = {slot: ZERO for slot in MealSlot}
        rows = []
        for day in days:
            rendered = {}
            for slot in MealSlot:
                entries = cells.get((day, slot), [])
                for extra in entries:
                    totals[slot] += extra.price
                rendered[slot] = join_cell(
                    format_extra_display(e, menu[e.menu_item_id]) for e in entries
                )
            rows.append(
                DayRow(
                    date=day,
                    breakfast=rendered[MealSlot.BREAKFAST],
                    lunch=rendered[MealSlot.LUNCH],
                    dinner=rendered[MealSlot.DINNER],
                )
            )
        return rows, totals
