"""Invoice data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from ..domain.entities import Customer


class PeriodType(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class DayRow:
    """One line of the day-by-day table; cells are display strings."""

    date: date
    breakfast: str
    lunch: str
    dinner: str

    @property
    def day(self) -> int:
        return self.date.day

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "day": self.day,
            "breakfast": self.breakfast,
            "lunch": self.lunch,
            "dinner": self.dinner,
        }


@dataclass(frozen=True)
class InvoiceSummary:
    """Totals block of an invoice."""

    days_in_month: int
    daily_amount: Decimal
    subscription_total: Decimal
    breakfast_total: Decimal
    lunch_total: Decimal
    dinner_total: Decimal
    total_advance: Decimal = Decimal("0")

    @property
    def extras_total(self) -> Decimal:
        return self.breakfast_total + self.lunch_total + self.dinner_total

    @property
    def grand_total(self) -> Decimal:
        return self.subscription_total + self.extras_total - self.total_advance

    def to_dict(self) -> dict:
        return {
            "daysInMonth": self.days_in_month,
            "dailyAmount": float(self.daily_amount),
            "subscriptionTotal": float(self.subscription_total),
            "breakfastTotal": float(self.breakfast_total),
            "lunchTotal": float(self.lunch_total),
            "dinnerTotal": float(self.dinner_total),
            "extrasTotal": float(self.extras_total),
            "totalAdvance": float(self.total_advance),
            "grandTotal": float(self.grand_total),
        }


@dataclass(frozen=True)
class InvoiceData:
    """Billing statement for one customer over a day or a calendar month."""

    period_type: PeriodType
    customer: Customer
    year: int
    month: int
    month_name: str
    summary: InvoiceSummary
    rows: list[DayRow] = field(default_factory=list)
    date: date | None = None

    def to_dict(self) -> dict:
        data: dict = {
            "customer": self.customer.to_dict(),
            "periodType": self.period_type.value,
        }
        if self.period_type is PeriodType.DAILY:
            data["date"] = self.date.isoformat() if self.date else None
        else:
            data["month"] = self.month
            data["year"] = self.year
        data["monthName"] = self.month_name
        data["dateWiseData"] = [row.to_dict() for row in self.rows]
        data["summary"] = self.summary.to_dict()
        return data
