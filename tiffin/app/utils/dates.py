"""Canonical calendar-date handling.

Every date the application stores or compares is a plain
:class:`datetime.date`. Inputs carrying a time of day are truncated to their
written calendar date; no timezone conversion is ever applied, so a value
such as ``2026-01-10T23:30:00-05:00`` stays on the 10th.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime

from ..domain.errors import ValidationError


def as_calendar_date(value: date | datetime | str) -> date:
    """Return ``value`` as a :class:`date` or raise :class:`ValidationError`."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        for sep in ("T", " "):
            text = text.split(sep, 1)[0]
        try:
            return date.fromisoformat(text)
        except ValueError as exc:
            raise ValidationError(
                f"malformed date: {value!r}", hint="expected YYYY-MM-DD"
            ) from exc
    raise ValidationError(f"malformed date: {value!r}", hint="expected YYYY-MM-DD")


def check_month(year: int, month: int) -> None:
    """Validate a 1-based ``month`` within ``year``."""

    if not 1 <= month <= 12:
        raise ValidationError(f"month out of range: {month}", hint="use 1-12")
    if not 1 <= year <= 9999:
        raise ValidationError(f"year out of range: {year}")


def days_in_month(year: int, month: int) -> int:
    """Return 28-31 following the proleptic Gregorian calendar."""

    check_month(year, month)
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last calendar day of ``month``."""

    return date(year, month, 1), date(year, month, days_in_month(year, month))


def month_name(month: int) -> str:
    """Return the English name of a 1-based month, independent of locale."""

    return (
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    )[month - 1]
