"""Decimal currency helpers."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..domain.errors import ValidationError


def to_money(value, *, field: str = "amount", allow_negative: bool = False) -> Decimal:
    """Return ``value`` as a :class:`Decimal` without rounding.

    Floats go through ``str`` so that ``80.1`` stays ``Decimal("80.1")``.
    """

    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field} must be a number") from exc
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if amount < 0 and not allow_negative:
        raise ValidationError(f"{field} cannot be negative")
    # amounts are stored with two decimal places
    if amount.normalize().as_tuple().exponent < -2:
        raise ValidationError(
            f"{field} has more than two decimal places", hint="use paise precision"
        )
    return amount


def format_amount(value: Decimal) -> str:
    """Render ``value`` the way a plain number prints: ``80``, ``80.5``."""

    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")
