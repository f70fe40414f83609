"""Closed enumerations for meal slots, subscriptions and customer status."""

from __future__ import annotations

from enum import Enum

from .errors import ValidationError


class MealSlot(str, Enum):
    """The three fixed subdivisions of a day's extras.

    Member order is the billing order: breakfast, then lunch, then dinner.
    Menu item categories use the same values.
    """

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"

    @classmethod
    def parse(cls, value: "MealSlot | str") -> "MealSlot":
        """Return the slot for ``value`` or raise :class:`ValidationError`."""

        try:
            return cls(value)
        except ValueError as exc:
            raise ValidationError(
                f"unrecognized meal slot: {value!r}",
                hint="use breakfast, lunch or dinner",
            ) from exc


class SubscriptionType(str, Enum):
    """How the standing subscription is charged."""

    DAILY = "daily"
    MONTHLY = "monthly"


class CustomerStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
