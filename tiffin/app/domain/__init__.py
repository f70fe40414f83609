"""Domain models and helpers."""

from .entities import AdvancePayment, Customer, DailyExtra, MenuItem
from .enums import CustomerStatus, MealSlot, SubscriptionType
from .errors import NotFoundError, StoreUnavailable, TiffinError, ValidationError

__all__ = [
    "AdvancePayment",
    "Customer",
    "CustomerStatus",
    "DailyExtra",
    "MealSlot",
    "MenuItem",
    "NotFoundError",
    "StoreUnavailable",
    "SubscriptionType",
    "TiffinError",
    "ValidationError",
]
