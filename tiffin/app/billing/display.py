"""Text rendering of extras inside invoice cells."""

from __future__ import annotations

from typing import Iterable

from ..domain.entities import DailyExtra, MenuItem
from ..utils.money import format_amount

EMPTY_CELL = "-"
LINE_BREAK = "\n"
UNKNOWN_ITEM = "Item"


def format_extra_display(extra: DailyExtra, menu_item: MenuItem | None) -> str:
    """Return ``"<name> – ₹<price>"`` plus ``" (<notes>)"`` when notes are set.

    The price is the one captured on the extra, not the menu's current price.
    A menu item that can no longer be resolved renders as ``Item``.
    """

    name = menu_item.name if menu_item is not None else UNKNOWN_ITEM
    display = f"{name} – ₹{format_amount(extra.price)}"
    notes = (extra.notes or "").strip()
    if notes:
        display += f" ({notes})"
    return display


def join_cell(displays: Iterable[str]) -> str:
    """Join rendered extras for one cell; an empty cell renders as ``-``."""

    parts = list(displays)
    return LINE_BREAK.join(parts) if parts else EMPTY_CELL
