"""Invoice computation for subscription customers."""

from .aggregator import InvoiceAggregator
from .display import EMPTY_CELL, LINE_BREAK, format_extra_display, join_cell
from .invoice import DayRow, InvoiceData, InvoiceSummary, PeriodType

__all__ = [
    "DayRow",
    "EMPTY_CELL",
    "InvoiceAggregator",
    "InvoiceData",
    "InvoiceSummary",
    "LINE_BREAK",
    "PeriodType",
    "format_extra_display",
    "join_cell",
]
