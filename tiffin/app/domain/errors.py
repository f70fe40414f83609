"""Exception taxonomy shared by the billing core and the HTTP layer."""

from __future__ import annotations


class TiffinError(Exception):
    """Base class carrying a machine readable ``code`` and optional ``hint``."""

    code = "ERROR"

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ValidationError(TiffinError, ValueError):
    """Raised before any state mutation when an input is malformed."""

    code = "VALIDATION"


class NotFoundError(TiffinError, LookupError):
    """Raised when a referenced record does not exist."""

    code = "NOT_FOUND"


class StoreUnavailable(TiffinError, RuntimeError):
    """Raised when the record store cannot be reached.

    Never retried or masked by the core.
    """

    code = "STORE_UNAVAILABLE"
