"""SQLAlchemy-backed repository implementations."""

from .store_sql import RecordStoreSQL

__all__ = ["RecordStoreSQL"]
