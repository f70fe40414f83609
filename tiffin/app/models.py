"""Database models for customers, the menu, daily extras and advances.

These models are kept isolated from any application wiring so that they can
be used in tests or migrations independently."""

from __future__ import annotations

from datetime import timezone

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Index,
    func,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

from .domain.entities import new_id
from .domain.enums import CustomerStatus, MealSlot, SubscriptionType

Base = declarative_base()


class UTCDateTime(TypeDecorator):
    """Timestamp that always reads back as an aware UTC datetime.

    SQLite stores no offset, so naive values coming out of it are UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


def _enum(cls, name: str) -> Enum:
    # store the lowercase values rather than member names
    return Enum(
        cls,
        name=name,
        native_enum=False,
        values_callable=lambda members: [m.value for m in members],
    )


class Customer(Base):
    """Subscribers billed by the service."""

    __tablename__ = "customers"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    mobile = Column(String(10), nullable=False)
    address = Column(Text, nullable=False, default="")
    subscription_type = Column(
        _enum(SubscriptionType, "subscription_type"),
        nullable=False,
        default=SubscriptionType.DAILY,
    )
    daily_amount = Column(Numeric(10, 2), nullable=False)
    start_date = Column(Date, nullable=False)
    status = Column(
        _enum(CustomerStatus, "customer_status"),
        nullable=False,
        default=CustomerStatus.ACTIVE,
    )

    created_at = Column(UTCDateTime, server_default=func.now())
    updated_at = Column(UTCDateTime, nullable=True)


class MenuItem(Base):
    """Extra items that can be ordered on top of a subscription."""

    __tablename__ = "menu_items"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    category = Column(_enum(MealSlot, "meal_slot"), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=False, default="")
    available = Column(Boolean, nullable=False, default=True)

    created_at = Column(UTCDateTime, server_default=func.now())
    updated_at = Column(UTCDateTime, nullable=True)


class DailyExtra(Base):
    """At most one extra per customer, date and meal slot."""

    __tablename__ = "daily_extras"
    __table_args__ = (
        UniqueConstraint(
            "customer_id", "date", "meal_slot", name="uq_daily_extras_slot"
        ),
        Index("ix_daily_extras_date", "date"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    # no foreign key: extras of a deleted customer are kept
    customer_id = Column(String(36), nullable=False)
    date = Column(Date, nullable=False)
    meal_slot = Column(_enum(MealSlot, "meal_slot"), nullable=False)
    menu_item_id = Column(String(36), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=False, default="")

    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=True)


class AdvancePayment(Base):
    """Prepaid amount credited to one calendar month."""

    __tablename__ = "advance_payments"
    __table_args__ = (
        Index("ix_advance_payments_customer_year", "customer_id", "year"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    customer_id = Column(String(36), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    paid_on = Column(Date, nullable=True)
    notes = Column(Text, nullable=False, default="")

    created_at = Column(UTCDateTime, server_default=func.now())
