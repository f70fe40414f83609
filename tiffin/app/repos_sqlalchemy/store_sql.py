"""SQLAlchemy implementation of the record store gateway."""

from __future__ import annotations

import functools
from datetime import date, datetime, timezone

from sqlalchemy import case, delete, func, or_, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.entities import AdvancePayment, Customer, DailyExtra, MenuItem
from ..domain.enums import CustomerStatus, MealSlot
from ..domain.errors import StoreUnavailable
from ..models import AdvancePayment as AdvancePaymentRow
from ..models import Customer as CustomerRow
from ..models import DailyExtra as DailyExtraRow
from ..models import MenuItem as MenuItemRow
from ..repos.store import RecordStore
from ..utils.dates import month_bounds

_SLOT_RANK = {slot: i for i, slot in enumerate(MealSlot)}
_SLOT_ORDER = case(_SLOT_RANK, value=DailyExtraRow.meal_slot)
_CATEGORY_ORDER = case(_SLOT_RANK, value=MenuItemRow.category)


def _guard(fn):
    """Translate connectivity failures into :class:`StoreUnavailable`."""

    @functools.wraps(fn)
    async def wrapper(self, *args, **kwargs):
        try:
            return await fn(self, *args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            await self.session.rollback()
            raise StoreUnavailable(
                "record store unavailable", hint=str(exc.orig or exc)
            ) from exc

    return wrapper


def _customer(row: CustomerRow) -> Customer:
    return Customer(
        id=row.id,
        name=row.name,
        mobile=row.mobile,
        address=row.address or "",
        subscription_type=row.subscription_type,
        daily_amount=row.daily_amount,
        start_date=row.start_date,
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _menu_item(row: MenuItemRow) -> MenuItem:
    return MenuItem(
        id=row.id,
        name=row.name,
        category=row.category,
        price=row.price,
        description=row.description or "",
        available=row.available,
    )


def _extra(row: DailyExtraRow) -> DailyExtra:
    return DailyExtra(
        id=row.id,
        customer_id=row.customer_id,
        date=row.date,
        meal_slot=row.meal_slot,
        menu_item_id=row.menu_item_id,
        price=row.price,
        notes=row.notes or "",
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _advance(row: AdvancePaymentRow) -> AdvancePayment:
    return AdvancePayment(
        id=row.id,
        customer_id=row.customer_id,
        amount=row.amount,
        year=row.year,
        month=row.month,
        paid_on=row.paid_on,
        notes=row.notes or "",
    )


class RecordStoreSQL(RecordStore):
    """Concrete RecordStore using SQLAlchemy with an AsyncSession.

    Every write commits before returning. The session must be created with
    ``expire_on_commit=False`` so rows can be converted after the commit.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # customers

    @_guard
    async def list_customers(
        self, status: CustomerStatus | None = None, query: str | None = None
    ) -> list[Customer]:
        stmt = select(CustomerRow).order_by(func.lower(CustomerRow.name))
        if status is not None:
            stmt = stmt.where(CustomerRow.status == status)
        if query and query.strip():
            pattern = f"%{query.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(CustomerRow.name).like(pattern),
                    CustomerRow.mobile.like(pattern),
                    func.lower(CustomerRow.address).like(pattern),
                )
            )
        result = await self.session.execute(stmt)
        return [_customer(row) for row in result.scalars().all()]

    @_guard
    async def get_customer(self, customer_id: str) -> Customer | None:
        row = await self.session.get(CustomerRow, customer_id)
        return _customer(row) if row is not None else None

    @_guard
    async def add_customer(self, customer: Customer) -> Customer:
        row = CustomerRow(
            id=customer.id,
            name=customer.name,
            mobile=customer.mobile,
            address=customer.address,
            subscription_type=customer.subscription_type,
            daily_amount=customer.daily_amount,
            start_date=customer.start_date,
            status=customer.status,
        )
        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)
        return _customer(row)

    @_guard
    async def update_customer(self, customer: Customer) -> Customer | None:
        row = await self.session.get(CustomerRow, customer.id)
        if row is None:
            return None
        row.name = customer.name
        row.mobile = customer.mobile
        row.address = customer.address
        row.subscription_type = customer.subscription_type
        row.daily_amount = customer.daily_amount
        row.start_date = customer.start_date
        row.status = customer.status
        row.updated_at = datetime.now(timezone.utc)
        await self.session.commit()
        await self.session.refresh(row)
        return _customer(row)

    @_guard
    async def delete_customer(self, customer_id: str) -> bool:
        result = await self.session.execute(
            delete(CustomerRow).where(CustomerRow.id == customer_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    # menu

    @_guard
    async def list_menu_items(self) -> list[MenuItem]:
        result = await self.session.execute(
            select(MenuItemRow).order_by(
                _CATEGORY_ORDER, func.lower(MenuItemRow.name)
            )
        )
        return [_menu_item(row) for row in result.scalars().all()]

    @_guard
    async def get_menu_item(self, item_id: str) -> MenuItem | None:
        row = await self.session.get(MenuItemRow, item_id)
        return _menu_item(row) if row is not None else None

    @_guard
    async def get_menu_items_by_category(self, category: MealSlot) -> list[MenuItem]:
        result = await self.session.execute(
            select(MenuItemRow)
            .where(MenuItemRow.category == category)
            .where(MenuItemRow.available.is_(True))
            .order_by(func.lower(MenuItemRow.name))
        )
        return [_menu_item(row) for row in result.scalars().all()]

    @_guard
    async def add_menu_item(self, item: MenuItem) -> MenuItem:
        row = MenuItemRow(
            id=item.id,
            name=item.name,
            category=item.category,
            price=item.price,
            description=item.description,
            available=item.available,
        )
        self.session.add(row)
        await self.session.commit()
        return _menu_item(row)

    @_guard
    async def update_menu_item(self, item: MenuItem) -> MenuItem | None:
        row = await self.session.get(MenuItemRow, item.id)
        if row is None:
            return None
        row.name = item.name
        row.category = item.category
        row.price = item.price
        row.description = item.description
        row.available = item.available
        row.updated_at = datetime.now(timezone.utc)
        await self.session.commit()
        return _menu_item(row)

    @_guard
    async def delete_menu_item(self, item_id: str) -> bool:
        result = await self.session.execute(
            delete(MenuItemRow).where(MenuItemRow.id == item_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    # daily extras

    async def _slot_row(
        self, customer_id: str, on: date, meal_slot: MealSlot
    ) -> DailyExtraRow | None:
        result = await self.session.execute(
            select(DailyExtraRow).where(
                DailyExtraRow.customer_id == customer_id,
                DailyExtraRow.date == on,
                DailyExtraRow.meal_slot == meal_slot,
            )
        )
        return result.scalar_one_or_none()

    @_guard
    async def find_extra(
        self, customer_id: str, on: date, meal_slot: MealSlot
    ) -> DailyExtra | None:
        row = await self._slot_row(customer_id, on, meal_slot)
        return _extra(row) if row is not None else None

    @_guard
    async def upsert_extra(self, entry: DailyExtra) -> DailyExtra:
        row = await self._slot_row(entry.customer_id, entry.date, entry.meal_slot)
        if row is None:
            row = DailyExtraRow(
                id=entry.id,
                customer_id=entry.customer_id,
                date=entry.date,
                meal_slot=entry.meal_slot,
                created_at=entry.created_at or datetime.now(timezone.utc),
            )
            self.session.add(row)
        row.menu_item_id = entry.menu_item_id
        row.price = entry.price
        row.notes = entry.notes
        row.updated_at = entry.updated_at
        await self.session.commit()
        return _extra(row)

    @_guard
    async def list_extras_for_customer_in_month(
        self, customer_id: str, year: int, month: int
    ) -> list[DailyExtra]:
        first, last = month_bounds(year, month)
        result = await self.session.execute(
            select(DailyExtraRow)
            .where(DailyExtraRow.customer_id == customer_id)
            .where(DailyExtraRow.date.between(first, last))
            .order_by(DailyExtraRow.date, _SLOT_ORDER)
        )
        return [_extra(row) for row in result.scalars().all()]

    @_guard
    async def list_extras_for_date(self, on: date) -> list[DailyExtra]:
        result = await self.session.execute(
            select(DailyExtraRow)
            .where(DailyExtraRow.date == on)
            .order_by(DailyExtraRow.customer_id, _SLOT_ORDER)
        )
        return [_extra(row) for row in result.scalars().all()]

    @_guard
    async def delete_extras(
        self, customer_id: str, on: date, meal_slot: MealSlot | None = None
    ) -> int:
        stmt = delete(DailyExtraRow).where(
            DailyExtraRow.customer_id == customer_id, DailyExtraRow.date == on
        )
        if meal_slot is not None:
            stmt = stmt.where(DailyExtraRow.meal_slot == meal_slot)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount

    # advance payments

    @_guard
    async def add_advance_payment(self, payment: AdvancePayment) -> AdvancePayment:
        row = AdvancePaymentRow(
            id=payment.id,
            customer_id=payment.customer_id,
            amount=payment.amount,
            year=payment.year,
            month=payment.month,
            paid_on=payment.paid_on,
            notes=payment.notes,
        )
        self.session.add(row)
        await self.session.commit()
        return _advance(row)

    @_guard
    async def list_advance_payments(
        self, customer_id: str, year: int
    ) -> list[AdvancePayment]:
        result = await self.session.execute(
            select(AdvancePaymentRow)
            .where(AdvancePaymentRow.customer_id == customer_id)
            .where(AdvancePaymentRow.year == year)
            .order_by(AdvancePaymentRow.month, AdvancePaymentRow.created_at)
        )
        return [_advance(row) for row in result.scalars().all()]

    @_guard
    async def delete_advance_payment(self, payment_id: str) -> bool:
        result = await self.session.execute(
            delete(AdvancePaymentRow).where(AdvancePaymentRow.id == payment_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    # dashboard

    @_guard
    async def stats(self, today: date) -> dict:
        async def count(stmt) -> int:
            return (await self.session.scalar(stmt)) or 0

        return {
            "total_customers": await count(select(func.count(CustomerRow.id))),
            "active_customers": await count(
                select(func.count(CustomerRow.id)).where(
                    CustomerRow.status == CustomerStatus.ACTIVE
                )
            ),
            "total_menu_items": await count(select(func.count(MenuItemRow.id))),
            "available_menu_items": await count(
                select(func.count(MenuItemRow.id)).where(
                    MenuItemRow.available.is_(True)
                )
            ),
            "today_extras": await count(
                select(func.count(DailyExtraRow.id)).where(DailyExtraRow.date == today)
            ),
            "total_extras": await count(select(func.count(DailyExtraRow.id))),
        }
