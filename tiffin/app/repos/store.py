"""Repository interface for the record store gateway.

The billing core reads and writes customers, menu items, daily extras and
advance payments only through this contract. Implementations hand records
out as the immutable dataclasses in :mod:`tiffin.app.domain.entities` and
raise :class:`~tiffin.app.domain.errors.StoreUnavailable` when the backing
storage cannot be reached.
"""

from abc import ABC, abstractmethod


class RecordStore(ABC):
    """Contract for customer, menu, extras and advance persistence."""

    # customers

    @abstractmethod
    async def list_customers(self, status=None, query=None):
        """Return customers, optionally filtered by status or a search term.

        ``query`` matches case-insensitively against name, mobile and address.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_customer(self, customer_id):
        """Return the customer or ``None``."""
        raise NotImplementedError

    @abstractmethod
    async def add_customer(self, customer):
        raise NotImplementedError

    @abstractmethod
    async def update_customer(self, customer):
        """Replace a stored customer; return it, or ``None`` if unknown."""
        raise NotImplementedError

    @abstractmethod
    async def delete_customer(self, customer_id):
        """Delete a customer without touching its extras or advances."""
        raise NotImplementedError

    # menu

    @abstractmethod
    async def list_menu_items(self):
        raise NotImplementedError

    @abstractmethod
    async def get_menu_item(self, item_id):
        """Return the menu item or ``None``."""
        raise NotImplementedError

    @abstractmethod
    async def get_menu_items_by_category(self, category):
        """Return available items of ``category`` ordered by name."""
        raise NotImplementedError

    @abstractmethod
    async def add_menu_item(self, item):
        raise NotImplementedError

    @abstractmethod
    async def update_menu_item(self, item):
        raise NotImplementedError

    @abstractmethod
    async def delete_menu_item(self, item_id):
        raise NotImplementedError

    # daily extras

    @abstractmethod
    async def find_extra(self, customer_id, on, meal_slot):
        """Return the single extra for the slot or ``None``."""
        raise NotImplementedError

    @abstractmethod
    async def upsert_extra(self, entry):
        """Write ``entry`` into its (customer, date, meal slot) slot.

        An existing row for the slot keeps its identity and creation time and
        takes the entry's menu item, price, notes and update time.
        """
        raise NotImplementedError

    @abstractmethod
    async def list_extras_for_customer_in_month(self, customer_id, year, month):
        """Return the customer's extras in a 1-based month, by date then slot."""
        raise NotImplementedError

    @abstractmethod
    async def list_extras_for_date(self, on):
        """Return every customer's extras on ``on``."""
        raise NotImplementedError

    @abstractmethod
    async def delete_extras(self, customer_id, on, meal_slot=None):
        """Delete one slot, or the whole day when ``meal_slot`` is ``None``.

        Returns the number of rows removed.
        """
        raise NotImplementedError

    # advance payments

    @abstractmethod
    async def add_advance_payment(self, payment):
        raise NotImplementedError

    @abstractmethod
    async def list_advance_payments(self, customer_id, year):
        """Return a customer's advances for ``year``, each tagged with its month."""
        raise NotImplementedError

    @abstractmethod
    async def delete_advance_payment(self, payment_id):
        raise NotImplementedError

    # dashboard

    @abstractmethod
    async def stats(self, today):
        """Return record counts for the dashboard."""
        raise NotImplementedError
