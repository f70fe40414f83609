"""Redis read-through cache for available menu items per category."""

from __future__ import annotations

import json
import logging
from decimal import Decimal

from redis.asyncio import Redis

from ..domain.entities import MenuItem
from ..domain.enums import MealSlot
from ..repos.store import RecordStore

logger = logging.getLogger("obs")


def cache_key(category: MealSlot) -> str:
    return f"menu:{category.value}"


def _decode(raw: str | bytes) -> list[MenuItem]:
    return [
        MenuItem(
            id=item["id"],
            name=item["name"],
            category=MealSlot(item["category"]),
            price=Decimal(str(item["price"])),
            description=item["description"],
            available=item["available"],
        )
        for item in json.loads(raw)
    ]


async def items_by_category(
    redis: Redis, store: RecordStore, category: MealSlot, ttl: int = 60
) -> list[MenuItem]:
    """Return available items for ``category``, caching them for ``ttl`` seconds."""

    key = cache_key(category)
    cached = await redis.get(key)
    if cached is not None:
        return _decode(cached)
    items = await store.get_menu_items_by_category(category)
    await redis.set(key, json.dumps([i.to_dict() for i in items]), ex=ttl)
    logger.debug("menu cache filled key=%s items=%d", key, len(items))
    return items


async def invalidate(redis: Redis) -> None:
    """Drop every cached category after a menu write."""

    await redis.delete(*(cache_key(slot) for slot in MealSlot))
