import fakeredis.aioredis
import pytest

from tests._seed import add_menu_item
from tiffin.app.domain import MealSlot
from tiffin.app.services import menu_cache


@pytest.mark.anyio
async def test_category_listing_is_cached_until_invalidated(memory_store):
    redis = fakeredis.aioredis.FakeRedis(decode_responses=True)
    await add_menu_item(memory_store, name="Veg Thali")
    await add_menu_item(memory_store, name="Rice & Dal", available=False)
    await add_menu_item(memory_store, name="Poha", category=MealSlot.BREAKFAST)

    items = await menu_cache.items_by_category(redis, memory_store, MealSlot.LUNCH)
    assert [i.name for i in items] == ["Veg Thali"]
    assert await redis.ttl(menu_cache.cache_key(MealSlot.LUNCH)) > 0

    await add_menu_item(memory_store, name="Special Thali", price=120)
    cached = await menu_cache.items_by_category(redis, memory_store, MealSlot.LUNCH)
    assert cached == items

    await menu_cache.invalidate(redis)
    fresh = await menu_cache.items_by_category(redis, memory_store, MealSlot.LUNCH)
    assert [i.name for i in fresh] == ["Special Thali", "Veg Thali"]
