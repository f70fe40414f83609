"""Menu catalogue routes.

Writes drop the cached per-category listings used by the extras form.
"""

from __future__ import annotations

from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException
from redis.asyncio import Redis

from config import get_settings

from .deps.store import get_redis, get_store
from .domain.entities import MenuItem, new_id
from .domain.enums import MealSlot
from .repos.store import RecordStore
from .schemas import MenuItemIn, MenuItemUpdate
from .services import menu_cache
from .utils.responses import ok

router = APIRouter(prefix="/api/menu")


@router.get("")
async def list_menu_items(store: RecordStore = Depends(get_store)) -> dict:
    """Return every menu item, available or not."""

    return ok([item.to_dict() for item in await store.list_menu_items()])


@router.get("/category/{category}")
async def list_category(
    category: MealSlot,
    store: RecordStore = Depends(get_store),
    redis: Redis = Depends(get_redis),
) -> dict:
    """Return available items for one meal slot."""

    items = await menu_cache.items_by_category(
        redis, store, category, ttl=get_settings().menu_cache_ttl
    )
    return ok([item.to_dict() for item in items])


@router.post("")
async def create_menu_item(
    payload: MenuItemIn,
    store: RecordStore = Depends(get_store),
    redis: Redis = Depends(get_redis),
) -> dict:
    item = MenuItem(
        id=new_id(),
        name=payload.name.strip(),
        category=payload.category,
        price=payload.price,
        description=payload.description,
        available=payload.available,
    )
    saved = await store.add_menu_item(item)
    await menu_cache.invalidate(redis)
    return ok(saved.to_dict())


@router.get("/{item_id}")
async def get_menu_item(item_id: str, store: RecordStore = Depends(get_store)) -> dict:
    item = await store.get_menu_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return ok(item.to_dict())


@router.put("/{item_id}")
async def update_menu_item(
    item_id: str,
    payload: MenuItemUpdate,
    store: RecordStore = Depends(get_store),
    redis: Redis = Depends(get_redis),
) -> dict:
    """Update a menu item. Prices already captured on extras do not change."""

    current = await store.get_menu_item(item_id)
    if current is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    updated = await store.update_menu_item(replace(current, **changes))
    if updated is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    await menu_cache.invalidate(redis)
    return ok(updated.to_dict())


@router.delete("/{item_id}")
async def delete_menu_item(
    item_id: str,
    store: RecordStore = Depends(get_store),
    redis: Redis = Depends(get_redis),
) -> dict:
    if not await store.delete_menu_item(item_id):
        raise HTTPException(status_code=404, detail="Menu item not found")
    await menu_cache.invalidate(redis)
    return ok({"deleted": item_id})
