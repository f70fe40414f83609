"""Daily extras routes backed by the admission engine."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from .billing.display import format_extra_display
from .deps.store import get_store
from .domain.entities import DailyExtra
from .repos.store import RecordStore
from .routes_metrics import extras_admitted_total
from .schemas import ExtraIn
from .services.extras import ExtrasAdmission, ExtraWrite
from .utils.responses import ok

router = APIRouter(prefix="/api/extras")


async def _with_display(store: RecordStore, extras: list[DailyExtra]) -> list[dict]:
    items: dict = {}
    data = []
    for extra in extras:
        if extra.menu_item_id not in items:
            items[extra.menu_item_id] = await store.get_menu_item(extra.menu_item_id)
        data.append(
            {
                **extra.to_dict(),
                "display": format_extra_display(extra, items[extra.menu_item_id]),
            }
        )
    return data


@router.post("")
async def admit_extra(payload: ExtraIn, store: RecordStore = Depends(get_store)) -> dict:
    """Write an extra into its slot, overwriting whatever the slot held."""

    admission = await ExtrasAdmission(store).admit_extra(
        ExtraWrite(**payload.model_dump())
    )
    extras_admitted_total.labels(
        outcome="overwritten" if admission.overwritten else "created"
    ).inc()
    (data,) = await _with_display(store, [admission.extra])
    data["overwritten"] = admission.overwritten
    return ok(data)


@router.get("")
async def extras_for_date(date: str, store: RecordStore = Depends(get_store)) -> dict:
    """Return every customer's extras on ``date``."""

    extras = await ExtrasAdmission(store).extras_for_date(date)
    return ok(await _with_display(store, extras))


@router.get("/slots")
async def taken_slots(
    customer_id: str, date: str, store: RecordStore = Depends(get_store)
) -> dict:
    """Return the meal slots that already hold an extra for the customer."""

    slots = await ExtrasAdmission(store).taken_slots(customer_id, date)
    return ok({"customer_id": customer_id, "date": date, "taken": [s.value for s in slots]})


@router.get("/find")
async def find_extra(
    customer_id: str,
    date: str,
    meal_slot: str,
    store: RecordStore = Depends(get_store),
) -> dict:
    extra = await ExtrasAdmission(store).find_extra(customer_id, date, meal_slot)
    if extra is None:
        return ok(None)
    (data,) = await _with_display(store, [extra])
    return ok(data)


@router.delete("")
async def remove_extra(
    customer_id: str,
    date: str,
    meal_slot: str | None = None,
    store: RecordStore = Depends(get_store),
) -> dict:
    """Remove one slot's extra, or the whole day's when ``meal_slot`` is omitted."""

    removed = await ExtrasAdmission(store).remove_extra(customer_id, date, meal_slot)
    return ok({"removed": removed})
