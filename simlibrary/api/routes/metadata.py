"""Metadata endpoints: the read-only content catalog, so clients hardcode nothing.

Catalog entries are pydantic dataclasses from ``simlibrary.core.catalog``
serialized directly.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import TypeAdapter

from simlibrary.api.dependencies import get_engine_manager
from simlibrary.api.engine_manager import EngineManager
from simlibrary.core.catalog import Catalog
from simlibrary.core.repository import NOTIFICATION_KINDS

router = APIRouter(prefix="/metadata", tags=["Metadata"])


def _dump(items) -> list[dict[str, Any]]:
    items = list(items)
    if not items:
        return []
    return TypeAdapter(list[type(items[0])]).dump_python(items, mode="json")


def serialize_catalog(catalog: Catalog) -> dict[str, Any]:
    return {
        "floor_types": _dump(catalog.floor_types.values()),
        "staff_types": _dump(catalog.staff_types.values()),
        "reader_types": _dump(catalog.reader_types),
        "vip_types": _dump(catalog.vip_types),
        "events": _dump(catalog.events.values()),
        "donation_sources": _dump(catalog.donation_sources),
        "synergies": _dump(catalog.synergies),
        "holidays": _dump(catalog.holidays),
        "incidents": _dump(catalog.incidents),
        "weather": _dump(catalog.weather),
        "achievements": _dump(catalog.achievements),
        "prestige_levels": _dump(catalog.prestige_levels),
        "perks": _dump(catalog.perks.values()),
        "upgrades": _dump(catalog.upgrades.values()),
        "decorations": _dump(catalog.decorations.values()),
        "themes": _dump(catalog.themes.values()),
        "mini_quests": _dump(catalog.mini_quests),
        "hall_events": _dump(catalog.hall_events),
    }


@router.get("/catalog")
def get_catalog(manager: EngineManager = Depends(get_engine_manager)) -> dict[str, Any]:
    return serialize_catalog(manager.catalog())


@router.get("/notification-kinds", response_model=list[str])
def get_notification_kinds() -> list[str]:
    return list(NOTIFICATION_KINDS)
