"""Floor factory plus construction and restock timers."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from simlibrary.core.effects import multiplier
from simlibrary.core.enums import EffectKind, FloorKind, FloorStatus
from simlibrary.core.models import Category, Floor

if TYPE_CHECKING:
    from simlibrary.core.catalog import FloorTypeDef
    from simlibrary.core.repository import TowerState
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)

# Stock and earning multipliers applied to catalog values per upgrade level.
UPGRADE_MULTIPLIERS: dict[int, float] = {1: 1.0, 2: 1.25, 3: 1.5}


def create_floor(state: TowerState, ftype: FloorTypeDef, now: int, build_ms: int = 0) -> Floor:
    """Build a floor record for *ftype*. ``build_ms == 0`` yields a ready floor."""
    if ftype.kind == FloorKind.BASEMENT:
        number = 0
    else:
        number = state.next_floor_slot
        state.next_floor_slot += 1
    floor = Floor(
        id=state.allocate_id("f"),
        type_id=ftype.id,
        name=ftype.name,
        kind=ftype.kind,
        floor_number=number,
        status=FloorStatus.READY if build_ms <= 0 else FloorStatus.BUILDING,
        build_start=now,
        build_end=now + max(0, build_ms),
        book_stock=[
            Category(
                name=c.name,
                current_stock=0,
                max_stock=c.stock_amount,
                stock_cost=c.stock_cost,
                stock_time=c.stock_time,
                earning_rate=c.earning_rate,
            )
            for c in ftype.categories
        ],
        staff=[None] * len(ftype.utility_roles),
    )
    return floor


def build_duration_ms(ctx: SimContext, ftype: FloorTypeDef, now: int) -> int:
    speed = multiplier(ctx.effects(now), EffectKind.BUILD_SPEED) or 1.0
    return int(ftype.build_time * 1000 / speed)


def restock_duration_ms(ctx: SimContext, floor: Floor, index: int, now: int) -> int:
    """Stock time shortened by the skill of the staff member unlocking the category."""
    category = floor.book_stock[index]
    seconds = float(category.stock_time)
    member = floor.staff[index] if index < len(floor.staff) else None
    if member is not None:
        seconds *= 1.0 - 0.05 * (member.skill - 1)
        if member.is_dream_match:
            seconds *= 0.9
    speed = multiplier(ctx.effects(now), EffectKind.RESTOCK_SPEED) or 1.0
    return int(seconds * 1000 / speed)


def scaled_value(base: int, level: int) -> int:
    """Catalog value scaled for *level*, rounded half up. Never compounded."""
    return int(math.floor(base * UPGRADE_MULTIPLIERS.get(level, 1.0) + 0.5))


def apply_upgrade_level(ctx: SimContext, floor: Floor) -> None:
    ftype = ctx.catalog.floor_types[floor.type_id]
    for category, definition in zip(floor.book_stock, ftype.categories):
        category.max_stock = scaled_value(definition.stock_amount, floor.upgrade_level)
        category.earning_rate = scaled_value(definition.earning_rate, floor.upgrade_level)
        category.current_stock = min(category.current_stock, category.max_stock)


def complete_due(ctx: SimContext, now: int) -> tuple[int, int]:
    """Flip finished builds to ready and fill finished restocks.

    Returns (floors completed, restocks completed). A completed build only
    changes ``status``.
    """
    built = restocked = 0
    for floor in ctx.state.floors:
        if floor.status == FloorStatus.BUILDING and now >= floor.build_end:
            floor.status = FloorStatus.READY
            built += 1
            logger.info("Floor %s (%s) is ready", floor.id, floor.type_id)
            ctx.emit(now, "construction", f"{floor.name} is open for business", floor_id=floor.id)
        for category in floor.book_stock:
            if category.restocking and category.restock_end is not None and now >= category.restock_end:
                category.fill()
                restocked += 1
    return built, restocked
