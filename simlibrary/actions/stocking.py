"""Floor upkeep actions: restocking, cleaning, readers, lost items, incidents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from simlibrary.actions.base import ActionResult
from simlibrary.core.enums import ErrorCode, ElevatorState
from simlibrary.systems import incidents, missions, spawner
from simlibrary.systems.construction import restock_duration_ms

if TYPE_CHECKING:
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)


def restock_books(ctx: SimContext, floor_id: str, category_index: int, now: int) -> ActionResult:
    state = ctx.state
    floor = state.floor(floor_id)
    if floor is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if not floor.ready:
        return ActionResult.fail(ErrorCode.WRONG_STATE)
    if not 0 <= category_index < len(floor.book_stock):
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if not floor.is_unlocked(category_index):
        return ActionResult.fail(ErrorCode.CATEGORY_LOCKED)
    category = floor.book_stock[category_index]
    if category.restocking:
        return ActionResult.fail(ErrorCode.ALREADY_RESTOCKING)
    if category.current_stock >= category.max_stock:
        return ActionResult.fail(ErrorCode.ALREADY_FULL)
    if not state.spend_stars(category.stock_cost):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_FUNDS)

    category.restocking = True
    category.restock_start = now
    category.restock_end = now + restock_duration_ms(ctx, floor, category_index, now)
    state.bump("total_restocks")
    missions.on_restock(ctx, now)
    logger.debug("Restocking %s[%d] until %d", floor_id, category_index, category.restock_end)
    return ActionResult.ok(restock_end=category.restock_end)


def rush_restocking(ctx: SimContext, floor_id: str, category_index: int, now: int) -> ActionResult:
    state = ctx.state
    floor = state.floor(floor_id)
    if floor is None or not 0 <= category_index < len(floor.book_stock):
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    category = floor.book_stock[category_index]
    if not category.restocking:
        return ActionResult.fail(ErrorCode.WRONG_STATE)
    if not state.spend_bucks(1):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_BUCKS)
    category.fill()
    category.restock_end = now
    return ActionResult.ok(current_stock=category.current_stock)


def clean_floor(ctx: SimContext, floor_id: str) -> ActionResult:
    state = ctx.state
    floor = state.floor(floor_id)
    if floor is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if floor.trash == 0:
        return ActionResult.fail(ErrorCode.WRONG_STATE)
    if not state.spend_stars(ctx.config.manual_clean_cost):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_FUNDS)
    removed = floor.trash
    floor.trash = 0
    return ActionResult.ok(removed=removed)


def cancel_elevator_ride(ctx: SimContext, reader_id: str) -> ActionResult:
    reader = ctx.state.reader(reader_id)
    if reader is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if reader.elevator_state != ElevatorState.WAITING:
        return ActionResult.fail(ErrorCode.WRONG_STATE)
    spawner.cancel_ride(ctx, reader_id)
    return ActionResult.ok(reader_id=reader_id)


def search_floor(ctx: SimContext, floor_id: str, now: int) -> ActionResult:
    state = ctx.state
    if state.floor(floor_id) is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    find = state.find_mission
    if find is None or not find.active:
        return ActionResult.fail(ErrorCode.WRONG_STATE)
    reward = find.reward_stars
    found = missions.search_floor(ctx, floor_id, now)
    completed = found and state.find_mission is None
    return ActionResult.ok(
        found=found,
        items_found=find.found,
        items_total=find.total,
        reward_stars=reward if completed else 0,
    )


def resolve_incident(ctx: SimContext, floor_id: str, kind: str, now: int) -> ActionResult:
    state = ctx.state
    floor = state.floor(floor_id)
    if floor is None or kind not in floor.incidents:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if not state.spend_bucks(1):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_BUCKS)
    incidents.clear_incident(ctx, floor, kind, now)
    return ActionResult.ok(floor_id=floor_id, kind=kind)
