"""Construction actions: build, delete, reorder, rush and upgrade floors."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from simlibrary.actions.base import ActionResult
from simlibrary.core.enums import ErrorCode, FloorKind, FloorStatus
from simlibrary.systems.construction import apply_upgrade_level, build_duration_ms, create_floor

if TYPE_CHECKING:
    from simlibrary.core.models import Floor
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)


def build_floor(ctx: SimContext, type_id: str, now: int) -> ActionResult:
    state = ctx.state
    ftype = ctx.catalog.floor_types.get(type_id)
    if ftype is None or ftype.kind == FloorKind.BASEMENT:
        return ActionResult.fail(ErrorCode.INVALID_TYPE)
    if state.stars < ftype.build_cost:
        return ActionResult.fail(ErrorCode.INSUFFICIENT_FUNDS)
    if len(state.player_floors()) >= ctx.config.max_floors:
        return ActionResult.fail(ErrorCode.CAPACITY_EXCEEDED)

    state.spend_stars(ftype.build_cost)
    floor = create_floor(state, ftype, now, build_ms=build_duration_ms(ctx, ftype, now))
    floor.cost_basis = ftype.build_cost
    state.add_floor(floor)
    state.bump("total_floors_built")
    logger.info("Building %s as %s (ready at %d)", ftype.id, floor.id, floor.build_end)
    ctx.emit(now, "construction", f"Construction started on {ftype.name}", floor_id=floor.id)
    return ActionResult.ok(floor_id=floor.id, floor=floor.to_dict())


def refund_basis(ctx: SimContext, floor: Floor) -> int:
    """Stars the floor cost to build. The free starter floor has a basis of 0."""
    if floor.cost_basis is not None:
        return floor.cost_basis
    ftype = ctx.catalog.floor_types.get(floor.type_id)
    return ftype.build_cost if ftype is not None else 0


def delete_floor(ctx: SimContext, floor_id: str, now: int) -> ActionResult:
    state = ctx.state
    floor = state.floor(floor_id)
    if floor is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if floor.kind == FloorKind.BASEMENT:
        return ActionResult.fail(ErrorCode.PROTECTED_FLOOR)
    if floor.is_standard and len(state.standard_floors()) <= 1:
        return ActionResult.fail(ErrorCode.LAST_FLOOR)

    refund = int(refund_basis(ctx, floor) * ctx.config.delete_refund_ratio)
    unassigned = [m.id for m in floor.members()]
    state.remove_floor(floor_id)
    state.credit_stars(refund, earned=False)

    retry_ms = ctx.config.mission_retry_s * 1000
    if state.mission is not None and state.mission.floor_id == floor_id:
        state.mission = None
        state.next_mission_at = now + retry_ms
    if state.find_mission is not None and state.find_mission.hides_item_on(floor_id):
        state.find_mission = None
        state.next_find_mission_at = now + retry_ms
    if state.hall_event is not None and state.hall_event.floor_id == floor_id:
        state.hall_event = None
        state.next_hall_event_at = now + retry_ms

    logger.info("Deleted floor %s (refund %d, %d staff unassigned)", floor_id, refund, len(unassigned))
    return ActionResult.ok(refund=refund, unassigned_staff=unassigned)


def reorder_floor(ctx: SimContext, floor_id: str, target_index: int) -> ActionResult:
    """Move a player floor to *target_index* among the player floors (0 = lowest).

    The floors keep the same set of floor numbers; they are handed out again
    bottom-up in the new order, so elevator times follow the new position.
    """
    state = ctx.state
    floor = state.floor(floor_id)
    if floor is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if floor.kind == FloorKind.BASEMENT:
        return ActionResult.fail(ErrorCode.PROTECTED_FLOOR)
    ordered = sorted(state.player_floors(), key=lambda f: f.floor_number)
    if not 0 <= target_index < len(ordered):
        return ActionResult.fail(ErrorCode.OUT_OF_RANGE)

    numbers = sorted(f.floor_number for f in ordered)
    ordered.remove(floor)
    ordered.insert(target_index, floor)
    for f, number in zip(ordered, numbers):
        f.floor_number = number
    state.floors = [f for f in state.floors if f.kind == FloorKind.BASEMENT] + ordered
    logger.info("Moved %s to position %d (floor %d)", floor_id, target_index, floor.floor_number)
    return ActionResult.ok(floor_id=floor_id, order=[f.id for f in ordered])


def rush_construction(ctx: SimContext, floor_id: str, now: int) -> ActionResult:
    state = ctx.state
    floor = state.floor(floor_id)
    if floor is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if floor.status != FloorStatus.BUILDING:
        return ActionResult.fail(ErrorCode.WRONG_STATE)
    if not state.spend_bucks(1):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_BUCKS)
    floor.status = FloorStatus.READY
    floor.build_end = now
    logger.info("Rushed construction of %s", floor_id)
    return ActionResult.ok(floor_id=floor_id)


def upgrade_floor(ctx: SimContext, floor_id: str, now: int) -> ActionResult:
    state = ctx.state
    floor = state.floor(floor_id)
    if floor is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if not floor.ready or not floor.is_standard:
        return ActionResult.fail(ErrorCode.WRONG_STATE)
    if floor.upgrade_level >= ctx.config.max_upgrade_level:
        return ActionResult.fail(ErrorCode.MAX_LEVEL)
    cost = ctx.config.upgrade_costs[floor.upgrade_level - 1]
    if not state.spend_stars(cost):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_FUNDS)
    floor.upgrade_level += 1
    apply_upgrade_level(ctx, floor)
    logger.info("Upgraded %s to level %d", floor_id, floor.upgrade_level)
    ctx.emit(now, "construction", f"{floor.name} upgraded to level {floor.upgrade_level}", floor_id=floor_id)
    return ActionResult.ok(floor_id=floor_id, level=floor.upgrade_level, cost=cost)
