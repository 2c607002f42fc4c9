"""Staffing actions: hiring, firing, reassignment and the lobby queues.

Standard floors hold up to three staff in hire order; the n-th member
unlocks category n. Utility floors have one fixed slot per role.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from simlibrary.actions.base import ActionResult
from simlibrary.core.catalog import STANDARD_STAFF_ORDER
from simlibrary.core.enums import ErrorCode
from simlibrary.core.models import StaffMember
from simlibrary.systems import spawner
from simlibrary.systems.lobby import roll_traits

if TYPE_CHECKING:
    from simlibrary.core.models import Floor
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)


def _slot_for(ctx: SimContext, floor: Floor, type_id: str) -> tuple[int | None, ErrorCode | None]:
    """Where a member of *type_id* would go on *floor*, or why it cannot."""
    staff_type = ctx.catalog.staff_types.get(type_id)
    if staff_type is None:
        return None, ErrorCode.INVALID_TYPE
    if not floor.ready:
        return None, ErrorCode.WRONG_STATE
    if floor.is_standard:
        if staff_type.utility:
            return None, ErrorCode.INVALID_TYPE
        if floor.staff_count >= len(STANDARD_STAFF_ORDER):
            return None, ErrorCode.FULLY_STAFFED
        return floor.staff_count, None
    roles = ctx.catalog.floor_types[floor.type_id].utility_roles
    if type_id not in roles:
        return None, ErrorCode.INVALID_TYPE
    slot = roles.index(type_id)
    if len(floor.staff) < len(roles):
        floor.staff.extend([None] * (len(roles) - len(floor.staff)))
    if floor.staff[slot] is not None:
        return None, ErrorCode.SLOT_OCCUPIED
    return slot, None


def _seat(floor: Floor, member: StaffMember, slot: int) -> None:
    if floor.is_standard:
        floor.staff.append(member)
    else:
        floor.staff[slot] = member
    member.place(floor.id, floor.type_id)


def _new_member(ctx: SimContext, type_id: str, now: int) -> StaffMember:
    skill, dream = roll_traits(ctx)
    return StaffMember(id=ctx.state.allocate_id("s"), type_id=type_id, skill=skill, dream_genre=dream, hired_at=now)


def hire_staff(ctx: SimContext, floor_id: str, now: int, staff_type_id: str | None = None) -> ActionResult:
    """Hire the next standard staff member for a floor.

    Without *staff_type_id* the type is implied by the current staff count.
    Naming a type whose slot is not next fails: a later slot is
    ``category-locked``, an earlier one ``slot-occupied``.
    """
    state = ctx.state
    floor = state.floor(floor_id)
    if floor is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if not floor.is_standard:
        return ActionResult.fail(ErrorCode.INVALID_TYPE)
    if not floor.ready:
        return ActionResult.fail(ErrorCode.WRONG_STATE)
    count = floor.staff_count
    if count >= len(STANDARD_STAFF_ORDER):
        return ActionResult.fail(ErrorCode.FULLY_STAFFED)

    type_id = staff_type_id or STANDARD_STAFF_ORDER[count]
    if type_id not in STANDARD_STAFF_ORDER:
        return ActionResult.fail(ErrorCode.INVALID_TYPE)
    wanted = STANDARD_STAFF_ORDER.index(type_id)
    if wanted > count:
        return ActionResult.fail(ErrorCode.CATEGORY_LOCKED)
    if wanted < count:
        return ActionResult.fail(ErrorCode.SLOT_OCCUPIED)

    if not state.spend_stars(ctx.catalog.staff_types[type_id].hire_cost):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_FUNDS)
    member = _new_member(ctx, type_id, now)
    _seat(floor, member, count)
    state.bump("total_staff_hired")
    logger.info("Hired %s %s on %s (skill %d)", type_id, member.id, floor_id, member.skill)
    return ActionResult.ok(staff=member.to_dict(), category_unlocked=count)


def hire_utility_staff(ctx: SimContext, floor_id: str, role_id: str, now: int) -> ActionResult:
    state = ctx.state
    floor = state.floor(floor_id)
    if floor is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if floor.is_standard:
        return ActionResult.fail(ErrorCode.INVALID_TYPE)
    slot, error = _slot_for(ctx, floor, role_id)
    if error is not None:
        return ActionResult.fail(error)
    if not state.spend_stars(ctx.catalog.staff_types[role_id].hire_cost):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_FUNDS)
    member = _new_member(ctx, role_id, now)
    _seat(floor, member, slot)
    state.bump("total_staff_hired")
    logger.info("Hired %s %s on %s", role_id, member.id, floor_id)
    return ActionResult.ok(staff=member.to_dict(), slot=slot)


def fire_staff(ctx: SimContext, floor_id: str | None, staff_id: str) -> ActionResult:
    """Dismiss a staff member for good. ``floor_id=None`` targets the unassigned pool."""
    state = ctx.state
    floor, member = state.find_staff(staff_id)
    if member is None or (floor.id if floor is not None else None) != floor_id:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    state.detach_staff(staff_id)
    logger.info("Fired %s from %s", staff_id, floor_id or "the staff pool")
    return ActionResult.ok(staff_id=staff_id)


def reassign_staff(ctx: SimContext, staff_id: str, floor_id: str) -> ActionResult:
    state = ctx.state
    current, member = state.find_staff(staff_id)
    if member is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    target = state.floor(floor_id)
    if target is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if current is not None and current.id == floor_id:
        return ActionResult.fail(ErrorCode.WRONG_STATE)
    slot, error = _slot_for(ctx, target, member.type_id)
    if error is not None:
        return ActionResult.fail(error)
    state.detach_staff(staff_id)
    _seat(target, member, slot)
    logger.info("Reassigned %s to %s", staff_id, floor_id)
    return ActionResult.ok(staff=member.to_dict())


# ---------------------------------------------------------------------------
# Lobby
# ---------------------------------------------------------------------------

def hire_applicant(ctx: SimContext, applicant_id: str, now: int, floor_id: str | None = None) -> ActionResult:
    """Hire a lobby applicant at a discount, onto a floor or into the staff pool."""
    state = ctx.state
    applicant = next((a for a in state.applicants if a.id == applicant_id), None)
    if applicant is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    staff_type = ctx.catalog.staff_types.get(applicant.staff_type)
    if staff_type is None:
        return ActionResult.fail(ErrorCode.INVALID_TYPE)

    floor = None
    slot = None
    if floor_id is not None:
        floor = state.floor(floor_id)
        if floor is None:
            return ActionResult.fail(ErrorCode.NOT_FOUND)
        slot, error = _slot_for(ctx, floor, applicant.staff_type)
        if error is not None:
            return ActionResult.fail(error)

    cost = int(staff_type.hire_cost * ctx.config.applicant_discount)
    if not state.spend_stars(cost):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_FUNDS)

    member = StaffMember(
        id=state.allocate_id("s"),
        type_id=applicant.staff_type,
        skill=applicant.skill,
        dream_genre=applicant.dream_genre,
        hired_at=now,
    )
    if floor is not None:
        _seat(floor, member, slot)
    else:
        state.unassigned_staff.append(member)
    state.applicants.remove(applicant)
    state.bump("total_staff_hired")
    logger.info("Hired applicant %s as %s", applicant.name, member.id)
    return ActionResult.ok(staff=member.to_dict(), cost=cost)


def dismiss_applicant(ctx: SimContext, applicant_id: str) -> ActionResult:
    state = ctx.state
    applicant = next((a for a in state.applicants if a.id == applicant_id), None)
    if applicant is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    state.applicants.remove(applicant)
    return ActionResult.ok(applicant_id=applicant_id)


def welcome_vip(ctx: SimContext, vip_id: str, now: int) -> ActionResult:
    """Send a waiting VIP guest up as a reader. The guest stays if no floor can take them."""
    state = ctx.state
    guest = next((v for v in state.lobby_vips if v.id == vip_id), None)
    if guest is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    vip_type = ctx.catalog.vip_type(guest.vip_type)
    if vip_type is None:
        return ActionResult.fail(ErrorCode.INVALID_TYPE)
    reader = spawner.spawn_reader(ctx, now, vip_type=vip_type)
    if reader is None:
        return ActionResult.fail(ErrorCode.NO_ELIGIBLE_FLOOR)
    reader.name = guest.name or reader.name
    state.lobby_vips.remove(guest)
    return ActionResult.ok(reader=reader.to_dict())
