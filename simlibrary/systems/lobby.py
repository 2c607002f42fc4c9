"""Lobby queues: job applicants and VIP guests sharing one capacity."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from simlibrary.core.catalog import STANDARD_STAFF_ORDER
from simlibrary.core.enums import Domain
from simlibrary.core.models import Applicant, LobbyVip
from simlibrary.systems.selection import uniform_choice, weighted_choice

if TYPE_CHECKING:
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)

DREAM_GENRE_CHANCE = 0.7


def roll_traits(ctx: SimContext) -> tuple[int, str | None]:
    """Skill 1-5 and an optional dream floor type for a new hire."""
    skill = ctx.rng.next_int(Domain.STAFF, 1, 5)
    dream = None
    if ctx.rng.next_bool(Domain.STAFF, DREAM_GENRE_CHANCE):
        dream = uniform_choice(ctx.catalog.standard_floor_ids(), ctx.rng, Domain.STAFF)
    return skill, dream


def has_room(ctx: SimContext) -> bool:
    return ctx.state.lobby_occupancy < ctx.config.lobby_capacity


def expire_lobby(ctx: SimContext, now: int) -> int:
    state = ctx.state
    before = state.lobby_occupancy
    state.applicants = [a for a in state.applicants if now < a.expires_at]
    state.lobby_vips = [v for v in state.lobby_vips if now < v.expires_at]
    return before - state.lobby_occupancy


def add_applicant(ctx: SimContext, now: int) -> Applicant | None:
    state = ctx.state
    if not has_room(ctx):
        return None
    staff_type = uniform_choice(list(ctx.catalog.staff_types), ctx.rng, Domain.LOBBY) or STANDARD_STAFF_ORDER[0]
    skill, dream = roll_traits(ctx)
    applicant = Applicant(
        id=state.allocate_id("a"),
        staff_type=staff_type,
        name=uniform_choice(ctx.catalog.first_names, ctx.rng, Domain.NAMES) or "Applicant",
        skill=skill,
        dream_genre=dream,
        arrived_at=now,
        expires_at=now + ctx.config.applicant_ttl_s * 1000,
    )
    state.applicants.append(applicant)
    logger.info("Applicant %s (%s, skill %d) arrived", applicant.name, staff_type, skill)
    ctx.notify("applicant_arrived", {"id": applicant.id, "staff_type": staff_type, "name": applicant.name})
    return applicant


def add_vip_guest(ctx: SimContext, now: int) -> LobbyVip | None:
    state = ctx.state
    if not has_room(ctx):
        return None
    vip = weighted_choice(ctx.catalog.vip_types, lambda v: v.spawn_chance, ctx.rng.next_float(Domain.LOBBY))
    if vip is None:
        return None
    guest = LobbyVip(
        id=state.allocate_id("v"),
        vip_type=vip.id,
        name=uniform_choice(ctx.catalog.first_names, ctx.rng, Domain.NAMES) or vip.name,
        arrived_at=now,
        expires_at=now + ctx.config.vip_guest_ttl_s * 1000,
    )
    state.lobby_vips.append(guest)
    logger.info("VIP guest %s (%s) is waiting in the lobby", guest.name, vip.id)
    ctx.notify("vip_arrived", {"id": guest.id, "vip_type": vip.id, "name": guest.name})
    return guest


def tick_lobby(ctx: SimContext, now: int) -> None:
    state = ctx.state
    cfg = ctx.config
    expire_lobby(ctx, now)
    if now >= state.next_applicant_at:
        add_applicant(ctx, now)
        state.next_applicant_at = now + ctx.rng.next_int(Domain.LOBBY, *cfg.applicant_interval_s) * 1000
    if now >= state.next_vip_guest_at:
        add_vip_guest(ctx, now)
        state.next_vip_guest_at = now + ctx.rng.next_int(Domain.LOBBY, *cfg.vip_guest_interval_s) * 1000
