"""Global events, rush hour and the instant-effect dispatcher."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from simlibrary.core.enums import Domain, EffectKind
from simlibrary.core.models import ActiveEvent
from simlibrary.systems.selection import uniform_choice

if TYPE_CHECKING:
    from simlibrary.core.catalog import EventDef
    from simlibrary.core.effects import Effect
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)


def apply_instant_effect(ctx: SimContext, effect: Effect, now: int) -> None:
    """Interpret one instant effect descriptor. Continuous kinds are ignored here."""
    state = ctx.state
    if effect.kind == EffectKind.RESTOCK_ALL:
        for floor in state.ready_standard_floors():
            for category in floor.book_stock:
                category.fill()
    elif effect.kind == EffectKind.DONATION:
        source = uniform_choice(ctx.catalog.donation_sources, ctx.rng, Domain.EVENT)
        if source is not None:
            state.credit_stars(source.stars)
            ctx.emit(now, "event", f"{source.name} donated {source.stars} stars", source=source.id)
    elif effect.kind == EffectKind.GRANT_BUCKS:
        state.credit_bucks(int(effect.params.get("value", 1)))


def start_event(ctx: SimContext, event: EventDef, now: int) -> ActiveEvent:
    state = ctx.state
    active = ActiveEvent(event_id=event.id, started_at=now, ends_at=now + event.duration_s * 1000)
    state.active_event = active
    for effect in event.effects:
        apply_instant_effect(ctx, effect, now)
    state.bump("total_events_seen")
    logger.info("Event started: %s (%ds)", event.name, event.duration_s)
    ctx.notify("event_started", {"id": event.id, "name": event.name, "ends_at": active.ends_at})
    ctx.emit(now, "event", f"{event.name} has begun", event_id=event.id)
    return active


def end_expired_event(ctx: SimContext, now: int) -> bool:
    state = ctx.state
    active = state.active_event
    if active is None or now < active.ends_at:
        return False
    state.active_event = None
    logger.info("Event ended: %s", active.event_id)
    return True


def tick_events(ctx: SimContext, now: int) -> None:
    state = ctx.state
    end_expired_event(ctx, now)
    if state.active_event is not None or now < state.next_event_at:
        return
    lo, hi = ctx.config.event_interval_s
    state.next_event_at = now + ctx.rng.next_int(Domain.EVENT, lo, hi) * 1000
    event = uniform_choice(list(ctx.catalog.events.values()), ctx.rng, Domain.EVENT)
    if event is not None:
        start_event(ctx, event, now)


def tick_rush_hour(ctx: SimContext, now: int) -> None:
    state = ctx.state
    if now < state.next_rush_hour_at:
        return
    cfg = ctx.config
    state.rush_hour_until = now + cfg.rush_hour_duration_s * 1000
    lo, hi = cfg.rush_hour_interval_s
    state.next_rush_hour_at = now + ctx.rng.next_int(Domain.EVENT, lo, hi) * 1000
    logger.info("Rush hour until %d", state.rush_hour_until)
    ctx.notify("rush_hour", {"until": state.rush_hour_until})
    ctx.emit(now, "rush_hour", "Rush hour! Readers are pouring in")
