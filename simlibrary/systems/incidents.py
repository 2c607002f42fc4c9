"""Floor incidents: occurrence rolls, fixed deadlines and clearing.

Gates on a new incident:
  - at least ``incident_min_floors`` standard floors exist
  - the cooldown since the last fix has elapsed
  - while any incident is active, a new one may only start on a floor
    that already has one (different kind); other floors stay calm
At most one incident begins per tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from simlibrary.core.enums import Domain
from simlibrary.core.models import Incident
from simlibrary.systems.selection import uniform_choice, weighted_choice

if TYPE_CHECKING:
    from simlibrary.core.catalog import IncidentDef
    from simlibrary.core.models import Floor
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)


def incident_def(ctx: SimContext, kind: str) -> IncidentDef | None:
    for d in ctx.catalog.incidents:
        if d.id == kind:
            return d
    return None


def occurrence_probability(ctx: SimContext, definition: IncidentDef) -> float:
    """Per-tick probability; a staffed fixer makes the incident rarer."""
    p = definition.probability
    if ctx.state.role_staffed(definition.fixer_role):
        p /= ctx.config.incident_fixer_reduction
    return p


def fix_deadline(ctx: SimContext, definition: IncidentDef, start: int) -> int:
    seconds = definition.fix_seconds
    if not ctx.state.role_staffed(definition.fixer_role):
        seconds *= ctx.config.incident_unstaffed_fix_factor
    return start + seconds * 1000


def _can_start(ctx: SimContext, now: int) -> bool:
    state = ctx.state
    cfg = ctx.config
    if state.non_utility_floor_count() < cfg.incident_min_floors:
        return False
    if state.last_incident_fixed_at and now - state.last_incident_fixed_at < cfg.incident_cooldown_s * 1000:
        return False
    return True


def maybe_start_incident(ctx: SimContext, now: int) -> tuple[Floor, Incident] | None:
    state = ctx.state
    if not _can_start(ctx, now) or not ctx.catalog.incidents:
        return None

    roll = ctx.rng.next_float(Domain.INCIDENT)
    total = sum(occurrence_probability(ctx, d) for d in ctx.catalog.incidents)
    if roll >= total:
        return None
    definition = weighted_choice(ctx.catalog.incidents, lambda d: occurrence_probability(ctx, d), roll, total=1.0)

    if state.active_incident_count():
        pool = [f for f in state.ready_standard_floors() if f.incidents]
    else:
        pool = state.ready_standard_floors()
    candidates = [f for f in pool if definition.id not in f.incidents]
    floor = uniform_choice(candidates, ctx.rng, Domain.INCIDENT)
    if floor is None:
        return None

    incident = Incident(kind=definition.id, start=now, fix_time=fix_deadline(ctx, definition, now))
    floor.incidents[definition.id] = incident
    state.bump("total_incidents")
    logger.info("Incident %s on %s (clears at %d)", definition.id, floor.id, incident.fix_time)
    ctx.notify("incident_occurred", {"floor_id": floor.id, "kind": definition.id, "fix_time": incident.fix_time})
    ctx.emit(now, "incident", f"{definition.name} on {floor.name}", floor_id=floor.id, kind=definition.id)
    return floor, incident


def clear_incident(ctx: SimContext, floor: Floor, kind: str, now: int) -> bool:
    state = ctx.state
    if floor.incidents.pop(kind, None) is None:
        return False
    state.last_incident_fixed_at = now
    state.bump("total_incidents_fixed")
    logger.info("Incident %s on %s resolved", kind, floor.id)
    ctx.notify("incident_resolved", {"floor_id": floor.id, "kind": kind})
    ctx.emit(now, "incident", f"{kind.replace('_', ' ')} on {floor.name} resolved", floor_id=floor.id)
    return True


def clear_due_incidents(ctx: SimContext, now: int) -> int:
    cleared = 0
    for floor in ctx.state.floors:
        for kind, incident in list(floor.incidents.items()):
            if now >= incident.fix_time and clear_incident(ctx, floor, kind, now):
                cleared += 1
    return cleared


def tick_incidents(ctx: SimContext, now: int) -> None:
    clear_due_incidents(ctx, now)
    maybe_start_incident(ctx, now)
