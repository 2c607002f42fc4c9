"""Effect descriptors: declarative modifiers carried by events, perks and upgrades.

Design:
  - An effect is a tagged record ``{kind, params}``; it never captures engine
    state and never executes by itself.
  - Continuous effects (multipliers, bonuses) are folded on demand by
    ``multiplier`` / ``additive`` over whatever sources are currently active.
  - Instant effects are interpreted exactly once by the global-event
    dispatcher in ``systems.events``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import field
from typing import TYPE_CHECKING

from pydantic.dataclasses import dataclass as pydantic_dataclass

from simlibrary.core.enums import EffectKind

if TYPE_CHECKING:
    from simlibrary.core.catalog import Catalog
    from simlibrary.core.repository import TowerState


@pydantic_dataclass(frozen=True)
class Effect:
    """A single tagged effect descriptor."""

    kind: EffectKind
    params: dict[str, float] = field(default_factory=dict)

    @property
    def value(self) -> float:
        return float(self.params.get("value", 0.0))


def multiplier(effects: Iterable[Effect], kind: EffectKind) -> float:
    """Product of the ``value`` of every effect of *kind* (1.0 when none)."""
    result = 1.0
    for eff in effects:
        if eff.kind == kind:
            result *= eff.value
    return result


def additive(effects: Iterable[Effect], kind: EffectKind) -> float:
    """Sum of the ``value`` of every effect of *kind* (0.0 when none)."""
    return sum(eff.value for eff in effects if eff.kind == kind)


def owned_effects(state: TowerState, catalog: Catalog) -> list[Effect]:
    """Effects granted permanently by purchased perks and upgrades."""
    out: list[Effect] = []
    for perk_id in state.unlocked_perks:
        perk = catalog.perks.get(perk_id)
        if perk is not None:
            out.extend(perk.effects)
    for upgrade_id in state.purchased_upgrades:
        upgrade = catalog.upgrades.get(upgrade_id)
        if upgrade is not None:
            out.extend(upgrade.effects)
    return out


def event_effects(state: TowerState, catalog: Catalog, now: int) -> list[Effect]:
    """Effects of the global event running at *now* (empty when none)."""
    active = state.active_event
    if active is None or now >= active.ends_at:
        return []
    event = catalog.events.get(active.event_id)
    return list(event.effects) if event is not None else []


def active_effects(state: TowerState, catalog: Catalog, now: int) -> list[Effect]:
    return owned_effects(state, catalog) + event_effects(state, catalog, now)
