"""SimContext: the collaborators every subsystem and action operates on.

Subsystems are plain functions taking ``(ctx, now)``. They mutate
``ctx.state`` in place and append feed entries through ``ctx.emit``; the
tick loop drains ``ctx.events`` into the shared ``EventLog`` afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from simlibrary.core.effects import Effect, active_effects
from simlibrary.utils.event_log import SimEvent

if TYPE_CHECKING:
    from simlibrary.config import EngineConfig
    from simlibrary.core.catalog import Catalog
    from simlibrary.core.repository import TowerState
    from simlibrary.systems.rng import DeterministicRNG


@dataclass
class SimContext:
    state: TowerState
    catalog: Catalog
    config: EngineConfig
    rng: DeterministicRNG
    events: list[SimEvent] = field(default_factory=list)

    def emit(self, now: int, category: str, message: str, **metadata) -> None:
        self.events.append(SimEvent(timestamp=now, category=category, message=message, metadata=metadata))

    def drain_events(self) -> list[SimEvent]:
        out = self.events
        self.events = []
        return out

    def effects(self, now: int) -> list[Effect]:
        """Continuous effects active at *now* (owned perks/upgrades plus the running event)."""
        return active_effects(self.state, self.catalog, now)

    def notify(self, kind: str, payload) -> None:
        self.state.notifications.set(kind, payload)
