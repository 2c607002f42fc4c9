"""TowerLoop: the single tick entry point that advances every subsystem.

Fixed subsystem order per tick:
  1. construction / restock completion
  2. reader elevator rides and checkouts
  3. leveling
  4. rush hour
  5. spawn roll
  6. lobby queues
  7. objectives, global events, incidents
  8. weather / season
  9. mood
  10. cleaning
  11. achievements and prestige
  12. persistence write

A tick with no elapsed wall-clock time since the previous one is a no-op.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from simlibrary.systems import construction, environment, events, incidents, lobby, missions, progression, spawner

if TYPE_CHECKING:
    from simlibrary.systems.context import SimContext
    from simlibrary.utils.clock import Clock
    from simlibrary.utils.event_log import EventLog

logger = logging.getLogger(__name__)


class TowerLoop:
    """The heartbeat of the tower. Single writer of timer-driven state."""

    __slots__ = ("_ctx", "_clock", "_event_log", "_on_tick_end", "_ticks")

    def __init__(
        self,
        ctx: SimContext,
        clock: Clock,
        event_log: EventLog | None = None,
        on_tick_end: Callable[[int], None] | None = None,
    ) -> None:
        self._ctx = ctx
        self._clock = clock
        self._event_log = event_log
        self._on_tick_end = on_tick_end
        self._ticks = 0

    @property
    def ticks(self) -> int:
        """Ticks that actually advanced the tower."""
        return self._ticks

    def tick(self) -> bool:
        """Advance every subsystem to the clock's current time.

        Returns False when no time has passed (nothing is touched).
        """
        now = self._clock.now_ms()
        return self.tick_at(now)

    def tick_at(self, now: int) -> bool:
        ctx = self._ctx
        state = ctx.state
        if now <= state.last_tick_at:
            return False

        t0 = time.perf_counter()
        elapsed_s = now // 1000 - state.last_tick_at // 1000
        state.stats["time_played"] = state.stats.get("time_played", 0) + elapsed_s

        construction.complete_due(ctx, now)
        spawner.resolve_readers(ctx, now)
        progression.check_level_up(ctx, now)
        events.tick_rush_hour(ctx, now)
        spawner.spawn_tick(ctx, now)
        lobby.tick_lobby(ctx, now)
        missions.tick_objectives(ctx, now)
        events.tick_events(ctx, now)
        incidents.tick_incidents(ctx, now)
        environment.tick_season(ctx, now)
        environment.tick_weather(ctx, now)
        environment.tick_mood(ctx, now, elapsed_s)
        environment.tick_cleaning(ctx, now)
        progression.check_achievements(ctx, now)
        progression.check_prestige(ctx, now)

        state.last_tick_at = now
        state.rng_counters = ctx.rng.counters()
        self._ticks += 1

        emitted = ctx.drain_events()
        if self._event_log is not None and emitted:
            self._event_log.append_many(emitted)

        if self._on_tick_end is not None:
            self._on_tick_end(now)

        logger.debug(
            "Tick @%d: readers=%d stars=%d mood=%.1f (%.4fs)",
            now, len(state.readers), state.stars, state.mood, time.perf_counter() - t0,
        )
        return True
