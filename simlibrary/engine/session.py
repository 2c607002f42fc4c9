"""GameSession: the facade a host application drives.

Owns the tower state, clock, RNG, store and tick loop. Every successful
player action and every advancing tick ends with a full snapshot write.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

from simlibrary.actions import construction as construction_actions
from simlibrary.actions import rewards, shop, staffing, stocking
from simlibrary.actions.base import ActionResult
from simlibrary.config import EngineConfig
from simlibrary.core.catalog import Catalog
from simlibrary.core.enums import ErrorCode
from simlibrary.engine import persistence
from simlibrary.engine.persistence import KeyValueStore, MemoryStore, OfflineReport
from simlibrary.engine.tower_loop import TowerLoop
from simlibrary.systems import environment, spawner
from simlibrary.systems.context import SimContext
from simlibrary.systems.rng import DeterministicRNG
from simlibrary.utils.clock import Clock, SystemClock
from simlibrary.utils.event_log import EventLog

logger = logging.getLogger(__name__)


class GameSession:
    """One running game: load-or-create, offline catch-up, ticks and actions."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        catalog: Catalog | None = None,
        clock: Clock | None = None,
        store: KeyValueStore | None = None,
        rng: DeterministicRNG | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.catalog = catalog or Catalog.default()
        self.clock = clock or SystemClock()
        self.store = store if store is not None else MemoryStore()
        self.event_log = event_log if event_log is not None else EventLog()
        self.offline_report: OfflineReport | None = None
        self._rng_override = rng
        self._start()

    # -- lifecycle --

    def _start(self) -> None:
        now = self.clock.now_ms()
        loaded = persistence.load(self.store, self.config, self.catalog)
        if loaded is None:
            state = persistence.new_game(self.catalog, self.config, now)
            last_timestamp = None
            logger.info("Started a new game (seed=%d)", self.config.world_seed)
        else:
            state, last_timestamp = loaded
            logger.info("Loaded save %s (level %d, %d stars)", self.config.save_key, state.level, state.stars)

        rng = self._rng_override or DeterministicRNG(self.config.world_seed)
        rng.restore(state.rng_counters)
        self.ctx = SimContext(state=state, catalog=self.catalog, config=self.config, rng=rng)
        self.loop = TowerLoop(self.ctx, self.clock, self.event_log, on_tick_end=self._after_tick)

        if last_timestamp is not None:
            self.offline_report = persistence.process_offline_progress(self.ctx, last_timestamp, now)
            state.last_tick_at = now
        self._flush_events()
        self.save()

    def reset(self) -> None:
        """Discard the save and start over."""
        self.store.delete(self.config.save_key)
        self.event_log.clear()
        self.offline_report = None
        if self._rng_override is not None:
            self._rng_override.restore({})
        self._start()

    @property
    def state(self):
        return self.ctx.state

    @property
    def now(self) -> int:
        return self.clock.now_ms()

    def save(self) -> bool:
        self.ctx.state.rng_counters = self.ctx.rng.counters()
        return persistence.save(self.store, self.config, self.ctx.state, self.clock.now_ms())

    def _after_tick(self, now: int) -> None:
        persistence.save(self.store, self.config, self.ctx.state, now)

    def _flush_events(self) -> None:
        emitted = self.ctx.drain_events()
        if emitted:
            self.event_log.append_many(emitted)

    def tick(self) -> bool:
        return self.loop.tick()

    def consume_notifications(self) -> dict[str, Any]:
        return self.ctx.state.notifications.consume()

    def _finish(self, result: ActionResult) -> ActionResult:
        self._flush_events()
        if result.success:
            self.save()
        return result

    # -- construction --

    def build_floor(self, type_id: str) -> ActionResult:
        return self._finish(construction_actions.build_floor(self.ctx, type_id, self.now))

    def delete_floor(self, floor_id: str) -> ActionResult:
        return self._finish(construction_actions.delete_floor(self.ctx, floor_id, self.now))

    def reorder_floor(self, floor_id: str, target_index: int) -> ActionResult:
        return self._finish(construction_actions.reorder_floor(self.ctx, floor_id, target_index))

    def rush_construction(self, floor_id: str) -> ActionResult:
        return self._finish(construction_actions.rush_construction(self.ctx, floor_id, self.now))

    def upgrade_floor(self, floor_id: str) -> ActionResult:
        return self._finish(construction_actions.upgrade_floor(self.ctx, floor_id, self.now))

    # -- staffing & lobby --

    def hire_staff(self, floor_id: str, staff_type_id: str | None = None) -> ActionResult:
        return self._finish(staffing.hire_staff(self.ctx, floor_id, self.now, staff_type_id))

    def hire_utility_staff(self, floor_id: str, role_id: str) -> ActionResult:
        return self._finish(staffing.hire_utility_staff(self.ctx, floor_id, role_id, self.now))

    def fire_staff(self, floor_id: str | None, staff_id: str) -> ActionResult:
        return self._finish(staffing.fire_staff(self.ctx, floor_id, staff_id))

    def reassign_staff(self, staff_id: str, floor_id: str) -> ActionResult:
        return self._finish(staffing.reassign_staff(self.ctx, staff_id, floor_id))

    def hire_applicant(self, applicant_id: str, floor_id: str | None = None) -> ActionResult:
        return self._finish(staffing.hire_applicant(self.ctx, applicant_id, self.now, floor_id))

    def dismiss_applicant(self, applicant_id: str) -> ActionResult:
        return self._finish(staffing.dismiss_applicant(self.ctx, applicant_id))

    def welcome_vip(self, vip_id: str) -> ActionResult:
        return self._finish(staffing.welcome_vip(self.ctx, vip_id, self.now))

    # -- floor upkeep --

    def restock_books(self, floor_id: str, category_index: int) -> ActionResult:
        return self._finish(stocking.restock_books(self.ctx, floor_id, category_index, self.now))

    def rush_restocking(self, floor_id: str, category_index: int) -> ActionResult:
        return self._finish(stocking.rush_restocking(self.ctx, floor_id, category_index, self.now))

    def clean_floor(self, floor_id: str) -> ActionResult:
        return self._finish(stocking.clean_floor(self.ctx, floor_id))

    def cancel_elevator_ride(self, reader_id: str) -> ActionResult:
        return self._finish(stocking.cancel_elevator_ride(self.ctx, reader_id))

    def search_floor(self, floor_id: str) -> ActionResult:
        return self._finish(stocking.search_floor(self.ctx, floor_id, self.now))

    def resolve_incident(self, floor_id: str, kind: str) -> ActionResult:
        return self._finish(stocking.resolve_incident(self.ctx, floor_id, kind, self.now))

    # -- shop --

    def purchase_perk(self, perk_id: str) -> ActionResult:
        return self._finish(shop.purchase_perk(self.ctx, perk_id))

    def purchase_upgrade(self, upgrade_id: str) -> ActionResult:
        return self._finish(shop.purchase_upgrade(self.ctx, upgrade_id))

    def purchase_decoration(self, decoration_id: str) -> ActionResult:
        return self._finish(shop.purchase_decoration(self.ctx, decoration_id))

    def place_lobby_decoration(self, decoration_id: str) -> ActionResult:
        return self._finish(shop.place_lobby_decoration(self.ctx, decoration_id))

    def place_floor_decoration(self, floor_id: str, decoration_id: str) -> ActionResult:
        return self._finish(shop.place_floor_decoration(self.ctx, floor_id, decoration_id))

    def purchase_theme(self, theme_id: str) -> ActionResult:
        return self._finish(shop.purchase_theme(self.ctx, theme_id))

    def set_theme(self, theme_id: str) -> ActionResult:
        return self._finish(shop.set_theme(self.ctx, theme_id))

    # -- rewards --

    def check_daily_login(self) -> ActionResult:
        return self._finish(rewards.check_daily_login(self.ctx, self.now))

    # -- readers --

    def spawn_reader(self):
        """Force one spawn attempt outside the tick roll. None when nothing can spawn."""
        reader = spawner.spawn_reader(self.ctx, self.now)
        if reader is not None:
            self.save()
        return reader

    # -- dispatch --

    def actions(self) -> dict[str, Callable[..., ActionResult]]:
        """Player actions by their public (camelCase) name."""
        return {
            "buildFloor": self.build_floor,
            "deleteFloor": self.delete_floor,
            "reorderFloor": self.reorder_floor,
            "rushConstruction": self.rush_construction,
            "upgradeFloor": self.upgrade_floor,
            "hireStaff": self.hire_staff,
            "hireUtilityStaff": self.hire_utility_staff,
            "fireStaff": self.fire_staff,
            "reassignStaff": self.reassign_staff,
            "hireApplicant": self.hire_applicant,
            "dismissApplicant": self.dismiss_applicant,
            "welcomeVip": self.welcome_vip,
            "restockBooks": self.restock_books,
            "rushRestocking": self.rush_restocking,
            "cleanFloor": self.clean_floor,
            "cancelElevatorRide": self.cancel_elevator_ride,
            "searchFloor": self.search_floor,
            "resolveIncident": self.resolve_incident,
            "purchasePerk": self.purchase_perk,
            "purchaseUpgrade": self.purchase_upgrade,
            "purchaseDecoration": self.purchase_decoration,
            "placeLobbyDecoration": self.place_lobby_decoration,
            "placeFloorDecoration": self.place_floor_decoration,
            "purchaseTheme": self.purchase_theme,
            "setTheme": self.set_theme,
            "checkDailyLogin": self.check_daily_login,
        }

    def check_params(self, name: str, params: dict[str, Any]) -> None:
        """Raise TypeError when *params* do not fit the signature of action *name*."""
        inspect.signature(self.actions()[name]).bind(**params)

    def dispatch(self, name: str, **params: Any) -> ActionResult:
        handler = self.actions().get(name)
        if handler is None:
            return ActionResult.fail(ErrorCode.INVALID_TYPE, action=name)
        return handler(**params)

    # -- views --

    def describe(self) -> dict[str, Any]:
        """JSON-ready view of the tower for API consumers."""
        state = self.ctx.state
        now = self.now
        data = persistence.encode_state(state, now)
        data.pop("rng_counters", None)
        data["game_day"] = environment.game_day(self.ctx)
        data["mood_target"] = round(environment.mood_target(self.ctx, now), 2)
        data["rush_hour_active"] = now < state.rush_hour_until
        data["pending_notifications"] = sorted(state.notifications.pending())
        return data
