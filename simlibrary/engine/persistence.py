"""Snapshot persistence, new-game setup and offline reconciliation.

Snapshot format: one JSON object stored under ``EngineConfig.save_key``
holding every persisted ``TowerState`` field plus ``timestamp`` (ms).

Loading is defensive. Each field falls back to its default when absent,
legacy bare-string staff entries are normalized, and any structurally
broken payload is reported as "no save" so the caller starts fresh.
"""

from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from simlibrary.config import EngineConfig
from simlibrary.core.catalog import BASEMENT_TYPE_ID, STANDARD_STAFF_ORDER, Catalog
from simlibrary.core.effects import additive, owned_effects
from simlibrary.core.enums import EffectKind, FloorStatus
from simlibrary.core.models import (
    ActiveEvent,
    Applicant,
    FindMission,
    Floor,
    HallEvent,
    LobbyVip,
    MiniQuest,
    Mission,
    Reader,
    StaffMember,
)
from simlibrary.core.repository import DEFAULT_STATS, TowerState
from simlibrary.systems import economy, events, incidents, lobby, missions
from simlibrary.systems.construction import complete_due, create_floor
from simlibrary.systems.context import SimContext
from simlibrary.systems.progression import default_achievements, merge_achievements

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 3


# ---------------------------------------------------------------------------
# Key-value stores
# ---------------------------------------------------------------------------

class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...


class MemoryStore:
    """In-process store; used by tests and headless runs."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes += 1

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore:
    """One ``<key>.json`` file per key under *directory*. Writes are atomic renames."""

    def __init__(self, directory: str | os.PathLike) -> None:
        self._dir = Path(directory)

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


# ---------------------------------------------------------------------------
# New game
# ---------------------------------------------------------------------------

def new_game(catalog: Catalog, config: EngineConfig, now: int) -> TowerState:
    """Fresh tower: starting currencies, the basement and a ready starter floor."""
    state = TowerState(
        stars=config.starting_stars,
        tower_bucks=config.starting_tower_bucks,
        xp_to_next=config.starting_xp_to_next,
        mood=config.starting_mood,
        achievements=default_achievements(catalog),
    )
    state.stats["game_start_time"] = now
    state.add_floor(create_floor(state, catalog.floor_types[BASEMENT_TYPE_ID], now))
    starter = create_floor(state, catalog.floor_types[config.starter_floor_type], now)
    starter.cost_basis = 0
    state.add_floor(starter)
    state.bump("total_floors_built")

    state.next_mission_at = now + config.mission_first_s * 1000
    state.next_find_mission_at = now + config.find_mission_first_s * 1000
    state.next_hall_event_at = now + config.hall_event_first_s * 1000
    state.next_mini_quest_at = now + config.mini_quest_first_s * 1000
    state.next_event_at = now + config.event_first_s * 1000
    state.next_rush_hour_at = now + config.rush_hour_first_s * 1000
    state.next_applicant_at = now + config.applicant_interval_s[0] * 1000
    state.next_vip_guest_at = now + config.vip_guest_interval_s[0] * 1000
    state.next_weather_at = now + config.weather_interval_s[0] * 1000
    state.next_cleaning_at = now + config.cleaning_interval_s * 1000
    state.last_tick_at = now
    return state


# ---------------------------------------------------------------------------
# Encode / decode
# ---------------------------------------------------------------------------

_SCALARS: tuple[str, ...] = (
    "stars", "tower_bucks", "bookmarks", "level", "xp", "xp_to_next", "next_floor_slot",
    "next_mission_at", "next_find_mission_at", "next_hall_event_at", "next_mini_quest_at",
    "next_event_at", "rush_hour_until", "next_rush_hour_at", "next_applicant_at",
    "next_vip_guest_at", "last_incident_fixed_at", "weather", "next_weather_at", "season",
    "mood", "next_cleaning_at", "current_prestige", "active_theme", "next_id",
    "last_login_day", "login_streak",
)

_STRING_LISTS: tuple[str, ...] = (
    "library_cards", "owned_decorations", "lobby_decorations", "unlocked_perks",
    "purchased_upgrades", "unlocked_themes",
)


def encode_state(state: TowerState, now: int) -> dict[str, Any]:
    data: dict[str, Any] = {name: getattr(state, name) for name in _SCALARS}
    data.update({name: list(getattr(state, name)) for name in _STRING_LISTS})
    data.update(
        version=SNAPSHOT_VERSION,
        timestamp=now,
        floors=[f.to_dict() for f in state.floors],
        unassigned_staff=[s.to_dict() for s in state.unassigned_staff],
        readers=[r.to_dict() for r in state.readers],
        mission=state.mission.to_dict() if state.mission else None,
        mission_history=list(state.mission_history),
        find_mission=state.find_mission.to_dict() if state.find_mission else None,
        hall_event=state.hall_event.to_dict() if state.hall_event else None,
        mini_quest=state.mini_quest.to_dict() if state.mini_quest else None,
        active_event=state.active_event.to_dict() if state.active_event else None,
        applicants=[a.to_dict() for a in state.applicants],
        lobby_vips=[v.to_dict() for v in state.lobby_vips],
        stats=dict(state.stats),
        achievements=[a.to_dict() for a in state.achievements],
        reader_collection=dict(state.reader_collection),
        rng_counters=dict(state.rng_counters),
    )
    return data


def _optional(data: dict, key: str, model):
    raw = data.get(key)
    return model.from_dict(raw) if raw else None


def decode_state(data: dict, catalog: Catalog, lobby_capacity: int = 3) -> TowerState:
    """Rebuild a ``TowerState``. Raises on structurally invalid payloads."""
    if not isinstance(data, dict):
        raise TypeError("snapshot must be a JSON object")
    defaults = TowerState()
    scalars = {}
    for name in _SCALARS:
        value = data.get(name)
        if value is None:
            continue
        kind = type(getattr(defaults, name))
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"non-finite value for {name}")
        scalars[name] = kind(value) if kind is not float else float(value)
    state = TowerState(**scalars)
    _clamp_scalars(state)
    for name in _STRING_LISTS:
        if name in data and data[name] is not None:
            setattr(state, name, [str(v) for v in data[name]])

    legacy_ids = iter(range(10**9))

    def legacy_staff(name: str, slot: int) -> StaffMember:
        lowered = name.strip().lower()
        type_id = lowered if lowered in catalog.staff_types else STANDARD_STAFF_ORDER[min(slot, 2)]
        return StaffMember(id=f"legacy{next(legacy_ids)}", type_id=type_id)

    state.floors = [Floor.from_dict(f, legacy_staff=legacy_staff) for f in data.get("floors") or []]
    state.unassigned_staff = [StaffMember.from_dict(s) for s in data.get("unassigned_staff") or []]
    state.readers = [Reader.from_dict(r) for r in data.get("readers") or []]
    state.mission = _optional(data, "mission", Mission)
    state.mission_history = [dict(m) for m in data.get("mission_history") or []]
    state.find_mission = _optional(data, "find_mission", FindMission)
    state.hall_event = _optional(data, "hall_event", HallEvent)
    state.mini_quest = _optional(data, "mini_quest", MiniQuest)
    state.active_event = _optional(data, "active_event", ActiveEvent)
    state.applicants = [Applicant.from_dict(a) for a in data.get("applicants") or []]
    state.lobby_vips = [LobbyVip.from_dict(v) for v in data.get("lobby_vips") or []]
    state.stats = {**DEFAULT_STATS, **{str(k): int(v) for k, v in (data.get("stats") or {}).items()}}
    state.achievements = merge_achievements(catalog, list(data.get("achievements") or []))
    state.reader_collection = {str(k): int(v) for k, v in (data.get("reader_collection") or {}).items()}
    state.rng_counters = {str(k): int(v) for k, v in (data.get("rng_counters") or {}).items()}
    _normalize(state, catalog, lobby_capacity)
    return state


def _clamp_scalars(state: TowerState) -> None:
    """Pull hand-edited or stale values back inside their runtime bounds."""
    state.stars = max(0, state.stars)
    state.tower_bucks = max(0, state.tower_bucks)
    state.bookmarks = max(0, state.bookmarks)
    state.xp = max(0, state.xp)
    state.level = max(1, state.level)
    state.xp_to_next = max(1, state.xp_to_next)
    state.login_streak = max(0, state.login_streak)
    state.mood = max(0.0, min(state.mood, 100.0))


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not a valid snapshot number")


def _normalize(state: TowerState, catalog: Catalog, lobby_capacity: int) -> None:
    """Repair structural links: staff back-references, slot shapes, the basement."""
    for floor in state.floors:
        ftype = catalog.floor_types.get(floor.type_id)
        if floor.is_standard:
            floor.staff = floor.members()[: len(STANDARD_STAFF_ORDER)]
        elif ftype is not None:
            roles = len(ftype.utility_roles)
            floor.staff = (floor.staff + [None] * roles)[:roles]
        for member in floor.members():
            member.place(floor.id, floor.type_id)
    for member in state.unassigned_staff:
        member.place(None, None)

    if state.basement() is None:
        basement = create_floor(state, catalog.floor_types[BASEMENT_TYPE_ID], 0)
        state.floors.insert(0, basement)
    else:
        state.basement().status = FloorStatus.READY
    # Legacy ids never collide with freshly allocated ones.
    for floor in state.floors:
        for member in floor.members():
            if member.id.startswith("legacy"):
                member.id = state.allocate_id("s")

    while state.lobby_occupancy > lobby_capacity:
        if state.lobby_vips:
            state.lobby_vips.pop()
        else:
            state.applicants.pop()


def save(store: KeyValueStore, config: EngineConfig, state: TowerState, now: int) -> bool:
    """Write a full snapshot. I/O failures are logged and swallowed."""
    try:
        store.set(config.save_key, json.dumps(encode_state(state, now)))
    except (OSError, TypeError, ValueError):
        logger.exception("Failed to write save %s", config.save_key)
        return False
    return True


def load(store: KeyValueStore, config: EngineConfig, catalog: Catalog) -> tuple[TowerState, int] | None:
    """Return (state, saved timestamp), or None when no usable save exists."""
    try:
        raw = store.get(config.save_key)
    except OSError:
        logger.exception("Failed to read save %s", config.save_key)
        return None
    if not raw:
        return None
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
        state = decode_state(data, catalog, config.lobby_capacity)
        timestamp = int(data.get("timestamp") or 0)
    except (ValueError, TypeError, KeyError, AttributeError, OverflowError, RecursionError):
        logger.warning("Save %s is corrupt; starting a new game", config.save_key, exc_info=True)
        return None
    return state, timestamp


# ---------------------------------------------------------------------------
# Offline reconciliation
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OfflineReport:
    elapsed_ms: int
    capped_ms: int
    capped: bool
    earnings: int
    floors_completed: int
    restocks_completed: int
    readers_discarded: int

    @property
    def duration_text(self) -> str:
        minutes = self.capped_ms // 60_000
        return f"{minutes // 60}h {minutes % 60}m"


def offline_cap_ms(ctx: SimContext) -> int:
    bonus = additive(owned_effects(ctx.state, ctx.catalog), EffectKind.OFFLINE_HOURS)
    return int((ctx.config.offline_base_cap_hours + bonus) * 3_600_000)


def process_offline_progress(ctx: SimContext, last_timestamp: int, now: int) -> OfflineReport | None:
    """Coarse, capped replay of the gap between *last_timestamp* and *now*.

    Completes due builds/restocks, discards in-flight readers, expires
    passed deadlines and credits an approximate earning once. Returns None
    when the gap is below the threshold (nothing changes).
    """
    cfg = ctx.config
    state = ctx.state
    elapsed = now - last_timestamp
    if elapsed < cfg.offline_min_ms:
        return None

    built, restocked = complete_due(ctx, now)
    discarded = len(state.readers)
    state.readers = []

    missions.expire_objectives(ctx, now)
    lobby.expire_lobby(ctx, now)
    incidents.clear_due_incidents(ctx, now)
    events.end_expired_event(ctx, now)

    cap = offline_cap_ms(ctx)
    capped_ms = min(elapsed, cap)
    intervals = capped_ms // 1000 // cfg.offline_reader_interval_s
    rate = economy.average_earning_rate(state.ready_standard_floors())
    earnings = int(math.floor(intervals * rate * cfg.offline_earning_factor))
    state.credit_stars(earnings)

    report = OfflineReport(
        elapsed_ms=elapsed,
        capped_ms=capped_ms,
        capped=elapsed > cap,
        earnings=earnings,
        floors_completed=built,
        restocks_completed=restocked,
        readers_discarded=discarded,
    )
    if elapsed > cfg.offline_notify_after_ms and earnings > 0:
        ctx.notify("offline_earnings", {
            "stars": earnings,
            "duration": report.duration_text,
            "capped": report.capped,
        })
    logger.info(
        "Offline for %ds (credited %ds): +%d stars, %d floors and %d restocks completed",
        elapsed // 1000, capped_ms // 1000, earnings, built, restocked,
    )
    return report
