"""Mutable authoritative tower state, the single source of truth for the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from simlibrary.core.enums import FloorKind
from simlibrary.core.models import (
    AchievementState,
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

DEFAULT_STATS: dict[str, int] = {
    "total_books_checked_out": 0,
    "total_stars_earned": 0,
    "total_readers_served": 0,
    "total_vips_served": 0,
    "total_missions_completed": 0,
    "total_find_missions_completed": 0,
    "total_hall_events_completed": 0,
    "total_mini_quests_completed": 0,
    "total_events_seen": 0,
    "total_tower_bucks_earned": 0,
    "total_bookmarks_earned": 0,
    "total_floors_built": 0,
    "total_staff_hired": 0,
    "total_daily_logins": 0,
    "total_restocks": 0,
    "total_incidents": 0,
    "total_incidents_fixed": 0,
    "readers_disappointed": 0,
    "time_played": 0,
    "game_start_time": 0,
}

NOTIFICATION_KINDS: tuple[str, ...] = (
    "weather_changed",
    "achievement_unlocked",
    "incident_occurred",
    "incident_resolved",
    "level_up",
    "mission_completed",
    "find_mission_completed",
    "hall_event_completed",
    "mini_quest_completed",
    "event_started",
    "rush_hour",
    "prestige_up",
    "applicant_arrived",
    "vip_arrived",
    "offline_earnings",
)


class Notifications:
    """Single-slot, single-use notification fields read and cleared by the consumer.

    Setting a kind that is already pending overwrites it; nothing queues.
    """

    __slots__ = ("_slots",)

    def __init__(self) -> None:
        self._slots: dict[str, Any] = {}

    def set(self, kind: str, payload: Any) -> None:
        if kind not in NOTIFICATION_KINDS:
            raise KeyError(f"Unknown notification kind: {kind}")
        self._slots[kind] = payload

    def peek(self, kind: str) -> Any:
        return self._slots.get(kind)

    def pending(self) -> dict[str, Any]:
        return dict(self._slots)

    def consume(self) -> dict[str, Any]:
        out = self._slots
        self._slots = {}
        return out


@dataclass
class TowerState:
    """Owns every mutable entity of one game.

    Player actions and the tick loop mutate this object directly; the
    helpers below are the only places currencies and structural links
    change, so the non-negativity and back-reference invariants hold by
    construction.
    """

    # Currencies & progression
    stars: int = 0
    tower_bucks: int = 0
    bookmarks: int = 0
    level: int = 1
    xp: int = 0
    xp_to_next: int = 100

    # Tower
    floors: list[Floor] = field(default_factory=list)
    next_floor_slot: int = 1
    unassigned_staff: list[StaffMember] = field(default_factory=list)
    readers: list[Reader] = field(default_factory=list)

    # Singleton objectives
    mission: Mission | None = None
    next_mission_at: int = 0
    mission_history: list[dict] = field(default_factory=list)
    find_mission: FindMission | None = None
    next_find_mission_at: int = 0
    hall_event: HallEvent | None = None
    next_hall_event_at: int = 0
    mini_quest: MiniQuest | None = None
    next_mini_quest_at: int = 0

    # Global event / rush hour
    active_event: ActiveEvent | None = None
    next_event_at: int = 0
    rush_hour_until: int = 0
    next_rush_hour_at: int = 0

    # Lobby
    applicants: list[Applicant] = field(default_factory=list)
    lobby_vips: list[LobbyVip] = field(default_factory=list)
    next_applicant_at: int = 0
    next_vip_guest_at: int = 0

    # Incidents
    last_incident_fixed_at: int = 0

    # Environment
    weather: str = "sunny"
    next_weather_at: int = 0
    season: int = 0
    mood: float = 50.0
    next_cleaning_at: int = 0

    # Progress tracking
    stats: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_STATS))
    achievements: list[AchievementState] = field(default_factory=list)
    reader_collection: dict[str, int] = field(default_factory=dict)
    library_cards: list[str] = field(default_factory=list)
    current_prestige: str = "community"
    last_login_day: int = -1     # UTC day number of the last claimed login bonus
    login_streak: int = 0

    # Shop unlocks
    owned_decorations: list[str] = field(default_factory=list)
    lobby_decorations: list[str] = field(default_factory=list)
    unlocked_perks: list[str] = field(default_factory=list)
    purchased_upgrades: list[str] = field(default_factory=list)
    unlocked_themes: list[str] = field(default_factory=lambda: ["classic"])
    active_theme: str = "classic"

    # Bookkeeping
    next_id: int = 1
    rng_counters: dict[str, int] = field(default_factory=dict)
    last_tick_at: int = 0
    notifications: Notifications = field(default_factory=Notifications, repr=False, compare=False)

    # -- ids --

    def allocate_id(self, prefix: str) -> str:
        eid = f"{prefix}{self.next_id}"
        self.next_id += 1
        return eid

    # -- currencies (clamped at the mutation site) --

    def spend_stars(self, amount: int) -> bool:
        if amount < 0 or self.stars < amount:
            return False
        self.stars -= amount
        return True

    def credit_stars(self, amount: int, earned: bool = True) -> None:
        if amount <= 0:
            return
        self.stars += amount
        if earned:
            self.bump("total_stars_earned", amount)

    def spend_bucks(self, amount: int) -> bool:
        if amount < 0 or self.tower_bucks < amount:
            return False
        self.tower_bucks -= amount
        return True

    def credit_bucks(self, amount: int) -> None:
        if amount <= 0:
            return
        self.tower_bucks += amount
        self.bump("total_tower_bucks_earned", amount)

    def credit_bookmarks(self, amount: int) -> None:
        if amount <= 0:
            return
        self.bookmarks += amount
        self.bump("total_bookmarks_earned", amount)

    def bump(self, stat: str, amount: int = 1) -> None:
        self.stats[stat] = self.stats.get(stat, 0) + amount

    # -- floor lookups --

    def floor(self, floor_id: str | None) -> Floor | None:
        if floor_id is None:
            return None
        for f in self.floors:
            if f.id == floor_id:
                return f
        return None

    def basement(self) -> Floor | None:
        for f in self.floors:
            if f.kind == FloorKind.BASEMENT:
                return f
        return None

    def standard_floors(self) -> list[Floor]:
        return [f for f in self.floors if f.kind == FloorKind.STANDARD]

    def ready_standard_floors(self) -> list[Floor]:
        return [f for f in self.floors if f.kind == FloorKind.STANDARD and f.ready]

    def player_floors(self) -> list[Floor]:
        """Floors the player built (everything except the basement)."""
        return [f for f in self.floors if f.kind != FloorKind.BASEMENT]

    def non_utility_floor_count(self) -> int:
        return len(self.standard_floors())

    def ready_type_ids(self) -> set[str]:
        return {f.type_id for f in self.floors if f.ready}

    def add_floor(self, floor: Floor) -> None:
        self.floors.append(floor)

    def remove_floor(self, floor_id: str) -> Floor | None:
        """Detach a floor, moving its staff to the unassigned pool and dropping its readers."""
        floor = self.floor(floor_id)
        if floor is None:
            return None
        self.floors.remove(floor)
        for member in floor.members():
            member.place(None, None)
            self.unassigned_staff.append(member)
        floor.staff = []
        self.readers = [r for r in self.readers if r.floor_id != floor_id]
        return floor

    # -- staff lookups --

    def find_staff(self, staff_id: str) -> tuple[Floor | None, StaffMember | None]:
        """Locate a staff member on a floor or in the unassigned pool."""
        for f in self.floors:
            for member in f.staff:
                if member is not None and member.id == staff_id:
                    return f, member
        for member in self.unassigned_staff:
            if member.id == staff_id:
                return None, member
        return None, None

    def detach_staff(self, staff_id: str) -> StaffMember | None:
        """Remove a staff member from wherever it is; standard floors compact left."""
        floor, member = self.find_staff(staff_id)
        if member is None:
            return None
        if floor is None:
            self.unassigned_staff.remove(member)
        elif floor.is_standard:
            floor.staff = [s for s in floor.staff if s is not None and s.id != staff_id]
        else:
            floor.staff = [None if (s is not None and s.id == staff_id) else s for s in floor.staff]
        member.place(None, None)
        return member

    def role_staffed(self, role: str) -> list[StaffMember]:
        """Utility staff of *role* on ready utility floors."""
        out: list[StaffMember] = []
        for f in self.floors:
            if f.is_standard or not f.ready:
                continue
            out.extend(m for m in f.members() if m.type_id == role)
        return out

    # -- readers --

    def reader(self, reader_id: str) -> Reader | None:
        for r in self.readers:
            if r.id == reader_id:
                return r
        return None

    # -- lobby --

    @property
    def lobby_occupancy(self) -> int:
        return len(self.applicants) + len(self.lobby_vips)

    # -- incidents --

    def active_incident_count(self) -> int:
        return sum(len(f.incidents) for f in self.floors)

    # -- achievements --

    def achievement(self, achievement_id: str) -> AchievementState | None:
        for a in self.achievements:
            if a.id == achievement_id:
                return a
        return None
