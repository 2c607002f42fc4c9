"""Core data models: Category, StaffMember, Floor, Reader, objectives, lobby entries.

Every model owns a ``to_dict`` / ``from_dict`` pair. ``from_dict`` defaults
each field independently so older snapshots keep loading as fields are
added; structurally wrong payloads (wrong container types) raise and are
handled at the persistence boundary.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from simlibrary.core.enums import ElevatorState, FloorKind, FloorStatus, MiniQuestKind, ObjectiveStatus


def _int(d: dict, key: str, default: int = 0) -> int:
    v = d.get(key)
    return default if v is None else int(v)


def _opt_int(d: dict, key: str) -> int | None:
    v = d.get(key)
    return None if v is None else int(v)


def _cost_basis(d: dict) -> int | None:
    v = _opt_int(d, "cost_basis")
    return None if v is None else max(0, v)


def _float(d: dict, key: str, default: float = 0.0) -> float:
    v = d.get(key)
    return default if v is None else float(v)


def _str(d: dict, key: str, default: str = "") -> str:
    v = d.get(key)
    return default if v is None else str(v)


def _opt_str(d: dict, key: str) -> str | None:
    v = d.get(key)
    return None if v is None else str(v)


# ---------------------------------------------------------------------------
# Floor contents
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Category:
    """A stockable shelf within a floor."""

    name: str
    current_stock: int = 0
    max_stock: int = 100
    stock_cost: int = 0
    stock_time: int = 0          # seconds
    earning_rate: int = 0
    restocking: bool = False
    restock_start: int | None = None
    restock_end: int | None = None

    def consume(self, amount: int) -> int:
        """Remove up to *amount* books; returns how many were actually taken."""
        taken = max(0, min(amount, self.current_stock))
        self.current_stock -= taken
        return taken

    def fill(self) -> None:
        self.current_stock = self.max_stock
        self.restocking = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> Category:
        max_stock = max(0, _int(d, "max_stock", 100))
        return cls(
            name=_str(d, "name"),
            current_stock=max(0, min(_int(d, "current_stock"), max_stock)),
            max_stock=max_stock,
            stock_cost=_int(d, "stock_cost"),
            stock_time=_int(d, "stock_time"),
            earning_rate=_int(d, "earning_rate"),
            restocking=bool(d.get("restocking", False)),
            restock_start=_opt_int(d, "restock_start"),
            restock_end=_opt_int(d, "restock_end"),
        )


@dataclass(slots=True)
class StaffMember:
    """A hired worker. ``assigned_floor`` is a floor id, never an object."""

    id: str
    type_id: str
    skill: int = 1
    dream_genre: str | None = None
    is_dream_match: bool = False
    assigned_floor: str | None = None
    hired_at: int = 0

    def place(self, floor_id: str | None, floor_type_id: str | None) -> None:
        self.assigned_floor = floor_id
        self.is_dream_match = floor_type_id is not None and self.dream_genre == floor_type_id

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> StaffMember:
        return cls(
            id=_str(d, "id"),
            type_id=_str(d, "type_id", "page"),
            skill=max(1, min(_int(d, "skill", 1), 5)),
            dream_genre=_opt_str(d, "dream_genre"),
            is_dream_match=bool(d.get("is_dream_match", False)),
            assigned_floor=_opt_str(d, "assigned_floor"),
            hired_at=_int(d, "hired_at"),
        )


@dataclass(slots=True)
class Incident:
    """An active problem on a floor. ``fix_time`` is the fixed clear deadline."""

    kind: str
    start: int
    fix_time: int

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, kind: str, d: dict) -> Incident:
        start = _int(d, "start")
        return cls(kind=kind, start=start, fix_time=_int(d, "fix_time", start))


@dataclass(slots=True)
class Floor:
    """One level of the tower."""

    id: str
    type_id: str
    name: str = ""
    kind: FloorKind = FloorKind.STANDARD
    floor_number: int = 0
    status: FloorStatus = FloorStatus.BUILDING
    build_start: int = 0
    build_end: int = 0
    upgrade_level: int = 1
    staff: list[StaffMember | None] = field(default_factory=list)
    book_stock: list[Category] = field(default_factory=list)
    trash: int = 0
    incidents: dict[str, Incident] = field(default_factory=dict)
    decoration: str | None = None
    vip_bonus_multiplier: float = 1.0
    vip_bonus_until: int = 0
    cost_basis: int | None = None   # stars paid to build; None falls back to the catalog cost

    @property
    def ready(self) -> bool:
        return self.status == FloorStatus.READY

    @property
    def is_standard(self) -> bool:
        return self.kind == FloorKind.STANDARD

    @property
    def staff_count(self) -> int:
        return sum(1 for s in self.staff if s is not None)

    def members(self) -> list[StaffMember]:
        return [s for s in self.staff if s is not None]

    def is_unlocked(self, index: int) -> bool:
        return self.staff_count > index

    def stocked_categories(self) -> list[int]:
        """Indices of unlocked categories that currently hold stock."""
        return [
            i for i, cat in enumerate(self.book_stock)
            if cat.current_stock > 0 and self.is_unlocked(i)
        ]

    def add_trash(self, amount: int) -> None:
        self.trash = max(0, min(100, self.trash + amount))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type_id": self.type_id,
            "name": self.name,
            "kind": self.kind.value,
            "floor_number": self.floor_number,
            "status": self.status.value,
            "build_start": self.build_start,
            "build_end": self.build_end,
            "upgrade_level": self.upgrade_level,
            "staff": [s.to_dict() if s is not None else None for s in self.staff],
            "book_stock": [c.to_dict() for c in self.book_stock],
            "trash": self.trash,
            "incidents": {k: i.to_dict() for k, i in self.incidents.items()},
            "decoration": self.decoration,
            "vip_bonus_multiplier": self.vip_bonus_multiplier,
            "vip_bonus_until": self.vip_bonus_until,
            "cost_basis": self.cost_basis,
        }

    @classmethod
    def from_dict(cls, d: dict, legacy_staff: Any = None) -> Floor:
        """Build a floor; *legacy_staff(name, slot)* normalizes bare-string staff entries."""
        staff: list[StaffMember | None] = []
        for raw in d.get("staff") or []:
            if raw is None:
                staff.append(None)
            elif isinstance(raw, str):
                staff.append(legacy_staff(raw, len(staff)) if legacy_staff else None)
            else:
                staff.append(StaffMember.from_dict(raw))
        return cls(
            id=_str(d, "id"),
            type_id=_str(d, "type_id"),
            name=_str(d, "name"),
            kind=FloorKind(_str(d, "kind", FloorKind.STANDARD.value)),
            floor_number=_int(d, "floor_number"),
            status=FloorStatus(_str(d, "status", FloorStatus.BUILDING.value)),
            build_start=_int(d, "build_start"),
            build_end=_int(d, "build_end"),
            upgrade_level=max(1, min(_int(d, "upgrade_level", 1), 3)),
            staff=staff,
            book_stock=[Category.from_dict(c) for c in d.get("book_stock") or []],
            trash=max(0, min(_int(d, "trash"), 100)),
            incidents={str(k): Incident.from_dict(str(k), v) for k, v in (d.get("incidents") or {}).items()},
            decoration=_opt_str(d, "decoration"),
            vip_bonus_multiplier=_float(d, "vip_bonus_multiplier", 1.0),
            vip_bonus_until=_int(d, "vip_bonus_until"),
            cost_basis=_cost_basis(d),
        )


# ---------------------------------------------------------------------------
# Readers
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Reader:
    """A transient visitor. Removed exactly once at ``checkout_time``."""

    id: str
    floor_id: str
    category_index: int
    name: str = ""
    reader_type: str = "adult"
    is_vip: bool = False
    vip_type: str | None = None
    vip_ability: str | None = None
    elevator_state: ElevatorState = ElevatorState.WAITING
    elevator_arrival: int = 0
    checkout_time: int = 0
    earning_amount: int = 0
    books_to_checkout: int = 1

    def to_dict(self) -> dict:
        d = asdict(self)
        d["elevator_state"] = self.elevator_state.value
        return d

    @classmethod
    def from_dict(cls, d: dict) -> Reader:
        return cls(
            id=_str(d, "id"),
            floor_id=_str(d, "floor_id"),
            category_index=_int(d, "category_index"),
            name=_str(d, "name"),
            reader_type=_str(d, "reader_type", "adult"),
            is_vip=bool(d.get("is_vip", False)),
            vip_type=_opt_str(d, "vip_type"),
            vip_ability=_opt_str(d, "vip_ability"),
            elevator_state=ElevatorState(_str(d, "elevator_state", ElevatorState.WAITING.value)),
            elevator_arrival=_int(d, "elevator_arrival"),
            checkout_time=_int(d, "checkout_time"),
            earning_amount=_int(d, "earning_amount"),
            books_to_checkout=max(1, _int(d, "books_to_checkout", 1)),
        )


# ---------------------------------------------------------------------------
# Singleton time-boxed objectives
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Objective:
    """Common lifecycle for mission-like objectives: active -> completed | expired."""

    id: str = ""
    status: ObjectiveStatus = ObjectiveStatus.ACTIVE
    start_time: int = 0
    expiry_time: int = 0
    progress: int = 0
    target: int = 1

    @property
    def active(self) -> bool:
        return self.status == ObjectiveStatus.ACTIVE

    @property
    def progress_ratio(self) -> float:
        if self.target <= 0:
            return 1.0
        return min(self.progress / self.target, 1.0)

    def advance(self, amount: int = 1) -> bool:
        """Advance progress. Returns True if the objective just reached its target."""
        if not self.active:
            return False
        self.progress = min(self.progress + amount, self.target)
        return self.progress >= self.target

    def is_expired(self, now: int) -> bool:
        return self.active and now >= self.expiry_time

    def to_dict(self) -> dict:
        d = asdict(self)
        d["status"] = self.status.value
        return d

    @classmethod
    def _base_kwargs(cls, d: dict) -> dict:
        return {
            "id": _str(d, "id"),
            "status": ObjectiveStatus(_str(d, "status", ObjectiveStatus.ACTIVE.value)),
            "start_time": _int(d, "start_time"),
            "expiry_time": _int(d, "expiry_time"),
            "progress": _int(d, "progress"),
            "target": _int(d, "target", 1),
        }


@dataclass(slots=True)
class Mission(Objective):
    """Deliver ``target`` checkouts from one floor category."""

    floor_id: str = ""
    category_index: int = 0
    category_name: str = ""
    floor_name: str = ""
    requester: str = ""
    reward: int = 0
    reward_bucks: int = 0
    completed_at: int | None = None

    @classmethod
    def from_dict(cls, d: dict) -> Mission:
        return cls(
            **cls._base_kwargs(d),
            floor_id=_str(d, "floor_id"),
            category_index=_int(d, "category_index"),
            category_name=_str(d, "category_name"),
            floor_name=_str(d, "floor_name"),
            requester=_str(d, "requester"),
            reward=_int(d, "reward"),
            reward_bucks=_int(d, "reward_bucks"),
            completed_at=_opt_int(d, "completed_at"),
        )


@dataclass(slots=True)
class HiddenItem:
    """One copy of a find mission's item, hidden on a floor."""

    floor_id: str
    found: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> HiddenItem:
        return cls(floor_id=_str(d, "floor_id"), found=bool(d.get("found", False)))


@dataclass(slots=True)
class FindMission(Objective):
    """A reader lost several copies of ``item`` across the tower.

    ``progress`` counts found copies and ``target`` the total hidden.
    """

    item: str = ""
    requester: str = ""
    reward_stars: int = 0
    reward_bookmarks: int = 0
    items: list[HiddenItem] = field(default_factory=list)

    @property
    def found(self) -> int:
        return self.progress

    @property
    def total(self) -> int:
        return self.target

    def hides_item_on(self, floor_id: str) -> bool:
        return any(i.floor_id == floor_id and not i.found for i in self.items)

    def reveal(self, floor_id: str) -> bool:
        """Mark the first unfound copy on *floor_id* as found. False when none is there."""
        for hidden in self.items:
            if hidden.floor_id == floor_id and not hidden.found:
                hidden.found = True
                self.advance()
                return True
        return False

    @classmethod
    def from_dict(cls, d: dict) -> FindMission:
        items = [HiddenItem.from_dict(i) for i in d.get("items") or []]
        if not items and d.get("floor_id"):
            # single-item snapshots stored the floor directly
            items = [HiddenItem(floor_id=_str(d, "floor_id"), found=_int(d, "progress") > 0)]
        kwargs = cls._base_kwargs(d)
        if items:
            kwargs["target"] = len(items)
            kwargs["progress"] = sum(1 for i in items if i.found)
        return cls(
            **kwargs,
            item=_str(d, "item"),
            requester=_str(d, "requester"),
            reward_stars=_int(d, "reward_stars"),
            reward_bookmarks=_int(d, "reward_bookmarks"),
            items=items,
        )


@dataclass(slots=True)
class HallEvent(Objective):
    """An event hosted on one floor; checkouts there count as attendance."""

    template_id: str = ""
    name: str = ""
    floor_id: str = ""
    reward_stars: int = 0
    reward_bucks: int = 0

    @classmethod
    def from_dict(cls, d: dict) -> HallEvent:
        return cls(
            **cls._base_kwargs(d),
            template_id=_str(d, "template_id"),
            name=_str(d, "name"),
            floor_id=_str(d, "floor_id"),
            reward_stars=_int(d, "reward_stars"),
            reward_bucks=_int(d, "reward_bucks"),
        )


@dataclass(slots=True)
class MiniQuest(Objective):
    template_id: str = ""
    name: str = ""
    kind: MiniQuestKind = MiniQuestKind.CHECKOUT
    reward_stars: int = 0
    reward_bookmarks: int = 1

    def to_dict(self) -> dict:
        d = Objective.to_dict(self)
        d["kind"] = self.kind.value
        return d

    @classmethod
    def from_dict(cls, d: dict) -> MiniQuest:
        return cls(
            **cls._base_kwargs(d),
            template_id=_str(d, "template_id"),
            name=_str(d, "name"),
            kind=MiniQuestKind(_str(d, "kind", MiniQuestKind.CHECKOUT.value)),
            reward_stars=_int(d, "reward_stars"),
            reward_bookmarks=_int(d, "reward_bookmarks", 1),
        )


@dataclass(slots=True)
class ActiveEvent:
    """The global event currently running."""

    event_id: str
    started_at: int
    ends_at: int

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> ActiveEvent:
        return cls(event_id=_str(d, "event_id"), started_at=_int(d, "started_at"), ends_at=_int(d, "ends_at"))


# ---------------------------------------------------------------------------
# Lobby
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Applicant:
    """A job seeker waiting in the lobby."""

    id: str
    staff_type: str
    name: str = ""
    skill: int = 1
    dream_genre: str | None = None
    arrived_at: int = 0
    expires_at: int = 0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> Applicant:
        return cls(
            id=_str(d, "id"),
            staff_type=_str(d, "staff_type", "page"),
            name=_str(d, "name"),
            skill=max(1, min(_int(d, "skill", 1), 5)),
            dream_genre=_opt_str(d, "dream_genre"),
            arrived_at=_int(d, "arrived_at"),
            expires_at=_int(d, "expires_at"),
        )


@dataclass(slots=True)
class LobbyVip:
    """A VIP guest waiting to be welcomed in."""

    id: str
    vip_type: str
    name: str = ""
    arrived_at: int = 0
    expires_at: int = 0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> LobbyVip:
        return cls(
            id=_str(d, "id"),
            vip_type=_str(d, "vip_type"),
            name=_str(d, "name"),
            arrived_at=_int(d, "arrived_at"),
            expires_at=_int(d, "expires_at"),
        )


# ---------------------------------------------------------------------------
# Achievements
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class AchievementState:
    """Unlock record for one catalog achievement. Never re-locked."""

    id: str
    stat_key: str
    requirement: int
    reward_stars: int = 0
    reward_bucks: int = 0
    unlocked: bool = False
    unlocked_at: int | None = None

    def to_dict(self) -> dict:
        return {"id": self.id, "unlocked": self.unlocked, "unlocked_at": self.unlocked_at}
