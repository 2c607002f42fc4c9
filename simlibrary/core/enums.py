"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class FloorStatus(str, Enum):
    """Construction state of a floor."""

    BUILDING = "building"
    READY = "ready"


@unique
class FloorKind(str, Enum):
    """Structural family of a floor type."""

    STANDARD = "standard"   # Stockable categories, 3 ordered staff slots
    UTILITY = "utility"     # Fixed role slots, no categories
    BASEMENT = "basement"   # Singleton utility floor, never built or deleted


@unique
class ElevatorState(str, Enum):
    WAITING = "waiting"
    ARRIVED = "arrived"


@unique
class ObjectiveStatus(str, Enum):
    """Lifecycle of a singleton time-boxed objective."""

    ACTIVE = "active"
    COMPLETED = "completed"
    EXPIRED = "expired"


@unique
class MiniQuestKind(str, Enum):
    CHECKOUT = "checkout"   # Check out N books anywhere
    VIP = "vip"             # Serve N VIP readers
    RESTOCK = "restock"     # Start N restocks


@unique
class Season(IntEnum):
    SPRING = 0
    SUMMER = 1
    AUTUMN = 2
    WINTER = 3


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    SPAWN = 0
    VIP = 1
    FLOOR = 2
    MISSION = 3
    EVENT = 4
    INCIDENT = 5
    WEATHER = 6
    LOBBY = 7
    STAFF = 8
    BONUS = 9
    NAMES = 10


@unique
class ErrorCode(str, Enum):
    """Expected domain failures returned by player actions."""

    INSUFFICIENT_FUNDS = "insufficient-funds"
    INSUFFICIENT_BUCKS = "insufficient-bucks"
    INVALID_TYPE = "invalid-type"
    CAPACITY_EXCEEDED = "capacity-exceeded"
    NOT_FOUND = "not-found"
    WRONG_STATE = "wrong-state"
    CATEGORY_LOCKED = "category-locked"
    SLOT_OCCUPIED = "slot-occupied"
    FULLY_STAFFED = "fully-staffed"
    LAST_FLOOR = "last-floor"
    PROTECTED_FLOOR = "protected-floor"
    MAX_LEVEL = "max-level"
    ALREADY_FULL = "already-full"
    ALREADY_RESTOCKING = "already-restocking"
    LOBBY_FULL = "lobby-full"
    ALREADY_OWNED = "already-owned"
    LOCKED = "locked"
    NO_ELIGIBLE_FLOOR = "no-eligible-floor"
    COOLDOWN_ACTIVE = "cooldown-active"
    NO_SLOT = "no-slot"
    ALREADY_CLAIMED = "already-claimed"
    OUT_OF_RANGE = "out-of-range"


@unique
class EffectKind(str, Enum):
    """Tagged effect descriptors interpreted by ``core.effects``."""

    # Continuous modifiers (queried while the source is active/owned)
    STAR_MULTIPLIER = "star_multiplier"
    SPAWN_RATE = "spawn_rate"
    RESTOCK_SPEED = "restock_speed"
    BUILD_SPEED = "build_speed"
    ELEVATOR_SPEED = "elevator_speed"
    EARNING_BONUS = "earning_bonus"
    OFFLINE_HOURS = "offline_hours"
    MOOD = "mood"
    # Instant effects (applied once when the source starts)
    RESTOCK_ALL = "restock_all"
    DONATION = "donation"
    GRANT_BUCKS = "grant_bucks"
