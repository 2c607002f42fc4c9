"""Core data models, content catalog and tower state."""

from simlibrary.core.catalog import Catalog
from simlibrary.core.effects import Effect
from simlibrary.core.enums import Domain, EffectKind, ErrorCode, FloorKind, FloorStatus
from simlibrary.core.models import Category, Floor, Reader, StaffMember
from simlibrary.core.repository import TowerState

__all__ = [
    "Catalog",
    "Category",
    "Domain",
    "Effect",
    "EffectKind",
    "ErrorCode",
    "Floor",
    "FloorKind",
    "FloorStatus",
    "Reader",
    "StaffMember",
    "TowerState",
]
