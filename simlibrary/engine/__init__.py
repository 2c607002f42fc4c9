"""Engine layer: tick loop, persistence and the game session facade."""

from simlibrary.engine.persistence import JsonFileStore, MemoryStore, OfflineReport
from simlibrary.engine.session import GameSession
from simlibrary.engine.tower_loop import TowerLoop

__all__ = ["GameSession", "JsonFileStore", "MemoryStore", "OfflineReport", "TowerLoop"]
