"""Engine systems: RNG, weighted selection, economy and the tick subsystems."""

from simlibrary.systems.context import SimContext
from simlibrary.systems.rng import DeterministicRNG
from simlibrary.systems.selection import weighted_choice

__all__ = ["DeterministicRNG", "SimContext", "weighted_choice"]
