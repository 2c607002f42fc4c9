"""Domain-separated deterministic RNG using xxhash.

Formula: RNG_Value = Hash(Seed, Domain, DrawIndex)

Every domain keeps its own draw counter, so extra draws in one subsystem
never shift the sequence seen by another. Counters are part of the saved
game, which makes a resumed session continue its streams.
"""

from __future__ import annotations

import struct

import xxhash

from simlibrary.core.enums import Domain


class DeterministicRNG:
    """Seeded pseudo-random source with one counter per ``Domain``."""

    __slots__ = ("_seed", "_counters")

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int, counters: dict[str, int] | None = None) -> None:
        self._seed = seed
        self._counters: dict[str, int] = dict(counters or {})

    @property
    def seed(self) -> int:
        return self._seed

    def counters(self) -> dict[str, int]:
        return dict(self._counters)

    def restore(self, counters: dict[str, int]) -> None:
        self._counters = {str(k): int(v) for k, v in counters.items()}

    def _hash(self, domain: Domain, draw: int) -> int:
        payload = struct.pack("<qiq", self._seed, domain.value, draw)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        key = domain.name
        draw = self._counters.get(key, 0)
        self._counters[key] = draw + 1
        return self._hash(domain, draw) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain) < probability
