"""Clock sources: wall-clock milliseconds, injectable for tests."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now_ms(self) -> int: ...


class SystemClock:
    """Wall-clock time in integer milliseconds."""

    __slots__ = ()

    def now_ms(self) -> int:
        return int(time.time() * 1000)


class FakeClock:
    """Manually advanced clock for deterministic tests and headless runs."""

    __slots__ = ("_now",)

    def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
        self._now = start_ms

    def now_ms(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        self._now += ms
        return self._now

    def advance_seconds(self, seconds: float) -> int:
        return self.advance(int(seconds * 1000))

    def set(self, ms: int) -> None:
        self._now = ms
