"""Bounded feed of engine transitions (construction, weather, achievements...) for the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SimEvent:
    """One line of the feed. ``timestamp`` is engine time in ms."""

    timestamp: int
    category: str
    message: str
    metadata: dict = field(default_factory=dict)


class EventLog:
    """Oldest events fall off once *maxlen* is reached.

    The tick thread and action handlers append; API handlers read copies.
    """

    __slots__ = ("_events", "_lock")

    def __init__(self, maxlen: int = 500) -> None:
        self._events: deque[SimEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._events)

    def append_many(self, events: list[SimEvent]) -> None:
        with self._lock:
            self._events.extend(events)

    def query(self, since: int | None = None, category: str | None = None, limit: int | None = 50) -> list[SimEvent]:
        """The newest *limit* events at or after *since*, optionally of one category."""
        with self._lock:
            items = list(self._events)
        if since is not None:
            items = [e for e in items if e.timestamp >= since]
        if category is not None:
            items = [e for e in items if e.category == category]
        if limit is None:
            return items
        return items[-limit:] if limit > 0 else []

    def since(self, timestamp: int) -> list[SimEvent]:
        return self.query(since=timestamp, limit=None)

    def latest(self, count: int = 50) -> list[SimEvent]:
        return self.query(limit=count)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
