"""EngineManager: runs the GameSession tick on a background thread.

The engine itself is single-writer and lock-free; this wrapper serializes
the tick thread and API handlers with one lock so they never interleave.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from simlibrary.engine.persistence import JsonFileStore
from simlibrary.engine.session import GameSession

if TYPE_CHECKING:
    from simlibrary.actions.base import ActionResult
    from simlibrary.config import EngineConfig
    from simlibrary.utils.event_log import EventLog

logger = logging.getLogger(__name__)


class EngineManager:
    """Manages the session lifecycle on a background thread.

    Provides thread-safe access to:
      - the tower view and notifications (lock-guarded)
      - player actions (lock-guarded, saved on success)
      - control commands (start / pause / resume / step / reset)
    """

    def __init__(self, config: EngineConfig, session_factory: Callable[[], GameSession] | None = None) -> None:
        self.config = config
        self._tick_rate: float = config.tick_rate
        self._session_factory = session_factory or (
            lambda: GameSession(config=config, store=JsonFileStore(config.save_dir))
        )
        self._lock = threading.RLock()
        self._session = self._session_factory()

        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.05, min(value, 10.0))

    @property
    def event_log(self) -> EventLog:
        return self._session.event_log

    @property
    def ticks(self) -> int:
        return self._session.loop.ticks

    # -- locked session access --

    def describe(self) -> dict[str, Any]:
        with self._lock:
            return self._session.describe()

    def consume_notifications(self) -> dict[str, Any]:
        with self._lock:
            return self._session.consume_notifications()

    def perform(self, action: str, params: dict[str, Any]) -> ActionResult:
        with self._lock:
            return self._session.dispatch(action, **params)

    def check_params(self, action: str, params: dict[str, Any]) -> None:
        self._session.check_params(action, params)

    def action_names(self) -> list[str]:
        return sorted(self._session.actions())

    def catalog(self):
        return self._session.catalog

    def tick_now(self) -> bool:
        with self._lock:
            return self._session.tick()

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.2fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused after %d ticks", self.ticks)

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed")

    def step(self) -> None:
        """Run exactly one tick (pauses the loop first)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        with self._lock:
            self._session.save()
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, wipe the save and start a fresh game, left stopped."""
        self.stop()
        with self._lock:
            self._session.reset()
        logger.info("EngineManager reset.")

    # -- internals --

    def _run_loop(self) -> None:
        logger.info("Engine thread started.")
        while not self._stop_requested.is_set():
            if self._paused.is_set() and not self._step_requested.is_set():
                time.sleep(0.01)
                continue

            single_step = self._step_requested.is_set()
            if single_step:
                self._step_requested.clear()

            self.tick_now()

            if not single_step:
                time.sleep(self._tick_rate)

        self._running.clear()
        logger.info("Engine thread exited.")
