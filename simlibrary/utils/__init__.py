"""Utilities: clock sources, logging setup, event feed."""

from simlibrary.utils.clock import Clock, FakeClock, SystemClock
from simlibrary.utils.event_log import EventLog, SimEvent

__all__ = ["Clock", "EventLog", "FakeClock", "SimEvent", "SystemClock"]
