"""Logging setup shared by the server and the headless CLI."""

from __future__ import annotations

import logging
import sys

# The client polls /state every tick; access lines drown engine output.
_NOISY_LOGGERS: tuple[str, ...] = ("uvicorn.access",)


def setup_logging(level: str | int = "INFO") -> None:
    """Send every record to stdout, one line each, prefixed with the logger name."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
