"""SimLibrary: tick-driven simulation and economy engine for a library-tower idle game."""

__version__ = "0.3.0"
