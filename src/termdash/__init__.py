"""termdash - a terminal dashboard that launches your TUI tools."""

__version__ = "0.3.0"
