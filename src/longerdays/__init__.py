"""Daylight tracking core: solar times, seasons, comparisons and milestones."""

__version__ = "0.1.0"
