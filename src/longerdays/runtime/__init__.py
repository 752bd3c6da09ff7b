"""Runtime components that hold state across calls."""

from .store import SnapshotStore, YESTERDAY_KEY, SOLSTICE_KEY

__all__ = [
    "SnapshotStore",
    "YESTERDAY_KEY",
    "SOLSTICE_KEY",
]
