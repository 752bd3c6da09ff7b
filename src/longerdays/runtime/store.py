"""Snapshot store for the "yesterday" and "last solstice" references.

Provides thread-safe, date-keyed storage of DaylightSnapshots with optional
JSON file persistence. Writers are serialized; readers get immutable snapshots.
"""
from pathlib import Path
from threading import RLock
from typing import Dict, Optional, Union
import json
import logging

from ..io.schema import SnapshotRecord
from ..model.snapshots import ComparisonOutcome, DaylightSnapshot

logger = logging.getLogger(__name__)

YESTERDAY_KEY = "yesterday"
SOLSTICE_KEY = "solstice"


class SnapshotStore:
    """Thread-safe holder of the two reference snapshots."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """Initialize the store.

        Args:
            path: Optional JSON file to load from and write through to
        """
        self._snapshots: Dict[str, DaylightSnapshot] = {}
        self._lock = RLock()
        self._path = Path(path) if path else None
        if self._path and self._path.exists():
            self._load()

    def get(self, key: str) -> Optional[DaylightSnapshot]:
        """Get the snapshot stored under key.

        Args:
            key: YESTERDAY_KEY or SOLSTICE_KEY

        Returns:
            The snapshot, or None if nothing is stored
        """
        with self._lock:
            return self._snapshots.get(key)

    def put(self, key: str, snapshot: DaylightSnapshot) -> bool:
        """Store a snapshot, overwriting the previous one for that key.

        A snapshot for the same day as the stored one is ignored, so repeated
        writes within a calendar day are cheap.

        Args:
            key: YESTERDAY_KEY or SOLSTICE_KEY
            snapshot: Snapshot to store

        Returns:
            True if the stored value changed
        """
        with self._lock:
            current = self._snapshots.get(key)
            if current is not None and current.day == snapshot.day:
                return False
            self._snapshots[key] = snapshot
            if self._path:
                self._save()
            logger.debug(f"Stored {key} snapshot for {snapshot.day}")
            return True

    @property
    def yesterday(self) -> Optional[DaylightSnapshot]:
        return self.get(YESTERDAY_KEY)

    @property
    def solstice(self) -> Optional[DaylightSnapshot]:
        return self.get(SOLSTICE_KEY)

    def store_daylight(self, snapshot: DaylightSnapshot) -> bool:
        """Record today's snapshot; it becomes tomorrow's "yesterday"."""
        return self.put(YESTERDAY_KEY, snapshot)

    def apply(self, outcome: ComparisonOutcome) -> bool:
        """Persist the solstice reference a comparison asked for, if any.

        Args:
            outcome: Result of DaylightComparisonEngine.compare

        Returns:
            True if a new solstice snapshot was stored
        """
        if outcome.persist_solstice is None:
            return False
        return self.put(SOLSTICE_KEY, outcome.persist_solstice)

    def clear(self) -> None:
        """Drop all stored snapshots."""
        with self._lock:
            self._snapshots.clear()
            if self._path:
                self._save()

    def _load(self) -> None:
        raw = json.loads(self._path.read_text(encoding="utf-8"))
        for key, row in raw.items():
            self._snapshots[key] = SnapshotRecord(**row).to_snapshot()
        logger.info(f"Loaded {len(self._snapshots)} snapshots from {self._path}")

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            key: SnapshotRecord.from_snapshot(snap).model_dump(mode="json")
            for key, snap in self._snapshots.items()
        }
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        tmp.replace(self._path)
