"""
Snapshot storage for synced events.

Each sync run writes its full result as one JSON file, replacing the
previous snapshot under the same key.
"""

import json
import logging
from pathlib import Path

from .models import CanonicalEvent

logger = logging.getLogger(__name__)


class SnapshotStore:
    """JSON-file snapshots under a data directory (<data_dir>/<key>.json)."""

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def write_snapshot(self, key: str, events: list[CanonicalEvent]) -> Path:
        """Overwrite the snapshot for key with events."""
        path = self.path_for(key)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        try:
            with open(path, "w", encoding="utf-8") as f:
                # NaN sentinels are written as NaN, which json.load reads back
                json.dump([e.to_dict() for e in events], f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save snapshot to {path}: {e}")
            raise
        logger.info(f"Saved {len(events)} events to {path}")
        return path

    def read_snapshot(self, key: str) -> list[CanonicalEvent]:
        """Load the snapshot for key, or an empty list if none was written."""
        path = self.path_for(key)
        if not path.exists():
            return []
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return [CanonicalEvent.from_dict(item) for item in data]
