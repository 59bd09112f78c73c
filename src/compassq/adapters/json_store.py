"""JSON file snapshot storage adapter."""

import json
import logging
import os
from pathlib import Path

from compassq.core.snapshot import Snapshot

logger = logging.getLogger(__name__)


class JsonSnapshotStore:
    """
    File-based snapshot storage.

    Implements SnapshotStore protocol. The whole board lives in one JSON
    document: {"tasks": [...], "archived": [...]}.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def load(self) -> Snapshot:
        """Load snapshot from file. Missing or unreadable files give an empty board."""
        if not self.path.exists():
            return Snapshot()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read snapshot from {self.path}: {e}")
            return Snapshot()
        if not isinstance(data, dict):
            logger.warning(f"Ignoring snapshot in {self.path}: expected an object")
            return Snapshot()
        snapshot = Snapshot.from_dict(data)
        logger.debug(
            f"Loaded {len(snapshot.tasks)} active / {len(snapshot.archived)} archived tasks from {self.path}"
        )
        return snapshot

    def save(self, snapshot: Snapshot) -> None:
        """Write snapshot atomically (temp file + replace)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(snapshot.to_dict(), indent=2), encoding="utf-8")
        os.replace(tmp, self.path)
        logger.debug(f"Saved snapshot to {self.path}")
