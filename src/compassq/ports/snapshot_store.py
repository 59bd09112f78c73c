"""Snapshot persistence interface."""

from typing import Protocol

from compassq.core.snapshot import Snapshot


class SnapshotStore(Protocol):
    """Interface for loading and saving the full board state."""

    def load(self) -> Snapshot:
        """Load the last saved snapshot. Returns an empty one if none exists."""
        ...

    def save(self, snapshot: Snapshot) -> None:
        """Persist the snapshot, replacing whatever was stored."""
        ...
