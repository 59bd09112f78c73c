"""Per-quadrant capacity guard."""

from .errors import CapacityExceeded
from .snapshot import Snapshot
from .tasks import Quadrant

QUADRANT_CAPACITY = 10


def has_room(snapshot: Snapshot, quadrant: Quadrant, exclude_id: str | None = None) -> bool:
    """True if one more task fits in the quadrant (not counting exclude_id)."""
    return snapshot.count(quadrant, exclude_id) < QUADRANT_CAPACITY


def ensure_room(
    snapshot: Snapshot,
    quadrant: Quadrant,
    exclude_id: str | None = None,
    hint: str = "",
) -> None:
    """Raise CapacityExceeded if the quadrant is full."""
    if not has_room(snapshot, quadrant, exclude_id):
        raise CapacityExceeded(quadrant, QUADRANT_CAPACITY, hint)
