"""Functional core - pure business logic with no I/O."""

from .errors import ValidationError, CapacityExceeded, CancelledByUser
from .tasks import Quadrant, Task, classify, is_urgent, now_ms
from .snapshot import QUADRANTS, Snapshot, flatten, group_by_quadrant
from .capacity import QUADRANT_CAPACITY, ensure_room, has_room
from .lifecycle import (
    complete_task,
    create_task,
    delete_archived,
    delete_task,
    edit_task,
    restore_task,
)
from .transfer import crosses_urgency, default_hours, transfer_task
from .reclassify import next_delay_ms, reclassify

__all__ = [
    # Errors
    "ValidationError",
    "CapacityExceeded",
    "CancelledByUser",
    # Tasks
    "Quadrant",
    "Task",
    "classify",
    "is_urgent",
    "now_ms",
    # Snapshot
    "QUADRANTS",
    "Snapshot",
    "flatten",
    "group_by_quadrant",
    # Capacity
    "QUADRANT_CAPACITY",
    "ensure_room",
    "has_room",
    # Lifecycle
    "create_task",
    "edit_task",
    "complete_task",
    "delete_task",
    "restore_task",
    "delete_archived",
    # Transfer
    "crosses_urgency",
    "default_hours",
    "transfer_task",
    # Reclassification
    "next_delay_ms",
    "reclassify",
]
