"""
Drag-driven reassignment between (or within) quadrants.

Pure functions - no I/O. Asking the user for renegotiated hours happens in
the caller; `transfer_task` receives the answer.
"""

from dataclasses import replace

from .capacity import ensure_room
from .errors import CancelledByUser
from .snapshot import Snapshot, flatten, group_by_quadrant
from .tasks import (
    URGENT_THRESHOLD_HOURS,
    URGENT_THRESHOLD_MS,
    Quadrant,
    Task,
    check_hours,
    hours_to_ms,
    is_urgent,
    ms_to_hours,
    now_ms,
)


def crosses_urgency(src: Quadrant, dest: Quadrant) -> bool:
    """A move between urgent and non-urgent quadrants changes the due-time."""
    return src.urgent != dest.urgent


def default_hours(task: Task | None, as_of: int | None = None) -> int:
    """Suggested 'due in' hours for the renegotiation prompt (at least 1)."""
    as_of = now_ms() if as_of is None else as_of
    due_at = task.due_at if task is not None else as_of + URGENT_THRESHOLD_MS
    return max(1, ms_to_hours(due_at - as_of))


def clamp_to_axis(hours: float, dest: Quadrant) -> float:
    """Keep renegotiated hours on the destination's side of the threshold."""
    if dest.urgent:
        return min(hours, float(URGENT_THRESHOLD_HOURS))
    return max(hours, float(URGENT_THRESHOLD_HOURS + 1))


def transfer_task(
    snapshot: Snapshot,
    task_id: str,
    dest: Quadrant,
    index: int | None = None,
    hours: float | None = None,
    as_of: int | None = None,
) -> tuple[Snapshot, Task | None]:
    """
    Move a task to `dest` at position `index` within that quadrant
    (None appends).

    Steps, all-or-nothing:
    1. Crossing the urgency axis needs `hours`; None cancels the move and
       bad values raise ValidationError.
    2. Importance always follows the destination.
    3. A due-time that still disagrees with the destination's urgency is
       forced to the threshold (urgent) or one hour past it.
    4. Capacity is checked when the quadrant changes.
    5. The task is spliced into the destination bucket and buckets are
       flattened back in Q1..Q4 order.
    """
    as_of = now_ms() if as_of is None else as_of
    current = snapshot.find(task_id)
    if current is None:
        return snapshot, None

    src = current.quadrant
    due_at = current.due_at

    if crosses_urgency(src, dest):
        if hours is None:
            raise CancelledByUser("Due-time renegotiation was cancelled")
        h = clamp_to_axis(check_hours(hours), dest)
        due_at = as_of + hours_to_ms(h)

    if is_urgent(due_at, as_of) != dest.urgent:
        fallback = URGENT_THRESHOLD_HOURS if dest.urgent else URGENT_THRESHOLD_HOURS + 1
        due_at = as_of + hours_to_ms(fallback)

    if dest != src:
        ensure_room(snapshot, dest, exclude_id=task_id)

    moved = replace(current, important=dest.important, due_at=due_at, quadrant=dest)

    buckets = group_by_quadrant(snapshot.tasks)
    buckets[src] = [t for t in buckets[src] if t.id != task_id]
    dest_list = buckets[dest]
    insert_at = len(dest_list) if index is None else min(max(0, index), len(dest_list))
    dest_list.insert(insert_at, moved)

    return replace(snapshot, tasks=flatten(buckets)), moved
