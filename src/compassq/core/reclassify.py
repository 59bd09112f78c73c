"""Time-driven reclassification - pure functions, no timers."""

from dataclasses import replace

from .snapshot import Snapshot
from .tasks import URGENT_THRESHOLD_MS, Task, now_ms

MIN_DELAY_MS = 500
MAX_DELAY_MS = 600_000
IDLE_DELAY_MS = 60_000


def next_delay_ms(tasks, as_of: int | None = None) -> int:
    """
    Milliseconds until the next task crosses into the urgent window.

    Only tasks that are not urgent yet count. The result is clamped to
    [MIN_DELAY_MS, MAX_DELAY_MS]; with nothing pending it is IDLE_DELAY_MS.
    """
    as_of = now_ms() if as_of is None else as_of
    pending = [d for d in ((t.due_at - as_of) - URGENT_THRESHOLD_MS for t in tasks) if d > 0]
    if not pending:
        return IDLE_DELAY_MS
    return max(MIN_DELAY_MS, min(min(pending), MAX_DELAY_MS))


def stale_tasks(tasks, as_of: int | None = None) -> list[Task]:
    """Tasks whose stored quadrant no longer matches the clock."""
    as_of = now_ms() if as_of is None else as_of
    return [t for t in tasks if t.expected_quadrant(as_of) != t.quadrant]


def reclassify(snapshot: Snapshot, as_of: int | None = None) -> Snapshot:
    """
    Recompute the quadrant of every active task.

    Positions are kept and capacity is not checked: the clock cannot be
    refused. Returns the same snapshot object when nothing moved.
    """
    as_of = now_ms() if as_of is None else as_of
    changed = False
    tasks = []
    for t in snapshot.tasks:
        q = t.expected_quadrant(as_of)
        if q != t.quadrant:
            changed = True
            t = replace(t, quadrant=q)
        tasks.append(t)
    if not changed:
        return snapshot
    return replace(snapshot, tasks=tuple(tasks))
