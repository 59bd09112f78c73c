"""
Task lifecycle transitions.

Every function takes a Snapshot and returns `(new_snapshot, task)`. When the
task id is unknown the original snapshot comes back unchanged with `None`.
Rejections raise ValidationError or CapacityExceeded before anything is
built, so a failed call never yields a partially updated snapshot.

Pure functions - no I/O.
"""

import uuid
from dataclasses import replace

from .capacity import ensure_room
from .errors import ValidationError
from .snapshot import Snapshot
from .tasks import Task, check_hours, check_title, classify, hours_to_ms, normalize_hours, now_ms

CREATE_FULL_HINT = "Try another quadrant or complete/delete tasks."
CLEAR_ROOM_HINT = "Clear room first."


def new_task_id(snapshot: Snapshot) -> str:
    """Short random id, unique across active and archived tasks."""
    while True:
        task_id = uuid.uuid4().hex[:8]
        if not snapshot.has_id(task_id):
            return task_id


def _coerce_hours(hours) -> float:
    try:
        return check_hours(hours)
    except ValidationError:
        return 0.0


def create_task(
    snapshot: Snapshot,
    title: str,
    important: bool,
    urgent: bool,
    hours: float,
    as_of: int | None = None,
    task_id: str | None = None,
) -> tuple[Snapshot, Task]:
    """
    Create a task and put it at the front of the active list.

    Unusable hour values fall back to 0 before normalization.
    """
    as_of = now_ms() if as_of is None else as_of
    title = check_title(title)
    h = normalize_hours(_coerce_hours(hours), urgent)
    due_at = as_of + hours_to_ms(h)
    quadrant = classify(important, due_at, as_of)

    ensure_room(snapshot, quadrant, hint=CREATE_FULL_HINT)

    task = Task(
        id=task_id or new_task_id(snapshot),
        title=title,
        important=bool(important),
        due_at=due_at,
        created_at=as_of,
        quadrant=quadrant,
    )
    return replace(snapshot, tasks=(task, *snapshot.tasks)), task


def edit_task(
    snapshot: Snapshot,
    task_id: str,
    title: str,
    hours: float,
    urgent: bool,
    important: bool,
    as_of: int | None = None,
) -> tuple[Snapshot, Task | None]:
    """
    Replace title, importance and due-time of an active task.

    The capacity check gates the whole edit: if the task would move into a
    full quadrant nothing is changed.
    """
    as_of = now_ms() if as_of is None else as_of
    title = check_title(title)
    h = normalize_hours(check_hours(hours), urgent)

    current = snapshot.find(task_id)
    if current is None:
        return snapshot, None

    due_at = as_of + hours_to_ms(h)
    quadrant = classify(important, due_at, as_of)
    if quadrant != current.quadrant:
        ensure_room(snapshot, quadrant, exclude_id=task_id, hint=CLEAR_ROOM_HINT)

    updated = replace(current, title=title, important=bool(important), due_at=due_at, quadrant=quadrant)
    tasks = tuple(updated if t.id == task_id else t for t in snapshot.tasks)
    return replace(snapshot, tasks=tasks), updated


def complete_task(
    snapshot: Snapshot, task_id: str, as_of: int | None = None
) -> tuple[Snapshot, Task | None]:
    """Move an active task to the top of the archive."""
    as_of = now_ms() if as_of is None else as_of
    current = snapshot.find(task_id)
    if current is None:
        return snapshot, None

    done = replace(current, completed_at=as_of)
    tasks = tuple(t for t in snapshot.tasks if t.id != task_id)
    return Snapshot(tasks=tasks, archived=(done, *snapshot.archived)), done


def delete_task(snapshot: Snapshot, task_id: str) -> tuple[Snapshot, Task | None]:
    """Drop an active task. No capacity or classification checks."""
    current = snapshot.find(task_id)
    if current is None:
        return snapshot, None
    tasks = tuple(t for t in snapshot.tasks if t.id != task_id)
    return replace(snapshot, tasks=tasks), current


def restore_task(
    snapshot: Snapshot, task_id: str, as_of: int | None = None
) -> tuple[Snapshot, Task | None]:
    """
    Bring an archived task back to the front of the active list.

    The due-time is kept as stored, so an overdue task lands in an urgent
    quadrant. A full destination leaves the task archived.
    """
    as_of = now_ms() if as_of is None else as_of
    archived = snapshot.find_archived(task_id)
    if archived is None:
        return snapshot, None

    quadrant = classify(archived.important, archived.due_at, as_of)
    ensure_room(snapshot, quadrant, hint=CLEAR_ROOM_HINT)

    restored = replace(archived, quadrant=quadrant, completed_at=None)
    return (
        Snapshot(
            tasks=(restored, *snapshot.tasks),
            archived=tuple(t for t in snapshot.archived if t.id != task_id),
        ),
        restored,
    )


def delete_archived(snapshot: Snapshot, task_id: str) -> tuple[Snapshot, Task | None]:
    """Permanently drop a completed task."""
    current = snapshot.find_archived(task_id)
    if current is None:
        return snapshot, None
    archived = tuple(t for t in snapshot.archived if t.id != task_id)
    return replace(snapshot, archived=archived), current
