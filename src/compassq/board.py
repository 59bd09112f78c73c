"""
Single-writer board state holder.

The Board owns the current Snapshot. Every operation runs a pure core
transition under one lock and either commits the whole result or nothing.
Capacity and validation failures are reported through the Notifier port and
a REJECTION feedback signal; unknown ids and cancelled prompts are silent
no-ops.

`snapshot` and `dragging` are plain attribute reads so background jobs can
look at them without taking the lock.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Callable

from .core.errors import CancelledByUser, CapacityExceeded, ValidationError
from .core.lifecycle import (
    complete_task,
    create_task,
    delete_archived,
    delete_task,
    edit_task,
    restore_task,
)
from .core.reclassify import reclassify, stale_tasks
from .core.snapshot import Snapshot
from .core.tasks import Quadrant, Task, now_ms
from .core.transfer import crosses_urgency, default_hours, transfer_task
from .ports.notifier import Feedback, FeedbackSink, Notifier
from .ports.prompter import HoursPrompter

logger = logging.getLogger(__name__)

Listener = Callable[[Snapshot], None]


class Board:
    """The priority matrix and all operations that mutate it."""

    def __init__(
        self,
        snapshot: Snapshot | None = None,
        notifier: Notifier | None = None,
        feedback: FeedbackSink | None = None,
        prompter: HoursPrompter | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        self._snapshot = snapshot or Snapshot()
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []
        self._dragging = False
        self.notifier = notifier
        self.feedback = feedback
        self.prompter = prompter
        self.clock = clock

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def dragging(self) -> bool:
        return self._dragging

    def subscribe(self, listener: Listener) -> None:
        """Call `listener(snapshot)` after every change and drag start/end."""
        self._listeners.append(listener)

    # ============== Internals ==============

    def _publish(self) -> None:
        for listener in list(self._listeners):
            listener(self._snapshot)

    def _commit(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        self._publish()

    def _emit(self, signal: Feedback) -> None:
        if self.feedback is not None:
            self.feedback.emit(signal)

    def _reject(self, error: Exception) -> None:
        logger.info(f"Operation rejected: {error}")
        if self.notifier is not None:
            self.notifier.notify(str(error))
        self._emit(Feedback.REJECTION)

    def _apply(self, transition, success: Feedback = Feedback.SUCCESS) -> Task | None:
        """Run `transition(snapshot)` and commit its result atomically."""
        with self._lock:
            try:
                snapshot, task = transition(self._snapshot)
            except (ValidationError, CapacityExceeded) as e:
                self._reject(e)
                return None
            except CancelledByUser:
                logger.info("Transfer cancelled by user")
                return None
            if task is None:
                logger.debug("Task not found; nothing to do")
                return None
            self._commit(snapshot)
        self._emit(success)
        return task

    # ============== Lifecycle ==============

    def create(self, title: str, important: bool = True, urgent: bool = False, hours: float = 24) -> Task | None:
        task = self._apply(lambda s: create_task(s, title, important, urgent, hours, as_of=self.clock()))
        if task:
            logger.info(f"Created task {task.id} in {task.quadrant.value}")
        return task

    def edit(self, task_id: str, title: str, hours: float, urgent: bool, important: bool) -> Task | None:
        task = self._apply(
            lambda s: edit_task(s, task_id, title, hours, urgent, important, as_of=self.clock())
        )
        if task:
            logger.info(f"Edited task {task.id} -> {task.quadrant.value}")
        return task

    def complete(self, task_id: str) -> Task | None:
        return self._apply(lambda s: complete_task(s, task_id, as_of=self.clock()))

    def delete(self, task_id: str) -> Task | None:
        return self._apply(lambda s: delete_task(s, task_id), success=Feedback.DESTRUCTIVE)

    def restore(self, task_id: str) -> Task | None:
        return self._apply(lambda s: restore_task(s, task_id, as_of=self.clock()))

    def delete_archived(self, task_id: str) -> Task | None:
        return self._apply(lambda s: delete_archived(s, task_id), success=Feedback.DESTRUCTIVE)

    # ============== Transfer ==============

    @contextmanager
    def drag(self):
        """Mark a drag as in flight; listeners hear about both edges."""
        with self._lock:
            if self._dragging:
                raise RuntimeError("A drag is already in progress")
            self._dragging = True
            self._publish()
        try:
            yield self
        finally:
            with self._lock:
                self._dragging = False
                self._publish()

    def move(
        self,
        task_id: str,
        dest: Quadrant | str,
        index: int | None = None,
        prompter: HoursPrompter | None = None,
    ) -> Task | None:
        """
        Drag a task to `dest` at `index` (None appends).

        Crossing the urgency axis asks the prompter for new hours first;
        the prompt runs outside the lock while the drag flag keeps the
        reclassification timer quiet.
        """
        dest = Quadrant(dest)
        prompter = prompter or self.prompter

        with self.drag():
            task = self._snapshot.find(task_id)
            if task is None:
                logger.debug(f"Move of unknown task {task_id} ignored")
                return None

            hours = None
            if crosses_urgency(task.quadrant, dest) and prompter is not None:
                hours = prompter.request_hours(default_hours(task, self.clock()))

            moved = self._apply(
                lambda s: transfer_task(s, task_id, dest, index, hours, as_of=self.clock())
            )
        if moved:
            logger.info(f"Moved task {moved.id} to {moved.quadrant.value}")
        return moved

    # ============== Time ==============

    def reclassify(self) -> list[Task]:
        """Apply clock-driven quadrant changes. Returns the tasks that moved."""
        with self._lock:
            if self._dragging:
                return []
            as_of = self.clock()
            stale = stale_tasks(self._snapshot.tasks, as_of)
            if not stale:
                return []
            after = reclassify(self._snapshot, as_of=as_of)
            changed = [after.find(t.id) for t in stale]
            self._commit(after)
        logger.info(f"Reclassified {len(changed)} task(s)")
        return changed
