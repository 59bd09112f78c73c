"""
Background jobs on an APScheduler scheduler.

- ReclassificationScheduler: one-shot timer that wakes when the next task
  crosses into the urgent window, reclassifies, and re-arms.
- DebouncedSaver: writes the snapshot shortly after the last change.

Jobs are tracked by handle rather than by a fixed id, so a job re-arming
itself from inside its own run never collides with the scheduler removing
the finished one.
"""

import contextlib
import logging
import threading
from datetime import datetime, timedelta, timezone

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger

from .board import Board
from .core.reclassify import next_delay_ms
from .core.snapshot import Snapshot
from .ports.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

DEFAULT_SAVE_DELAY_MS = 200


def create_scheduler() -> BackgroundScheduler:
    """Scheduler used by the CLI. Jobs run on a worker thread."""
    return BackgroundScheduler(timezone=timezone.utc)


def _trigger_in(delay_ms: int) -> DateTrigger:
    run_date = datetime.now(timezone.utc) + timedelta(milliseconds=delay_ms)
    return DateTrigger(run_date=run_date)


def _remove(job) -> None:
    if job is not None:
        with contextlib.suppress(JobLookupError):
            job.remove()


class ReclassificationScheduler:
    """Keeps stored quadrants in step with the clock."""

    def __init__(self, board: Board, scheduler: BaseScheduler):
        self.board = board
        self.scheduler = scheduler
        self.delay_ms: int | None = None
        self._job = None
        self._lock = threading.Lock()

    def start(self) -> None:
        """Subscribe to board changes and arm the first timer."""
        self.board.subscribe(self._on_change)
        self.arm()

    def _on_change(self, snapshot: Snapshot) -> None:
        self.arm()

    @property
    def armed(self) -> bool:
        return self._job is not None

    def arm(self) -> int | None:
        """
        (Re)schedule the timer from the current board state.

        While a drag is in flight the timer is cancelled and None is
        returned; the drag's end re-arms it.
        """
        with self._lock:
            _remove(self._job)
            self._job = None
            if self.board.dragging:
                self.delay_ms = None
                logger.debug("Drag in progress; reclassification suspended")
                return None
            delay = next_delay_ms(self.board.snapshot.tasks, self.board.clock())
            self._job = self.scheduler.add_job(self._fire, _trigger_in(delay), name="reclassify")
            self.delay_ms = delay
            logger.debug(f"Reclassification armed in {delay}ms")
            return delay

    def cancel(self) -> None:
        with self._lock:
            _remove(self._job)
            self._job = None
            self.delay_ms = None

    def _fire(self) -> None:
        changed = self.board.reclassify()
        for task in changed:
            logger.info(f"Task {task.id} is now {task.quadrant.value}")
        self.arm()


class DebouncedSaver:
    """Persists the latest snapshot once changes settle."""

    def __init__(
        self,
        store: SnapshotStore,
        scheduler: BaseScheduler,
        delay_ms: int = DEFAULT_SAVE_DELAY_MS,
    ):
        self.store = store
        self.scheduler = scheduler
        self.delay_ms = delay_ms
        self._pending: Snapshot | None = None
        self._saved: Snapshot | None = None
        self._job = None
        self._lock = threading.Lock()

    def attach(self, board: Board) -> None:
        """Treat the board's current state as saved and follow its changes."""
        self._saved = board.snapshot
        board.subscribe(self.schedule)

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, snapshot: Snapshot) -> None:
        """Queue `snapshot` for saving, restarting the debounce window."""
        with self._lock:
            if snapshot is self._saved or snapshot is self._pending:
                return
            self._pending = snapshot
            _remove(self._job)
            self._job = self.scheduler.add_job(self.flush, _trigger_in(self.delay_ms), name="save-snapshot")

    def flush(self) -> bool:
        """Write any pending snapshot now. Returns True if something was saved."""
        with self._lock:
            _remove(self._job)
            self._job = None
            snapshot = self._pending
            if snapshot is None:
                return False
            try:
                self.store.save(snapshot)
            except OSError as e:
                logger.error(f"Failed to save snapshot: {e}")
                raise
            self._pending = None
            self._saved = snapshot
            return True
