"""Shared workflow layer for the CLI.

Wires the configured store, the Board, the debounced saver and the
reclassification timer into one session.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass

from apscheduler.schedulers.base import BaseScheduler

from .adapters.json_store import JsonSnapshotStore
from .board import Board
from .config import Config
from .ports.notifier import FeedbackSink, Notifier
from .ports.prompter import HoursPrompter
from .ports.snapshot_store import SnapshotStore
from .scheduler import DebouncedSaver, ReclassificationScheduler, create_scheduler

logger = logging.getLogger(__name__)


def get_store(config: Config) -> JsonSnapshotStore:
    """Resolve the snapshot file from config."""
    return JsonSnapshotStore(config.data_file)


@dataclass
class Session:
    """A loaded board plus the background jobs that follow it."""

    board: Board
    saver: DebouncedSaver
    reclassifier: ReclassificationScheduler
    scheduler: BaseScheduler

    def close(self) -> None:
        """Stop the timer and write any unsaved change."""
        self.reclassifier.cancel()
        try:
            self.saver.flush()
        finally:
            if self.scheduler.running:
                self.scheduler.shutdown(wait=False)


def open_session(
    config: Config,
    notifier: Notifier | None = None,
    feedback: FeedbackSink | None = None,
    prompter: HoursPrompter | None = None,
    store: SnapshotStore | None = None,
    scheduler: BaseScheduler | None = None,
) -> Session:
    """
    Load the board and start its background jobs.

    Quadrants are brought up to date with the clock right after loading, so
    a board saved yesterday opens classified for today.
    """
    store = store or get_store(config)
    scheduler = scheduler or create_scheduler()

    board = Board(store.load(), notifier=notifier, feedback=feedback, prompter=prompter)
    saver = DebouncedSaver(store, scheduler, delay_ms=config.save_debounce_ms)
    saver.attach(board)
    board.reclassify()

    reclassifier = ReclassificationScheduler(board, scheduler)
    if not scheduler.running:
        scheduler.start()
    reclassifier.start()
    logger.debug(f"Session opened with {len(board.snapshot.tasks)} active tasks")
    return Session(board=board, saver=saver, reclassifier=reclassifier, scheduler=scheduler)


@contextmanager
def session(config: Config, **kwargs):
    """Context-managed open_session(); always flushes on exit."""
    s = open_session(config, **kwargs)
    try:
        yield s
    finally:
        s.close()
