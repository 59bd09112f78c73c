"""Ports - interfaces/protocols for external dependencies."""

from .snapshot_store import SnapshotStore
from .prompter import HoursPrompter
from .notifier import Feedback, FeedbackSink, Notifier

__all__ = [
    "SnapshotStore",
    "HoursPrompter",
    "Feedback",
    "FeedbackSink",
    "Notifier",
]
