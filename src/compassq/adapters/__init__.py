"""Adapters - I/O implementations of ports."""

from .json_store import JsonSnapshotStore
from .terminal import ClickHoursPrompter, ClickNotifier, FixedHoursPrompter, TerminalFeedback

__all__ = [
    "JsonSnapshotStore",
    "ClickHoursPrompter",
    "ClickNotifier",
    "FixedHoursPrompter",
    "TerminalFeedback",
]
