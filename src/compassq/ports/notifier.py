"""User-facing notification and feedback interfaces."""

from enum import Enum
from typing import Protocol


class Feedback(Enum):
    """Abstract outcome of a completed operation."""

    SUCCESS = "success"
    REJECTION = "rejection"
    DESTRUCTIVE = "destructive"


class Notifier(Protocol):
    """Single channel for capacity and validation messages."""

    def notify(self, message: str) -> None:
        ...


class FeedbackSink(Protocol):
    """Renders outcome signals (sound, flash, bell...)."""

    def emit(self, signal: Feedback) -> None:
        ...
