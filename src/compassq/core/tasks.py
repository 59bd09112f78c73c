"""Pure task domain logic - no I/O dependencies."""

import math
import time
from dataclasses import dataclass
from enum import Enum

from .errors import ValidationError

URGENT_THRESHOLD_HOURS = 24
HOUR_MS = 3_600_000
URGENT_THRESHOLD_MS = URGENT_THRESHOLD_HOURS * HOUR_MS


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def hours_to_ms(hours: float) -> int:
    return int(round(max(0.0, float(hours)) * HOUR_MS))


def ms_to_hours(ms: float) -> int:
    """Whole hours, rounded up, never negative."""
    return max(0, math.ceil(ms / HOUR_MS))


class Quadrant(str, Enum):
    """
    Eisenhower quadrant.

    Q1: Urgent + Important
    Q2: Not Urgent + Important
    Q3: Urgent + Not Important
    Q4: Not Urgent + Not Important
    """

    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"

    @property
    def urgent(self) -> bool:
        return self in (Quadrant.Q1, Quadrant.Q3)

    @property
    def important(self) -> bool:
        return self in (Quadrant.Q1, Quadrant.Q2)

    @property
    def label(self) -> str:
        labels = {
            Quadrant.Q1: "Urgent + Important",
            Quadrant.Q2: "Not Urgent + Important",
            Quadrant.Q3: "Urgent + Not Important",
            Quadrant.Q4: "Not Urgent + Not Important",
        }
        return labels[self]

    @classmethod
    def for_axes(cls, urgent: bool, important: bool) -> "Quadrant":
        if urgent and important:
            return cls.Q1
        elif not urgent and important:
            return cls.Q2
        elif urgent and not important:
            return cls.Q3
        else:
            return cls.Q4


def is_urgent(due_at: int, as_of: int | None = None) -> bool:
    """Due within the threshold window or overdue = urgent."""
    as_of = now_ms() if as_of is None else as_of
    return due_at - as_of <= URGENT_THRESHOLD_MS


def classify(important: bool, due_at: int, as_of: int | None = None) -> Quadrant:
    """Map importance and due-time to a quadrant using one clock reading."""
    as_of = now_ms() if as_of is None else as_of
    return Quadrant.for_axes(is_urgent(due_at, as_of), important)


def check_title(title: str) -> str:
    """Return the trimmed title, or raise ValidationError if it is empty."""
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required")
    return title


def check_hours(hours) -> float:
    """
    Return hours as a float, or raise ValidationError unless it is >= 0 and
    still finite once converted to milliseconds.
    """
    try:
        value = float(hours)
    except (TypeError, ValueError):
        raise ValidationError("Enter a valid non-negative number of hours.")
    if not math.isfinite(value * HOUR_MS) or value < 0:
        raise ValidationError("Enter a valid non-negative number of hours.")
    return value


def normalize_hours(hours: float, urgent: bool) -> float:
    """
    Pull the hour count onto the requested side of the urgency threshold.

    Urgent tasks are capped at the threshold; non-urgent tasks are bumped to
    one hour past it.
    """
    if urgent and hours > URGENT_THRESHOLD_HOURS:
        return float(URGENT_THRESHOLD_HOURS)
    if not urgent and hours <= URGENT_THRESHOLD_HOURS:
        return float(URGENT_THRESHOLD_HOURS + 1)
    return hours


@dataclass(frozen=True)
class Task:
    """A task placed on the priority matrix."""

    id: str
    title: str
    important: bool
    due_at: int
    created_at: int
    quadrant: Quadrant
    completed_at: int | None = None

    def expected_quadrant(self, as_of: int | None = None) -> Quadrant:
        """The quadrant this task belongs in right now."""
        return classify(self.important, self.due_at, as_of)

    def remaining_ms(self, as_of: int | None = None) -> int:
        as_of = now_ms() if as_of is None else as_of
        return max(0, self.due_at - as_of)

    def remaining_label(self, as_of: int | None = None) -> str:
        """Human-readable time left, e.g. '5h 12m left'."""
        ms = self.remaining_ms(as_of)
        hrs = ms // HOUR_MS
        mins = (ms % HOUR_MS) // 60_000
        return f"{hrs}h {mins}m left"

    def to_dict(self) -> dict:
        """Serialize using the snapshot storage field names."""
        data = {
            "id": self.id,
            "title": self.title,
            "important": self.important,
            "dueAt": self.due_at,
            "createdAt": self.created_at,
            "quadrant": self.quadrant.value,
        }
        if self.completed_at is not None:
            data["completedAt"] = self.completed_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a stored snapshot entry."""
        important = data.get("important", False)
        if not isinstance(important, bool):
            raise ValueError(f"'important' must be true or false, got {important!r}")
        completed = data.get("completedAt")
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            important=important,
            due_at=int(data["dueAt"]),
            created_at=int(data.get("createdAt", data["dueAt"])),
            quadrant=Quadrant(data["quadrant"]),
            completed_at=int(completed) if completed is not None else None,
        )
