"""Immutable board state and the bucketing folds over it."""

import logging
from dataclasses import dataclass

from .tasks import Quadrant, Task

logger = logging.getLogger(__name__)

QUADRANTS = (Quadrant.Q1, Quadrant.Q2, Quadrant.Q3, Quadrant.Q4)


@dataclass(frozen=True)
class Snapshot:
    """
    Full board state at one instant.

    `tasks` holds active tasks in display order, `archived` holds completed
    tasks with the most recently completed first. A task id appears in at
    most one of the two.
    """

    tasks: tuple[Task, ...] = ()
    archived: tuple[Task, ...] = ()

    def find(self, task_id: str) -> Task | None:
        """Find an active task by id."""
        return next((t for t in self.tasks if t.id == task_id), None)

    def find_archived(self, task_id: str) -> Task | None:
        return next((t for t in self.archived if t.id == task_id), None)

    def has_id(self, task_id: str) -> bool:
        return self.find(task_id) is not None or self.find_archived(task_id) is not None

    def count(self, quadrant: Quadrant, exclude_id: str | None = None) -> int:
        """Active tasks in a quadrant, optionally ignoring one task."""
        return sum(1 for t in self.tasks if t.quadrant == quadrant and t.id != exclude_id)

    def counts(self) -> dict[Quadrant, int]:
        return {q: self.count(q) for q in QUADRANTS}

    def to_dict(self) -> dict:
        return {
            "tasks": [t.to_dict() for t in self.tasks],
            "archived": [t.to_dict() for t in self.archived],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Snapshot":
        """Build a snapshot from stored data, skipping malformed entries."""
        seen: set[str] = set()

        def parse(key: str) -> tuple[Task, ...]:
            items = data.get(key)
            if items is None:
                return ()
            if not isinstance(items, list):
                logger.warning(f"Ignoring '{key}': expected a list, got {type(items).__name__}")
                return ()
            out = []
            for item in items:
                if not isinstance(item, dict):
                    logger.warning(f"Skipping non-object task entry {item!r}")
                    continue
                try:
                    task = Task.from_dict(item)
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning(f"Skipping malformed task entry {item!r}: {e}")
                    continue
                if task.id in seen:
                    logger.warning(f"Skipping duplicate task id {task.id}")
                    continue
                seen.add(task.id)
                out.append(task)
            return tuple(out)

        tasks = parse("tasks")
        archived = parse("archived")
        return cls(tasks=tasks, archived=archived)


def group_by_quadrant(tasks) -> dict[Quadrant, list[Task]]:
    """Split tasks into per-quadrant lists, preserving relative order."""
    buckets: dict[Quadrant, list[Task]] = {q: [] for q in QUADRANTS}
    for t in tasks:
        buckets[t.quadrant].append(t)
    return buckets


def flatten(buckets: dict[Quadrant, list[Task]]) -> tuple[Task, ...]:
    """Concatenate buckets in fixed Q1, Q2, Q3, Q4 order."""
    return tuple(t for q in QUADRANTS for t in buckets.get(q, []))
