"""Tests for drag-driven transfers between quadrants."""

import pytest

from compassq.core.capacity import QUADRANT_CAPACITY
from compassq.core.errors import CancelledByUser, CapacityExceeded, ValidationError
from compassq.core.lifecycle import create_task
from compassq.core.snapshot import Snapshot, group_by_quadrant
from compassq.core.tasks import HOUR_MS, Quadrant
from compassq.core.transfer import clamp_to_axis, crosses_urgency, default_hours, transfer_task

NOW = 1_700_000_000_000


def add(snapshot, task_id, quadrant, hours=None):
    if hours is None:
        hours = 2 if quadrant.urgent else 48
    snapshot, _ = create_task(
        snapshot, task_id.upper(), quadrant.important, quadrant.urgent, hours, as_of=NOW, task_id=task_id
    )
    return snapshot


@pytest.fixture
def snapshot():
    s = Snapshot()
    # create prepends, so add in reverse of the wanted display order
    for task_id, q in [("q4a", Quadrant.Q4), ("q2b", Quadrant.Q2), ("q2a", Quadrant.Q2), ("q1a", Quadrant.Q1)]:
        s = add(s, task_id, q)
    return s


class TestHelpers:
    def test_crosses_urgency(self):
        assert crosses_urgency(Quadrant.Q4, Quadrant.Q1)
        assert crosses_urgency(Quadrant.Q1, Quadrant.Q2)
        assert not crosses_urgency(Quadrant.Q1, Quadrant.Q3)
        assert not crosses_urgency(Quadrant.Q2, Quadrant.Q4)

    def test_default_hours(self, snapshot):
        task = snapshot.find("q2a")
        assert default_hours(task, as_of=NOW) == 48
        assert default_hours(task, as_of=task.due_at + HOUR_MS) == 1

    def test_clamp_to_axis(self):
        assert clamp_to_axis(100, Quadrant.Q1) == 24
        assert clamp_to_axis(2, Quadrant.Q1) == 2
        assert clamp_to_axis(2, Quadrant.Q4) == 25
        assert clamp_to_axis(100, Quadrant.Q4) == 100


class TestTransfer:
    def test_not_urgent_unimportant_to_q1_with_new_hours(self, snapshot):
        later = NOW + 1000
        result, moved = transfer_task(snapshot, "q4a", Quadrant.Q1, hours=2, as_of=later)

        assert moved.important is True
        assert moved.due_at == later + 2 * HOUR_MS
        assert moved.quadrant == Quadrant.Q1
        assert result.find("q4a") == moved
        assert result.count(Quadrant.Q4) == 0

    def test_reorder_within_quadrant(self, snapshot):
        result, moved = transfer_task(snapshot, "q2b", Quadrant.Q2, index=0, as_of=NOW)
        before = snapshot.find("q2b")

        assert [t.id for t in group_by_quadrant(result.tasks)[Quadrant.Q2]] == ["q2b", "q2a"]
        assert (moved.important, moved.due_at, moved.quadrant) == (before.important, before.due_at, before.quadrant)

    def test_reorder_within_full_quadrant_never_rejected(self):
        s = Snapshot()
        for i in range(QUADRANT_CAPACITY):
            s = add(s, f"t{i}", Quadrant.Q2)
        result, moved = transfer_task(s, "t0", Quadrant.Q2, index=0, as_of=NOW)
        assert group_by_quadrant(result.tasks)[Quadrant.Q2][0] is moved

    def test_cancelled_prompt_raises_before_any_change(self, snapshot):
        with pytest.raises(CancelledByUser):
            transfer_task(snapshot, "q4a", Quadrant.Q1, hours=None, as_of=NOW)
        assert snapshot.find("q4a").quadrant == Quadrant.Q4

    def test_bad_hours_rejected(self, snapshot):
        with pytest.raises(ValidationError):
            transfer_task(snapshot, "q4a", Quadrant.Q1, hours=-2, as_of=NOW)

    def test_overflowing_hours_rejected(self, snapshot):
        with pytest.raises(ValidationError):
            transfer_task(snapshot, "q1a", Quadrant.Q2, hours=1e305, as_of=NOW)
        assert snapshot.find("q1a").quadrant == Quadrant.Q1

    def test_prompted_hours_clamped_to_destination(self, snapshot):
        _, moved = transfer_task(snapshot, "q1a", Quadrant.Q2, hours=3, as_of=NOW)
        assert moved.due_at == NOW + 25 * HOUR_MS
        assert moved.quadrant == Quadrant.Q2

    def test_same_urgency_move_flips_importance_only(self, snapshot):
        before = snapshot.find("q2a")
        _, moved = transfer_task(snapshot, "q2a", Quadrant.Q4, as_of=NOW)
        assert moved.important is False
        assert moved.due_at == before.due_at
        assert moved.quadrant == Quadrant.Q4

    def test_drifted_due_time_forced_to_destination(self, snapshot):
        # q2a was due in 48h; 30h later it is urgent but still stored as Q2
        as_of = NOW + 30 * HOUR_MS
        _, moved = transfer_task(snapshot, "q2a", Quadrant.Q4, as_of=as_of)
        assert moved.due_at == as_of + 25 * HOUR_MS

    def test_destination_full_rejected(self, snapshot):
        s = snapshot
        for i in range(QUADRANT_CAPACITY - 1):
            s = add(s, f"x{i}", Quadrant.Q1)
        assert s.count(Quadrant.Q1) == QUADRANT_CAPACITY

        with pytest.raises(CapacityExceeded):
            transfer_task(s, "q4a", Quadrant.Q1, hours=2, as_of=NOW)

    def test_index_clamped_and_default_appends(self, snapshot):
        s = add(snapshot, "q4b", Quadrant.Q4)
        result, _ = transfer_task(s, "q2a", Quadrant.Q4, index=99, as_of=NOW)
        assert [t.id for t in group_by_quadrant(result.tasks)[Quadrant.Q4]] == ["q4b", "q4a", "q2a"]

        result, _ = transfer_task(s, "q2b", Quadrant.Q4, as_of=NOW)
        assert [t.id for t in group_by_quadrant(result.tasks)[Quadrant.Q4]][-1] == "q2b"

    def test_result_is_ordered_by_quadrant(self, snapshot):
        result, _ = transfer_task(snapshot, "q1a", Quadrant.Q3, as_of=NOW)
        quadrants = [t.quadrant for t in result.tasks]
        assert quadrants == sorted(quadrants, key=lambda q: q.value)

    def test_unknown_task(self, snapshot):
        result, moved = transfer_task(snapshot, "missing", Quadrant.Q1, hours=1, as_of=NOW)
        assert moved is None
        assert result is snapshot
