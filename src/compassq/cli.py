"""Compass-Q CLI - priority-matrix task tracker."""

import json
import logging
import sys
import threading
from datetime import datetime
from pathlib import Path

import click

from .adapters.terminal import ClickHoursPrompter, ClickNotifier, FixedHoursPrompter, TerminalFeedback
from .config import load_config
from .core.capacity import QUADRANT_CAPACITY
from .core.snapshot import QUADRANTS, Snapshot, group_by_quadrant
from .core.tasks import URGENT_THRESHOLD_HOURS, Quadrant, Task, ms_to_hours, now_ms
from .workflows import session

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

QUADRANT_CHOICE = click.Choice([q.value for q in QUADRANTS], case_sensitive=False)


def _format_task(task: Task, as_of: int) -> str:
    importance = "Important" if task.important else "Not important"
    return f"  [{task.id}] {task.title} ({importance}, {task.remaining_label(as_of)})"


def _show_board(snapshot: Snapshot, as_json: bool = False) -> None:
    """Shared board display logic."""
    if as_json:
        click.echo(json.dumps([t.to_dict() for t in snapshot.tasks], indent=2))
        return

    as_of = now_ms()
    buckets = group_by_quadrant(snapshot.tasks)
    counts = snapshot.counts()
    for i, q in enumerate(QUADRANTS):
        if i:
            click.echo()
        click.echo(f"### {q.value} {q.label} ({counts[q]}/{QUADRANT_CAPACITY})")
        if not buckets[q]:
            click.echo("  (empty)")
        for task in buckets[q]:
            click.echo(_format_task(task, as_of))


def _open(ctx: click.Context, prompter=None):
    config = ctx.obj
    return session(
        config,
        notifier=ClickNotifier(),
        feedback=TerminalFeedback(bell=config.bell),
        prompter=prompter,
    )


def _not_found(task_id: str) -> None:
    click.echo(f"Task {task_id} not found.", err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="compassq")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--file",
    "data_file",
    envvar="COMPASSQ_DATA",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Board file (default: from compassq.conf)",
)
@click.pass_context
def main(ctx, debug: bool, data_file: Path | None):
    """Compass-Q - sort tasks by urgency and importance."""
    config = load_config()
    if data_file is not None:
        config.data_file = data_file

    level = logging.DEBUG if debug else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(format=LOG_FORMAT, level=level)

    ctx.obj = config


@main.command()
@click.argument("title")
@click.option("--important/--not-important", default=True, help="Importance (default: important)")
@click.option("--urgent/--not-urgent", default=False, help="Urgency (default: not urgent)")
@click.option("--hours", type=float, default=24.0, show_default=True, help="Due in N hours")
@click.pass_context
def add(ctx, title: str, important: bool, urgent: bool, hours: float):
    """Add a new task."""
    with _open(ctx) as s:
        task = s.board.create(title, important=important, urgent=urgent, hours=hours)
    if task is None:
        sys.exit(1)
    click.echo(f"Added [{task.id}] {task.title} -> {task.quadrant.value} ({task.quadrant.label})")


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_tasks(ctx, as_json: bool):
    """Show the matrix."""
    with _open(ctx) as s:
        snapshot = s.board.snapshot
    _show_board(snapshot, as_json)


@main.command()
@click.argument("task_id")
@click.option("--title", default=None, help="New title")
@click.option("--hours", type=float, default=None, help="Due in N hours from now")
@click.option("--urgent/--not-urgent", default=None, help="Urgency")
@click.option("--important/--not-important", default=None, help="Importance")
@click.pass_context
def edit(ctx, task_id: str, title: str | None, hours: float | None, urgent: bool | None, important: bool | None):
    """
    Edit a task.

    Options left out keep their current value. Flipping urgency without
    --hours picks 6h (urgent) or 48h (not urgent) when the current due-time
    is on the wrong side of the threshold.
    """
    with _open(ctx) as s:
        task = s.board.snapshot.find(task_id)
        if task is None:
            _not_found(task_id)

        if hours is None:
            hours = ms_to_hours(task.remaining_ms(s.board.clock())) or URGENT_THRESHOLD_HOURS
            if urgent is True and hours > URGENT_THRESHOLD_HOURS:
                hours = 6
            elif urgent is False and hours <= URGENT_THRESHOLD_HOURS:
                hours = 48
        if urgent is None:
            urgent = task.quadrant.urgent
        if important is None:
            important = task.important

        updated = s.board.edit(
            task_id,
            title=task.title if title is None else title,
            hours=hours,
            urgent=urgent,
            important=important,
        )
    if updated is None:
        sys.exit(1)
    click.echo(f"Updated [{updated.id}] {updated.title} -> {updated.quadrant.value} ({updated.quadrant.label})")


@main.command()
@click.argument("task_id")
@click.argument("quadrant", type=QUADRANT_CHOICE)
@click.option("--index", type=click.IntRange(min=0), default=None, help="Position in the quadrant (default: last)")
@click.option("--hours", type=float, default=None, help="New 'due in' hours when urgency changes")
@click.pass_context
def move(ctx, task_id: str, quadrant: str, index: int | None, hours: float | None):
    """Move a task to another quadrant (or reorder within one)."""
    prompter = FixedHoursPrompter(hours) if hours is not None else ClickHoursPrompter()
    with _open(ctx, prompter=prompter) as s:
        if s.board.snapshot.find(task_id) is None:
            _not_found(task_id)
        moved = s.board.move(task_id, Quadrant(quadrant.upper()), index)
    if moved is None:
        sys.exit(1)
    click.echo(f"Moved [{moved.id}] {moved.title} -> {moved.quadrant.value} ({moved.remaining_label()})")


@main.command()
@click.argument("task_id")
@click.pass_context
def done(ctx, task_id: str):
    """Mark a task as completed."""
    with _open(ctx) as s:
        task = s.board.complete(task_id)
    if task is None:
        _not_found(task_id)
    click.echo(f"Completed [{task.id}] {task.title}")


@main.command()
@click.argument("task_id")
@click.pass_context
def rm(ctx, task_id: str):
    """Delete an active task."""
    with _open(ctx) as s:
        task = s.board.delete(task_id)
    if task is None:
        _not_found(task_id)
    click.echo(f"Deleted [{task.id}] {task.title}")


@main.command()
@click.argument("task_id")
@click.pass_context
def restore(ctx, task_id: str):
    """Restore a completed task to the matrix."""
    with _open(ctx) as s:
        if s.board.snapshot.find_archived(task_id) is None:
            _not_found(task_id)
        task = s.board.restore(task_id)
    if task is None:
        sys.exit(1)
    click.echo(f"Restored [{task.id}] {task.title} -> {task.quadrant.value}")


@main.command()
@click.argument("task_id")
@click.pass_context
def purge(ctx, task_id: str):
    """Permanently delete a completed task."""
    with _open(ctx) as s:
        task = s.board.delete_archived(task_id)
    if task is None:
        _not_found(task_id)
    click.echo(f"Purged [{task.id}] {task.title}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def archive(ctx, as_json: bool):
    """List completed tasks, newest first."""
    with _open(ctx) as s:
        archived = s.board.snapshot.archived

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in archived], indent=2))
        return

    if not archived:
        click.echo("No completed tasks yet.")
        return

    for task in archived:
        completed = datetime.fromtimestamp(task.completed_at / 1000).strftime("%b %d, %Y %H:%M")
        click.echo(f"  [{task.id}] {task.title} (completed {completed})")


@main.command()
@click.pass_context
def watch(ctx):
    """Keep the matrix live, reprinting it whenever a task changes quadrant."""
    with _open(ctx) as s:
        _show_board(s.board.snapshot)

        def on_change(snapshot: Snapshot) -> None:
            if not s.board.dragging:
                click.echo(f"\n--- {datetime.now().strftime('%H:%M:%S')} ---")
                _show_board(snapshot)

        s.board.subscribe(on_change)
        click.echo("\nWatching for changes. Press Ctrl+C to stop.")
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            click.echo("\nStopped.")


if __name__ == "__main__":
    main()
