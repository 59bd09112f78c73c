"""Terminal adapters for the notification, feedback and prompt ports."""

import logging

import click

from compassq.ports.notifier import Feedback

logger = logging.getLogger(__name__)


class ClickNotifier:
    """
    Prints failure messages to stderr.

    Implements Notifier protocol.
    """

    def notify(self, message: str) -> None:
        click.echo(f"Error: {message}", err=True)


class TerminalFeedback:
    """
    Rings the terminal bell for rejected and destructive outcomes.

    Implements FeedbackSink protocol.
    """

    def __init__(self, bell: bool = True):
        self.bell = bell

    def emit(self, signal: Feedback) -> None:
        logger.debug(f"Feedback: {signal.value}")
        if self.bell and signal in (Feedback.REJECTION, Feedback.DESTRUCTIVE):
            click.echo("\a", nl=False, err=True)


class ClickHoursPrompter:
    """
    Interactive renegotiation prompt.

    Implements HoursPrompter protocol. Ctrl+C / EOF count as cancel.
    """

    def request_hours(self, default: int) -> float | None:
        try:
            return click.prompt("Set new 'Due in' hours", default=default, type=float)
        except click.Abort:
            return None


class FixedHoursPrompter:
    """
    Answers the renegotiation prompt with a value given up front.

    Implements HoursPrompter protocol; `None` behaves like a cancelled prompt.
    """

    def __init__(self, hours: float | None):
        self.hours = hours

    def request_hours(self, default: int) -> float | None:
        return self.hours
