"""Due-time renegotiation prompt interface."""

from typing import Protocol


class HoursPrompter(Protocol):
    """Asks the user for a new 'due in N hours' value during a drag."""

    def request_hours(self, default: int) -> float | None:
        """Return the entered hours, or None if the user cancelled."""
        ...
