"""Error taxonomy raised by the functional core."""


class ValidationError(ValueError):
    """Raised when user input cannot be applied (empty title, bad hours)."""

    pass


class CapacityExceeded(Exception):
    """Raised when the destination quadrant is already full."""

    def __init__(self, quadrant, capacity: int, hint: str = ""):
        self.quadrant = quadrant
        self.capacity = capacity
        message = f"Quadrant limit reached ({capacity})."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class CancelledByUser(Exception):
    """Raised when the due-time renegotiation prompt is dismissed."""

    pass
