"""Exceptions raised by the scheduling core.

"No slot" and "no assignment" are ordinary outcomes and are returned as
empty collections; these exceptions signal malformed input or a write
that would double-book a technician.
"""


class SchedulingInputError(ValueError):
    """Raised when the caller passes structurally invalid input."""


class BookingConflictError(Exception):
    """Raised when a booking write overlaps an existing booking."""

    def __init__(self, technician_id: int, message: str) -> None:
        super().__init__(message)
        self.technician_id = technician_id
