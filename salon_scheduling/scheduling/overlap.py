"""
Overlap detection between a candidate interval and existing bookings.

Intervals are half-open, ``[start, end)``: two bookings that only touch
(one ends exactly when the other starts) do not overlap. A zero-length
candidate ``[x, x)`` is treated as the single instant ``x`` and overlaps
a booking only when ``x`` falls inside it, so a point at a booking's
start overlaps and a point at its end does not.
"""

from datetime import datetime, tzinfo
from typing import Iterable, NamedTuple, Optional

from salon_scheduling.schemas.booking_schema import Booking


class Interval(NamedTuple):
    """An occupied ``[start, end)`` range."""

    start: datetime
    end: datetime


def booking_interval(booking: Booking, tz: Optional[tzinfo] = None) -> Interval:
    """Occupied interval of a booking: start time plus the sum of its durations."""
    return Interval(booking.starts_at(tz), booking.ends_at(tz))


def interval_overlaps(occupied: Interval, start: datetime, end: datetime) -> bool:
    """Check whether ``[start, end)`` intersects one occupied interval."""
    if start == end:
        return occupied.start <= start < occupied.end
    return start < occupied.end and end > occupied.start


def any_overlap(occupied: Iterable[Interval], start: datetime, end: datetime) -> bool:
    """Check ``[start, end)`` against precomputed occupied intervals."""
    return any(interval_overlaps(interval, start, end) for interval in occupied)


def overlaps(existing_bookings: Iterable[Booking], start: datetime, end: datetime) -> bool:
    """
    Check whether a candidate interval intersects any existing booking.

    Args:
        existing_bookings: bookings to check against; each occupies
            ``[start_service_time, start_service_time + sum(durations))``
            on its own date.
        start: candidate start.
        end: candidate end.

    Returns:
        True if the candidate overlaps at least one booking.

    Bookings are placed in the candidate's timezone, so aware and naive
    candidates are both supported as long as start and end agree.
    """
    tz = start.tzinfo
    return any_overlap((booking_interval(b, tz) for b in existing_bookings), start, end)
