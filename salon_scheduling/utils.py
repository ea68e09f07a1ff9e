"""Shared utilities used across the scheduling core."""

from datetime import date, datetime, time
from typing import Optional, Union

MIN_WEEKDAY = 0
MAX_WEEKDAY = 6


def parse_unavailable_weekdays(value: Optional[str]) -> frozenset[int]:
    """Parse a comma-separated weekday list (0=Sunday .. 6=Saturday).

    Blank, non-numeric and out-of-range tokens are ignored.

    Examples:
        >>> sorted(parse_unavailable_weekdays("0, 6"))
        [0, 6]
        >>> sorted(parse_unavailable_weekdays("1,,x,9"))
        [1]
    """
    days: set[int] = set()
    for token in (value or "").split(","):
        token = token.strip()
        if not token:
            continue
        try:
            day = int(token)
        except ValueError:
            continue
        if MIN_WEEKDAY <= day <= MAX_WEEKDAY:
            days.add(day)
    return frozenset(days)


def sunday_weekday(day: date) -> int:
    """Weekday index with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def format_hhmm(value: Union[datetime, time]) -> str:
    """Format a datetime or time as zero-padded 24h ``HH:MM``."""
    return f"{value.hour:02d}:{value.minute:02d}"
