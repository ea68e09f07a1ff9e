"""Business-timezone clock.

"Now" is always computed as a new timezone-aware value and passed into
the scheduling functions, which never read the clock themselves when a
value is supplied. Tests freeze time by passing ``now`` explicitly.
"""

from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from salon_scheduling.config import settings
from salon_scheduling.scheduling.errors import SchedulingInputError


def business_zone(name: Optional[str] = None) -> ZoneInfo:
    """Return the configured business timezone (or ``name`` if given)."""
    zone_name = name or settings.business.timezone
    try:
        return ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise SchedulingInputError(f"Unknown timezone: {zone_name!r}") from None


def business_now(tz: Optional[tzinfo] = None) -> datetime:
    """Current time in the business timezone."""
    return datetime.now(tz or business_zone())


def in_zone(moment: datetime, tz: tzinfo) -> datetime:
    """Express ``moment`` in ``tz``. Naive values are taken as already local."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)
