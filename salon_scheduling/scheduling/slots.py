"""
Slot generation for a single technician on a single day.

Candidate start times sit on a fixed grid aligned to opening time. A
candidate is kept when the whole requested duration fits before closing,
it does not overlap any of the technician's bookings that day, and (for
today only) it is not earlier than now plus the advance-notice buffer.

Usage:
    slots = available_slots(bookings, {1: [manicure]}, date(2026, 3, 2),
                            BusinessHours(start=9, end=19), tech, now=frozen)
"""

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Mapping, Optional

from salon_scheduling.config import settings
from salon_scheduling.schemas.booking_schema import Booking
from salon_scheduling.schemas.calendar_schema import BusinessHours
from salon_scheduling.schemas.catalog_schema import CategoryId, Service
from salon_scheduling.schemas.technician_schema import TechnicianChoice
from salon_scheduling.scheduling.clock import business_now, business_zone, in_zone
from salon_scheduling.scheduling.overlap import any_overlap, booking_interval
from salon_scheduling.scheduling.services import calculate_total_time
from salon_scheduling.utils import sunday_weekday

logger = logging.getLogger(__name__)


def _candidate_starts(opens: datetime, closes: datetime, step: timedelta) -> Iterable[datetime]:
    slot = opens
    while slot <= closes:
        yield slot
        slot += step


def available_slots(
    existing_bookings: Iterable[Booking],
    requested_services: Mapping[CategoryId, list[Service]],
    target_date: date,
    business_hours: BusinessHours,
    technician: TechnicianChoice,
    buffer_hours: float = 0,
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
    interval_minutes: Optional[int] = None,
) -> list[datetime]:
    """
    Compute the start times at which ``technician`` can take the request.

    Args:
        existing_bookings: the technician's bookings; other dates are ignored.
        requested_services: category id -> services, durations summed.
        target_date: calendar day in the business timezone.
        business_hours: opening window for ``target_date``.
        technician: real technician or the "No Preference" placeholder.
        buffer_hours: advance notice applied when ``target_date`` is today.
        now: frozen current time; defaults to the business clock.
        tz: business timezone; defaults to the configured one.
        interval_minutes: grid step; defaults to the configured one.

    Returns:
        Ascending timezone-aware start times. Empty when the day is fully
        booked, the technician is off, or the date has passed.
    """
    tz = tz or business_zone()
    step = timedelta(minutes=interval_minutes or settings.scheduling.slot_interval_minutes)
    current = in_zone(now, tz) if now is not None else business_now(tz)

    if technician.is_on_vacation(target_date):
        logger.debug("Technician %s on vacation on %s", technician.name, target_date)
        return []
    if sunday_weekday(target_date) in technician.unavailable_weekdays:
        logger.debug("Technician %s does not work weekday of %s", technician.name, target_date)
        return []
    if target_date < current.date():
        return []

    total = timedelta(minutes=calculate_total_time(requested_services))
    occupied = [
        booking_interval(b, tz) for b in existing_bookings if b.date == target_date
    ]

    earliest = None
    if target_date == current.date():
        earliest = current + timedelta(hours=buffer_hours)

    opens, closes = business_hours.window(target_date, tz)
    slots: list[datetime] = []
    for start in _candidate_starts(opens, closes, step):
        end = start + total
        if end > closes:
            break
        if earliest is not None and start < earliest:
            continue
        if any_overlap(occupied, start, end):
            continue
        slots.append(start)

    logger.debug(
        "Technician %s has %d slot(s) on %s for %s",
        technician.name, len(slots), target_date, total,
    )
    return slots
