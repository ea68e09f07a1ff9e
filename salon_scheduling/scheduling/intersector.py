"""
Common availability across the technicians of a group booking.

Each lane is checked against its own technician's calendar; the lanes
can start together only at times every technician has free.
"""

import logging
from datetime import date, datetime, tzinfo
from typing import Mapping, Optional, Sequence

from salon_scheduling.schemas.booking_schema import Booking
from salon_scheduling.schemas.calendar_schema import BusinessHours
from salon_scheduling.schemas.catalog_schema import Lane
from salon_scheduling.schemas.technician_schema import TechnicianChoice
from salon_scheduling.scheduling.slots import available_slots

logger = logging.getLogger(__name__)


def common_slots(
    assigned_techs: Sequence[Optional[TechnicianChoice]],
    lanes: Sequence[Lane],
    target_date: date,
    schedules_by_tech_id: Mapping[int, list[Booking]],
    buffer_hours: float,
    business_hours: BusinessHours,
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> list[datetime]:
    """
    Start times free for every (technician, lane) pair.

    Lanes without a technician are skipped. If any technician has no
    slot of their own the result is empty.
    """
    common: Optional[set[datetime]] = None
    for tech, lane in zip(assigned_techs, lanes):
        if tech is None:
            continue
        slots = available_slots(
            schedules_by_tech_id.get(tech.id, []),
            lane.grouped_by_category(),
            target_date,
            business_hours,
            tech,
            buffer_hours,
            now=now,
            tz=tz,
        )
        if not slots:
            logger.debug("No slots for %s on %s; combination impossible", tech.name, target_date)
            return []
        common = set(slots) if common is None else common & set(slots)
        if not common:
            return []
    return sorted(common) if common else []
