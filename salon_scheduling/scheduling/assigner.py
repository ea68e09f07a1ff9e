"""
Technician assignment for group bookings.

Each lane has a list of technicians qualified for its services. One
technician is chosen per lane so that no real technician works two lanes
at once. The "No Preference" placeholder is a type of its own
(:class:`AnyTechnician`) and may fill any number of lanes.

Two forms are provided:

- :func:`assign` picks greedily, lane by lane, without looking at calendars.
- :func:`assign_with_availability` tries every combination and keeps the
  one with the most common free start times, preferring combinations made
  only of real technicians.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import TYPE_CHECKING, Iterator, Optional, Sequence

from salon_scheduling.logging_context import get_request_logger
from salon_scheduling.schemas.booking_schema import Booking
from salon_scheduling.schemas.calendar_schema import BusinessHours
from salon_scheduling.schemas.catalog_schema import Lane
from salon_scheduling.schemas.technician_schema import AnyTechnician, TechnicianChoice
from salon_scheduling.scheduling.intersector import common_slots

if TYPE_CHECKING:
    from salon_scheduling.tools.schedule_store import ScheduleStore

logger = get_request_logger(__name__)


@dataclass
class Assignment:
    """One technician per lane plus the start times they share."""

    assigned_techs: list[TechnicianChoice] = field(default_factory=list)
    common_slots: list[datetime] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.assigned_techs


def _ordered_candidates(
    candidates: Sequence[TechnicianChoice], used: frozenset[int]
) -> Iterator[TechnicianChoice]:
    """Unused real technicians first, then the placeholder entries."""
    for tech in candidates:
        if not isinstance(tech, AnyTechnician) and tech.id not in used:
            yield tech
    for tech in candidates:
        if isinstance(tech, AnyTechnician):
            yield tech


def assign(candidates_per_lane: Sequence[Sequence[TechnicianChoice]]) -> list[Optional[TechnicianChoice]]:
    """Pick a technician per lane in order, without checking calendars.

    A lane with no usable candidate gets ``None``.
    """
    used: set[int] = set()
    assigned: list[Optional[TechnicianChoice]] = []
    for candidates in candidates_per_lane:
        choice = next(_ordered_candidates(candidates, frozenset(used)), None)
        if choice is not None and not isinstance(choice, AnyTechnician):
            used.add(choice.id)
        assigned.append(choice)
    return assigned


def _combinations(
    candidates_per_lane: Sequence[Sequence[TechnicianChoice]],
    chosen: tuple[TechnicianChoice, ...] = (),
    used: frozenset[int] = frozenset(),
) -> Iterator[tuple[TechnicianChoice, ...]]:
    """Yield every complete assignment with no real technician repeated."""
    lane = len(chosen)
    if lane == len(candidates_per_lane):
        yield chosen
        return
    for tech in _ordered_candidates(candidates_per_lane[lane], used):
        now_used = used if isinstance(tech, AnyTechnician) else used | {tech.id}
        yield from _combinations(candidates_per_lane, chosen + (tech,), now_used)


def search_assignments(
    candidates_per_lane: Sequence[Sequence[TechnicianChoice]],
    lanes: Sequence[Lane],
    target_date: date,
    schedules_by_tech_id: dict[int, list[Booking]],
    buffer_hours: float,
    business_hours: BusinessHours,
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> Assignment:
    """Exhaustive search over already-fetched schedules."""
    best_real: Optional[Assignment] = None
    best_any: Optional[Assignment] = None

    for combo in _combinations(candidates_per_lane):
        slots = common_slots(
            combo, lanes, target_date, schedules_by_tech_id, buffer_hours, business_hours,
            now=now, tz=tz,
        )
        if not slots:
            continue
        logger.debug("Combination %s shares %d slot(s)", [t.name for t in combo], len(slots))

        if best_any is None or len(slots) > len(best_any.common_slots):
            best_any = Assignment(list(combo), slots)
        all_real = not any(isinstance(t, AnyTechnician) for t in combo)
        if all_real and (best_real is None or len(slots) > len(best_real.common_slots)):
            best_real = Assignment(list(combo), slots)

    if best_real is not None:
        return best_real
    if best_any is not None:
        return best_any
    return Assignment()


async def assign_with_availability(
    candidates_per_lane: Sequence[Sequence[TechnicianChoice]],
    lanes: Sequence[Lane],
    target_date: date,
    store: ScheduleStore,
    *,
    buffer_hours: Optional[float] = None,
    business_hours: Optional[BusinessHours] = None,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> Assignment:
    """
    Choose technicians for all lanes maximising shared free time.

    Schedules for every candidate are fetched in one batched call before
    the search starts. Returns an empty :class:`Assignment` when no
    combination has a common slot.
    """
    if not lanes or len(candidates_per_lane) != len(lanes):
        return Assignment()

    tech_ids = list(dict.fromkeys(t.id for candidates in candidates_per_lane for t in candidates))
    schedules = await store.find_bookings_for_technicians_on_date(tech_ids, target_date)
    if business_hours is None:
        business_hours = await store.get_business_hours_for_date(target_date)
    if buffer_hours is None:
        buffer_hours = await store.get_buffer_time_hours()

    result = search_assignments(
        candidates_per_lane, lanes, target_date, schedules, buffer_hours, business_hours,
        now=now, tz=tz,
    )
    if result.is_empty():
        logger.info("No technician combination fits %d lane(s) on %s", len(lanes), target_date)
    else:
        logger.info(
            "Assigned %s on %s with %d common slot(s)",
            [t.name for t in result.assigned_techs], target_date, len(result.common_slots),
        )
    return result
