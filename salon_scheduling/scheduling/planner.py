"""
Booking planner: the entry points used by the booking UI and routes.

Single bookings ask for the open start times of one technician. Group
bookings go through the whole pipeline:

    requested services -> lanes (distributor)
                       -> qualified technicians per lane (store)
                       -> technician combination + common slots (assigner)

Everything is read fresh from the store on each call; the planner keeps
no state between requests.
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime, tzinfo
from typing import TYPE_CHECKING, Optional, Sequence

from salon_scheduling.logging_context import get_request_logger, request_scope
from salon_scheduling.schemas.booking_schema import GroupBookingPlan
from salon_scheduling.schemas.catalog_schema import Lane, RequestedService, Service
from salon_scheduling.schemas.technician_schema import TechnicianChoice
from salon_scheduling.scheduling.assigner import assign_with_availability
from salon_scheduling.scheduling.clock import business_zone
from salon_scheduling.scheduling.distributor import distribute
from salon_scheduling.scheduling.errors import SchedulingInputError
from salon_scheduling.scheduling.services import group_services_by_category
from salon_scheduling.scheduling.slots import available_slots

if TYPE_CHECKING:
    from salon_scheduling.tools.schedule_store import ScheduleStore

logger = get_request_logger(__name__)


def expand_quantities(requested: Sequence[RequestedService]) -> list[Service]:
    """Repeat each service by its quantity into a flat pool."""
    if not isinstance(requested, (list, tuple)):
        raise SchedulingInputError("Requested services must be a list.")
    return [item.service for item in requested for _ in range(item.quantity)]


class BookingPlanner:
    """Computes availability against a :class:`ScheduleStore`."""

    def __init__(self, store: ScheduleStore, tz: Optional[tzinfo] = None) -> None:
        self.store = store
        self.tz = tz or business_zone()

    async def compute_slots_for_single_technician(
        self,
        technician: TechnicianChoice,
        requested_services: list[Service],
        target_date: date,
        *,
        now: Optional[datetime] = None,
    ) -> list[datetime]:
        """Open start times for one technician doing all requested services."""
        grouped = group_services_by_category(requested_services)
        bookings, hours, buffer_hours = await asyncio.gather(
            self.store.find_bookings_for_technician(technician.id),
            self.store.get_business_hours_for_date(target_date),
            self.store.get_buffer_time_hours(),
        )
        return available_slots(
            bookings, grouped, target_date, hours, technician, buffer_hours,
            now=now, tz=self.tz,
        )

    async def compute_group_booking(
        self,
        requested: Sequence[RequestedService],
        group_size: int,
        target_date: date,
        *,
        now: Optional[datetime] = None,
    ) -> GroupBookingPlan:
        """
        Plan a group booking for ``target_date``.

        Returns a plan whose ``common_slots`` is empty when no combination
        of technicians can start all lanes together that day.
        """
        pool = expand_quantities(requested)
        if not pool:
            return GroupBookingPlan(date=target_date)

        with request_scope() as request_id:
            lanes: list[Lane] = [
                lane for lane in distribute(pool, group_size) if not lane.is_empty()
            ]
            logger.info(
                "%s: %d service(s) in %d lane(s) for %s",
                request_id, len(pool), len(lanes), target_date,
            )

            candidates_per_lane = await asyncio.gather(*(
                self.store.find_technicians_for_categories(lane.category_ids) for lane in lanes
            ))
            hours, buffer_hours = await asyncio.gather(
                self.store.get_business_hours_for_date(target_date),
                self.store.get_buffer_time_hours(),
            )
            assignment = await assign_with_availability(
                candidates_per_lane, lanes, target_date, self.store,
                buffer_hours=buffer_hours, business_hours=hours, now=now, tz=self.tz,
            )
        return GroupBookingPlan(
            date=target_date,
            lanes=lanes,
            assigned_technicians=assignment.assigned_techs,
            common_slots=assignment.common_slots,
        )
