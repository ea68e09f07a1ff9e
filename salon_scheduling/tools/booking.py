"""
Booking creation with write-time conflict checks.

Slot lists shown to a customer can go stale while they decide, so every
write re-validates against the technician's current calendar before the
booking is stored.
"""

import logging
from datetime import date, time
from typing import Optional, Sequence, TypedDict

from salon_scheduling.schemas.booking_schema import AppointmentForm, Booking
from salon_scheduling.schemas.catalog_schema import Service
from salon_scheduling.schemas.technician_schema import TechnicianChoice
from salon_scheduling.scheduling.clock import business_zone
from salon_scheduling.scheduling.errors import BookingConflictError
from salon_scheduling.tools.schedule_store import InMemoryScheduleStore

logger = logging.getLogger(__name__)


class BookingResult(TypedDict, total=False):
    """Result from create_booking."""

    success: bool
    message: str
    booking_ref: str
    details: Booking


def _booking_ref(booking_id: int) -> str:
    return f"BK-{booking_id:06d}"


async def create_booking(
    store: InMemoryScheduleStore,
    customer_name: str,
    technicians: Sequence[TechnicianChoice],
    services: Sequence[Service],
    day: date,
    start_time: time,
) -> BookingResult:
    """Create a booking if the technicians are still free at that time."""
    missing = [
        field_name
        for field_name, value in [
            ("customer_name", customer_name.strip()),
            ("technicians", technicians),
            ("services", services),
        ]
        if not value
    ]
    if missing:
        return {
            "success": False,
            "message": f"Cannot create booking - missing required fields: {', '.join(missing)}.",
        }

    booking = Booking(
        date=day,
        start_service_time=start_time,
        durations=[s.time for s in services],
        technician_ids=[t.id for t in technicians],
        customer_name=customer_name.strip(),
    )
    try:
        stored = await store.insert_booking(booking, tz=business_zone())
    except BookingConflictError as exc:
        logger.info("Booking rejected for %s: %s", customer_name, exc)
        return {"success": False, "message": f"That time is no longer available. {exc}"}

    ref = _booking_ref(stored.id)
    logger.info("Booking created: %s for %s on %s at %s", ref, customer_name, day, start_time)
    return {
        "success": True,
        "booking_ref": ref,
        "message": f"Booking confirmed. Reference number: {ref}. {day} at {start_time:%H:%M}.",
        "details": stored,
    }


async def create_group_booking(
    store: InMemoryScheduleStore,
    customer_name: str,
    forms: Sequence[AppointmentForm],
    start_time: Optional[time] = None,
) -> list[BookingResult]:
    """Book every lane form together; if any lane is rejected none are stored."""
    if not customer_name.strip() or not forms:
        return [{"success": False, "message": "Cannot create group booking - no customer or lanes."}]

    bookings: list[Booking] = []
    for form in forms:
        tech = store.get_technician(form.technician_id) if form.technician_id is not None else None
        when = start_time or (time.fromisoformat(form.time) if form.time else None)
        if tech is None or when is None or not form.services:
            return [{"success": False, "message": "Lane has no technician, time or services."}]
        bookings.append(Booking(
            date=form.date,
            start_service_time=when,
            durations=[s.time for s in form.services],
            technician_ids=[tech.id],
            customer_name=customer_name.strip(),
        ))

    try:
        stored = await store.insert_bookings(bookings, tz=business_zone())
    except BookingConflictError as exc:
        logger.info("Group booking rejected for %s: %s", customer_name, exc)
        return [{"success": False, "message": f"That time is no longer available. {exc}"}]

    results: list[BookingResult] = []
    for booking in stored:
        ref = _booking_ref(booking.id)
        results.append({
            "success": True,
            "booking_ref": ref,
            "message": f"Booking confirmed. Reference number: {ref}. "
                       f"{booking.date} at {booking.start_service_time:%H:%M}.",
            "details": booking,
        })
    logger.info("Group booking created for %s: %s", customer_name, [r["booking_ref"] for r in results])
    return results
