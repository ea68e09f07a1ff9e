"""
Schedule store: the data the scheduling core reads.

``ScheduleStore`` is the async interface the core consumes. In
production it would sit in front of the salon database;
``InMemoryScheduleStore`` backs the CLI and the tests.

Writes go through :meth:`InMemoryScheduleStore.insert_bookings`, which
re-checks overlap under a lock. Slot computation is advisory and may
race with another booking for the same time, so the write path has the
final word.
"""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from datetime import date
from numbers import Real
from typing import Any, Optional, Protocol, Sequence

from salon_scheduling.config import settings
from salon_scheduling.schemas.booking_schema import Booking
from salon_scheduling.schemas.calendar_schema import BusinessHours, DateRange
from salon_scheduling.schemas.catalog_schema import CategoryId
from salon_scheduling.schemas.technician_schema import AnyTechnician, TechnicianChoice
from salon_scheduling.scheduling.errors import BookingConflictError
from salon_scheduling.scheduling.overlap import overlaps

logger = logging.getLogger(__name__)

SUNDAY = 6  # date.weekday()


def get_business_hours_for_date(day: date) -> BusinessHours:
    """Opening hours for ``day``: shortened on Sundays."""
    cfg = settings.business
    if day.weekday() == SUNDAY:
        return BusinessHours(start=cfg.sunday_open_hour, end=cfg.sunday_close_hour)
    return BusinessHours(start=cfg.weekday_open_hour, end=cfg.weekday_close_hour)


def resolve_buffer_hours(raw: Any) -> float:
    """Interpret a stored buffer setting, falling back to the configured default."""
    default = settings.scheduling.default_buffer_hours
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, Real):
        value = float(raw)
    else:
        try:
            value = float(str(raw).strip())
        except ValueError:
            logger.warning("Invalid buffer time setting %r; using %s hour(s)", raw, default)
            return default
    if value != value or value < 0:  # NaN or negative
        logger.warning("Invalid buffer time setting %r; using %s hour(s)", raw, default)
        return default
    return value


class ScheduleStore(Protocol):
    """Async read interface used by the scheduling core."""

    async def find_bookings_for_technician(
        self, technician_id: int, date_range: Optional[DateRange] = None
    ) -> list[Booking]: ...

    async def find_bookings_for_technicians_on_date(
        self, technician_ids: Sequence[int], day: date
    ) -> dict[int, list[Booking]]: ...

    async def find_technicians_for_categories(
        self, category_ids: Sequence[CategoryId]
    ) -> list[TechnicianChoice]: ...

    async def get_business_hours_for_date(self, day: date) -> BusinessHours: ...

    async def get_buffer_time_hours(self) -> float: ...


class InMemoryScheduleStore:
    """Dict-backed store with technician qualifications by category."""

    def __init__(self, buffer_time_setting: Any = None) -> None:
        self.buffer_time_setting = buffer_time_setting
        self._technicians: dict[int, TechnicianChoice] = {}
        self._qualifications: dict[int, frozenset[CategoryId]] = {}
        self._bookings: list[Booking] = []
        self._write_lock = asyncio.Lock()
        self._next_id = 1

    # ------------------------------------------------------------------ #
    # Seeding
    # ------------------------------------------------------------------ #

    def add_technician(
        self, technician: TechnicianChoice, category_ids: Iterable[CategoryId]
    ) -> None:
        self._technicians[technician.id] = technician
        self._qualifications[technician.id] = frozenset(category_ids)

    def add_booking(self, booking: Booking) -> Booking:
        """Store a booking without conflict checks (seed data, imports)."""
        if booking.id is None:
            booking = booking.model_copy(update={"id": self._next_id})
        self._next_id = max(self._next_id, booking.id) + 1
        self._bookings.append(booking)
        return booking

    def load_records(self, records: Iterable[Mapping[str, Any]]) -> list[Booking]:
        """Store bookings given in the database record shape (``Services``, ``Technicians``)."""
        return [self.add_booking(Booking.from_record(record)) for record in records]

    def get_technician(self, technician_id: int) -> Optional[TechnicianChoice]:
        return self._technicians.get(technician_id)

    # ------------------------------------------------------------------ #
    # ScheduleStore interface
    # ------------------------------------------------------------------ #

    async def find_bookings_for_technician(
        self, technician_id: int, date_range: Optional[DateRange] = None
    ) -> list[Booking]:
        return [
            b for b in self._bookings
            if technician_id in b.technician_ids
            and (date_range is None or date_range.contains(b.date))
        ]

    async def find_bookings_for_technicians_on_date(
        self, technician_ids: Sequence[int], day: date
    ) -> dict[int, list[Booking]]:
        on_day = DateRange(start=day, end=day)
        return {
            tech_id: await self.find_bookings_for_technician(tech_id, on_day)
            for tech_id in technician_ids
        }

    async def find_technicians_for_categories(
        self, category_ids: Sequence[CategoryId]
    ) -> list[TechnicianChoice]:
        wanted = set(category_ids)
        return [
            tech for tech_id, tech in self._technicians.items()
            if wanted <= self._qualifications.get(tech_id, frozenset())
        ]

    async def get_business_hours_for_date(self, day: date) -> BusinessHours:
        return get_business_hours_for_date(day)

    async def get_buffer_time_hours(self) -> float:
        return resolve_buffer_hours(self.buffer_time_setting)

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def _check_conflicts(self, booking: Booking, pending: Sequence[Booking], tz) -> None:
        start = booking.starts_at(tz)
        end = booking.ends_at(tz)
        for tech_id in booking.technician_ids:
            if isinstance(self._technicians.get(tech_id), AnyTechnician):
                continue
            existing = [
                b for b in [*self._bookings, *pending]
                if tech_id in b.technician_ids and b.date == booking.date
            ]
            if overlaps(existing, start, end):
                raise BookingConflictError(
                    tech_id,
                    f"Technician {tech_id} is already booked on {booking.date} "
                    f"around {booking.start_service_time:%H:%M}",
                )

    async def insert_booking(self, booking: Booking, tz=None) -> Booking:
        """Insert after re-checking every real technician's calendar.

        Raises:
            BookingConflictError: if the booking overlaps an existing one.
        """
        stored = await self.insert_bookings([booking], tz=tz)
        return stored[0]

    async def insert_bookings(self, bookings: Sequence[Booking], tz=None) -> list[Booking]:
        """Insert several bookings together, or none of them.

        Each booking is checked against the stored calendars and against the
        ones before it in ``bookings`` while the write lock is held.

        Raises:
            BookingConflictError: if any booking overlaps; nothing is stored.
        """
        async with self._write_lock:
            for index, booking in enumerate(bookings):
                self._check_conflicts(booking, bookings[:index], tz)
            return [self.add_booking(booking) for booking in bookings]
