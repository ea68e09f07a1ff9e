"""Shared test fixtures and helpers."""

from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from salon_scheduling.schemas.booking_schema import Booking
from salon_scheduling.schemas.calendar_schema import BusinessHours
from salon_scheduling.schemas.catalog_schema import Service
from salon_scheduling.schemas.technician_schema import AnyTechnician, Technician
from salon_scheduling.tools.schedule_store import InMemoryScheduleStore
from salon_scheduling.tools.services import seed_store

TZ = ZoneInfo("America/Los_Angeles")

SUNDAY = date(2026, 3, 1)
MONDAY = date(2026, 3, 2)
TUESDAY = date(2026, 3, 3)

# The evening before MONDAY, so same-day buffers never apply to it.
FROZEN_NOW = datetime(2026, 3, 1, 20, 0, tzinfo=TZ)


@pytest.fixture
def tz():
    return TZ


@pytest.fixture
def now():
    return FROZEN_NOW


@pytest.fixture
def hours():
    return BusinessHours(start=9, end=17)


@pytest.fixture
def store():
    return seed_store(InMemoryScheduleStore())


def at(day: date, hour: int, minute: int = 0) -> datetime:
    """Aware datetime in the test timezone."""
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=TZ)


def make_service(
    service_id="S1",
    minutes: int = 30,
    category_id=1,
    price: int = 0,
    name: str = "",
) -> Service:
    """Helper to create a Service."""
    return Service(
        id=service_id,
        name=name or f"Service {service_id}",
        category_id=category_id,
        time=minutes,
        price=price,
    )


def make_tech(
    tech_id: int = 1,
    name: Optional[str] = None,
    unavailability: Optional[str] = None,
    vacation_ranges: Optional[list[dict]] = None,
) -> Technician:
    """Helper to create a named Technician."""
    return Technician(
        id=tech_id,
        name=name or f"Tech {tech_id}",
        unavailability=unavailability,
        vacation_ranges=vacation_ranges or [],
    )


def make_any(tech_id: int = 999) -> AnyTechnician:
    """Helper to create the No Preference placeholder."""
    return AnyTechnician(id=tech_id)


def make_booking(
    day: date,
    hour: int,
    minute: int = 0,
    durations: Optional[list[int]] = None,
    technician_ids: Optional[list[int]] = None,
) -> Booking:
    """Helper to create a Booking starting at ``hour:minute`` on ``day``."""
    return Booking(
        date=day,
        start_service_time=time(hour, minute),
        durations=durations if durations is not None else [60],
        technician_ids=technician_ids or [1],
    )
