"""Tests for catalog, calendar, technician and booking models."""

from datetime import date, time

import pytest
from pydantic import ValidationError

from tests.conftest import MONDAY, TUESDAY, TZ, at, make_service

from salon_scheduling.schemas.booking_schema import Booking, GroupBookingPlan
from salon_scheduling.schemas.calendar_schema import BusinessHours, DateRange
from salon_scheduling.schemas.catalog_schema import Lane
from salon_scheduling.schemas.technician_schema import (
    NO_PREFERENCE_NAME,
    AnyTechnician,
    Technician,
    technician_from_record,
)


class TestLane:
    def test_duplicate_service_rejected(self):
        with pytest.raises(ValidationError, match="more than once"):
            Lane(services=[make_service("A"), make_service("A")])

    def test_totals_and_categories(self):
        lane = Lane(services=[
            make_service("A", 30, category_id=2),
            make_service("B", 15, category_id=1),
            make_service("C", 10, category_id=2),
        ])
        assert lane.total_minutes == 55
        assert lane.category_ids == [2, 1]
        assert lane.service_ids == frozenset({"A", "B", "C"})
        assert [s.id for s in lane.grouped_by_category()[2]] == ["A", "C"]

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            make_service("A", -5)


class TestBusinessHours:
    def test_window(self):
        opens, closes = BusinessHours(start=9, end=17).window(MONDAY, TZ)
        assert (opens, closes) == (at(MONDAY, 9), at(MONDAY, 17))

    def test_close_at_midnight(self):
        _, closes = BusinessHours(start=9, end=24).window(MONDAY, TZ)
        assert closes == at(TUESDAY, 0)

    def test_start_must_precede_end(self):
        with pytest.raises(ValidationError, match="must be before"):
            BusinessHours(start=17, end=9)


class TestDateRange:
    def test_inclusive(self):
        vacation = DateRange(start=date(2026, 3, 1), end=MONDAY)
        assert vacation.contains(MONDAY)
        assert not vacation.contains(TUESDAY)

    def test_reversed_rejected(self):
        with pytest.raises(ValidationError, match="before it starts"):
            DateRange(start=TUESDAY, end=MONDAY)


class TestTechnicianFromRecord:
    def test_named(self):
        tech = technician_from_record({"id": 1, "name": "Lisa", "unavailability": "2"})
        assert isinstance(tech, Technician)
        assert tech.unavailable_weekdays == frozenset({2})

    def test_no_preference_by_name(self):
        tech = technician_from_record({"id": 999, "name": " No Preference "})
        assert isinstance(tech, AnyTechnician)
        assert tech.name == NO_PREFERENCE_NAME

    def test_kind_field_ignored(self):
        tech = technician_from_record({"id": 5, "name": "Anna", "kind": "any"})
        assert isinstance(tech, Technician)

    def test_works_on(self):
        tech = technician_from_record({
            "id": 2, "name": "Tracy", "unavailability": "0",
            "vacation_ranges": [{"start": "2026-03-03", "end": "2026-03-04"}],
        })
        assert tech.works_on(MONDAY)
        assert not tech.works_on(TUESDAY)
        assert not tech.works_on(date(2026, 3, 1))


class TestBooking:
    def test_from_record(self):
        booking = Booking.from_record({
            "id": 7,
            "date": "2026-03-02",
            "start_service_time": "10:00",
            "Services": [{"time": 30}, {"time": 45}],
            "Technicians": [{"id": 1}],
        })
        assert booking.total_minutes == 75
        assert booking.technician_ids == [1]
        assert booking.ends_at(TZ) == at(MONDAY, 11, 15)

    def test_from_record_rejects_non_list_services(self):
        with pytest.raises(ValueError, match="must be a list"):
            Booking.from_record({
                "date": "2026-03-02", "start_service_time": "10:00", "Services": {"time": 30},
            })

    def test_starts_at(self):
        booking = Booking(date=MONDAY, start_service_time=time(9, 30), durations=[30])
        assert booking.starts_at(TZ) == at(MONDAY, 9, 30)


class TestGroupBookingPlan:
    def test_forms_need_a_technician_per_lane(self):
        plan = GroupBookingPlan(
            date=MONDAY,
            lanes=[Lane(services=[make_service("A")]), Lane(services=[make_service("B")])],
            assigned_technicians=[Technician(id=1, name="Lisa")],
            common_slots=[at(MONDAY, 9)],
        )
        assert plan.to_forms() == []

    def test_infeasible_without_slots(self):
        plan = GroupBookingPlan(date=MONDAY, lanes=[Lane(services=[make_service("A")])])
        assert not plan.is_feasible()
        assert plan.earliest_slot is None
