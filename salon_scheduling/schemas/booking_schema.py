"""Booking and group-plan data models."""

import datetime as dt
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from salon_scheduling.schemas.catalog_schema import Lane, Service
from salon_scheduling.schemas.technician_schema import TechnicianChoice
from salon_scheduling.utils import format_hhmm


class Booking(BaseModel):
    """An existing appointment, read for conflict checking."""
    id: Optional[int] = None
    date: dt.date
    start_service_time: dt.time
    durations: list[int] = Field(default_factory=list)
    technician_ids: list[int] = Field(default_factory=list)
    customer_name: str = ""

    @property
    def total_minutes(self) -> int:
        return sum(self.durations)

    def starts_at(self, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
        return dt.datetime.combine(self.date, self.start_service_time, tzinfo=tz)

    def ends_at(self, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
        return self.starts_at(tz) + dt.timedelta(minutes=self.total_minutes)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Booking":
        """Build from a store record that nests its services under ``Services``."""
        services = record.get("Services") or []
        if not isinstance(services, list):
            raise ValueError(f"Booking services must be a list, got {type(services).__name__}")
        technicians = record.get("Technicians") or []
        return cls(
            id=record.get("id"),
            date=record["date"],
            start_service_time=record["start_service_time"],
            durations=[int(s.get("time") or 0) for s in services],
            technician_ids=[t["id"] for t in technicians],
            customer_name=record.get("customer_name", ""),
        )


class AppointmentForm(BaseModel):
    """Draft appointment for one lane, shown to the customer for confirmation."""
    date: dt.date
    time: str = ""
    technician_id: Optional[int] = None
    technician_name: Optional[str] = None
    services: list[Service] = Field(default_factory=list)


class GroupBookingPlan(BaseModel):
    """Result of planning a group booking for one date."""
    date: dt.date
    lanes: list[Lane] = Field(default_factory=list)
    assigned_technicians: list[Optional[TechnicianChoice]] = Field(default_factory=list)
    common_slots: list[dt.datetime] = Field(default_factory=list)

    @property
    def earliest_slot(self) -> Optional[dt.datetime]:
        return self.common_slots[0] if self.common_slots else None

    def is_feasible(self) -> bool:
        return bool(self.lanes) and bool(self.common_slots)

    def to_forms(self) -> list[AppointmentForm]:
        """One form per lane, prefilled with the earliest common slot.

        Returns no forms when some lane has no technician.
        """
        if len(self.assigned_technicians) < len(self.lanes):
            return []
        first = self.earliest_slot
        forms = []
        for lane, tech in zip(self.lanes, self.assigned_technicians):
            forms.append(
                AppointmentForm(
                    date=self.date,
                    time=format_hhmm(first) if first else "",
                    technician_id=tech.id if tech else None,
                    technician_name=tech.name if tech else None,
                    services=list(lane.services),
                )
            )
        return forms
