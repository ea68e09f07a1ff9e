"""Technician data models.

A booking lane is staffed either by a named technician or by the
"No Preference" placeholder, which means any technician is acceptable.
The two are separate types so the assigner can tell them apart without
comparing names; the name check happens once, when a store record is
converted with :func:`technician_from_record`.
"""

import datetime as dt
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field

from salon_scheduling.schemas.calendar_schema import DateRange
from salon_scheduling.utils import parse_unavailable_weekdays, sunday_weekday

NO_PREFERENCE_NAME = "No Preference"


class _TechnicianBase(BaseModel):
    id: int
    name: str
    unavailability: Optional[str] = None
    vacation_ranges: list[DateRange] = Field(default_factory=list)

    @property
    def unavailable_weekdays(self) -> frozenset[int]:
        """Weekdays (0=Sunday) on which this technician never works."""
        return parse_unavailable_weekdays(self.unavailability)

    def is_on_vacation(self, day: dt.date) -> bool:
        return any(r.contains(day) for r in self.vacation_ranges)

    def works_on(self, day: dt.date) -> bool:
        return not self.is_on_vacation(day) and sunday_weekday(day) not in self.unavailable_weekdays


class Technician(_TechnicianBase):
    """A real technician with their own calendar."""
    kind: Literal["named"] = "named"


class AnyTechnician(_TechnicianBase):
    """The "No Preference" placeholder; may staff several lanes at once."""
    kind: Literal["any"] = "any"
    name: str = NO_PREFERENCE_NAME


TechnicianChoice = Union[Technician, AnyTechnician]


def technician_from_record(record: Mapping[str, Any]) -> TechnicianChoice:
    """Build the right technician variant from a store record."""
    fields = {k: v for k, v in record.items() if k != "kind"}
    if str(fields.get("name", "")).strip() == NO_PREFERENCE_NAME:
        return AnyTechnician.model_validate(dict(fields, name=NO_PREFERENCE_NAME))
    return Technician.model_validate(fields)
