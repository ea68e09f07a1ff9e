"""Business hours and date-range models."""

import datetime as dt

from pydantic import BaseModel, Field, model_validator


class BusinessHours(BaseModel):
    """Opening window for one calendar date, as whole hours of the day."""
    start: int = Field(ge=0, le=23)
    end: int = Field(ge=1, le=24)

    @model_validator(mode="after")
    def _start_before_end(self) -> "BusinessHours":
        if self.start >= self.end:
            raise ValueError(f"Business hours start ({self.start}) must be before end ({self.end})")
        return self

    def window(self, day: dt.date, tz: dt.tzinfo) -> tuple[dt.datetime, dt.datetime]:
        """Return the ``[open, close)`` datetimes for ``day`` in ``tz``."""
        opens = dt.datetime.combine(day, dt.time(self.start), tzinfo=tz)
        # 24 means midnight of the following day
        closes = dt.datetime.combine(day, dt.time(0), tzinfo=tz) + dt.timedelta(hours=self.end)
        return opens, closes


class DateRange(BaseModel):
    """Inclusive calendar date range, e.g. a technician's vacation."""
    start: dt.date
    end: dt.date

    @model_validator(mode="after")
    def _ordered(self) -> "DateRange":
        if self.end < self.start:
            raise ValueError(f"Date range ends ({self.end}) before it starts ({self.start})")
        return self

    def contains(self, day: dt.date) -> bool:
        return self.start <= day <= self.end
