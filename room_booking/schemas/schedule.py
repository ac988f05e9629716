import datetime
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from room_booking.models.room_availability import Weekday
from room_booking.utils.timeslots import TimeRange, format_time


class ScheduleEntry(BaseModel):
    """A weekday's opening window. Times of a disabled day are ignored."""
    dayOfWeek: Weekday
    startTime: Optional[str] = None
    endTime:   Optional[str] = None
    enabled:   bool = True

    @model_validator(mode="after")
    def check_window(self) -> "ScheduleEntry":
        if not self.enabled:
            return self
        if not self.startTime or not self.endTime:
            raise ValueError("Start and end time are required for an open day")
        self.startTime = format_time(self.startTime)
        self.endTime = format_time(self.endTime)
        TimeRange.parse(self.startTime, self.endTime)
        return self


class ScheduleUpdateRequest(BaseModel):
    """The complete weekly schedule; days not listed (or disabled) become closed."""
    schedule: list[ScheduleEntry]

    @model_validator(mode="after")
    def check_unique_days(self) -> "ScheduleUpdateRequest":
        days = [e.dayOfWeek for e in self.schedule if e.enabled]
        if len(days) != len(set(days)):
            raise ValueError("Each weekday may appear only once in a schedule")
        return self

    @property
    def enabled_entries(self) -> list[ScheduleEntry]:
        return [e for e in self.schedule if e.enabled]


class UnavailabilityCreateRequest(BaseModel):
    date:      datetime.date
    startTime: str
    endTime:   str
    reason:    Optional[str] = None

    @field_validator("startTime", "endTime")
    @classmethod
    def check_time(cls, v):
        return format_time(v)

    @field_validator("reason")
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        return v.strip() or None

    @model_validator(mode="after")
    def check_window(self) -> "UnavailabilityCreateRequest":
        TimeRange.parse(self.startTime, self.endTime)
        return self
