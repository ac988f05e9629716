import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator, model_validator

from room_booking.models.room_reservation import ReservationStatus
from room_booking.utils.timeslots import TimeRange, format_time


def _strip_or_none(v):
    if v is None:
        return None
    return v.strip() or None


class ReservationRequest(BaseModel):
    """Fields shared by the public booking form and the admin create call."""
    roomId:        int
    date:          datetime.date
    startTime:     str
    endTime:       str
    customerName:  str
    customerEmail: Optional[EmailStr] = None
    customerPhone: Optional[str] = None
    purpose:       Optional[str] = None
    notes:         Optional[str] = None

    @field_validator("customerName")
    @classmethod
    def check_customer_name(cls, v):
        if not v.strip():
            raise ValueError("Customer name is required")
        return v.strip()

    @field_validator("customerEmail", mode="before")
    @classmethod
    def blank_email(cls, v):
        return _strip_or_none(v) if isinstance(v, str) else v

    @field_validator("customerPhone", "purpose", "notes")
    @classmethod
    def blank_to_none(cls, v):
        return _strip_or_none(v)

    @field_validator("startTime", "endTime")
    @classmethod
    def check_time(cls, v):
        return format_time(v)

    @model_validator(mode="after")
    def check_window(self):
        TimeRange.parse(self.startTime, self.endTime)
        return self

    @property
    def time_range(self) -> TimeRange:
        return TimeRange.parse(self.startTime, self.endTime)


class PublicReservationRequest(ReservationRequest):
    pass


class ReservationCreateRequest(ReservationRequest):
    status: ReservationStatus = ReservationStatus.CONFIRMED

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        if v == ReservationStatus.CANCELLED:
            raise ValueError("A reservation cannot be created as cancelled")
        return v


class ReservationUpdateRequest(BaseModel):
    """Partial update; only the fields actually sent are applied."""
    roomId:        Optional[int] = None
    date:          Optional[datetime.date] = None
    startTime:     Optional[str] = None
    endTime:       Optional[str] = None
    customerName:  Optional[str] = None
    customerEmail: Optional[EmailStr] = None
    customerPhone: Optional[str] = None
    purpose:       Optional[str] = None
    notes:         Optional[str] = None

    @field_validator("customerName")
    @classmethod
    def check_customer_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Customer name is required")
        return v.strip() if v else v

    @field_validator("customerEmail", mode="before")
    @classmethod
    def blank_email(cls, v):
        return _strip_or_none(v) if isinstance(v, str) else v

    @field_validator("customerPhone", "purpose", "notes")
    @classmethod
    def blank_to_none(cls, v):
        return _strip_or_none(v)

    @field_validator("startTime", "endTime")
    @classmethod
    def check_time(cls, v):
        return format_time(v) if v is not None else v

    @property
    def moves_slot(self) -> bool:
        return bool({"roomId", "date", "startTime", "endTime"} & self.model_fields_set)


class ReservationStatusRequest(BaseModel):
    status: ReservationStatus
