"""
Wall-clock time values used by the scheduler.

All times are local "HH:MM" strings on the wire and in the database; these
types are the only place they get parsed. Dates are "YYYY-MM-DD".
"""

import re
from dataclasses import dataclass
from datetime import date, datetime

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


@dataclass(frozen=True, order=True)
class TimeOfDay:
    hour:   int
    minute: int = 0

    def __post_init__(self):
        if self.hour == 24 and self.minute == 0:
            return  # end-of-day bound
        if not 0 <= self.hour <= 23 or not 0 <= self.minute <= 59:
            raise ValueError(f"Invalid time of day: {self.hour:02d}:{self.minute:02d}")

    @classmethod
    def parse(cls, value: "str | TimeOfDay") -> "TimeOfDay":
        if isinstance(value, TimeOfDay):
            return value
        match = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
        if not match:
            raise ValueError(f"Time must be in HH:MM format, got {value!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def from_hour(cls, hour: int) -> "TimeOfDay":
        return cls(hour, 0)

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class TimeRange:
    """Half-open range [start, end) within a single day."""
    start: TimeOfDay
    end:   TimeOfDay

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"End time must be after start time ({self.start}-{self.end})")

    @classmethod
    def parse(cls, start: "str | TimeOfDay", end: "str | TimeOfDay") -> "TimeRange":
        return cls(TimeOfDay.parse(start), TimeOfDay.parse(end))

    @classmethod
    def hour_slot(cls, hour: int) -> "TimeRange":
        return cls(TimeOfDay.from_hour(hour), TimeOfDay.from_hour(hour + 1))

    def overlaps(self, other: "TimeRange") -> bool:
        return self.start < other.end and other.start < self.end

    def covers(self, other: "TimeRange") -> bool:
        return self.start <= other.start and other.end <= self.end

    def contains_hour(self, hour: int) -> bool:
        """
        Slot-view containment: whole hour `hour` is inside when
        start.hour <= hour < end.hour. Minutes are ignored, so 14:00-16:30
        contains 14 and 15 but not 16.
        """
        return self.start.hour <= hour < self.end.hour

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def parse_date(value: "str | date") -> date:
    """Parse a YYYY-MM-DD string (datetimes are truncated to their date)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValueError(f"Date must be in YYYY-MM-DD format, got {value!r}")


def format_time(value: "str | TimeOfDay") -> str:
    """Canonical HH:MM form of a time value."""
    return str(TimeOfDay.parse(value))
