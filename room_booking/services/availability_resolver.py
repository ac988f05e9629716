"""
Slot availability for one room on one date.

Pure functions only: callers fetch the room's reservations, unavailability
blocks and the weekday's opening rule, and this module turns them into

  - the conflict set: every period that is not bookable (reservations,
    closures, hours outside the weekly schedule), and
  - the slot grid: one entry per whole hour between the first and last
    slot hour, marked available or not.

Both the JSON API and the server-rendered booking page use these functions,
so the two surfaces can never disagree about what is free.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from room_booking.models.room_reservation import ReservationStatus
from room_booking.utils.timeslots import TimeOfDay, TimeRange

START_OF_DAY = TimeOfDay(0, 0)
END_OF_DAY   = TimeOfDay(24, 0)

RESERVED    = "reserved"
UNAVAILABLE = "unavailable"
CLOSED      = "closed"

# wire names for the `type` field of a conflict period
CONFLICT_TYPES = {RESERVED: "reservation", UNAVAILABLE: "unavailable", CLOSED: "closed"}


@dataclass(frozen=True)
class ConflictPeriod:
    time_range:     TimeRange
    kind:           str                   # reserved | unavailable | closed
    label:          str
    purpose:        Optional[str] = None
    reservation_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id":           self.reservation_id,
            "startTime":    str(self.time_range.start),
            "endTime":      str(self.time_range.end),
            "customerName": self.label,
            "purpose":      self.purpose,
            "type":         CONFLICT_TYPES[self.kind],
        }


@dataclass(frozen=True)
class Slot:
    hour:     int
    conflict: Optional[ConflictPeriod] = None

    @property
    def available(self) -> bool:
        return self.conflict is None

    @property
    def time(self) -> str:
        return str(TimeOfDay.from_hour(self.hour))

    def to_dict(self) -> dict:
        c = self.conflict
        return {
            "hour":        self.hour,
            "time":        self.time,
            "endTime":     str(TimeOfDay.from_hour(self.hour + 1)),
            "available":   self.available,
            "reason":      c.kind if c else None,
            "reservation": {
                "id":           c.reservation_id,
                "customerName": c.label,
                "purpose":      c.purpose,
            } if c and c.kind == RESERVED else None,
            "note":        c.purpose if c and c.kind != RESERVED else None,
        }


def closed_periods(rule) -> list[ConflictPeriod]:
    """Hours outside the weekday's opening window (the whole day if there is no rule)."""
    if rule is None:
        return [ConflictPeriod(TimeRange(START_OF_DAY, END_OF_DAY), CLOSED,
                               "Closed", "Room is not open on this day")]

    window = TimeRange.parse(rule.startTime, rule.endTime)
    periods = []
    if window.start > START_OF_DAY:
        periods.append(ConflictPeriod(TimeRange(START_OF_DAY, window.start), CLOSED,
                                      "Closed", "Outside opening hours"))
    if window.end < END_OF_DAY:
        periods.append(ConflictPeriod(TimeRange(window.end, END_OF_DAY), CLOSED,
                                      "Closed", "Outside opening hours"))
    return periods


def collect_conflicts(
    reservations: Iterable,
    blocks: Iterable,
    rule=None,
    enforce_schedule: bool = True,
) -> list[ConflictPeriod]:
    """
    Build the conflict set. Reservations come first, then blocks, then closed
    hours, so a slot always reports the most specific reason it is taken.
    Cancelled reservations are skipped.
    """
    active = [r for r in reservations if r.status != ReservationStatus.CANCELLED]
    conflicts = [
        ConflictPeriod(
            TimeRange.parse(r.startTime, r.endTime), RESERVED,
            r.customerName, r.purpose, r.id,
        )
        for r in sorted(active, key=lambda r: (TimeOfDay.parse(r.startTime), r.id or 0))
    ]
    conflicts += [
        ConflictPeriod(TimeRange.parse(b.startTime, b.endTime), UNAVAILABLE,
                       "Unavailable", b.reason)
        for b in sorted(blocks, key=lambda b: TimeOfDay.parse(b.startTime))
    ]
    if enforce_schedule:
        conflicts += closed_periods(rule)
    return conflicts


def resolve_slots(conflicts: list[ConflictPeriod], first_hour: int = 8, last_hour: int = 22) -> list[Slot]:
    """Mark each whole hour in [first_hour, last_hour] with the first conflict containing it."""
    slots = []
    for hour in range(first_hour, last_hour + 1):
        conflict = next((c for c in conflicts if c.time_range.contains_hour(hour)), None)
        slots.append(Slot(hour, conflict))
    return slots


def resolve_availability(
    reservations: Iterable,
    blocks: Iterable,
    rule=None,
    enforce_schedule: bool = True,
    first_hour: int = 8,
    last_hour: int = 22,
) -> list[Slot]:
    conflicts = collect_conflicts(reservations, blocks, rule, enforce_schedule)
    return resolve_slots(conflicts, first_hour, last_hour)
