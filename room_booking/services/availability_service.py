from datetime import date
from sqlalchemy.orm import Session

from room_booking.config import settings
from room_booking.models.room import Room
from room_booking.models.room_availability import RoomAvailability, Weekday
from room_booking.models.room_reservation import RoomReservation, ACTIVE_STATUSES
from room_booking.models.room_unavailability import RoomUnavailability
from room_booking.services.availability_resolver import collect_conflicts, resolve_slots
from room_booking.utils.exceptions import NotFoundException


def get_rule(db: Session, room_id: int, day: date) -> RoomAvailability | None:
    return db.query(RoomAvailability).filter(
        RoomAvailability.roomId    == room_id,
        RoomAvailability.dayOfWeek == Weekday.from_date(day),
    ).first()


def get_blocks(db: Session, room_id: int, day: date) -> list[RoomUnavailability]:
    return db.query(RoomUnavailability).filter(
        RoomUnavailability.roomId == room_id,
        RoomUnavailability.date   == day,
    ).all()


def get_active_reservations(
    db: Session, room_id: int, day: date, exclude_id: int | None = None,
) -> list[RoomReservation]:
    q = db.query(RoomReservation).filter(
        RoomReservation.roomId == room_id,
        RoomReservation.date   == day,
        RoomReservation.status.in_(ACTIVE_STATUSES),
    )
    if exclude_id:
        q = q.filter(RoomReservation.id != exclude_id)
    return q.all()


class AvailabilityService:

    def _room(self, db: Session, room_id: int, active_only: bool) -> Room:
        q = db.query(Room).filter(Room.id == room_id)
        if active_only:
            q = q.filter(Room.isActive == True)
        room = q.first()
        if not room:
            raise NotFoundException("Room")
        return room

    def _conflicts(self, db: Session, room_id: int, day: date):
        return collect_conflicts(
            get_active_reservations(db, room_id, day),
            get_blocks(db, room_id, day),
            get_rule(db, room_id, day),
            enforce_schedule=settings.ENFORCE_WEEKLY_SCHEDULE,
        )

    def get_conflicts(self, db: Session, room_id: int, day: date, active_only: bool = True) -> list[dict]:
        """Raw conflict set: everything on this date that cannot be booked."""
        self._room(db, room_id, active_only)
        return [c.to_dict() for c in self._conflicts(db, room_id, day)]

    def get_slots(self, db: Session, room_id: int, day: date, active_only: bool = True) -> list[dict]:
        """Hour-by-hour grid between SLOT_FIRST_HOUR and SLOT_LAST_HOUR."""
        self._room(db, room_id, active_only)
        slots = resolve_slots(
            self._conflicts(db, room_id, day),
            settings.SLOT_FIRST_HOUR,
            settings.SLOT_LAST_HOUR,
        )
        return [s.to_dict() for s in slots]


availability_service = AvailabilityService()
