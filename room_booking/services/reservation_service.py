import logging
from datetime import date
from sqlalchemy.orm import Session

from room_booking.config import settings
from room_booking.models.room import Room
from room_booking.models.room_reservation import RoomReservation, ReservationStatus
from room_booking.schemas.reservation import ReservationRequest, ReservationUpdateRequest
from room_booking.services.availability_service import (
    get_rule, get_blocks, get_active_reservations,
)
from room_booking.services.room_service import room_summary
from room_booking.utils.audit import log_action
from room_booking.utils.exceptions import (
    NotFoundException, RoomInactiveException, OutsideOpeningHoursException,
    SlotUnavailableException, BookingConflictException, InvalidTimeRangeException,
    InvalidStatusTransitionException,
)
from room_booking.utils.timeslots import TimeRange

logger = logging.getLogger(__name__)

# cancelled is terminal; everything else moves freely
_ALLOWED_TRANSITIONS = {
    ReservationStatus.PENDING:   {ReservationStatus.PENDING, ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {ReservationStatus.CONFIRMED, ReservationStatus.PENDING, ReservationStatus.CANCELLED},
    ReservationStatus.CANCELLED: {ReservationStatus.CANCELLED},
}

_REQUIRED_FIELDS = ("roomId", "date", "startTime", "endTime", "customerName")


def serialize_reservation(r: RoomReservation) -> dict:
    return {
        "id":            r.id,
        "roomId":        r.roomId,
        "room":          room_summary(r.room) if r.room else None,
        "date":          r.date.isoformat(),
        "startTime":     r.startTime,
        "endTime":       r.endTime,
        "customerName":  r.customerName,
        "customerEmail": r.customerEmail,
        "customerPhone": r.customerPhone,
        "purpose":       r.purpose,
        "notes":         r.notes,
        "status":        r.status.value,
        "createdById":   r.createdById,
        "createdAt":     r.createdAt.isoformat() if r.createdAt else None,
        "updatedAt":     r.updatedAt.isoformat() if r.updatedAt else None,
    }


def _lock_room(db: Session, room_id: int) -> Room:
    """
    Load the room with a row lock (SELECT ... FOR UPDATE). Every booking for
    the same room queues here, so the checks below and the insert behave as
    one atomic step. SQLite ignores FOR UPDATE; its transactions begin
    IMMEDIATE instead (see database.build_engine).
    """
    room = db.query(Room).filter(Room.id == room_id).with_for_update().first()
    if not room:
        raise NotFoundException("Room")
    if not room.isActive:
        raise RoomInactiveException()
    return room


def check_slot(
    db: Session, room_id: int, day: date, time_range: TimeRange, exclude_id: int | None = None,
) -> None:
    """Raise unless `time_range` on `day` can be booked. Call with the room locked."""
    if settings.ENFORCE_WEEKLY_SCHEDULE:
        rule = get_rule(db, room_id, day)
        if rule is None or not rule.window.covers(time_range):
            raise OutsideOpeningHoursException()

    for block in get_blocks(db, room_id, day):
        if block.time_range.overlaps(time_range):
            raise SlotUnavailableException(
                f"Room is closed {block.startTime}-{block.endTime}"
                + (f": {block.reason}" if block.reason else "")
            )

    for other in get_active_reservations(db, room_id, day, exclude_id=exclude_id):
        if other.time_range.overlaps(time_range):
            logger.info(f"Booking conflict on room #{room_id} {day.isoformat()} {time_range} "
                        f"with reservation #{other.id}")
            raise BookingConflictException()


class ReservationService:

    def list_reservations(
        self, db: Session, page: int, limit: int,
        room_id: int | None = None, day: date | None = None, status: ReservationStatus | None = None,
    ) -> tuple[list[dict], int]:
        q = db.query(RoomReservation)
        if room_id is not None: q = q.filter(RoomReservation.roomId == room_id)
        if day is not None:     q = q.filter(RoomReservation.date   == day)
        if status is not None:  q = q.filter(RoomReservation.status == status)

        total = q.count()
        items = q.order_by(RoomReservation.date.desc(), RoomReservation.startTime)\
                 .offset((page - 1) * limit).limit(limit).all()
        return [serialize_reservation(r) for r in items], total

    def get_reservation(self, db: Session, reservation_id: int) -> dict:
        return serialize_reservation(self._get(db, reservation_id))

    def _get(self, db: Session, reservation_id: int) -> RoomReservation:
        r = db.query(RoomReservation).filter(RoomReservation.id == reservation_id).first()
        if not r:
            raise NotFoundException("Reservation")
        return r

    # ─── Booking transaction ──────────────────────────────────────────────────
    def book(
        self, db: Session, data: ReservationRequest,
        status: ReservationStatus, actor_id: int | None = None,
    ) -> dict:
        """
        Check-and-insert in a single transaction: lock the room, re-check
        opening hours, closures and overlapping reservations against the
        current state, then insert. Nothing is written if any check fails.
        """
        try:
            room = _lock_room(db, data.roomId)
            time_range = data.time_range
            check_slot(db, room.id, data.date, time_range)

            r = RoomReservation(
                roomId=room.id,
                date=data.date,
                startTime=str(time_range.start),
                endTime=str(time_range.end),
                customerName=data.customerName,
                customerEmail=str(data.customerEmail) if data.customerEmail else None,
                customerPhone=data.customerPhone,
                purpose=data.purpose,
                notes=data.notes,
                status=status,
                createdById=actor_id,
            )
            db.add(r)
            db.flush()
            log_action(db, actor_id, "CREATE", "RoomReservation", r.id,
                       f"{r.customerName} booked '{room.name}' on {r.date.isoformat()} "
                       f"{time_range} ({status.value})")
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(r)
        logger.info(f"Reservation #{r.id} created for room #{room.id} {r.date.isoformat()} {time_range}")
        return serialize_reservation(r)

    def update_reservation(
        self, db: Session, reservation_id: int, data: ReservationUpdateRequest, actor_id: int | None,
    ) -> dict:
        try:
            r = self._get(db, reservation_id)
            changes = {
                k: v for k, v in data.model_dump(exclude_unset=True).items()
                if v is not None or k not in _REQUIRED_FIELDS
            }
            if "customerEmail" in changes and changes["customerEmail"] is not None:
                changes["customerEmail"] = str(changes["customerEmail"])

            if data.moves_slot:
                room_id = changes.get("roomId", r.roomId)
                day     = changes.get("date", r.date)
                try:
                    time_range = TimeRange.parse(changes.get("startTime", r.startTime),
                                                 changes.get("endTime", r.endTime))
                except ValueError as e:
                    raise InvalidTimeRangeException(str(e))
                # cancelled reservations hold no slot, so only the range itself is checked
                if not r.is_cancelled:
                    _lock_room(db, room_id)
                    check_slot(db, room_id, day, time_range, exclude_id=r.id)

            for field, value in changes.items():
                setattr(r, field, value)

            log_action(db, actor_id, "UPDATE", "RoomReservation", r.id,
                       f"Updated reservation #{r.id}: {', '.join(sorted(changes)) or 'no changes'}")
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(r)
        return serialize_reservation(r)

    def change_status(
        self, db: Session, reservation_id: int, status: ReservationStatus, actor_id: int | None,
    ) -> dict:
        r = self._get(db, reservation_id)
        old = r.status
        if status not in _ALLOWED_TRANSITIONS[old]:
            raise InvalidStatusTransitionException(old.value, status.value)

        r.status = status
        log_action(db, actor_id, "STATUS", "RoomReservation", r.id,
                   f"Reservation #{r.id} {old.value} -> {status.value}")
        db.commit()
        db.refresh(r)
        logger.info(f"Reservation #{r.id} status {old.value} -> {status.value}")
        return serialize_reservation(r)

    def delete_reservation(self, db: Session, reservation_id: int, actor_id: int | None) -> None:
        """Hard delete (admin only)."""
        r = self._get(db, reservation_id)
        log_action(db, actor_id, "DELETE", "RoomReservation", r.id,
                   f"Deleted reservation #{r.id} of {r.customerName} on {r.date.isoformat()} "
                   f"{r.startTime}-{r.endTime}")
        db.delete(r)
        db.commit()


reservation_service = ReservationService()
