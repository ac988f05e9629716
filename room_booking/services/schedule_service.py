import logging
from datetime import date
from sqlalchemy.orm import Session

from room_booking.models.room import Room
from room_booking.models.room_availability import RoomAvailability, Weekday
from room_booking.models.room_unavailability import RoomUnavailability
from room_booking.schemas.schedule import ScheduleUpdateRequest, UnavailabilityCreateRequest
from room_booking.services.availability_service import get_active_reservations
from room_booking.services.room_service import room_service
from room_booking.utils.audit import log_action
from room_booking.utils.exceptions import (
    NotFoundException, RoomInactiveException, BookingConflictException,
)
from room_booking.utils.timeslots import TimeRange

logger = logging.getLogger(__name__)

_DAY_ORDER = {day: i for i, day in enumerate(Weekday)}


def serialize_rule(a: RoomAvailability) -> dict:
    return {
        "id":        a.id,
        "roomId":    a.roomId,
        "dayOfWeek": a.dayOfWeek.value,
        "startTime": a.startTime,
        "endTime":   a.endTime,
        "updatedAt": a.updatedAt.isoformat() if a.updatedAt else None,
    }


def serialize_block(u: RoomUnavailability) -> dict:
    return {
        "id":        u.id,
        "roomId":    u.roomId,
        "date":      u.date.isoformat(),
        "startTime": u.startTime,
        "endTime":   u.endTime,
        "reason":    u.reason,
        "createdAt": u.createdAt.isoformat() if u.createdAt else None,
    }


class ScheduleService:

    # ─── Weekly opening hours ─────────────────────────────────────────────────
    def get_schedule(self, db: Session, room_id: int | None = None) -> list[dict]:
        q = db.query(RoomAvailability)
        if room_id is not None:
            room_service.get_room_or_404(db, room_id)
            q = q.filter(RoomAvailability.roomId == room_id)
        rules = sorted(q.all(), key=lambda a: (a.roomId, _DAY_ORDER[a.dayOfWeek]))
        return [serialize_rule(a) for a in rules]

    def set_schedule(
        self, db: Session, room_id: int, data: ScheduleUpdateRequest, actor_id: int | None,
    ) -> list[dict]:
        """
        Replace the room's weekly schedule with exactly the enabled days in
        `data`: matching days are updated in place, new days inserted, days
        no longer listed removed. One commit, so readers see old or new, never
        a mix.
        """
        room = room_service.get_room_or_404(db, room_id)
        if not room.isActive:
            raise RoomInactiveException()

        wanted = {e.dayOfWeek: e for e in data.enabled_entries}
        existing = {
            a.dayOfWeek: a
            for a in db.query(RoomAvailability).filter(RoomAvailability.roomId == room_id).all()
        }

        for day, rule in existing.items():
            if day not in wanted:
                db.delete(rule)
        db.flush()

        for day, entry in wanted.items():
            rule = existing.get(day)
            if rule is None:
                db.add(RoomAvailability(
                    roomId=room_id, dayOfWeek=day,
                    startTime=entry.startTime, endTime=entry.endTime,
                    createdById=actor_id,
                ))
            else:
                rule.startTime = entry.startTime
                rule.endTime   = entry.endTime

        summary = ", ".join(
            f"{d.value} {e.startTime}-{e.endTime}"
            for d, e in sorted(wanted.items(), key=lambda kv: _DAY_ORDER[kv[0]])
        ) or "closed all week"
        log_action(db, actor_id, "UPDATE", "RoomAvailability", room_id,
                   f"Weekly schedule for '{room.name}': {summary}")
        db.commit()
        logger.info(f"Room #{room_id} schedule replaced ({len(wanted)} open days)")
        return self.get_schedule(db, room_id)

    # ─── Unavailability blocks ────────────────────────────────────────────────
    def list_blocks(self, db: Session, room_id: int | None = None, day: date | None = None) -> list[dict]:
        q = db.query(RoomUnavailability)
        if room_id is not None: q = q.filter(RoomUnavailability.roomId == room_id)
        if day is not None:     q = q.filter(RoomUnavailability.date   == day)
        items = q.order_by(RoomUnavailability.date, RoomUnavailability.startTime).all()
        return [serialize_block(u) for u in items]

    def create_block(
        self, db: Session, room_id: int, data: UnavailabilityCreateRequest, actor_id: int | None,
    ) -> dict:
        room = db.query(Room).filter(Room.id == room_id).with_for_update().first()
        if not room:
            raise NotFoundException("Room")

        window = TimeRange.parse(data.startTime, data.endTime)
        clashing = [
            r for r in get_active_reservations(db, room_id, data.date)
            if r.time_range.overlaps(window)
        ]
        if clashing:
            ids = ", ".join(f"#{r.id}" for r in clashing)
            raise BookingConflictException(
                f"Existing reservations overlap this period ({ids}); cancel or move them first"
            )

        block = RoomUnavailability(
            roomId=room_id, date=data.date,
            startTime=data.startTime, endTime=data.endTime,
            reason=data.reason, createdById=actor_id,
        )
        db.add(block)
        db.flush()
        log_action(db, actor_id, "CREATE", "RoomUnavailability", block.id,
                   f"'{room.name}' unavailable {data.date.isoformat()} {window}"
                   + (f" | {data.reason}" if data.reason else ""))
        db.commit()
        db.refresh(block)
        return serialize_block(block)

    def delete_block(self, db: Session, block_id: int, actor_id: int | None) -> None:
        block = db.query(RoomUnavailability).filter(RoomUnavailability.id == block_id).first()
        if not block:
            raise NotFoundException("Unavailability period")
        log_action(db, actor_id, "DELETE", "RoomUnavailability", block.id,
                   f"Removed unavailability of room #{block.roomId} on {block.date.isoformat()} "
                   f"{block.startTime}-{block.endTime}")
        db.delete(block)
        db.commit()


schedule_service = ScheduleService()
