import logging
from sqlalchemy.orm import Session
from sqlalchemy import or_

from room_booking.models.room import Room
from room_booking.schemas.room import RoomCreateRequest, RoomUpdateRequest
from room_booking.utils.audit import log_action
from room_booking.utils.exceptions import NotFoundException

logger = logging.getLogger(__name__)


def serialize_room(r: Room) -> dict:
    return {
        "id":          r.id,
        "name":        r.name,
        "description": r.description,
        "capacity":    r.capacity,
        "equipment":   list(r.equipment or []),
        "color":       r.color,
        "isActive":    r.isActive,
        "createdById": r.createdById,
        "createdAt":   r.createdAt.isoformat() if r.createdAt else None,
        "updatedAt":   r.updatedAt.isoformat() if r.updatedAt else None,
    }


def room_summary(r: Room) -> dict:
    return {"id": r.id, "name": r.name, "color": r.color, "isActive": r.isActive}


class RoomService:

    def list_rooms(
        self, db: Session, page: int, limit: int,
        search: str | None = None, include_inactive: bool = False,
        min_capacity: int | None = None,
    ) -> tuple[list[dict], int]:
        q = db.query(Room)

        if not include_inactive:
            q = q.filter(Room.isActive == True)
        if search:
            kw = f"%{search}%"
            q = q.filter(or_(Room.name.ilike(kw), Room.description.ilike(kw)))
        if min_capacity:
            q = q.filter(Room.capacity >= min_capacity)

        total = q.count()
        items = q.order_by(Room.name).offset((page - 1) * limit).limit(limit).all()
        return [serialize_room(r) for r in items], total

    def list_active_rooms(self, db: Session) -> list[Room]:
        """Rooms offered on the public booking surface."""
        return db.query(Room).filter(Room.isActive == True).order_by(Room.name).all()

    def get_room(self, db: Session, room_id: int) -> dict:
        return serialize_room(self.get_room_or_404(db, room_id))

    def get_room_or_404(self, db: Session, room_id: int, active_only: bool = False) -> Room:
        q = db.query(Room).filter(Room.id == room_id)
        if active_only:
            q = q.filter(Room.isActive == True)
        r = q.first()
        if not r:
            raise NotFoundException("Room")
        return r

    def create_room(self, db: Session, data: RoomCreateRequest, actor_id: int | None) -> dict:
        room = Room(
            name=data.name,
            description=data.description,
            capacity=data.capacity,
            equipment=data.equipment,
            color=data.color,
            isActive=True,
            createdById=actor_id,
        )
        db.add(room)
        db.flush()
        log_action(db, actor_id, "CREATE", "Room", room.id, f"Created room '{data.name}'")
        db.commit()
        db.refresh(room)
        logger.info(f"Room #{room.id} '{room.name}' created")
        return serialize_room(room)

    def update_room(self, db: Session, room_id: int, data: RoomUpdateRequest, actor_id: int | None) -> dict:
        r = self.get_room_or_404(db, room_id)

        changes = data.model_dump(exclude_unset=True)
        if changes.get("name") is None:
            changes.pop("name", None)   # name is required, null means "leave as is"
        if "equipment" in changes and changes["equipment"] is None:
            changes["equipment"] = []
        for field, value in changes.items():
            setattr(r, field, value)

        log_action(db, actor_id, "UPDATE", "Room", r.id,
                   f"Updated room '{r.name}': {', '.join(sorted(changes)) or 'no changes'}")
        db.commit()
        db.refresh(r)
        return serialize_room(r)

    def deactivate_room(self, db: Session, room_id: int, actor_id: int | None) -> dict:
        """
        Soft delete. The room disappears from booking surfaces and schedule
        editing; its rules, blocks and reservations are kept untouched.
        """
        r = self.get_room_or_404(db, room_id)
        r.isActive = False
        log_action(db, actor_id, "DEACTIVATE", "Room", r.id, f"Deactivated room '{r.name}'")
        db.commit()
        db.refresh(r)
        logger.info(f"Room #{r.id} '{r.name}' deactivated")
        return serialize_room(r)

    def activate_room(self, db: Session, room_id: int, actor_id: int | None) -> dict:
        r = self.get_room_or_404(db, room_id)
        r.isActive = True
        log_action(db, actor_id, "ACTIVATE", "Room", r.id, f"Reactivated room '{r.name}'")
        db.commit()
        db.refresh(r)
        return serialize_room(r)


room_service = RoomService()
