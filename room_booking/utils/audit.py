import logging
from sqlalchemy.orm import Session
from room_booking.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def log_action(
    db: Session,
    user_id: int | None,
    action: str,
    entity_type: str,
    entity_id: int | None = None,
    description: str | None = None,
) -> None:
    """
    Write an audit log entry.

    Args:
        db:          Active DB session (entry is added but NOT committed; caller commits)
        user_id:     ID of user performing the action (None = public booking / system)
        action:      Verb: CREATE, UPDATE, DELETE, DEACTIVATE, STATUS, LOGIN, etc.
        entity_type: Model name: "Room", "RoomReservation", "RoomAvailability", ...
        entity_id:   Primary key of the affected record
        description: Human-readable description (shown in audit log UI)

    Usage:
        log_action(db, actor_id, "STATUS", "RoomReservation", reservation.id,
                   f"Reservation #{reservation.id} pending -> confirmed")
        db.commit()
    """
    entry = AuditLog(
        userId=user_id,
        action=action,
        entityType=entity_type,
        entityId=entity_id,
        description=description,
    )
    db.add(entry)
    logger.debug(f"audit {action} {entity_type}:{entity_id} by {user_id}")
