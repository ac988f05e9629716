"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. Relationships between models resolve correctly

Order matters: import parent tables before child tables.
"""

from room_booking.models.role import Role, RoleName
from room_booking.models.user import User
from room_booking.models.refresh_token import RefreshToken
from room_booking.models.room import Room
from room_booking.models.room_availability import RoomAvailability, Weekday
from room_booking.models.room_unavailability import RoomUnavailability
from room_booking.models.room_reservation import RoomReservation, ReservationStatus
from room_booking.models.audit_log import AuditLog

__all__ = [
    "Role",
    "RoleName",
    "User",
    "RefreshToken",
    "Room",
    "RoomAvailability",
    "Weekday",
    "RoomUnavailability",
    "RoomReservation",
    "ReservationStatus",
    "AuditLog",
]
