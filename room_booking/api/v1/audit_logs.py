from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from room_booking.database import get_db
from room_booking.dependencies import get_admin_user
from room_booking.models.user import User
from room_booking.schemas.common import paginated_response
from room_booking.services.audit_service import audit_service

router = APIRouter(prefix="/audit-logs")


@router.get("", summary="List audit log entries, newest first (Admin)")
def list_audit_logs(
    page:       int           = Query(1, ge=1),
    limit:      int           = Query(50, ge=1, le=200),
    entityType: Optional[str] = Query(None, description="Room | RoomReservation | RoomAvailability | ..."),
    entityId:   Optional[int] = Query(None),
    action:     Optional[str] = Query(None),
    db:         Session       = Depends(get_db),
    _:          User          = Depends(get_admin_user),
):
    data, total = audit_service.list_logs(db, page, limit, entityType, entityId, action)
    return paginated_response("Audit logs retrieved", data, total, page, limit)
