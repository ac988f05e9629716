import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from room_booking.database import get_db
from room_booking.dependencies import get_current_user
from room_booking.models.room_reservation import ReservationStatus
from room_booking.models.user import User
from room_booking.schemas.reservation import (
    ReservationCreateRequest, ReservationUpdateRequest, ReservationStatusRequest,
)
from room_booking.schemas.common import success_response, paginated_response, ERROR_RESPONSES
from room_booking.services.reservation_service import reservation_service

router = APIRouter(prefix="/reservations", responses=ERROR_RESPONSES)


@router.get("", summary="List reservations (paginated, filter by room / date / status)")
def list_reservations(
    page:   int                         = Query(1, ge=1),
    limit:  int                         = Query(50, ge=1, le=200),
    roomId: Optional[int]               = Query(None),
    date:   Optional[datetime.date]     = Query(None, description="YYYY-MM-DD"),
    status: Optional[ReservationStatus] = Query(None, description="pending | confirmed | cancelled"),
    db:     Session                     = Depends(get_db),
    _:      User                        = Depends(get_current_user),
):
    data, total = reservation_service.list_reservations(db, page, limit, roomId, date, status)
    return paginated_response("Reservations retrieved", data, total, page, limit)


@router.get("/{reservation_id}", summary="Get reservation by ID")
def get_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    _:  User    = Depends(get_current_user),
):
    return success_response("Reservation retrieved", reservation_service.get_reservation(db, reservation_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create reservation on behalf of a customer")
def create_reservation(
    body: ReservationCreateRequest,
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Same booking transaction as the public form: opening hours, closures and
    overlapping reservations are checked atomically with the insert.
    Status defaults to `confirmed`.
    """
    data = reservation_service.book(db, body, body.status, current_user.id)
    return success_response("Reservation created", data)


@router.put("/{reservation_id}", summary="Update reservation details or move it")
def update_reservation(
    reservation_id: int,
    body: ReservationUpdateRequest,
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = reservation_service.update_reservation(db, reservation_id, body, current_user.id)
    return success_response("Reservation updated", data)


@router.patch("/{reservation_id}/status", summary="Change reservation status")
def update_reservation_status(
    reservation_id: int,
    body: ReservationStatusRequest,
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = reservation_service.change_status(db, reservation_id, body.status, current_user.id)
    return success_response("Reservation status updated", data)


@router.delete("/{reservation_id}", summary="Delete reservation permanently")
def delete_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    reservation_service.delete_reservation(db, reservation_id, current_user.id)
    return success_response("Reservation deleted", None)
