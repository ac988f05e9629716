import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from room_booking.database import get_db
from room_booking.dependencies import get_current_user
from room_booking.models.user import User
from room_booking.schemas.room import RoomCreateRequest, RoomUpdateRequest
from room_booking.schemas.schedule import ScheduleUpdateRequest, UnavailabilityCreateRequest
from room_booking.schemas.common import success_response, paginated_response, ERROR_RESPONSES
from room_booking.services.availability_service import availability_service
from room_booking.services.room_service import room_service
from room_booking.services.schedule_service import schedule_service

router = APIRouter(responses=ERROR_RESPONSES)


# ─── Rooms ────────────────────────────────────────────────────────────────────

@router.get("/rooms", summary="List rooms (paginated)")
def list_rooms(
    page:            int           = Query(1, ge=1),
    limit:           int           = Query(20, ge=1, le=100),
    search:          Optional[str] = Query(None),
    includeInactive: bool          = Query(False, description="Also list deactivated rooms"),
    minCapacity:     Optional[int] = Query(None, ge=1),
    db:              Session       = Depends(get_db),
    _:               User          = Depends(get_current_user),
):
    data, total = room_service.list_rooms(db, page, limit, search, includeInactive, minCapacity)
    return paginated_response("Rooms retrieved successfully", data, total, page, limit)


@router.get("/rooms/{room_id}", summary="Get room by ID")
def get_room(room_id: int, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return success_response("Room retrieved", room_service.get_room(db, room_id))


@router.post("/rooms", status_code=status.HTTP_201_CREATED, summary="Create room")
def create_room(
    body: RoomCreateRequest,
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = room_service.create_room(db, body, current_user.id)
    return success_response("Room created successfully", data)


@router.put("/rooms/{room_id}", summary="Update room")
def update_room(
    room_id: int,
    body:    RoomUpdateRequest,
    db:      Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = room_service.update_room(db, room_id, body, current_user.id)
    return success_response("Room updated successfully", data)


@router.delete("/rooms/{room_id}", summary="Deactivate room (soft delete)")
def delete_room(
    room_id: int,
    db:      Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = room_service.deactivate_room(db, room_id, current_user.id)
    return success_response("Room deactivated", data)


@router.patch("/rooms/{room_id}/activate", summary="Reactivate a deactivated room")
def activate_room(
    room_id: int,
    db:      Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = room_service.activate_room(db, room_id, current_user.id)
    return success_response("Room activated", data)


# ─── Availability ─────────────────────────────────────────────────────────────

@router.get("/rooms/{room_id}/availability", summary="Conflicting periods for a room on a date")
def get_room_availability(
    room_id: int,
    date:    datetime.date = Query(..., description="YYYY-MM-DD"),
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_current_user),
):
    data = availability_service.get_conflicts(db, room_id, date, active_only=False)
    return success_response("Availability retrieved", data)


@router.get("/rooms/{room_id}/slots", summary="Hourly slot grid for a room on a date")
def get_room_slots(
    room_id: int,
    date:    datetime.date = Query(..., description="YYYY-MM-DD"),
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_current_user),
):
    data = availability_service.get_slots(db, room_id, date, active_only=False)
    return success_response("Slots retrieved", data)


# ─── Weekly schedule ──────────────────────────────────────────────────────────

@router.get("/room-schedules", summary="Weekly opening hours of all rooms (or one)")
def list_schedules(
    roomId: Optional[int] = Query(None),
    db:     Session       = Depends(get_db),
    _:      User          = Depends(get_current_user),
):
    return success_response("Schedules retrieved", schedule_service.get_schedule(db, roomId))


@router.get("/rooms/{room_id}/schedule", summary="Weekly opening hours of a room")
def get_schedule(room_id: int, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return success_response("Schedule retrieved", schedule_service.get_schedule(db, room_id))


@router.put("/rooms/{room_id}/schedule", summary="Replace the weekly opening hours of a room")
def set_schedule(
    room_id: int,
    body:    ScheduleUpdateRequest,
    db:      Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = schedule_service.set_schedule(db, room_id, body, current_user.id)
    return success_response("Availability updated", data)


# ─── Unavailability ───────────────────────────────────────────────────────────

@router.get("/room-unavailability", summary="List unavailability periods")
def list_unavailability(
    roomId: Optional[int]  = Query(None),
    date:   Optional[datetime.date] = Query(None, description="YYYY-MM-DD"),
    db:     Session        = Depends(get_db),
    _:      User           = Depends(get_current_user),
):
    return success_response("Unavailability retrieved", schedule_service.list_blocks(db, roomId, date))


@router.post("/rooms/{room_id}/unavailability", status_code=status.HTTP_201_CREATED,
             summary="Mark a room unavailable for part of a date")
def create_unavailability(
    room_id: int,
    body:    UnavailabilityCreateRequest,
    db:      Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = schedule_service.create_block(db, room_id, body, current_user.id)
    return success_response("Unavailability created", data)


@router.delete("/room-unavailability/{block_id}", summary="Remove an unavailability period")
def delete_unavailability(
    block_id: int,
    db:       Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    schedule_service.delete_block(db, block_id, current_user.id)
    return success_response("Unavailability removed", None)
