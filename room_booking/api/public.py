"""
Public booking pages. No authentication: anyone with the link can see the
active rooms, their free hours, and book one.

Errors raised by `POST /room-booking` are turned into plain-text 400
responses by the handlers in middleware/error_handler.py.
"""

import datetime
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session
from typing import Optional

from room_booking.config import settings
from room_booking.database import get_db
from room_booking.models.room_reservation import ReservationStatus
from room_booking.schemas.reservation import PublicReservationRequest
from room_booking.services.availability_service import availability_service
from room_booking.services.reservation_service import reservation_service
from room_booking.services.room_service import room_service, serialize_room
from room_booking.utils.exceptions import NotFoundException

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(tags=["Public booking"])


def end_choices(slots: list[dict], start: Optional[str]) -> list[str]:
    """End times reachable from `start` through consecutive free slots."""
    ends = []
    following = False
    for s in slots:
        if s["time"] == start:
            following = True
        if not following:
            continue
        if not s["available"]:
            break
        ends.append(s["endTime"])
    return ends


@router.get("/book-room", response_class=HTMLResponse, summary="[PUBLIC] Rooms open for booking")
def book_room(request: Request, db: Session = Depends(get_db)):
    rooms = [serialize_room(r) for r in room_service.list_active_rooms(db)]
    return templates.TemplateResponse(request, "book_room.html", {
        "app_name": settings.APP_NAME,
        "rooms":    rooms,
    })


@router.get("/room-booking", response_class=HTMLResponse, summary="[PUBLIC] Booking form for one room")
def room_booking_page(
    request: Request,
    room:    int                     = Query(...),
    date:    Optional[datetime.date] = Query(None, description="YYYY-MM-DD, defaults to today"),
    start:   Optional[str]           = Query(None, description="Preselected slot, HH:00"),
    db:      Session                 = Depends(get_db),
):
    try:
        selected_room = room_service.get_room_or_404(db, room, active_only=True)
    except NotFoundException:
        return templates.TemplateResponse(request, "room_not_found.html", {
            "app_name": settings.APP_NAME,
        }, status_code=404)

    day = date or datetime.date.today()
    slots = availability_service.get_slots(db, selected_room.id, day)
    selected = next((s for s in slots if s["time"] == start and s["available"]), None)
    return templates.TemplateResponse(request, "room_booking.html", {
        "app_name": settings.APP_NAME,
        "room":     serialize_room(selected_room),
        "date":     day.isoformat(),
        "slots":    slots,
        "selected": selected,
        "end_times": end_choices(slots, selected["time"]) if selected else [],
    })


@router.get("/room-availability", summary="[PUBLIC] Conflicting periods for a room on a date")
def room_availability(
    room: int           = Query(...),
    date: datetime.date = Query(..., description="YYYY-MM-DD"),
    db:   Session       = Depends(get_db),
):
    return availability_service.get_conflicts(db, room, date)


@router.get("/room-slots", summary="[PUBLIC] Hourly slot grid for a room on a date")
def room_slots(
    room: int           = Query(...),
    date: datetime.date = Query(..., description="YYYY-MM-DD"),
    db:   Session       = Depends(get_db),
):
    return availability_service.get_slots(db, room, date)


@router.post("/room-booking", response_class=PlainTextResponse, summary="[PUBLIC] Book a room")
def create_public_booking(body: PublicReservationRequest, db: Session = Depends(get_db)):
    status = ReservationStatus(settings.PUBLIC_RESERVATION_STATUS)
    r = reservation_service.book(db, body, status, actor_id=None)
    when = f"{r['date']} {r['startTime']}-{r['endTime']}"
    if status == ReservationStatus.PENDING:
        return f"Reservation request received for {r['customerName']} ({r['room']['name']}, {when}). " \
               "You will be contacted once it is confirmed."
    return f"Reservation confirmed for {r['customerName']} ({r['room']['name']}, {when})."
