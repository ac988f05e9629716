from datetime import date

from room_booking.models.room_availability import Weekday
from room_booking.models.room_reservation import RoomReservation
from room_booking.services.room_service import room_service

MONDAY = "2024-06-10"


def booking(room_id, start="10:00", end="11:00", **extra):
    body = {"roomId": room_id, "date": MONDAY, "startTime": start, "endTime": end,
            "customerName": "Alice", "customerEmail": "alice@example.com"}
    body.update(extra)
    return body


def test_book_room_lists_active_rooms(client, db, make_room):
    make_room(name="Meeting A")
    hidden = make_room(name="Old Annex")
    room_service.deactivate_room(db, hidden.id, None)

    res = client.get("/book-room")
    assert res.status_code == 200
    assert "text/html" in res.headers["content-type"]
    assert "Meeting A" in res.text
    assert "Old Annex" not in res.text


def test_room_booking_page_renders_slots(client, room):
    res = client.get(f"/room-booking?room={room.id}&date={MONDAY}&start=10:00")
    assert res.status_code == 200
    assert room.name in res.text
    assert f"/room-booking?room={room.id}&date={MONDAY}&start=08:00" in res.text
    assert "Selected: 10:00" in res.text


def test_room_booking_page_unknown_room(client):
    res = client.get("/room-booking?room=999")
    assert res.status_code == 404
    assert "Room not found" in res.text


def test_room_slots_json(client, room):
    client.post("/room-booking", json=booking(room.id, "14:00", "16:30"))

    res = client.get(f"/room-slots?room={room.id}&date={MONDAY}")
    assert res.status_code == 200
    slots = {s["hour"]: s for s in res.json()}
    assert slots[14]["available"] is False
    assert slots[14]["reservation"]["customerName"] == "Alice"
    assert slots[15]["available"] is False
    assert slots[16]["available"] is True
    assert min(slots) == 8 and max(slots) == 22


def test_room_availability_json(client, room):
    client.post("/room-booking", json=booking(room.id))
    res = client.get(f"/room-availability?room={room.id}&date={MONDAY}")
    assert res.status_code == 200
    conflicts = res.json()
    assert conflicts[0] == {"id": conflicts[0]["id"], "startTime": "10:00", "endTime": "11:00",
                            "customerName": "Alice", "purpose": None, "type": "reservation"}


def test_post_booking_success_is_plain_text(client, db, room):
    res = client.post("/room-booking", json=booking(room.id, purpose="Interview"))
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    assert res.text.startswith("Reservation confirmed for Alice")

    stored = db.query(RoomReservation).one()
    assert stored.createdById is None
    assert stored.customerEmail == "alice@example.com"
    assert stored.date == date(2024, 6, 10)


def test_post_booking_conflict_is_plain_text_400(client, room):
    assert client.post("/room-booking", json=booking(room.id)).status_code == 200
    res = client.post("/room-booking", json=booking(room.id, customerName="Bob"))
    assert res.status_code == 400
    assert res.headers["content-type"].startswith("text/plain")
    assert res.text == "Room is already booked for the requested time range"


def test_post_booking_outside_opening_hours(client, make_room):
    room = make_room(days=(Weekday.MONDAY,), hours=("16:00", "22:00"))
    assert client.post("/room-booking", json=booking(room.id, "16:00", "17:00")).status_code == 200
    res = client.post("/room-booking", json=booking(room.id, "15:00", "16:00"))
    assert res.status_code == 400
    assert "opening hours" in res.text


def test_post_booking_validation_errors_are_plain_text(client, room):
    res = client.post("/room-booking", json=booking(room.id, customerName="   "))
    assert res.status_code == 400
    assert res.text == "Customer name is required"

    res = client.post("/room-booking", json=booking(room.id, "11:00", "10:00"))
    assert res.status_code == 400
    assert res.text.startswith("End time must be after start time")

    body = booking(room.id)
    del body["customerName"]
    res = client.post("/room-booking", json=body)
    assert res.status_code == 400
    assert res.text == "customerName: Field required"


def test_post_booking_blank_email_is_allowed(client, db, room):
    res = client.post("/room-booking", json=booking(room.id, customerEmail=""))
    assert res.status_code == 200
    assert db.query(RoomReservation).one().customerEmail is None


def test_post_booking_inactive_room(client, db, room):
    room_service.deactivate_room(db, room.id, None)
    res = client.post("/room-booking", json=booking(room.id))
    assert res.status_code == 400
    assert res.text == "Room is no longer available for booking"


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_room_booking_page_offers_end_times(client, room):
    client.post("/room-booking", json=booking(room.id, "13:00", "14:00"))

    res = client.get(f"/room-booking?room={room.id}&date={MONDAY}&start=10:00")
    assert '<select id="endTime">' in res.text
    assert '<option value="11:00" selected>11:00</option>' in res.text
    assert '<option value="13:00">13:00</option>' in res.text
    # the 13:00 hour is taken, so the range cannot run past it
    assert '<option value="14:00">' not in res.text

    res = client.get(f"/room-booking?room={room.id}&date={MONDAY}")
    assert '<select id="endTime" disabled>' in res.text


def test_post_multi_hour_booking(client, room):
    res = client.post("/room-booking", json=booking(room.id, "10:00", "12:00"))
    assert res.status_code == 200
    assert "10:00-12:00" in res.text

    slots = {s["hour"]: s for s in client.get(f"/room-slots?room={room.id}&date={MONDAY}").json()}
    assert slots[10]["available"] is False
    assert slots[11]["available"] is False
    assert slots[12]["available"] is True

    res = client.post("/room-booking", json=booking(room.id, "11:00", "12:00", customerName="Bob"))
    assert res.status_code == 400
    assert res.text == "Room is already booked for the requested time range"
