from conftest import ADMIN_PASSWORD

MONDAY = "2024-06-10"


def create_reservation(client, headers, room_id, start="10:00", end="11:00", **extra):
    body = {"roomId": room_id, "date": MONDAY, "startTime": start, "endTime": end,
            "customerName": "Alice", **extra}
    return client.post("/api/v1/reservations", json=body, headers=headers)


# ─── Auth ─────────────────────────────────────────────────────────────────────

def test_admin_routes_require_token(client):
    for method, path in [
        ("get", "/api/v1/rooms"),
        ("get", "/api/v1/reservations"),
        ("get", "/api/v1/room-schedules"),
        ("get", "/api/v1/audit-logs"),
    ]:
        res = getattr(client, method)(path)
        assert res.status_code == 401, path
        assert res.json()["error"]["code"] == "UNAUTHORIZED"


def test_garbage_token_rejected(client):
    res = client.get("/api/v1/rooms", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


def test_login_refresh_logout(client, admin):
    res = client.post("/api/v1/auth/login", json={"email": admin.email, "password": ADMIN_PASSWORD})
    assert res.status_code == 200
    tokens = res.json()["data"]
    assert tokens["user"]["role"] == "ADMIN"
    headers = {"Authorization": f"Bearer {tokens['accessToken']}"}

    me = client.get("/api/v1/auth/me", headers=headers).json()["data"]
    assert me["email"] == admin.email

    refreshed = client.post("/api/v1/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert refreshed.status_code == 200
    assert refreshed.json()["data"]["accessToken"]

    assert client.post("/api/v1/auth/logout", json={"refreshToken": tokens["refreshToken"]},
                       headers=headers).status_code == 200
    again = client.post("/api/v1/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert again.status_code == 401
    assert again.json()["error"]["code"] == "REFRESH_TOKEN_INVALID"


def test_login_wrong_password(client, admin):
    res = client.post("/api/v1/auth/login", json={"email": admin.email, "password": "nope"})
    assert res.status_code == 401


# ─── Rooms ────────────────────────────────────────────────────────────────────

def test_room_crud(client, admin_headers):
    res = client.post("/api/v1/rooms", headers=admin_headers, json={
        "name": "  Meeting A ", "capacity": 8, "equipment": ["Projector", " ", "Whiteboard"],
        "color": "#22c55e",
    })
    assert res.status_code == 201
    room = res.json()["data"]
    assert room["name"] == "Meeting A"
    assert room["equipment"] == ["Projector", "Whiteboard"]

    res = client.put(f"/api/v1/rooms/{room['id']}", headers=admin_headers,
                     json={"capacity": 10, "equipment": None})
    assert res.json()["data"]["capacity"] == 10
    assert res.json()["data"]["equipment"] == []
    assert res.json()["data"]["name"] == "Meeting A"

    listed = client.get("/api/v1/rooms", headers=admin_headers).json()
    assert listed["meta"]["total"] == 1

    assert client.delete(f"/api/v1/rooms/{room['id']}", headers=admin_headers).json()["data"]["isActive"] is False
    assert client.get("/api/v1/rooms", headers=admin_headers).json()["meta"]["total"] == 0
    assert client.get("/api/v1/rooms?includeInactive=true", headers=admin_headers).json()["meta"]["total"] == 1

    res = client.patch(f"/api/v1/rooms/{room['id']}/activate", headers=admin_headers)
    assert res.json()["data"]["isActive"] is True


def test_room_validation(client, admin_headers):
    res = client.post("/api/v1/rooms", headers=admin_headers, json={"name": " ", "capacity": 0})
    assert res.status_code == 422
    fields = {d["field"] for d in res.json()["error"]["details"]}
    assert fields == {"name", "capacity"}


def test_room_not_found(client, admin_headers):
    res = client.get("/api/v1/rooms/404", headers=admin_headers)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"


# ─── Schedule and unavailability ──────────────────────────────────────────────

def test_schedule_endpoints(client, admin_headers, room):
    res = client.put(f"/api/v1/rooms/{room.id}/schedule", headers=admin_headers, json={"schedule": [
        {"dayOfWeek": "monday", "startTime": "16:00", "endTime": "22:00"},
        {"dayOfWeek": "friday", "startTime": "9:00", "endTime": "12:00"},
    ]})
    assert res.status_code == 200
    assert [(r["dayOfWeek"], r["startTime"]) for r in res.json()["data"]] == [("monday", "16:00"), ("friday", "09:00")]

    slots = client.get(f"/api/v1/rooms/{room.id}/slots?date={MONDAY}", headers=admin_headers).json()["data"]
    assert [s["hour"] for s in slots if s["available"]] == list(range(16, 22))

    assert create_reservation(client, admin_headers, room.id, "15:00", "16:00").json()["error"]["code"] \
        == "OUTSIDE_OPENING_HOURS"


def test_unavailability_endpoints(client, admin_headers, room):
    res = client.post(f"/api/v1/rooms/{room.id}/unavailability", headers=admin_headers,
                      json={"date": MONDAY, "startTime": "12:00", "endTime": "14:00", "reason": "Cleaning"})
    assert res.status_code == 201
    block_id = res.json()["data"]["id"]

    conflicts = client.get(f"/api/v1/rooms/{room.id}/availability?date={MONDAY}",
                           headers=admin_headers).json()["data"]
    assert {"startTime": "12:00", "type": "unavailable"}.items() <= conflicts[0].items()

    res = create_reservation(client, admin_headers, room.id, "13:00", "14:00")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "SLOT_UNAVAILABLE"

    listed = client.get(f"/api/v1/room-unavailability?roomId={room.id}", headers=admin_headers).json()["data"]
    assert [b["id"] for b in listed] == [block_id]
    assert client.delete(f"/api/v1/room-unavailability/{block_id}", headers=admin_headers).status_code == 200
    assert create_reservation(client, admin_headers, room.id, "13:00", "14:00").status_code == 201


# ─── Reservations ─────────────────────────────────────────────────────────────

def test_reservation_lifecycle(client, admin, admin_headers, room):
    res = create_reservation(client, admin_headers, room.id, status="pending")
    assert res.status_code == 201
    r = res.json()["data"]
    assert r["status"] == "pending"
    assert r["createdById"] == admin.id

    conflict = create_reservation(client, admin_headers, room.id, "10:30", "11:30")
    assert conflict.status_code == 409
    assert conflict.json()["error"]["code"] == "BOOKING_CONFLICT"

    res = client.patch(f"/api/v1/reservations/{r['id']}/status", headers=admin_headers,
                       json={"status": "cancelled"})
    assert res.json()["data"]["status"] == "cancelled"

    res = client.patch(f"/api/v1/reservations/{r['id']}/status", headers=admin_headers,
                       json={"status": "confirmed"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"

    assert create_reservation(client, admin_headers, room.id, "10:30", "11:30").status_code == 201

    listed = client.get(f"/api/v1/reservations?roomId={room.id}&date={MONDAY}", headers=admin_headers).json()
    assert listed["meta"]["total"] == 2
    only_cancelled = client.get("/api/v1/reservations?status=cancelled", headers=admin_headers).json()
    assert [x["id"] for x in only_cancelled["data"]] == [r["id"]]

    assert client.delete(f"/api/v1/reservations/{r['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/v1/reservations/{r['id']}", headers=admin_headers).status_code == 404


def test_reservation_cannot_be_created_cancelled(client, admin_headers, room):
    res = create_reservation(client, admin_headers, room.id, status="cancelled")
    assert res.status_code == 422


def test_update_reservation(client, admin_headers, room):
    r = create_reservation(client, admin_headers, room.id).json()["data"]
    res = client.put(f"/api/v1/reservations/{r['id']}", headers=admin_headers,
                     json={"startTime": "17:00", "endTime": "18:30", "notes": "Moved"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert (data["startTime"], data["endTime"], data["notes"]) == ("17:00", "18:30", "Moved")


def test_deactivated_room_history_still_listed(client, admin_headers, room):
    r = create_reservation(client, admin_headers, room.id).json()["data"]
    client.delete(f"/api/v1/rooms/{room.id}", headers=admin_headers)

    assert "Meeting A" not in client.get("/book-room").text
    listed = client.get(f"/api/v1/reservations?roomId={room.id}", headers=admin_headers).json()["data"]
    assert [x["id"] for x in listed] == [r["id"]]


# ─── Audit logs ───────────────────────────────────────────────────────────────

def test_audit_logs_admin_only(client, admin_headers, staff_headers, room):
    create_reservation(client, staff_headers, room.id)

    assert client.get("/api/v1/audit-logs", headers=staff_headers).status_code == 403

    res = client.get("/api/v1/audit-logs?entityType=RoomReservation", headers=admin_headers)
    assert res.status_code == 200
    entries = res.json()["data"]
    assert len(entries) == 1
    assert entries[0]["action"] == "CREATE"
    assert entries[0]["actor"]["name"] == "Front Desk"
