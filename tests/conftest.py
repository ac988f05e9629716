import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_ENV"] = "test"
os.environ["CORS_ORIGINS"] = "http://testserver"

import pytest
from fastapi.testclient import TestClient

from room_booking.database import Base, SessionLocal, engine
from room_booking.main import app
from room_booking.models.role import RoleName
from room_booking.models.room import Room
from room_booking.models.room_availability import RoomAvailability, Weekday
from room_booking.services.auth_service import auth_service
from room_booking.utils.security import create_access_token
import room_booking.models  # noqa: F401

ADMIN_PASSWORD = "admin-pass"


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin(db):
    return auth_service.create_user(db, "Admin", "admin@example.com", ADMIN_PASSWORD, RoleName.ADMIN)


@pytest.fixture
def staff(db):
    return auth_service.create_user(db, "Front Desk", "desk@example.com", "desk-pass", RoleName.STAFF)


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(admin.id, RoleName.ADMIN.value)}"}


@pytest.fixture
def staff_headers(staff):
    return {"Authorization": f"Bearer {create_access_token(staff.id, RoleName.STAFF.value)}"}


def add_room(db, name="Meeting A", hours=("08:00", "22:00"), days=tuple(Weekday), **fields):
    """Create an active room open `hours` on each of `days`."""
    room = Room(name=name, equipment=fields.pop("equipment", []), isActive=True, **fields)
    db.add(room)
    db.flush()
    for day in days:
        db.add(RoomAvailability(roomId=room.id, dayOfWeek=day, startTime=hours[0], endTime=hours[1]))
    db.commit()
    db.refresh(room)
    return room


@pytest.fixture
def make_room(db):
    def _make(**kwargs):
        return add_room(db, **kwargs)
    return _make


@pytest.fixture
def room(make_room):
    return make_room()
