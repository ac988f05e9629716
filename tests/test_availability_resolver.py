from types import SimpleNamespace

from room_booking.models.room_reservation import ReservationStatus
from room_booking.services.availability_resolver import (
    CLOSED, RESERVED, UNAVAILABLE,
    closed_periods, collect_conflicts, resolve_availability,
)


def reservation(start, end, status=ReservationStatus.CONFIRMED, id=1, name="Alice", purpose=None):
    return SimpleNamespace(id=id, startTime=start, endTime=end, status=status,
                           customerName=name, purpose=purpose)


def block(start, end, reason=None):
    return SimpleNamespace(startTime=start, endTime=end, reason=reason)


def rule(start, end):
    return SimpleNamespace(startTime=start, endTime=end)


def taken_hours(slots):
    return [s.hour for s in slots if not s.available]


def test_grid_covers_first_to_last_hour():
    slots = resolve_availability([], [], enforce_schedule=False)
    assert [s.hour for s in slots] == list(range(8, 23))
    assert all(s.available for s in slots)
    assert slots[0].to_dict()["time"] == "08:00"
    assert slots[-1].to_dict()["endTime"] == "23:00"


def test_end_exclusive_boundary():
    slots = resolve_availability([reservation("14:00", "15:00")], [], enforce_schedule=False)
    assert taken_hours(slots) == [14]


def test_fractional_end_does_not_block_next_hour():
    slots = resolve_availability([reservation("14:00", "16:30")], [], enforce_schedule=False)
    assert taken_hours(slots) == [14, 15]


def test_cancelled_reservations_never_block():
    reservations = [
        reservation("08:00", "22:00", status=ReservationStatus.CANCELLED, id=1),
        reservation("10:00", "11:00", status=ReservationStatus.CANCELLED, id=2),
    ]
    assert collect_conflicts(reservations, [], enforce_schedule=False) == []
    assert taken_hours(resolve_availability(reservations, [], enforce_schedule=False)) == []


def test_pending_reservations_block():
    slots = resolve_availability([reservation("09:00", "10:00", status=ReservationStatus.PENDING)], [],
                                 enforce_schedule=False)
    assert taken_hours(slots) == [9]


def test_resolver_is_deterministic():
    args = (
        [reservation("15:00", "17:00", id=2, name="Bob"), reservation("09:00", "10:00", id=1)],
        [block("12:00", "13:00", "Cleaning")],
        rule("08:00", "20:00"),
    )
    first = [s.to_dict() for s in resolve_availability(*args)]
    second = [s.to_dict() for s in resolve_availability(*args)]
    assert first == second


def test_no_rule_closes_the_whole_day():
    slots = resolve_availability([], [], rule=None, enforce_schedule=True)
    assert all(not s.available for s in slots)
    assert {s.to_dict()["reason"] for s in slots} == {CLOSED}


def test_rule_window_limits_open_hours():
    slots = resolve_availability([], [], rule=rule("16:00", "22:00"))
    assert [s.hour for s in slots if s.available] == list(range(16, 22))
    assert slots[-1].to_dict()["reason"] == CLOSED


def test_rule_ignored_when_not_enforced():
    slots = resolve_availability([], [], rule=None, enforce_schedule=False)
    assert taken_hours(slots) == []


def test_closed_periods_for_full_day_rule():
    assert closed_periods(rule("00:00", "24:00")) == []
    assert len(closed_periods(rule("08:00", "22:00"))) == 2


def test_blocks_are_reported_as_unavailable():
    slots = resolve_availability([], [block("12:00", "14:00", "Maintenance")], enforce_schedule=False)
    assert taken_hours(slots) == [12, 13]
    noon = slots[4].to_dict()
    assert noon["reason"] == UNAVAILABLE
    assert noon["note"] == "Maintenance"
    assert noon["reservation"] is None


def test_reservation_is_reported_before_block():
    slots = resolve_availability(
        [reservation("10:00", "11:00", id=7, name="Carol", purpose="Standup")],
        [block("10:00", "12:00")],
        enforce_schedule=False,
    )
    ten = slots[2].to_dict()
    assert ten["reason"] == RESERVED
    assert ten["reservation"] == {"id": 7, "customerName": "Carol", "purpose": "Standup"}
    assert slots[3].to_dict()["reason"] == UNAVAILABLE


def test_conflict_dict_shape():
    conflicts = collect_conflicts(
        [reservation("10:00", "11:00", id=3, name="Dan")], [block("13:00", "14:00", "Paint")],
        enforce_schedule=False,
    )
    assert [c.to_dict() for c in conflicts] == [
        {"id": 3, "startTime": "10:00", "endTime": "11:00", "customerName": "Dan",
         "purpose": None, "type": "reservation"},
        {"id": None, "startTime": "13:00", "endTime": "14:00", "customerName": "Unavailable",
         "purpose": "Paint", "type": "unavailable"},
    ]


def test_closed_hours_are_typed_closed():
    conflicts = collect_conflicts([], [block("12:00", "13:00")], rule=rule("16:00", "22:00"))
    assert [(c.to_dict()["startTime"], c.to_dict()["type"]) for c in conflicts] == [
        ("12:00", "unavailable"), ("00:00", "closed"), ("22:00", "closed"),
    ]
    whole_day = collect_conflicts([], [], rule=None)
    assert [c.to_dict()["type"] for c in whole_day] == ["closed"]
