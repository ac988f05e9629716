from datetime import date, datetime

import pytest

from room_booking.utils.timeslots import TimeOfDay, TimeRange, format_time, parse_date


def test_parse_and_format():
    assert TimeOfDay.parse("9:05") == TimeOfDay(9, 5)
    assert str(TimeOfDay.parse("9:05")) == "09:05"
    assert format_time(" 14:30 ") == "14:30"
    assert TimeOfDay.parse("24:00").minutes == 24 * 60


@pytest.mark.parametrize("value", ["", "1400", "25:00", "12:60", "24:30", "ab:cd", None])
def test_parse_rejects_malformed(value):
    with pytest.raises(ValueError):
        TimeOfDay.parse(value)


def test_ordering():
    assert TimeOfDay(8, 0) < TimeOfDay(8, 30) < TimeOfDay(9, 0)
    assert max(TimeOfDay(16, 0), TimeOfDay(15, 59)) == TimeOfDay(16, 0)


def test_range_requires_end_after_start():
    with pytest.raises(ValueError, match="End time must be after start time"):
        TimeRange.parse("10:00", "10:00")
    with pytest.raises(ValueError):
        TimeRange.parse("11:00", "10:00")


def test_overlap_is_end_exclusive():
    ten_to_eleven = TimeRange.parse("10:00", "11:00")
    assert ten_to_eleven.overlaps(TimeRange.parse("10:30", "11:30"))
    assert ten_to_eleven.overlaps(TimeRange.parse("09:00", "12:00"))
    assert not ten_to_eleven.overlaps(TimeRange.parse("11:00", "12:00"))
    assert not ten_to_eleven.overlaps(TimeRange.parse("09:00", "10:00"))


def test_covers():
    window = TimeRange.parse("16:00", "22:00")
    assert window.covers(TimeRange.parse("16:00", "17:00"))
    assert window.covers(window)
    assert not window.covers(TimeRange.parse("15:00", "16:00"))
    assert not window.covers(TimeRange.parse("21:30", "22:30"))


def test_contains_hour_ignores_minutes():
    r = TimeRange.parse("14:00", "16:30")
    assert [h for h in range(8, 23) if r.contains_hour(h)] == [14, 15]
    assert [h for h in range(8, 23) if TimeRange.parse("14:00", "15:00").contains_hour(h)] == [14]


def test_hour_slot():
    assert str(TimeRange.hour_slot(21)) == "21:00-22:00"
    assert TimeRange.hour_slot(23).end == TimeOfDay(24, 0)


def test_parse_date():
    assert parse_date("2024-06-10") == date(2024, 6, 10)
    assert parse_date(date(2024, 6, 10)) == date(2024, 6, 10)
    assert parse_date(datetime(2024, 6, 10, 15, 0)) == date(2024, 6, 10)
    with pytest.raises(ValueError, match="YYYY-MM-DD"):
        parse_date("10/06/2024")
