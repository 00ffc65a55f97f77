from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from vcalnode.models import CalendarEvent


def test_utc_accessors_return_none_when_unset():
    event = CalendarEvent()

    assert event.start_at_utc() is None
    assert event.end_at_utc() is None


def test_utc_accessors_keep_utc_values():
    t_utc = datetime(2009, 11, 10, 23, 0, 0, tzinfo=timezone.utc)
    event = CalendarEvent(start_at=t_utc, end_at=t_utc)

    assert event.start_at_utc() == t_utc
    assert event.end_at_utc() == t_utc
    assert event.start_at_utc().utcoffset().total_seconds() == 0


def test_utc_accessors_convert_other_zones():
    t_utc = datetime(2010, 3, 8, 2, 0, 0, tzinfo=timezone.utc)
    t_nyk = t_utc.astimezone(ZoneInfo("America/New_York"))
    event = CalendarEvent(start_at=t_nyk, end_at=t_nyk)

    start = event.start_at_utc()

    assert start == t_utc
    assert (start.hour, start.tzinfo) == (2, timezone.utc)
    assert event.end_at_utc() == t_utc


def test_new_york_morning_equals_utc_afternoon():
    event = CalendarEvent(start_at=datetime(2010, 1, 15, 9, 0, tzinfo=ZoneInfo("America/New_York")))

    assert event.start_at_utc() == datetime(2010, 1, 15, 14, 0, tzinfo=timezone.utc)
    assert event.start_at_utc().hour == 14


def test_naive_datetimes_are_taken_as_utc():
    event = CalendarEvent(end_at=datetime(2010, 1, 1, 12, 0, 0))

    assert event.end_at_utc() == datetime(2010, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
