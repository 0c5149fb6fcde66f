"""Work Hours tests: tri-state evaluation and weekly display lines.

Tests cover:
    - No schedule -> UNKNOWN
    - Half-open interval: 16:59 open, 17:00 closed, opening minute open
    - Day absent from schedule -> CLOSED; explicitly closed day -> CLOSED
    - Weekday and time resolved in the configured zone
    - Overnight range evaluates to CLOSED (preserved limitation)
    - HH:MM parsing and schedule validation errors
    - format_work_hours order, closed rendering, skipped days

Design Decisions:
    - Pure core functions: no fixtures, instants built inline
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from trustmap.core.domain_types import OpenStatus, Weekday
from trustmap.core.errors import InvalidInputError
from trustmap.core.records import DayHours
from trustmap.core.work_hours import (
    evaluate_open_status, format_work_hours, open_status_label,
    parse_hhmm, parse_schedule, resolve_timezone,
)


MONDAY_9_TO_5 = {Weekday.MONDAY: DayHours(open="09:00", close="17:00")}


def _monday(hour: int, minute: int) -> datetime:
    # 2026-03-02 is a Monday
    return datetime(2026, 3, 2, hour, minute, tzinfo=timezone.utc)


# --- evaluate_open_status -----------------------------------------------------

def test_no_schedule_is_unknown():
    assert evaluate_open_status(None, _monday(12, 0), "UTC") == OpenStatus.UNKNOWN


def test_one_minute_before_close_is_open():
    assert evaluate_open_status(MONDAY_9_TO_5, _monday(16, 59), "UTC") == OpenStatus.OPEN


def test_closing_minute_is_closed():
    assert evaluate_open_status(MONDAY_9_TO_5, _monday(17, 0), "UTC") == OpenStatus.CLOSED


def test_opening_minute_is_open():
    assert evaluate_open_status(MONDAY_9_TO_5, _monday(9, 0), "UTC") == OpenStatus.OPEN


def test_before_opening_is_closed():
    assert evaluate_open_status(MONDAY_9_TO_5, _monday(8, 59), "UTC") == OpenStatus.CLOSED


def test_day_absent_from_schedule_is_closed():
    tuesday = datetime(2026, 3, 3, 12, 0, tzinfo=timezone.utc)
    assert evaluate_open_status(MONDAY_9_TO_5, tuesday, "UTC") == OpenStatus.CLOSED


def test_explicitly_closed_day_is_closed():
    schedule = {Weekday.MONDAY: DayHours(closed=True)}
    assert evaluate_open_status(schedule, _monday(12, 0), "UTC") == OpenStatus.CLOSED


def test_empty_schedule_is_closed_not_unknown():
    assert evaluate_open_status({}, _monday(12, 0), "UTC") == OpenStatus.CLOSED


def test_time_of_day_uses_configured_zone():
    # 16:30 UTC is 17:30 in Berlin (CET, UTC+1)
    now = _monday(16, 30)
    assert evaluate_open_status(MONDAY_9_TO_5, now, "UTC") == OpenStatus.OPEN
    assert evaluate_open_status(MONDAY_9_TO_5, now, "Europe/Berlin") == OpenStatus.CLOSED


def test_weekday_uses_configured_zone():
    # Sunday 23:30 UTC is Monday 00:30 in Berlin
    now = datetime(2026, 3, 1, 23, 30, tzinfo=timezone.utc)
    schedule = {Weekday.MONDAY: DayHours(open="00:00", close="01:00")}
    assert evaluate_open_status(schedule, now, "UTC") == OpenStatus.CLOSED
    assert evaluate_open_status(schedule, now, ZoneInfo("Europe/Berlin")) == OpenStatus.OPEN


def test_naive_instant_is_taken_as_utc():
    naive = datetime(2026, 3, 2, 16, 59)
    assert evaluate_open_status(MONDAY_9_TO_5, naive, "UTC") == OpenStatus.OPEN


def test_overnight_range_is_closed():
    schedule = {Weekday.MONDAY: DayHours(open="22:00", close="02:00")}
    assert evaluate_open_status(schedule, _monday(23, 0), "UTC") == OpenStatus.CLOSED
    assert evaluate_open_status(schedule, _monday(1, 0), "UTC") == OpenStatus.CLOSED


def test_unknown_timezone_raises_invalid_input():
    with pytest.raises(InvalidInputError) as exc:
        resolve_timezone("Mars/Olympus_Mons")
    assert exc.value.field == "timezone"


def test_open_status_labels():
    assert open_status_label(OpenStatus.OPEN) == "Open"
    assert open_status_label(OpenStatus.CLOSED) == "Closed"
    assert open_status_label(OpenStatus.UNKNOWN) == ""


# --- parsing ------------------------------------------------------------------

def test_parse_hhmm_returns_minutes_since_midnight():
    assert parse_hhmm("00:00") == 0
    assert parse_hhmm("09:30") == 570
    assert parse_hhmm("23:59") == 1439


@pytest.mark.parametrize("bad", ["9:00", "24:00", "12:60", "1200", "ab:cd", ""])
def test_parse_hhmm_rejects_malformed_times(bad):
    with pytest.raises(InvalidInputError):
        parse_hhmm(bad)


def test_parse_schedule_accepts_raw_mapping():
    schedule = parse_schedule({
        "monday": {"open": "09:00", "close": "17:00"},
        "sunday": {"closed": True},
    })
    assert schedule == {
        Weekday.MONDAY: DayHours(open="09:00", close="17:00"),
        Weekday.SUNDAY: DayHours(closed=True),
    }


def test_parse_schedule_passes_none_through():
    assert parse_schedule(None) is None


def test_parse_schedule_rejects_unknown_weekday():
    with pytest.raises(InvalidInputError):
        parse_schedule({"funday": {"closed": True}})


def test_parse_schedule_rejects_open_day_without_close():
    with pytest.raises(InvalidInputError) as exc:
        parse_schedule({"monday": {"open": "09:00"}})
    assert exc.value.field == "work_hours.monday"


def test_parse_schedule_rejects_unknown_day_keys():
    with pytest.raises(InvalidInputError):
        parse_schedule({"monday": {"open": "09:00", "close": "17:00", "lunch": "13:00"}})


# --- format_work_hours --------------------------------------------------------

def test_format_is_empty_without_schedule():
    assert format_work_hours(None) == []


def test_format_iterates_monday_first_and_skips_missing_days():
    schedule = {
        Weekday.SUNDAY: DayHours(closed=True),
        Weekday.WEDNESDAY: DayHours(open="10:00", close="18:00"),
        Weekday.MONDAY: DayHours(open="09:00", close="17:00"),
    }
    assert format_work_hours(schedule) == [
        "Mon: 09:00-17:00",
        "Wed: 10:00-18:00",
        "Sun: Closed",
    ]
