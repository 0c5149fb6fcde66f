"""Work Hours: open/closed evaluation and weekly display for entity schedules.

Invariants:
    - Pure functions: no IO, no clock reads (the caller passes `now`)
    - No schedule -> UNKNOWN; day missing or closed -> CLOSED
    - Open interval is half-open: open <= minute < close (closing minute counts as closed)
    - Weekday is resolved in the configured zone, never the host's local zone
    - format_work_hours always iterates Monday -> Sunday

Design Decisions:
    - OpenStatus enum over bool-or-None: three states, three values
    - Naive `now` is taken as UTC, matching FixedClock
    - Overnight ranges (close <= open) cannot be expressed and evaluate to CLOSED;
      the schedule model has no way to say which day the tail belongs to
"""

from collections.abc import Mapping
from datetime import datetime, timezone, tzinfo
from types import MappingProxyType
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from trustmap.core.domain_types import OpenStatus, Weekday, WEEK_ORDER
from trustmap.core.errors import InvalidInputError
from trustmap.core.records import DayHours, WorkHours


DAY_LABELS: dict[Weekday, str] = {
    Weekday.MONDAY: "Mon",
    Weekday.TUESDAY: "Tue",
    Weekday.WEDNESDAY: "Wed",
    Weekday.THURSDAY: "Thu",
    Weekday.FRIDAY: "Fri",
    Weekday.SATURDAY: "Sat",
    Weekday.SUNDAY: "Sun",
}
CLOSED_LABEL = "Closed"

_STATUS_LABELS: dict[OpenStatus, str] = {
    OpenStatus.OPEN: "Open",
    OpenStatus.CLOSED: "Closed",
    OpenStatus.UNKNOWN: "",
}
_DAY_KEYS = {"closed", "open", "close"}


# ─── Parsing ─────────────────────────────────────────────────────

def parse_hhmm(value: str, field: str = "work_hours") -> int:
    """Parse "HH:MM" into minutes since midnight. Raises InvalidInputError."""
    if not isinstance(value, str):
        raise InvalidInputError(f"Expected 'HH:MM' string, got {type(value).__name__}", field)
    hours, sep, minutes = value.partition(":")
    if (
        not sep
        or len(hours) != 2 or len(minutes) != 2
        or not hours.isdigit() or not minutes.isdigit()
    ):
        raise InvalidInputError(f"Invalid time '{value}', expected 'HH:MM'", field)
    h, m = int(hours), int(minutes)
    if h > 23 or m > 59:
        raise InvalidInputError(f"Time out of range: '{value}'", field)
    return h * 60 + m


def parse_day_hours(entry: object, field: str) -> DayHours:
    """Validate one day entry: {closed: true} or {open: "HH:MM", close: "HH:MM"}."""
    if isinstance(entry, DayHours):
        entry = {"closed": entry.closed, "open": entry.open, "close": entry.close}
    if not isinstance(entry, Mapping):
        raise InvalidInputError("Day entry must be an object", field)
    unknown = set(entry) - _DAY_KEYS
    if unknown:
        raise InvalidInputError(f"Unknown day keys: {', '.join(sorted(unknown))}", field)

    closed = entry.get("closed", False)
    if not isinstance(closed, bool):
        raise InvalidInputError("'closed' must be a boolean", field)
    if closed:
        return DayHours(closed=True)

    opens, closes = entry.get("open"), entry.get("close")
    if opens is None or closes is None:
        raise InvalidInputError("Open day requires both 'open' and 'close'", field)
    parse_hhmm(opens, field)
    parse_hhmm(closes, field)
    return DayHours(open=opens, close=closes)


def parse_schedule(raw: object, field: str = "work_hours") -> WorkHours | None:
    """Validate a raw weekday mapping into a read-only WorkHours. None passes through."""
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise InvalidInputError("work_hours must be an object keyed by weekday", field)
    schedule: dict[Weekday, DayHours] = {}
    for key, entry in raw.items():
        try:
            day = Weekday(key)
        except ValueError:
            raise InvalidInputError(f"Unknown weekday '{key}'", field) from None
        schedule[day] = parse_day_hours(entry, f"{field}.{day.value}")
    return MappingProxyType(schedule)


def resolve_timezone(tz: str | tzinfo) -> tzinfo:
    """Accept an IANA zone name or a tzinfo instance."""
    if isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidInputError(f"Unknown timezone '{tz}'", "timezone") from None


# ─── Evaluation ──────────────────────────────────────────────────

def evaluate_open_status(
    schedule: WorkHours | None, now: datetime, tz: str | tzinfo,
) -> OpenStatus:
    """Tri-state verdict for `schedule` at instant `now` in zone `tz`."""
    if schedule is None:
        return OpenStatus.UNKNOWN

    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(resolve_timezone(tz))

    day = schedule.get(WEEK_ORDER[local.weekday()])
    if day is None or day.closed or day.open is None or day.close is None:
        return OpenStatus.CLOSED

    current = local.hour * 60 + local.minute
    opens = parse_hhmm(day.open)
    closes = parse_hhmm(day.close)
    return OpenStatus.OPEN if opens <= current < closes else OpenStatus.CLOSED


def open_status_label(status: OpenStatus) -> str:
    """Short display label; empty for UNKNOWN."""
    return _STATUS_LABELS[status]


# ─── Display ─────────────────────────────────────────────────────

def format_work_hours(schedule: WorkHours | None) -> list[str]:
    """One line per configured day, Monday first. Days not in schedule are skipped."""
    if not schedule:
        return []
    lines = []
    for day in WEEK_ORDER:
        hours = schedule.get(day)
        if hours is None:
            continue
        if hours.closed:
            lines.append(f"{DAY_LABELS[day]}: {CLOSED_LABEL}")
        else:
            lines.append(f"{DAY_LABELS[day]}: {hours.open}-{hours.close}")
    return lines
