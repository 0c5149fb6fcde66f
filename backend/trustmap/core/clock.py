"""Clock: injectable source of the current instant.

Invariants:
    - now() always returns a timezone-aware UTC datetime
    - Nothing in core reads datetime.now() directly; every "now" flows through a Clock

Design Decisions:
    - Protocol over ABC: structural subtyping, any object with now() works
    - FixedClock is mutable (set/advance) so tests can step through time windows
"""

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Contract for anything that can tell the time."""
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Deterministic clock for tests. Naive datetimes are taken as UTC."""

    def __init__(self, instant: datetime):
        self._instant = _as_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = _as_utc(instant)

    def advance(self, **delta: float) -> datetime:
        """Move forward by timedelta kwargs (seconds=5, minutes=1, ...)."""
        self._instant = self._instant + timedelta(**delta)
        return self._instant


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)
