"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - EntityId, SignalId, GuideId wrap opaque strings: never build ids by hand in domain logic
    - Rating is bounded 0.0–5.0, RatingCount is non-negative
    - All valid states encoded as Enums: no raw string matching
    - WEEK_ORDER is the single source of truth for display order (Monday first)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders and compare equal to raw
      query strings, so permissive filters need no parsing step
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EntityId = NewType("EntityId", str)
SignalId = NewType("SignalId", str)
GuideId = NewType("GuideId", str)


# ─── Value Types ─────────────────────────────────────────────────

Rating = NewType("Rating", float)             # 0.0–5.0
RatingCount = NewType("RatingCount", int)     # >= 0

MIN_RATING: float = 0.0
MAX_RATING: float = 5.0


# ─── Enums ───────────────────────────────────────────────────────

class EntityStatus(str, Enum):
    """Entity moderation states. ARCHIVED is terminal and hidden by default."""
    ACTIVE = "active"
    UNVERIFIED = "unverified"
    FLAGGED = "flagged"
    ARCHIVED = "archived"


class SignalType(str, Enum):
    """Known signal types. Only CONFIRM mutates the referenced entity."""
    CONFIRM = "confirm"
    REPORT = "report"
    CLOSED = "closed"
    MOVED = "moved"


class SignalEffect(str, Enum):
    """What appending a signal did to the entity collection."""
    CONFIRMED = "confirmed"   # confirm signal, entity stamped
    RECORDED = "recorded"     # non-confirm signal, entity untouched
    NO_OP = "no_op"           # confirm signal for a missing entity


class OpenStatus(str, Enum):
    """Tri-state verdict of the work hours evaluator."""
    UNKNOWN = "unknown"
    OPEN = "open"
    CLOSED = "closed"


class Weekday(str, Enum):
    """Schedule keys. Values match the keys used in stored work_hours."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


# Index matches datetime.weekday() (Monday == 0)
WEEK_ORDER: tuple[Weekday, ...] = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
    Weekday.SUNDAY,
)
