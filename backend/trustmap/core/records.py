"""Records: immutable value types for entities, signals, guides and schedules.

Invariants:
    - Records are frozen: a mutation always produces a new record via dataclasses.replace
    - A snapshot holding old references never observes a half-applied update
    - tags hold unique strings in first-seen order
    - A DayHours with closed=True carries no open/close times
    - work_hours is a read-only mapping, so a shared record cannot be edited in place

Design Decisions:
    - Frozen dataclasses, not Pydantic models: core stays free of boundary validation
      (schemas/ validate at the API edge, core/entity_fields validates at the store edge)
    - work_hours keyed by Weekday enum: a schedule cannot name a day that does not exist
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from trustmap.core.domain_types import (
    EntityId, SignalId, GuideId, EntityStatus, Weekday,
)


@dataclass(frozen=True)
class DayHours:
    """One weekday of a schedule: closed, or open from `open` until `close`."""
    closed: bool = False
    open: str | None = None
    close: str | None = None


# Read-only view; parse_schedule builds these over a private dict
WorkHours = Mapping[Weekday, DayHours]


@dataclass(frozen=True)
class Entity:
    """A listed place or activity."""
    id: EntityId
    type: str
    area: str
    title: str
    short_description: str
    created_at: datetime
    updated_at: datetime
    tags: tuple[str, ...] = ()
    rating: float = 0.0
    rating_count: int = 0
    status: EntityStatus = EntityStatus.UNVERIFIED
    work_hours: WorkHours | None = None
    last_confirmed_at: datetime | None = None

    @property
    def is_archived(self) -> bool:
        return self.status == EntityStatus.ARCHIVED


@dataclass(frozen=True)
class Signal:
    """An immutable assertion about an entity (confirmation, report, ...)."""
    id: SignalId
    entity_id: EntityId
    type: str
    created_at: datetime
    comment: str | None = None


@dataclass(frozen=True)
class Guide:
    """Read-only editorial content grouped by category."""
    id: GuideId
    category: str
    title: str
    content: str = ""
