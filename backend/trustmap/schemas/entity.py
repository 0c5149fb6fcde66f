"""Entity Schemas: Pydantic models with field-level validation for API boundaries.

Invariants:
    - EntityCreate/EntityUpdate forbid extra keys (unknown fields -> 400, never dropped)
    - EntityUpdate has no id, timestamps, rating or rating_count: those are not client-writable
    - DayHoursSchema cross-validates closed vs open/close
    - EntityResponse always carries the derived open_status

Design Decisions:
    - Partial update via model_dump(exclude_unset=True): "absent" and "set to null" differ,
      so work_hours can be cleared explicitly
    - HH:MM checked by pattern here; the core re-checks ranges on its own edge
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from trustmap.core.domain_types import EntityStatus, OpenStatus, Weekday
from trustmap.core.records import Entity


_HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


class DayHoursSchema(BaseModel):
    """One weekday: {closed: true} or {open: "HH:MM", close: "HH:MM"}."""
    model_config = ConfigDict(extra="forbid")

    closed: bool = False
    open: str | None = Field(None, pattern=_HHMM)
    close: str | None = Field(None, pattern=_HHMM)

    @model_validator(mode="after")
    def validate_open_close(self):
        if not self.closed and (self.open is None or self.close is None):
            raise ValueError("open day requires both 'open' and 'close'")
        return self


class EntityCreate(BaseModel):
    """Entity creation: id and timestamps are assigned by the store."""
    model_config = ConfigDict(extra="forbid")

    type: str = Field(min_length=1, max_length=100)
    area: str = Field(min_length=1, max_length=200)
    title: str = Field(min_length=1, max_length=300)
    short_description: str = Field(max_length=5000)
    tags: list[str] = Field(default_factory=list)
    rating: float = Field(0.0, ge=0.0, le=5.0)
    rating_count: int = Field(0, ge=0)
    status: EntityStatus = EntityStatus.UNVERIFIED
    work_hours: dict[Weekday, DayHoursSchema] | None = None


class EntityUpdate(BaseModel):
    """Partial update: only the fields a client may change."""
    model_config = ConfigDict(extra="forbid")

    type: str | None = Field(None, min_length=1, max_length=100)
    area: str | None = Field(None, min_length=1, max_length=200)
    title: str | None = Field(None, min_length=1, max_length=300)
    short_description: str | None = Field(None, max_length=5000)
    tags: list[str] | None = None
    status: EntityStatus | None = None
    work_hours: dict[Weekday, DayHoursSchema] | None = None

    def changes(self) -> dict:
        """Only the keys the client actually sent."""
        return self.model_dump(exclude_unset=True)


class EntityResponse(BaseModel):
    """Entity as returned to clients, plus the derived open/closed verdict."""
    id: str
    type: str
    area: str
    title: str
    short_description: str
    tags: list[str]
    rating: float
    rating_count: int
    status: EntityStatus
    work_hours: dict[Weekday, DayHoursSchema] | None
    last_confirmed_at: datetime | None
    created_at: datetime
    updated_at: datetime
    open_status: OpenStatus = OpenStatus.UNKNOWN

    @classmethod
    def from_record(
        cls, entity: Entity, open_status: OpenStatus = OpenStatus.UNKNOWN,
    ) -> "EntityResponse":
        work_hours = None
        if entity.work_hours is not None:
            work_hours = {
                day: DayHoursSchema(closed=h.closed, open=h.open, close=h.close)
                for day, h in entity.work_hours.items()
            }
        return cls(
            id=entity.id,
            type=entity.type,
            area=entity.area,
            title=entity.title,
            short_description=entity.short_description,
            tags=list(entity.tags),
            rating=entity.rating,
            rating_count=entity.rating_count,
            status=entity.status,
            work_hours=work_hours,
            last_confirmed_at=entity.last_confirmed_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            open_status=open_status,
        )


class EntityListResponse(BaseModel):
    entities: list[EntityResponse]
    total: int


class WorkHoursResponse(BaseModel):
    """Open/closed verdict plus the weekly display lines."""
    entity_id: str
    open_status: OpenStatus
    label: str
    schedule_lines: list[str]


class DeleteResponse(BaseModel):
    success: bool
