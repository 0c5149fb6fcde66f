"""Seed Schemas: shape of the initial directory document loaded at startup.

Invariants:
    - Seed entities carry their own ids; timestamps are optional (loader fills them)
    - Unknown keys are rejected so a typo in the seed file fails startup loudly

Design Decisions:
    - Reuses DayHoursSchema: one definition of a valid day entry for API and seed
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from trustmap.core.domain_types import EntityStatus, Weekday
from trustmap.schemas.entity import DayHoursSchema


class SeedEntity(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    type: str
    area: str
    title: str
    short_description: str = ""
    tags: list[str] = Field(default_factory=list)
    rating: float = Field(0.0, ge=0.0, le=5.0)
    rating_count: int = Field(0, ge=0)
    status: EntityStatus = EntityStatus.UNVERIFIED
    work_hours: dict[Weekday, DayHoursSchema] | None = None
    last_confirmed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SeedSignal(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    entity_id: str
    type: str
    comment: str | None = None
    created_at: datetime | None = None


class SeedGuide(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    category: str
    title: str
    content: str = ""


class SeedDocument(BaseModel):
    entities: list[SeedEntity] = Field(default_factory=list)
    signals: list[SeedSignal] = Field(default_factory=list)
    guides: list[SeedGuide] = Field(default_factory=list)
