"""Seed Loader: reads the initial directory document from a JSON file.

Invariants:
    - File contents validated by SeedDocument before any record is built
    - Entity fields pass through the same core validation as create()
    - Missing timestamps default to the load instant; naive timestamps are UTC
    - Any failure maps to SeedLoadError carrying the file path

Design Decisions:
    - Pydantic model_validate_json: one parse + validate step, precise error locations
    - Builds frozen records directly (ids come from the file, not the id factory)
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from trustmap.core.domain_types import EntityId, GuideId, SignalId
from trustmap.core.entity_fields import validate_create_fields
from trustmap.core.errors import TrustmapError
from trustmap.core.records import Entity, Guide, Signal
from trustmap.schemas.seed import SeedDocument, SeedEntity, SeedSignal

logger = logging.getLogger(__name__)


class SeedLoadError(Exception):
    """Seed file missing, unreadable or invalid."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot load seed '{path}': {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class SeedData:
    entities: list[Entity]
    signals: list[Signal]
    guides: list[Guide]


def read_seed_document(path: str | Path) -> SeedDocument:
    """Read and validate a seed JSON file."""
    seed_path = Path(path)
    try:
        raw = seed_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SeedLoadError(str(seed_path), e.strerror or str(e)) from e
    try:
        return SeedDocument.model_validate_json(raw)
    except ValidationError as e:
        raise SeedLoadError(str(seed_path), f"{e.error_count()} validation error(s)") from e


def build_seed_data(document: SeedDocument, now: datetime) -> SeedData:
    """Convert a validated document into core records."""
    return SeedData(
        entities=[_build_entity(e, now) for e in document.entities],
        signals=[_build_signal(s, now) for s in document.signals],
        guides=[
            Guide(id=GuideId(g.id), category=g.category, title=g.title, content=g.content)
            for g in document.guides
        ],
    )


def load_seed(path: str | Path, now: datetime) -> SeedData:
    seed = read_seed_document(path)
    try:
        data = build_seed_data(seed, now)
    except TrustmapError as e:
        raise SeedLoadError(str(path), e.message) from e
    logger.info(
        f"Seed loaded: {len(data.entities)} entities, "
        f"{len(data.signals)} signals, {len(data.guides)} guides",
    )
    return data


def _build_entity(seed: SeedEntity, now: datetime) -> Entity:
    fields = seed.model_dump(
        include={
            "type", "area", "title", "short_description", "tags",
            "rating", "rating_count", "status", "work_hours",
        },
    )
    values = validate_create_fields(fields)
    created_at = _utc(seed.created_at) or now
    return Entity(
        id=EntityId(seed.id),
        created_at=created_at,
        updated_at=_utc(seed.updated_at) or created_at,
        last_confirmed_at=_utc(seed.last_confirmed_at),
        **values,
    )


def _build_signal(seed: SeedSignal, now: datetime) -> Signal:
    return Signal(
        id=SignalId(seed.id),
        entity_id=EntityId(seed.entity_id),
        type=seed.type,
        comment=seed.comment,
        created_at=_utc(seed.created_at) or now,
    )


def _utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
