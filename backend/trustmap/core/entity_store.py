"""Entity Store: exclusive in-memory owner of the entity collection.

Invariants:
    - Every read and write of entities goes through this class
    - Entity ids are unique and never reassigned; entities are never physically removed
    - Every mutation sets updated_at to the Clock's current instant
    - list() returns a snapshot (new list of immutable records), never the live collection
    - Writers hold the lock exclusively, readers share it, and only for one operation

Design Decisions:
    - dict keyed by id: O(1) get/update, insertion order doubles as source order
      for stable sorting downstream
    - Records are frozen and replaced on write, so snapshot holders cannot see
      a partially-updated record even after the lock is released
    - UUID ids from an injectable factory: no collisions under rapid creation
    - soft_delete is update(status=archived): one mutation path, one timestamp rule
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import datetime
from uuid import uuid4

from trustmap.core.clock import Clock
from trustmap.core.domain_types import EntityId, EntityStatus
from trustmap.core.entity_fields import validate_create_fields, validate_update_fields
from trustmap.core.errors import InvalidInputError, ResourceNotFoundError
from trustmap.core.records import Entity
from trustmap.core.rw_lock import ReadWriteLock


def _new_entity_id() -> EntityId:
    return EntityId(str(uuid4()))


class EntityStore:
    """Owns entities behind a readers-writer lock."""

    def __init__(
        self,
        clock: Clock,
        id_factory: Callable[[], EntityId] = _new_entity_id,
    ):
        self._clock = clock
        self._id_factory = id_factory
        self._entities: dict[EntityId, Entity] = {}
        self._lock = ReadWriteLock()

    # --- Reads ----------------------------------------------------------------

    def get(self, entity_id: str) -> Entity:
        with self._lock.read():
            entity = self._entities.get(EntityId(entity_id))
        if entity is None:
            raise ResourceNotFoundError("Entity", entity_id)
        return entity

    def find(self, entity_id: str) -> Entity | None:
        """Like get(), but None instead of ResourceNotFoundError."""
        with self._lock.read():
            return self._entities.get(EntityId(entity_id))

    def list(self) -> list[Entity]:
        with self._lock.read():
            return list(self._entities.values())

    def count(self) -> int:
        with self._lock.read():
            return len(self._entities)

    def distinct_areas(self) -> list[str]:
        """Sorted distinct areas across the whole collection, archived included."""
        with self._lock.read():
            return sorted({e.area for e in self._entities.values()})

    def distinct_tags(self) -> list[str]:
        """Sorted distinct tags across the whole collection, archived included."""
        with self._lock.read():
            return sorted({t for e in self._entities.values() for t in e.tags})

    # --- Writes ---------------------------------------------------------------

    def create(self, fields: Mapping[str, object]) -> Entity:
        """Validate fields, assign id and timestamps, append."""
        values = validate_create_fields(fields)
        with self._lock.write():
            entity_id = self._id_factory()
            if entity_id in self._entities:
                raise InvalidInputError(f"Duplicate entity id '{entity_id}'", "id")
            now = self._clock.now()
            entity = Entity(id=entity_id, created_at=now, updated_at=now, **values)
            self._entities[entity_id] = entity
        return entity

    def update(self, entity_id: str, changes: Mapping[str, object]) -> Entity:
        """Merge only the supplied fields; everything else is left untouched."""
        values = validate_update_fields(changes)
        return self._replace(entity_id, values)

    def soft_delete(self, entity_id: str) -> Entity:
        """Archive an entity. Repeating the call is harmless."""
        return self._replace(entity_id, {"status": EntityStatus.ARCHIVED})

    def mark_confirmed(self, entity_id: str, at: datetime) -> Entity | None:
        """Stamp last_confirmed_at and updated_at with `at`. None if absent."""
        key = EntityId(entity_id)
        with self._lock.write():
            current = self._entities.get(key)
            if current is None:
                return None
            entity = replace(current, last_confirmed_at=at, updated_at=at)
            self._entities[key] = entity
        return entity

    def load(self, entities: Iterable[Entity]) -> int:
        """Bulk-insert pre-built records (seed data). Returns number loaded."""
        batch = list(entities)
        with self._lock.write():
            seen = set(self._entities)
            for entity in batch:
                if entity.id in seen:
                    raise InvalidInputError(f"Duplicate entity id '{entity.id}'", "id")
                seen.add(entity.id)
            for entity in batch:
                self._entities[entity.id] = entity
        return len(batch)

    def reset(self) -> None:
        with self._lock.write():
            self._entities.clear()

    def _replace(self, entity_id: str, values: dict) -> Entity:
        key = EntityId(entity_id)
        with self._lock.write():
            current = self._entities.get(key)
            if current is None:
                raise ResourceNotFoundError("Entity", entity_id)
            entity = replace(current, **values, updated_at=self._clock.now())
            self._entities[key] = entity
        return entity
