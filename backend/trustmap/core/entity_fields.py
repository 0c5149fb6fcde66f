"""Entity Fields: explicit field whitelist and type checks for create/update payloads.

Invariants:
    - Unknown keys are rejected, never silently dropped or coerced
    - id and timestamps are store-assigned and never accepted from callers
    - rating/rating_count may be seeded on create but never changed by update
    - Returned dicts hold normalized values (tuple tags, EntityStatus, WorkHours)

Design Decisions:
    - Validation lives at the store edge as well as the API edge: the store is
      callable without FastAPI (seed loading, tests) and must keep its invariants
    - bool is rejected where a number is expected (bool subclasses int)
"""

from collections.abc import Mapping

from trustmap.core.domain_types import EntityStatus, MIN_RATING, MAX_RATING
from trustmap.core.errors import InvalidInputError
from trustmap.core.work_hours import parse_schedule


TEXT_FIELDS: frozenset[str] = frozenset({"type", "area", "title", "short_description"})
UPDATABLE_FIELDS: frozenset[str] = TEXT_FIELDS | {"tags", "status", "work_hours"}
CREATABLE_FIELDS: frozenset[str] = UPDATABLE_FIELDS | {"rating", "rating_count"}
REQUIRED_FIELDS: frozenset[str] = TEXT_FIELDS
STORE_ASSIGNED_FIELDS: frozenset[str] = frozenset(
    {"id", "created_at", "updated_at", "last_confirmed_at"},
)


def validate_create_fields(fields: Mapping[str, object]) -> dict:
    """Validate a create payload. All REQUIRED_FIELDS must be present."""
    _reject_unknown(fields, CREATABLE_FIELDS)
    missing = sorted(REQUIRED_FIELDS - set(fields))
    if missing:
        raise InvalidInputError(f"Missing required fields: {', '.join(missing)}", missing[0])
    return {name: _normalize(name, value) for name, value in fields.items()}


def validate_update_fields(changes: Mapping[str, object]) -> dict:
    """Validate a partial update. Only supplied keys are returned."""
    _reject_unknown(changes, UPDATABLE_FIELDS)
    return {name: _normalize(name, value) for name, value in changes.items()}


def _reject_unknown(fields: Mapping[str, object], allowed: frozenset[str]) -> None:
    for name in fields:
        if name in STORE_ASSIGNED_FIELDS:
            raise InvalidInputError(f"Field '{name}' is assigned by the store", name)
        if name not in allowed:
            raise InvalidInputError(f"Unknown or read-only field '{name}'", name)


def _normalize(name: str, value: object) -> object:
    if name in TEXT_FIELDS:
        if not isinstance(value, str):
            raise InvalidInputError(f"'{name}' must be a string", name)
        return value
    if name == "tags":
        return _normalize_tags(value)
    if name == "status":
        try:
            return EntityStatus(value)
        except ValueError:
            raise InvalidInputError(f"Unknown status '{value}'", name) from None
    if name == "work_hours":
        return parse_schedule(value, name)
    if name == "rating":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError("'rating' must be a number", name)
        if not MIN_RATING <= value <= MAX_RATING:
            raise InvalidInputError(
                f"'rating' must be within [{MIN_RATING}, {MAX_RATING}]", name,
            )
        return float(value)
    if name == "rating_count":
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidInputError("'rating_count' must be a non-negative integer", name)
        return value
    raise InvalidInputError(f"Unknown field '{name}'", name)


def _normalize_tags(value: object) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
        raise InvalidInputError("'tags' must be a list of strings", "tags")
    seen: dict[str, None] = {}
    for tag in value:
        if not isinstance(tag, str):
            raise InvalidInputError("'tags' must be a list of strings", "tags")
        seen.setdefault(tag, None)
    return tuple(seen)
