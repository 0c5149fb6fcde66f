"""Query Engine: pure filter/search/sort pipeline over an entity snapshot.

Invariants:
    - Pure functions: no IO, no state, the input snapshot is never mutated
    - Archived entities are excluded unless the caller asks for a status explicitly
    - Tag filter is OR: one shared tag is enough
    - Search is a case-insensitive substring match on title, short_description or any tag
    - Result is sorted by rating descending; equal ratings keep source order
    - Unrecognized filter values narrow to an empty result, never raise

Design Decisions:
    - Stage order mirrors the listing semantics (exclude, type, area, tags, search, status,
      sort, truncate) so each stage only narrows what the previous one kept
    - sorted(reverse=True) is stable, which gives the deterministic tie order for free
    - popular() ignores every other filter: it is a curated view, not a query
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from trustmap.core.domain_types import EntityStatus
from trustmap.core.records import Entity


DEFAULT_LIST_LIMIT: int = 100
DEFAULT_POPULAR_LIMIT: int = 6


@dataclass(frozen=True)
class EntityQuery:
    """Caller filters. Empty strings and empty tag lists mean "not supplied"."""
    type: str | None = None
    area: str | None = None
    tags: Sequence[str] = field(default_factory=tuple)
    search: str | None = None
    status: str | None = None
    limit: int | None = None
    popular: bool = False


@dataclass(frozen=True)
class QueryResult:
    entities: list[Entity]

    @property
    def total(self) -> int:
        return len(self.entities)


# ─── Pipeline stages ─────────────────────────────────────────────

def _matches_search(entity: Entity, term: str) -> bool:
    return (
        term in entity.title.lower()
        or term in entity.short_description.lower()
        or any(term in tag.lower() for tag in entity.tags)
    )


def filter_entities(entities: Iterable[Entity], query: EntityQuery) -> list[Entity]:
    """Stages 1-6: exclusion and narrowing filters, source order preserved."""
    if query.status:
        result = list(entities)
    else:
        result = [e for e in entities if not e.is_archived]

    if query.type:
        result = [e for e in result if e.type == query.type]
    if query.area:
        result = [e for e in result if e.area == query.area]
    if query.tags:
        wanted = set(query.tags)
        result = [e for e in result if wanted.intersection(e.tags)]
    if query.search:
        term = query.search.lower()
        result = [e for e in result if _matches_search(e, term)]
    if query.status:
        result = [e for e in result if e.status == query.status]
    return result


def sort_by_rating(entities: Iterable[Entity]) -> list[Entity]:
    """Rating descending, stable for ties."""
    return sorted(entities, key=lambda e: e.rating, reverse=True)


def _truncate(entities: list[Entity], limit: int) -> list[Entity]:
    return entities[:max(limit, 0)]


# ─── Operations ──────────────────────────────────────────────────

def list_entities(
    entities: Iterable[Entity], query: EntityQuery, default_limit: int = DEFAULT_LIST_LIMIT,
) -> list[Entity]:
    """Full pipeline, then truncate to query.limit (or default_limit)."""
    limit = default_limit if query.limit is None else query.limit
    return _truncate(sort_by_rating(filter_entities(entities, query)), limit)


def popular_entities(
    entities: Iterable[Entity], limit: int = DEFAULT_POPULAR_LIMIT,
) -> list[Entity]:
    """Top-rated active entities; all other filters are ignored."""
    active = [e for e in entities if e.status == EntityStatus.ACTIVE]
    return _truncate(sort_by_rating(active), limit)


def run_query(
    entities: Iterable[Entity],
    query: EntityQuery,
    default_limit: int = DEFAULT_LIST_LIMIT,
    default_popular_limit: int = DEFAULT_POPULAR_LIMIT,
) -> QueryResult:
    """Dispatch between popular() and the filter pipeline."""
    if query.popular:
        limit = default_popular_limit if query.limit is None else query.limit
        return QueryResult(popular_entities(entities, limit))
    return QueryResult(list_entities(entities, query, default_limit))
