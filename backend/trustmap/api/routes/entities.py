"""Entity Routes: listing, CRUD and work-hours lookups for directory entities.

Invariants:
    - Routes never contain business logic (delegate to DirectoryService)
    - User input is validated by Pydantic before reaching the handler
    - Unknown ids surface as ResourceNotFoundError -> 404 via the global handler
    - DELETE archives (soft delete); entities are never physically removed

Design Decisions:
    - tags accepted as a comma-separated query string (matches existing clients)
    - `q` is the search parameter name; `popular=true` switches to the curated view
    - limit above max_list_limit is clamped, not rejected
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from trustmap.config import get_settings
from trustmap.core.query_engine import EntityQuery
from trustmap.schemas.entity import (
    DeleteResponse, EntityCreate, EntityListResponse, EntityResponse,
    EntityUpdate, WorkHoursResponse,
)
from trustmap.services.directory_service import DirectoryService, get_directory

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/entities", tags=["entities"])


def _split_tags(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(t.strip() for t in raw.split(",") if t.strip())


@router.get("", response_model=EntityListResponse)
async def list_entities(
    type_filter: str | None = Query(None, alias="type"),
    area: str | None = Query(None),
    tags: str | None = Query(None, description="Comma-separated, OR semantics"),
    q: str | None = Query(None, max_length=200),
    status_filter: str | None = Query(None, alias="status"),
    limit: int | None = Query(None, ge=1),
    popular: bool = Query(False),
    directory: DirectoryService = Depends(get_directory),
):
    """Filtered, rating-sorted listing (or the popular view)."""
    if limit is not None:
        limit = min(limit, get_settings().max_list_limit)
    query = EntityQuery(
        type=type_filter, area=area, tags=_split_tags(tags),
        search=q, status=status_filter, limit=limit, popular=popular,
    )
    result = directory.query_entities(query)
    return EntityListResponse(
        entities=[
            EntityResponse.from_record(e, directory.open_status(e))
            for e in result.entities
        ],
        total=result.total,
    )


@router.post(
    "", response_model=EntityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_entity(
    body: EntityCreate, directory: DirectoryService = Depends(get_directory),
):
    """Create a new entity; id and timestamps are assigned by the store."""
    entity = directory.create_entity(body.model_dump())
    return EntityResponse.from_record(entity, directory.open_status(entity))


@router.get("/{entity_id}", response_model=EntityResponse)
async def get_entity(
    entity_id: str, directory: DirectoryService = Depends(get_directory),
):
    entity = directory.get_entity(entity_id)
    return EntityResponse.from_record(entity, directory.open_status(entity))


@router.patch("/{entity_id}", response_model=EntityResponse)
async def update_entity(
    entity_id: str,
    body: EntityUpdate,
    directory: DirectoryService = Depends(get_directory),
):
    """Merge only the supplied fields."""
    entity = directory.update_entity(entity_id, body.changes())
    return EntityResponse.from_record(entity, directory.open_status(entity))


@router.delete("/{entity_id}", response_model=DeleteResponse)
async def delete_entity(
    entity_id: str, directory: DirectoryService = Depends(get_directory),
):
    """Soft delete: status becomes archived. Repeat calls succeed."""
    directory.archive_entity(entity_id)
    return DeleteResponse(success=True)


@router.get("/{entity_id}/hours", response_model=WorkHoursResponse)
async def get_entity_hours(
    entity_id: str, directory: DirectoryService = Depends(get_directory),
):
    """Open/closed verdict now, plus the weekly schedule lines."""
    view = directory.hours_view(entity_id)
    return WorkHoursResponse(
        entity_id=view.entity_id,
        open_status=view.open_status,
        label=view.label,
        schedule_lines=view.schedule_lines,
    )
