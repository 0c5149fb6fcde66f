"""Guide Routes: read-only guide lookup by category and id."""

from fastapi import APIRouter, Depends, Query

from trustmap.schemas.guide import GuideListResponse, GuideResponse
from trustmap.services.directory_service import DirectoryService, get_directory

router = APIRouter(prefix="/api/v1/guides", tags=["guides"])


@router.get("", response_model=GuideListResponse)
async def list_guides(
    category: str | None = Query(None),
    directory: DirectoryService = Depends(get_directory),
):
    guides = directory.list_guides(category)
    return GuideListResponse(
        guides=[GuideResponse.from_record(g) for g in guides],
        total=len(guides),
    )


@router.get("/{guide_id}", response_model=GuideResponse)
async def get_guide(
    guide_id: str, directory: DirectoryService = Depends(get_directory),
):
    return GuideResponse.from_record(directory.get_guide(guide_id))
