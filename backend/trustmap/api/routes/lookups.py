"""Lookup Routes: distinct areas and tags for filter pickers.

Invariants:
    - Values sorted ascending, recomputed on every call (no cache)
"""

from fastapi import APIRouter, Depends

from trustmap.services.directory_service import DirectoryService, get_directory

router = APIRouter(prefix="/api/v1", tags=["lookups"])


@router.get("/areas")
async def list_areas(directory: DirectoryService = Depends(get_directory)):
    return {"areas": directory.list_areas()}


@router.get("/tags")
async def list_tags(directory: DirectoryService = Depends(get_directory)):
    return {"tags": directory.list_tags()}
