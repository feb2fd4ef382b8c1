"""
Saved-resource (bookmark) endpoints for the current viewer
"""

from fastapi import APIRouter, Depends
from api.dependencies import get_repository, get_viewer
from core.session import ViewerContext
from directory.repository import Repository
from directory.saved import SavedResourceService
from schemas.api import SaveStatusResponse
from schemas.resource import ResourceResponse
from typing import List

router = APIRouter(prefix="/saved", tags=["Saved"])


def get_saved_service(
    viewer: ViewerContext = Depends(get_viewer),
    repository: Repository = Depends(get_repository)
) -> SavedResourceService:
    return SavedResourceService(repository, viewer)


@router.get("", response_model=List[ResourceResponse])
async def list_saved(service: SavedResourceService = Depends(get_saved_service)):
    return await service.list_saved()


@router.get("/{resource_id}", response_model=SaveStatusResponse)
async def saved_status(
    resource_id: int,
    service: SavedResourceService = Depends(get_saved_service)
):
    return SaveStatusResponse(resource_id=resource_id, saved=await service.is_saved(resource_id))


@router.put("/{resource_id}", response_model=SaveStatusResponse)
async def save_resource(
    resource_id: int,
    service: SavedResourceService = Depends(get_saved_service)
):
    return await service.save(resource_id)


@router.delete("/{resource_id}", response_model=SaveStatusResponse)
async def unsave_resource(
    resource_id: int,
    service: SavedResourceService = Depends(get_saved_service)
):
    return await service.unsave(resource_id)
