"""
Resource listing, lookup and editing endpoints
"""

from fastapi import APIRouter, Depends, Query, Request
from api.dependencies import get_repository, get_viewer
from core.session import ViewerContext
from directory.repository import Repository
from directory.queries import ResourceQueryService
from directory.mutations import ResourceMutationService
from models.base import ResourceCategory
from schemas.api import ResourcePage, CategoryListResponse
from schemas.resource import (
    ResourceCreate,
    ResourceUpdate,
    NoteCreate,
    ResourceResponse,
    NoteResponse,
)
from typing import List, Optional
from datetime import datetime
import uuid
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Resources"])


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", f"req_{uuid.uuid4().hex[:12]}")


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories():
    """The closed set of resource categories"""
    return CategoryListResponse(categories=[c.value for c in ResourceCategory])


@router.get("/resources", response_model=ResourcePage)
async def list_resources(
    request: Request,
    page: int = Query(1, ge=1, description="Page number"),
    category: Optional[str] = Query(None, description="Filter by category"),
    zipcode: Optional[str] = Query(None, description="Filter by 5 or 9 digit zipcode"),
    search: Optional[str] = Query(None, description="Search organization, program and category"),
    status: Optional[List[str]] = Query(None, description="Filter by status; repeat for any of several"),
    repository: Repository = Depends(get_repository)
):
    """
    Retrieve a page of resources, newest first.
    
    Features:
    - Category and zipcode exact-match filters
    - Status filter, repeatable (?status=AVAILABLE&status=LIMITED)
    - Case-insensitive free-text search
    - Fixed page size
    """
    logger.info(
        f"[{_request_id(request)}] GET /resources - page={page}, "
        f"filters: category={category}, zipcode={zipcode}, status={status}, search={search}"
    )
    
    service = ResourceQueryService(repository)
    filters = {"category": category, "zipcode": zipcode, "statuses": status}
    if search:
        return await service.search_resources(search, filters, page)
    return await service.list_resources(filters, page)


@router.get("/resources/recent", response_model=ResourcePage)
async def list_recent_updates(
    request: Request,
    since: datetime = Query(..., description="Only resources updated at or after this time"),
    page: int = Query(1, ge=1, description="Page number"),
    repository: Repository = Depends(get_repository)
):
    logger.info(f"[{_request_id(request)}] GET /resources/recent - since={since}, page={page}")
    return await ResourceQueryService(repository).list_recently_updated(since, page)


@router.get("/resources/{resource_id}", response_model=ResourceResponse)
async def get_resource(
    resource_id: int,
    repository: Repository = Depends(get_repository)
):
    """One resource with its notes, newest first"""
    return await ResourceQueryService(repository).get_resource_by_id(resource_id)


@router.post("/resources", response_model=ResourceResponse, status_code=201)
async def create_resource(
    request: Request,
    data: ResourceCreate,
    viewer: ViewerContext = Depends(get_viewer),
    repository: Repository = Depends(get_repository)
):
    logger.info(f"[{_request_id(request)}] POST /resources - user={viewer.user_id}")
    return await ResourceMutationService(repository).create_resource(data, viewer)


@router.patch("/resources/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    request: Request,
    resource_id: int,
    data: ResourceUpdate,
    repository: Repository = Depends(get_repository)
):
    """Update status and/or contact details"""
    logger.info(f"[{_request_id(request)}] PATCH /resources/{resource_id}")
    return await ResourceMutationService(repository).update_resource_details(resource_id, data)


@router.post("/resources/{resource_id}/notes", response_model=NoteResponse, status_code=201)
async def add_note(
    request: Request,
    resource_id: int,
    data: NoteCreate,
    repository: Repository = Depends(get_repository)
):
    logger.info(f"[{_request_id(request)}] POST /resources/{resource_id}/notes")
    return await ResourceMutationService(repository).add_note(resource_id, data.content)
