"""
Resource listing queries: filtering, free-text search and pagination
"""

from typing import Any, Dict, List, Optional, Union
from datetime import datetime
from sqlalchemy import or_
from core.config import settings
from core.exceptions import NotFound
from directory.repository import Repository
from directory.validation import parse_input, coerce_id, coerce_page, coerce_timestamp
from models.resource import Resource, ResourceNote
from schemas.resource import ResourceFilter, ResourceResponse
from schemas.api import ResourcePage
import math
import logging

logger = logging.getLogger(__name__)

# Newest first; id breaks ties so pages never overlap or skip rows
LISTING_ORDER = (Resource.last_updated.desc(), Resource.id.desc())
NOTE_ORDER = (ResourceNote.created_at.desc(), ResourceNote.id.desc())

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Make LIKE wildcards in user input match literally"""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def total_pages_for(total_resources: int, page_size: int) -> int:
    """Page count for a result set; an empty result still has one page"""
    return max(1, math.ceil(total_resources / page_size))


def build_filter_criteria(filters: ResourceFilter) -> List[Any]:
    """Translate a ResourceFilter into SQLAlchemy where-clauses"""
    criteria = []
    
    if filters.category is not None:
        criteria.append(Resource.category == filters.category.value)
    
    if filters.zipcode is not None:
        criteria.append(Resource.zipcode == filters.zipcode)
    
    if filters.statuses is not None:
        criteria.append(Resource.status.in_(filters.statuses))
    
    if filters.query is not None:
        pattern = f"%{escape_like(filters.query)}%"
        criteria.append(or_(
            Resource.organization.ilike(pattern, escape=LIKE_ESCAPE),
            Resource.program.ilike(pattern, escape=LIKE_ESCAPE),
            Resource.category.ilike(pattern, escape=LIKE_ESCAPE)
        ))
    
    return criteria


class ResourceQueryService:
    """
    Read side of the directory.
    
    Every listing shares one contract: fixed page size, 1-indexed pages,
    ordering by last_updated descending, and total_pages >= 1.
    Store failures propagate as QueryFailure without retry.
    """
    
    def __init__(self, repository: Repository, page_size: Optional[int] = None):
        self.repository = repository
        self.page_size = page_size or settings.PAGE_SIZE
    
    async def list_resources(
        self,
        filters: Union[ResourceFilter, Dict[str, Any], None] = None,
        page: int = 1
    ) -> ResourcePage:
        """List resources matching category / zipcode / status / free-text criteria"""
        filters = parse_input(ResourceFilter, filters)
        page = coerce_page(page)
        
        return await self._paginate(
            build_filter_criteria(filters),
            page,
            filters_applied={name: getattr(filters, name) for name in filters.applied()}
        )
    
    async def search_resources(
        self,
        query: Optional[str],
        filters: Union[ResourceFilter, Dict[str, Any], None] = None,
        page: int = 1
    ) -> ResourcePage:
        """Free-text search combined with the category, zipcode and status filters"""
        filters = parse_input(ResourceFilter, filters)
        merged = parse_input(ResourceFilter, {
            "category": filters.category,
            "zipcode": filters.zipcode,
            "query": query,
            "statuses": filters.statuses
        })
        return await self.list_resources(merged, page)
    
    async def list_recently_updated(
        self,
        since: Union[datetime, str],
        page: int = 1
    ) -> ResourcePage:
        """Resources whose last_updated is at or after `since`"""
        since = coerce_timestamp(since)
        page = coerce_page(page)
        
        return await self._paginate(
            [Resource.last_updated >= since],
            page,
            filters_applied={"since": since.isoformat()}
        )
    
    async def get_resource_by_id(self, resource_id: Union[int, str]) -> ResourceResponse:
        """Fetch one resource with its notes, newest first"""
        resource_id = coerce_id(resource_id, "resource_id")
        
        rows = await self.repository.select(Resource, Resource.id == resource_id, limit=1)
        if not rows:
            raise NotFound(
                f"Resource {resource_id} does not exist",
                context={"entity": "resource", "id": resource_id}
            )
        
        notes = await self.repository.select(
            ResourceNote,
            ResourceNote.resource_id == resource_id,
            order_by=NOTE_ORDER
        )
        return ResourceResponse.from_orm(rows[0], notes)
    
    async def _paginate(
        self,
        criteria: List[Any],
        page: int,
        filters_applied: Dict[str, Any]
    ) -> ResourcePage:
        total_resources = await self.repository.count(Resource, *criteria)
        total_pages = total_pages_for(total_resources, self.page_size)
        offset = (page - 1) * self.page_size
        
        rows = []
        if offset < total_resources:
            rows = await self.repository.select(
                Resource,
                *criteria,
                order_by=LISTING_ORDER,
                offset=offset,
                limit=self.page_size
            )
        
        logger.info(
            f"Listed {len(rows)} of {total_resources} resources "
            f"(page {page}/{total_pages}, filters: {sorted(filters_applied)})"
        )
        
        return ResourcePage(
            resources=[ResourceResponse.from_orm(r) for r in rows],
            current_page=page,
            total_pages=total_pages,
            total_resources=total_resources,
            filters_applied=filters_applied
        )
