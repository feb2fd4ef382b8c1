"""
Per-viewer saved-set: idempotent save/unsave and batched resolution
"""

from typing import List, Union
from core.exceptions import NotFound, DuplicateRecord
from core.session import ViewerContext
from directory.repository import Repository
from directory.validation import coerce_id
from directory.queries import LISTING_ORDER
from models.resource import Resource
from models.saved_resource import SavedResource
from schemas.resource import ResourceResponse
from schemas.api import SaveStatusResponse
import logging

logger = logging.getLogger(__name__)


class SavedResourceService:
    """
    Bookmarks scoped to one viewer.
    
    save and unsave are total over both states: saving a saved resource and
    unsaving an unsaved one both succeed without changes. A uniqueness
    violation from a concurrent save counts as "already saved".
    """
    
    def __init__(self, repository: Repository, viewer: ViewerContext):
        self.repository = repository
        self.viewer = viewer
    
    def _owned(self):
        """Criterion selecting this viewer's rows (NULL user for anonymous)"""
        if self.viewer.user_id is None:
            return SavedResource.user_id.is_(None)
        return SavedResource.user_id == self.viewer.user_id
    
    async def save(self, resource_id: Union[int, str]) -> SaveStatusResponse:
        resource_id = coerce_id(resource_id, "resource_id")
        
        if not await self.repository.count(Resource, Resource.id == resource_id):
            raise NotFound(
                f"Resource {resource_id} does not exist",
                context={"entity": "resource", "id": resource_id}
            )
        
        if await self.is_saved(resource_id):
            return SaveStatusResponse(resource_id=resource_id, saved=True)
        
        try:
            await self.repository.insert(SavedResource, {
                "resource_id": resource_id,
                "user_id": self.viewer.user_id,
            })
            logger.info(f"Viewer {self.viewer.user_id} saved resource {resource_id}")
        except DuplicateRecord:
            logger.debug(f"Resource {resource_id} was saved concurrently")
        
        return SaveStatusResponse(resource_id=resource_id, saved=True)
    
    async def unsave(self, resource_id: Union[int, str]) -> SaveStatusResponse:
        resource_id = coerce_id(resource_id, "resource_id")
        
        removed = await self.repository.delete(
            SavedResource,
            SavedResource.resource_id == resource_id,
            self._owned()
        )
        if removed:
            logger.info(f"Viewer {self.viewer.user_id} unsaved resource {resource_id}")
        
        return SaveStatusResponse(resource_id=resource_id, saved=False)
    
    async def is_saved(self, resource_id: Union[int, str]) -> bool:
        resource_id = coerce_id(resource_id, "resource_id")
        count = await self.repository.count(
            SavedResource,
            SavedResource.resource_id == resource_id,
            self._owned()
        )
        return count > 0
    
    async def list_saved(self) -> List[ResourceResponse]:
        """Resolve the saved ids into resources with one IN lookup"""
        saved = await self.repository.select(SavedResource, self._owned())
        if not saved:
            return []
        
        resource_ids = sorted({s.resource_id for s in saved})
        resources = await self.repository.select(
            Resource,
            Resource.id.in_(resource_ids),
            order_by=LISTING_ORDER
        )
        return [ResourceResponse.from_orm(r) for r in resources]
