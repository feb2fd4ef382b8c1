"""
Resource mutations: contribute, edit details, append notes
"""

from typing import Any, Dict, Union
from datetime import datetime
from core.exceptions import NotFound, PermissionDenied
from core.session import ViewerContext
from directory.repository import Repository
from directory.validation import parse_input, coerce_id
from models.resource import Resource, ResourceNote
from schemas.resource import (
    ResourceCreate,
    ResourceUpdate,
    NoteCreate,
    ResourceResponse,
    NoteResponse,
)
import logging

logger = logging.getLogger(__name__)

# Notes are attributed to this placeholder rather than the calling viewer
ANONYMOUS_NOTE_AUTHOR = "Anonymous"


class ResourceMutationService:
    """
    Write side of the directory.
    
    Ensures:
    - Input is validated before any store round-trip
    - last_updated is rewritten on every resource change
    - Notes are append-only and do not touch the parent's last_updated
    """
    
    def __init__(self, repository: Repository):
        self.repository = repository
    
    async def create_resource(
        self,
        data: Union[ResourceCreate, Dict[str, Any]],
        viewer: ViewerContext
    ) -> ResourceResponse:
        """
        Contribute a new resource listing.
        
        Args:
            data: organization, category and zipcode are required; program,
                status (default AVAILABLE) and contact_details are optional
            viewer: Must be a signed-in case manager or admin
        
        Raises:
            PermissionDenied: Viewer may not contribute resources
            ValidationFailure: Missing organization, unknown category or bad zipcode
        """
        if not viewer.can_create_resources():
            raise PermissionDenied(
                "Only signed-in case managers and admins can add resources",
                context={"user_id": viewer.user_id, "role": viewer.role}
            )
        
        payload = parse_input(ResourceCreate, data)
        now = datetime.utcnow()
        
        resource = await self.repository.insert(Resource, {
            "organization": payload.organization,
            "program": payload.program,
            "category": payload.category.value,
            "status": payload.status,
            "zipcode": payload.zipcode,
            "contact_details": payload.contact_details.dict(exclude_none=True),
            "created_at": now,
            "last_updated": now,
        })
        
        logger.info(
            f"User {viewer.user_id} created resource {resource.id} "
            f"({payload.organization}, {payload.category.value}, {payload.zipcode})"
        )
        return ResourceResponse.from_orm(resource)
    
    async def update_resource_details(
        self,
        resource_id: Union[int, str],
        partial: Union[ResourceUpdate, Dict[str, Any]]
    ) -> ResourceResponse:
        """
        Apply a partial update of status and/or contact details.
        
        Contact details are replaced as a whole when given. last_updated is
        always rewritten, even when the partial is empty.
        
        Raises:
            ValidationFailure: Unknown fields or invalid values
            NotFound: No resource with this id
        """
        resource_id = coerce_id(resource_id, "resource_id")
        payload = parse_input(ResourceUpdate, partial)
        
        values: Dict[str, Any] = {"last_updated": datetime.utcnow()}
        if payload.status is not None:
            values["status"] = payload.status
        if payload.contact_details is not None:
            values["contact_details"] = payload.contact_details.dict(exclude_none=True)
        
        rows = await self.repository.update(Resource, values, Resource.id == resource_id)
        if not rows:
            raise NotFound(
                f"Resource {resource_id} does not exist",
                context={"entity": "resource", "id": resource_id}
            )
        
        logger.info(f"Updated resource {resource_id}: {sorted(values)}")
        return ResourceResponse.from_orm(rows[0])
    
    async def add_note(self, resource_id: Union[int, str], content: str) -> NoteResponse:
        """Append a note to a resource"""
        resource_id = coerce_id(resource_id, "resource_id")
        note = parse_input(NoteCreate, {"content": content})
        
        if not await self.repository.count(Resource, Resource.id == resource_id):
            raise NotFound(
                f"Resource {resource_id} does not exist",
                context={"entity": "resource", "id": resource_id}
            )
        
        # TODO: attribute notes to the calling viewer once product confirms
        # the anonymous placeholder is unintended
        row = await self.repository.insert(ResourceNote, {
            "resource_id": resource_id,
            "user_id": None,
            "username": ANONYMOUS_NOTE_AUTHOR,
            "content": note.content,
            "created_at": datetime.utcnow(),
        })
        
        logger.info(f"Added note {row.id} to resource {resource_id}")
        return NoteResponse.from_orm(row)
