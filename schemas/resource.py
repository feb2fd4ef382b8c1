"""
Pydantic schemas for resources, notes and listing filters with validation
"""

from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime
from models.base import ResourceCategory, ResourceStatus

# 5-digit or ZIP+4 US postal code
ZIPCODE_PATTERN = r"^\d{5}(-\d{4})?$"


def _blank_to_none(v):
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return None
    return v


class HoursEntry(BaseModel):
    day: str
    hours: str


class ContactDetails(BaseModel):
    """Structured contact document stored in resources.contact_details"""
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    services: Optional[List[str]] = None
    eligibility: Optional[List[str]] = None
    hours: Optional[List[HoursEntry]] = None
    
    class Config:
        extra = "allow"


class ResourceCreate(BaseModel):
    """
    Schema for contributing a new resource.
    
    Ensures:
    - organization is present and not blank
    - category is one of the known categories
    - zipcode is a 5 or 9 digit US postal code
    """
    organization: str = Field(..., min_length=1, max_length=255)
    program: Optional[str] = Field(None, max_length=255)
    category: ResourceCategory
    status: ResourceStatus = ResourceStatus.AVAILABLE
    contact_details: ContactDetails = Field(default_factory=ContactDetails)
    zipcode: str = Field(..., pattern=ZIPCODE_PATTERN)
    
    @validator("organization", pre=True)
    def clean_organization(cls, v):
        """Strip whitespace; reject blank names"""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Organization cannot be empty")
        return v
    
    @validator("program", pre=True)
    def clean_program(cls, v):
        return _blank_to_none(v)
    
    @validator("zipcode", pre=True)
    def strip_zipcode(cls, v):
        return v.strip() if isinstance(v, str) else v
    
    @validator("contact_details", pre=True)
    def default_contact_details(cls, v):
        return {} if v is None else v


class ResourceUpdate(BaseModel):
    """Partial update: only status and contact details are editable"""
    status: Optional[ResourceStatus] = None
    contact_details: Optional[ContactDetails] = None
    
    class Config:
        extra = "forbid"


class NoteCreate(BaseModel):
    content: str
    
    @validator("content")
    def content_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Note content cannot be empty")
        return v


class ResourceFilter(BaseModel):
    """
    Listing filter. Absent (or blank) criteria are not applied.
    
    - category: exact match on a known category
    - zipcode: exact match
    - query: case-insensitive substring over organization, program and category
    - statuses: status is any of the given values
    """
    category: Optional[ResourceCategory] = None
    zipcode: Optional[str] = Field(None, pattern=ZIPCODE_PATTERN)
    query: Optional[str] = None
    statuses: Optional[List[ResourceStatus]] = None
    
    @validator("category", "zipcode", "query", pre=True)
    def blank_is_absent(cls, v):
        return _blank_to_none(v)
    
    @validator("statuses", pre=True)
    def collect_statuses(cls, v):
        if v is None:
            return None
        if isinstance(v, (str, ResourceStatus)):
            v = [v]
        if not isinstance(v, (list, tuple, set)):
            return v
        values = [s for s in (_blank_to_none(item) for item in v) if s is not None]
        # Repeated values collapse; order is kept for filters_applied
        return list(dict.fromkeys(values)) or None
    
    def applied(self) -> List[str]:
        """Names of the criteria that are set"""
        return [
            name for name in ("category", "zipcode", "query", "statuses")
            if getattr(self, name) is not None
        ]


class NoteResponse(BaseModel):
    id: int
    user_id: Optional[str]
    username: str
    content: str
    timestamp: datetime
    
    @classmethod
    def from_orm(cls, note):
        return cls(
            id=note.id,
            user_id=note.user_id,
            username=note.username,
            content=note.content,
            timestamp=note.created_at,
        )


class ResourceResponse(BaseModel):
    """Domain view of a resources row"""
    id: int
    organization: str
    program: Optional[str]
    category: str
    status: ResourceStatus
    contact_details: ContactDetails
    zipcode: str
    notes: List[NoteResponse] = Field(default_factory=list)
    created_at: datetime
    last_updated: datetime
    
    @classmethod
    def from_orm(cls, resource, notes=()):
        """Map a row (and optionally its notes) to the domain shape"""
        return cls(
            id=resource.id,
            organization=resource.organization,
            program=resource.program,
            category=resource.category,
            status=resource.status,
            contact_details=resource.contact_details or {},
            zipcode=resource.zipcode or "",
            notes=[NoteResponse.from_orm(n) for n in notes],
            created_at=resource.created_at,
            last_updated=resource.last_updated,
        )
    
    class Config:
        json_schema_extra = {
            "example": {
                "id": 42,
                "organization": "Mission Food Hub",
                "program": "Weekly Pantry",
                "category": "Food",
                "status": "AVAILABLE",
                "contact_details": {
                    "address": "701 Alabama St, San Francisco, CA",
                    "phone": "(415) 555-0134",
                    "hours": [{"day": "Monday", "hours": "9am-12pm"}]
                },
                "zipcode": "94103",
                "notes": [],
                "created_at": "2024-01-15T10:30:00",
                "last_updated": "2024-01-15T10:30:00"
            }
        }
