"""
Pydantic schemas for API request/response models
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from schemas.resource import ResourceResponse


# ============================================================================
# Health Check Schemas
# ============================================================================

class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str = Field(..., description="Overall system status: healthy, unhealthy")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    database_connected: bool
    total_resources: int = 0


# ============================================================================
# Resource Listing Schemas
# ============================================================================

class ResourcePage(BaseModel):
    """One page of a filtered, newest-first resource listing"""
    resources: List[ResourceResponse]
    current_page: int
    total_pages: int
    total_resources: int
    filters_applied: Dict[str, Any] = Field(default_factory=dict)
    
    class Config:
        json_schema_extra = {
            "example": {
                "resources": [
                    {
                        "id": 42,
                        "organization": "Mission Food Hub",
                        "category": "Food",
                        "status": "AVAILABLE",
                        "zipcode": "94103"
                    }
                ],
                "current_page": 1,
                "total_pages": 3,
                "total_resources": 31,
                "filters_applied": {
                    "category": "Food",
                    "zipcode": "94103"
                }
            }
        }


class CategoryListResponse(BaseModel):
    categories: List[str]


# ============================================================================
# Saved Resource Schemas
# ============================================================================

class SaveStatusResponse(BaseModel):
    """Save state of one resource for the current viewer"""
    resource_id: int
    saved: bool


# ============================================================================
# Error Response Schema
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str
    detail: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    
    class Config:
        json_schema_extra = {
            "example": {
                "error": "NotFound",
                "detail": "Resource 42 does not exist",
                "context": {"entity": "resource", "id": 42},
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }
