"""
SQLAlchemy ORM models for database tables.

Models:
    base: Base declarative class, JSON column type and shared enums
          (ResourceStatus, ResourceCategory, UserRole)
    resource: Resource listings and their append-only notes
    saved_resource: Per-viewer bookmarks
    user: Directory users (read-only here)

Usage:
    from models import Resource, ResourceNote, SavedResource, User
    from models.base import ResourceStatus, ResourceCategory

Relationships:
    - Resource → ResourceNote (one-to-many, newest first)
    - Resource → SavedResource (one-to-many, one row per viewer)
"""

from models.base import Base, ResourceStatus, ResourceCategory, UserRole
from models.resource import Resource, ResourceNote
from models.saved_resource import SavedResource
from models.user import User

__all__ = [
    "Base",
    "ResourceStatus",
    "ResourceCategory",
    "UserRole",
    "Resource",
    "ResourceNote",
    "SavedResource",
    "User",
]
