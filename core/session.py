"""
Explicit viewer session context passed to every viewer-scoped operation
"""

from typing import Optional
from pydantic import BaseModel
from models.base import UserRole

# Roles allowed to contribute new resources
CREATOR_ROLES = (UserRole.CASE_MANAGER, UserRole.ADMIN)


class ViewerContext(BaseModel):
    """The authenticated actor performing save/unsave/note operations."""
    user_id: Optional[str] = None
    username: str = "Anonymous"
    full_name: Optional[str] = None
    role: Optional[UserRole] = None
    
    @classmethod
    def anonymous(cls) -> "ViewerContext":
        return cls()
    
    @classmethod
    def from_user(cls, user) -> "ViewerContext":
        """Build a viewer context from a User row"""
        return cls(
            user_id=str(user.id),
            username=user.username,
            full_name=user.full_name,
            role=user.role,
        )
    
    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None
    
    def can_create_resources(self) -> bool:
        return self.is_authenticated and self.role in CREATOR_ROLES
