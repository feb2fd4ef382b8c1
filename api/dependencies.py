"""
FastAPI dependencies: database session, repository, viewer context
"""

from typing import AsyncGenerator, Optional
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession
from core.database import get_session
from core.session import ViewerContext
from directory.repository import Repository, SQLAlchemyRepository
from directory.validation import coerce_id
from core.exceptions import ValidationFailure
from models.user import User
import logging

logger = logging.getLogger(__name__)

# Tokens issued at sign-in look like "session-<user id>"
SESSION_TOKEN_PREFIX = "session-"


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request"""
    async for session in get_session():
        yield session


def get_repository(db: AsyncSession = Depends(get_db)) -> Repository:
    return SQLAlchemyRepository(db)


def parse_session_token(authorization: Optional[str]) -> Optional[int]:
    """Extract the user id from an `Authorization: Bearer session-<id>` header"""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.startswith(SESSION_TOKEN_PREFIX):
        return None
    user_id = token[len(SESSION_TOKEN_PREFIX):]
    if not user_id.isdigit():
        return None
    try:
        return coerce_id(user_id, "user_id")
    except ValidationFailure:
        return None


async def get_viewer(
    authorization: Optional[str] = Header(None),
    repository: Repository = Depends(get_repository)
) -> ViewerContext:
    """Resolve the caller into an explicit ViewerContext (anonymous if unknown)"""
    user_id = parse_session_token(authorization)
    if user_id is None:
        return ViewerContext.anonymous()
    
    users = await repository.select(User, User.id == user_id, limit=1)
    if not users:
        logger.warning(f"Session token for unknown user {user_id}")
        return ViewerContext.anonymous()
    
    return ViewerContext.from_user(users[0])
