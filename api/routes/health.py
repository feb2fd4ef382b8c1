"""
Health check endpoint with database status
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, text
from api.dependencies import get_db
from schemas.api import HealthCheckResponse
from models.resource import Resource
from datetime import datetime
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint.
    
    Returns:
    - Database connectivity status
    - Number of resource listings
    """
    db_connected = False
    total_resources = 0
    
    try:
        await db.execute(text("SELECT 1"))
        db_connected = True
        result = await db.execute(select(func.count()).select_from(Resource))
        total_resources = result.scalar() or 0
    except Exception as e:
        logger.error(f"Database connection failed: {str(e)}")
    
    return HealthCheckResponse(
        status="healthy" if db_connected else "unhealthy",
        timestamp=datetime.utcnow(),
        database_connected=db_connected,
        total_resources=total_resources
    )
