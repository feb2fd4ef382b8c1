"""
FastAPI application initialization
"""

from fastapi import FastAPI
from api.routes import health, resources, saved
from api.errors import register_exception_handlers
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.logging import setup_logging
import logging

setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Resource Directory API",
    description="Search, save, edit and contribute social-service resource listings",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestContextMiddleware)
register_exception_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(resources.router)
app.include_router(saved.router)


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info("Starting Resource Directory API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else 'configured'}")


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    logger.info("Shutting down Resource Directory API")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Resource Directory API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "resources": "/resources",
            "recent": "/resources/recent",
            "categories": "/categories",
            "saved": "/saved"
        }
    }
