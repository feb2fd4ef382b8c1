"""
Core utilities and configuration for the resource directory.

This package provides foundational components used throughout the service:

Modules:
    config: Application configuration and environment variable management
    database: Database connection and session management
    exceptions: Exception taxonomy (ValidationFailure, NotFound, QueryFailure, ...)
    logging: Logging configuration and utilities
    session: Explicit viewer session context

Usage:
    from core.config import settings
    from core.database import get_session
    from core.exceptions import NotFound, ValidationFailure
    from core.logging import setup_logging
    from core.session import ViewerContext
"""

__all__ = [
    "settings",
    "get_session",
    "setup_logging",
    "ViewerContext",
    # Exceptions
    "DirectoryException",
    "ValidationFailure",
    "NotFound",
    "PermissionDenied",
    "QueryFailure",
    "DuplicateRecord",
]
