"""
Custom exceptions for the resource directory with structured error context.

Every failure the core services raise is one of the types below, so callers
(the HTTP layer, scripts, tests) can branch on the failure reason instead of
inspecting driver-specific errors.

Exception Hierarchy:
    DirectoryException (base)
    ├── ValidationFailure      malformed caller input
    ├── NotFound               referenced id does not resolve
    ├── PermissionDenied       viewer role may not perform the operation
    └── QueryFailure           transport/backend error
        └── DuplicateRecord    uniqueness constraint violated
"""

from typing import Optional, Dict, Any
from datetime import datetime


class DirectoryException(Exception):
    """
    Base exception for all resource directory errors.
    
    Attributes:
        message: Human-readable error message
        context: Additional context information (resource id, field errors, etc.)
        original_exception: The original exception that was caught (if any)
    """
    
    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.utcnow()
        
        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception
    
    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"
        
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"
        
        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"
        
        return base_msg
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/responses."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class ValidationFailure(DirectoryException):
    """
    Raised when caller input is malformed.
    
    Context should include:
        - field_errors: Mapping of field name to error message
    
    Raised before any store round-trip.
    """
    pass


class NotFound(DirectoryException):
    """
    Raised when a referenced id does not resolve.
    
    Context should include:
        - entity: Entity name ("resource")
        - id: The id that was looked up
    """
    pass


class PermissionDenied(DirectoryException):
    """Raised when the viewer's role does not allow the operation."""
    pass


class QueryFailure(DirectoryException):
    """
    Raised when the backing store fails for reasons not attributable to
    caller input (connection loss, timeouts, constraint errors).
    
    Context should include:
        - operation: select, insert, update, delete or count
        - table_name: Name of the table
    
    Not retried; retry policy belongs to the caller.
    """
    pass


class DuplicateRecord(QueryFailure):
    """Raised when an insert violates a uniqueness constraint."""
    pass
