"""
Map directory exceptions to HTTP responses
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from core.exceptions import (
    DirectoryException,
    ValidationFailure,
    NotFound,
    PermissionDenied,
    QueryFailure,
)
from schemas.api import ErrorResponse
import logging

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ValidationFailure: 422,
    NotFound: 404,
    PermissionDenied: 403,
    QueryFailure: 503,
}


def status_code_for(exc: DirectoryException) -> int:
    for exc_type, status_code in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return status_code
    return 500


def _render(status_code: int, error: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(error))


async def directory_exception_handler(request: Request, exc: DirectoryException):
    request_id = getattr(request.state, "request_id", "-")
    status_code = status_code_for(exc)
    
    if status_code >= 500:
        logger.error(f"[{request_id}] {exc}")
    else:
        logger.info(f"[{request_id}] {exc.__class__.__name__}: {exc.message}")
    
    return _render(status_code, ErrorResponse(
        error=exc.__class__.__name__,
        detail=exc.message,
        # Driver details stay in the logs
        context={k: v for k, v in exc.context.items() if k != "original_error"},
    ))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    field_errors = {
        ".".join(str(part) for part in err["loc"]): err["msg"]
        for err in exc.errors()
    }
    return _render(422, ErrorResponse(
        error=ValidationFailure.__name__,
        detail="Invalid request",
        context={"field_errors": field_errors},
    ))


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(DirectoryException, directory_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
