"""
Error Handlers - Car UX Review Platform
carux/routers/errors.py

Maps request validation errors and domain exceptions to ErrorResponse
bodies. Registered on the app in carux/main.py.
"""

from datetime import datetime, timezone
from typing import Dict, Optional, Tuple, Type

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from carux.core.exceptions import (
    ConflictException,
    EntityNotFoundException,
    InvalidInputException,
    InvalidStatusTransitionException,
    RepositoryException,
    ReviewPlatformException,
    ReviewPublishedException,
)
from carux.models.report import ErrorResponse

logger = structlog.get_logger(__name__)

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "uuid_parsing": "Field '{field}' must be a valid UUID",
    "uuid_type": "Field '{field}' must be a valid UUID",
    "string_type": "Field '{field}' must be a string",
    "datetime_parsing": "Field '{field}' must be a valid datetime",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "bool_parsing": "Field '{field}' must be true or false",
    "enum": "Field '{field}' has an invalid value",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}

# Most specific class first
EXCEPTION_STATUS: Tuple[Tuple[Type[ReviewPlatformException], int, str], ...] = (
    (EntityNotFoundException, status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    (ReviewPublishedException, status.HTTP_409_CONFLICT, "REVIEW_PUBLISHED"),
    (InvalidStatusTransitionException, status.HTTP_409_CONFLICT, "INVALID_STATUS_TRANSITION"),
    (ConflictException, status.HTTP_409_CONFLICT, "CONFLICT"),
    (InvalidInputException, status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR"),
    (RepositoryException, status.HTTP_500_INTERNAL_SERVER_ERROR, "REPOSITORY_ERROR"),
)


def get_validation_message(field: str, error_type: str) -> str:
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


def error_body(error_code: str, message: str, details: Optional[Dict] = None) -> Dict:
    return ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_body("VALIDATION_ERROR", "Request validation failed"),
        )

    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])

    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("INVALID_REQUEST", "Malformed JSON request body"),
        )

    field = ".".join(str(l) for l in loc if l not in ("body", "query", "path"))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(
            "VALIDATION_ERROR",
            get_validation_message(field, error_type),
            {"field": field, "type": error_type} if field else None,
        ),
    )


async def domain_exception_handler(request: Request, exc: ReviewPlatformException):
    for exc_type, status_code, error_code in EXCEPTION_STATUS:
        if isinstance(exc, exc_type):
            break
    else:
        status_code, error_code = status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR"

    details = None
    if isinstance(exc, EntityNotFoundException):
        details = {"entity_type": exc.entity_type, "entity_id": str(exc.entity_id)}
    elif isinstance(exc, InvalidStatusTransitionException):
        details = {"current": exc.current, "requested": exc.requested}
    elif isinstance(exc, InvalidInputException) and exc.errors:
        details = {"errors": exc.errors}

    if status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=str(exc))
    else:
        logger.info("request_rejected", path=request.url.path, error_code=error_code)

    return JSONResponse(status_code=status_code, content=error_body(error_code, str(exc), details))
