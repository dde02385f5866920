"""
Service error taxonomy and its HTTP translation.

Services raise the exceptions defined here; the FastAPI handlers
registered by ``register_exception_handlers`` turn them into JSON
responses of the form ``{"detail": "<message>"}`` with the matching
status code.  Request body validation performed by FastAPI itself is
rendered as 400 rather than the framework default of 422.
"""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Missing or malformed input.  Not worth retrying."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request payload"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class ResourceNotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class MethodNotAllowed(ServiceError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    default_message = "Method not allowed"


class ServiceUnavailable(ServiceError):
    """The storage backend could not be reached.  Callers may retry."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Storage backend unavailable"


def _format_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """Build a single human readable message from pydantic errors."""
    if not errors:
        return ValidationError.default_message
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", ValidationError.default_message)
    return f"{location}: {message}" if location else message


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={
            "detail": _format_validation_errors(list(errors)),
            "errors": jsonable_encoder(errors),
        },
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Routing errors (404 for unknown paths, 405 for unsupported verbs)
    # are raised by Starlette before any service code runs.
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        error = MethodNotAllowed(f"Method {request.method} not allowed on {request.url.path}")
        return JSONResponse(
            status_code=error.status_code,
            content={"detail": error.message},
            headers=getattr(exc, "headers", None),
        )
    message = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": message},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers above to ``app``."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
