"""
Global Exception Handlers

Centralised mapping of every failure onto the response envelope:

{
    "success": false,
    "error": "Room with id '12' not found",
    "details": {"resource_type": "Room", "resource_id": 12},
    "data": []
}

Errors are always handled per request; nothing is retried.
"""

import logging
from typing import Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from boom_booking.exceptions import BoomBookingError
from boom_booking.responses import error_response

logger = logging.getLogger(__name__)


def get_error_type(status_code: int) -> str:
    """Get a human-readable error type based on status code."""
    error_types = {
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method not allowed",
        409: "Conflict",
        422: "Validation Error",
        500: "Internal Server Error",
        503: "Service Unavailable",
    }
    return error_types.get(status_code, "Error")


async def booking_exception_handler(request: Request, exc: BoomBookingError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "%s: %s",
        type(exc).__name__,
        exc.message,
        extra={"status_code": exc.status_code, "path": request.url.path},
    )
    return error_response(
        status_code=exc.status_code,
        error=exc.message,
        details=exc.details or None,
        data=exc.data,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(
        "HTTPException: %s",
        exc.detail,
        extra={"status_code": exc.status_code, "path": request.url.path},
    )
    message = get_error_type(exc.status_code) if exc.status_code == 405 else str(exc.detail)
    return error_response(status_code=exc.status_code, error=message)


async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, PydanticValidationError]
) -> JSONResponse:
    """Malformed bodies and query parameters are client errors (400)."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query"))
        errors.append({"field": field, "message": error["msg"], "type": error["type"]})

    logger.warning("Validation error on %s", request.url.path, extra={"path": request.url.path})

    first = errors[0] if errors else None
    message = f"Invalid {first['field']}: {first['message']}" if first and first["field"] else "Validation error"
    return error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        error=message,
        details={"validation_errors": errors},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Database error: %s",
        exc,
        exc_info=True,
        extra={"path": request.url.path, "method": request.method},
    )
    # Raw driver text only leaves the process in debug mode
    details = {"message": str(exc)} if request.app.state.settings.debug else None
    return error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error="Database error",
        details=details,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception: %s",
        exc,
        exc_info=True,
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error="Internal server error",
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(BoomBookingError, booking_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
