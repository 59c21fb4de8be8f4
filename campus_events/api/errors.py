"""
Exception handlers rendering the standard error envelope
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from campus_events.core.exceptions import CampusEventsError, RateLimitError
from campus_events.utils.responses import error_response

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


async def campus_events_error_handler(request: Request, exc: CampusEventsError):
    if exc.status_code >= 500:
        # internal detail stays in the log
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        return error_response(INTERNAL_ERROR, status_code=exc.status_code)

    headers = None
    if isinstance(exc, RateLimitError):
        headers = {"Retry-After": str(exc.retry_after)}
    return error_response(exc.message, exc.errors, exc.status_code, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(location) or "body", "message": error.get("msg", "Invalid value")})
    return error_response("Validation failed", errors, 400)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(INTERNAL_ERROR, status_code=500)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(INTERNAL_ERROR, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CampusEventsError, campus_events_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
