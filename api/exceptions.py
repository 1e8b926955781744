"""
Custom exceptions and error handlers for the API.

Every error response has the shape {"message": <text>}.
"""

import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

logger = logging.getLogger("api.errors")


class APIError(HTTPException):
    """Base API error with structured error response."""

    def __init__(self, status_code: int, error: str, message: str):
        self.error = error
        self.message = message
        super().__init__(status_code=status_code, detail=message)


class NotFoundError(APIError):
    """Resource not found error."""

    MESSAGES = {
        "movie": "MOVIE NOT FOUND!",
        "review": "MOVIE or REVIEW NOT FOUND!",
    }

    def __init__(self, resource: str):
        super().__init__(
            status_code=404,
            error="not_found",
            message=self.MESSAGES.get(resource, f"{resource.upper()} NOT FOUND!"),
        )


class ValidationError(APIError):
    """Request validation error."""

    def __init__(self, message: str):
        super().__init__(
            status_code=400,
            error="validation_error",
            message=message,
        )


class DatabaseError(APIError):
    """Database connection/operation error."""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(
            status_code=500,
            error="database_error",
            message=message,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions and return structured JSON response."""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 instead of FastAPI's 422."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    logger.warning(f"Rejected request {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"message": message})


async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    """Report store failures (unreachable server, timeouts, ...) as 500."""
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return await api_error_handler(request, DatabaseError())
