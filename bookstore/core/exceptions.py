"""
Global exception handling for the application.
Every error leaves the API in the same JSON envelope as a successful response:
{"error": true, "message": "..."}.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputException(AppError):
    """Malformed or missing request payload."""
    def __init__(self, message: str = "invalid json supplied, or json missing entirely", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class ValidationException(AppError):
    """A store constraint rejected the write (duplicate email, unknown foreign key)."""
    def __init__(self, message: str = "Constraint violation", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, details)


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class InvalidCredentialsException(UnauthorizedException):
    """Unknown email or wrong password. The two cases share one message."""
    def __init__(self, message: str = "invalid username/password", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class AccountInactiveException(UnauthorizedException):
    def __init__(self, message: str = "user is not active", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class InvalidTokenException(UnauthorizedException):
    def __init__(self, message: str = "invalid or expired token", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class StoreException(AppError):
    """Connection or query failure in the relational store."""
    def __init__(self, message: str = "database error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


class DatabaseConnectionError(StoreException):
    """The startup ping failed."""
    def __init__(self, message: str = "cannot connect to database", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


def _error_envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": True, "message": message},
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render application errors in the response envelope."""
    logger.warning(
        "Request rejected",
        code=exc.__class__.__name__,
        message=exc.message,
        path=request.url.path,
        **exc.details,
    )
    return _error_envelope(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body or path parameters that fail schema validation are invalid input."""
    error = InvalidInputException()
    logger.warning("Invalid request payload", path=request.url.path, errors=exc.errors())
    return _error_envelope(error.status_code, error.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_envelope(exc.status_code, str(exc.detail))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    logger.exception("Unexpected error occurred", path=request.url.path)
    return _error_envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again later.",
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
