"""
Application exceptions and the handlers that turn them into JSON errors.

Every error body is `{"error": <message>, "correlation_id": <id>}`; client
errors may add a `details` object. Server errors never expose details.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from travel_cms.lib.logging import get_logger

logger = get_logger(__name__)


class AppException(Exception):
    """Base for errors raised deliberately by services and routes."""

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


class ValidationException(AppException):
    """Missing or out-of-range input (400)."""

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            status.HTTP_400_BAD_REQUEST,
            {"errors": errors} if errors else None,
        )


class UnauthorizedException(AppException):
    """No usable bearer token, or the caller is not an admin (401)."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class NotFoundException(AppException):
    """
    Unknown id or slug (404).

    Also raised for a package that exists but is not ACTIVE when a visitor
    tries to review it.
    """

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        super().__init__(
            f"{resource} not found",
            status.HTTP_404_NOT_FOUND,
            {"resource": resource, "resource_id": resource_id} if resource_id else None,
        )


class InternalException(AppException):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


class SearchException(InternalException):
    """The store failed during a search; no partial results are returned."""

    def __init__(self, message: str = "Failed to search"):
        super().__init__(message)


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", "unknown")


def error_response(
    request: Request,
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"error": message, "correlation_id": _correlation_id(request)}
    if details and status_code < 500:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _log_context(request: Request, **fields) -> Dict[str, Any]:
    return {
        "correlation_id": _correlation_id(request),
        "method": request.method,
        "path": request.url.path,
        **fields,
    }


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """4xx are logged as warnings, 5xx as errors with the stack trace."""
    server_error = exc.status_code >= 500
    logger.log(
        logging.ERROR if server_error else logging.WARNING,
        f"Application error: {exc.message}",
        extra=_log_context(request, status_code=exc.status_code, details=exc.details),
        exc_info=exc if server_error else None,
    )
    return error_response(request, exc.status_code, exc.message, exc.details)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed bodies and query parameters are client errors (400)."""
    errors = [
        {
            "loc": [str(part) for part in error["loc"]],
            "msg": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning("Validation error", extra=_log_context(request, errors=errors))
    return error_response(
        request, status.HTTP_400_BAD_REQUEST, "Validation error", {"errors": errors}
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Unknown routes and disallowed methods."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra=_log_context(request, status_code=exc.status_code),
    )
    return error_response(
        request, exc.status_code, exc.detail, headers=getattr(exc, "headers", None)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception: {exc}", extra=_log_context(request), exc_info=exc)
    return error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
