"""
API middleware: exception types and their JSON handlers.
"""
from travel_cms.api.middleware.error_handler import (
    AppException,
    InternalException,
    NotFoundException,
    SearchException,
    UnauthorizedException,
    ValidationException,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "InternalException",
    "NotFoundException",
    "SearchException",
    "UnauthorizedException",
    "ValidationException",
    "register_exception_handlers",
]
