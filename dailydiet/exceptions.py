"""
Daily Diet Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and request dependencies; caught by global handlers.

Exception Hierarchy:
    DailyDietError (base)
    ├── UnauthenticatedError         → 400 Bad Request (no usable session)
    ├── ConflictError                → 400 Bad Request (duplicate registration)
    ├── NotFoundOrUnauthorizedError  → 400 Bad Request (update/delete miss)
    ├── NotFoundError                → 404 Not Found
    └── DatabaseError                → 500 Internal Server Error

Existence leakage:
    A meal that does not exist and a meal owned by someone else produce the
    same error. Services never query a meal without the owner filter, so they
    cannot tell the two cases apart anyway.
"""

from typing import Any, Dict, Optional


class DailyDietError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class UnauthenticatedError(DailyDietError):
    """
    Raised when a request carries no usable session.

    When:    Cookie missing, not a well-formed token, or bound to no user.
    HTTP:    400 Bad Request

    Raised before any owner-scoped query runs.
    """

    def __init__(
        self,
        message: str = "Session ID does not exist",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConflictError(DailyDietError):
    """
    Raised when registration collides with an existing user.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "User already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(DailyDietError):
    """
    Raised when a requested resource is not visible to the caller.

    When:    GET /meals/{id} for an id that does not exist or is not owned.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class NotFoundOrUnauthorizedError(DailyDietError):
    """
    Raised when an update or delete matched no row for this owner.

    HTTP:    400 Bad Request

    Repeating a delete, or deleting an id that never existed, lands here too.
    """

    def __init__(
        self,
        message: str = "Meal not found or unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(DailyDietError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; driver details are
    logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
