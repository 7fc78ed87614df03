"""
Postboard Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages, without leaking internals.
How:   Each exception class carries a message, an optional context dict, a
       status code and a machine-readable code. Global exception handlers
       (registered in main.py) turn them into JSON error responses.
Who:   Raised by services and the auth gate; caught by global handlers.

Exception Hierarchy:
    PostboardError (base)
    ├── ValidationError       → 400 Bad Request (client can fix)
    ├── ConflictError         → 400 Bad Request (uniqueness violation)
    ├── AuthenticationError   → 401 Unauthorized
    ├── ForbiddenError        → 403 Forbidden (authenticated, not the owner)
    ├── NotFoundError         → 404 Not Found
    └── DatabaseError         → 500 Internal Server Error

    InvalidTokenError is not an HTTP error: the token service raises it and
    the auth gate converts it into AuthenticationError.
"""

from typing import Any, Dict, Optional


class PostboardError(Exception):
    """
    Base exception for all Postboard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PostboardError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, password too short, malformed body.
    HTTP:    400 Bad Request
    """

    status_code = 400
    code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConflictError(PostboardError):
    """
    Raised when a write collides with a uniqueness constraint.

    HTTP 400 rather than 409: clients of this API treat a taken username
    like any other invalid registration input.
    """

    status_code = 400
    code = "conflict"

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(PostboardError):
    """
    Raised when the caller's identity cannot be established.

    When:    No bearer token, invalid/expired token, or bad login credentials.
    HTTP:    401 Unauthorized

    Login failures always use the same message for an unknown username and a
    wrong password so that responses cannot be used to enumerate accounts.
    """

    status_code = 401
    code = "unauthenticated"

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(PostboardError):
    """Authenticated, but not the author of the resource being mutated (403)."""

    status_code = 403
    code = "forbidden"

    def __init__(
        self,
        message: str = "Not authorized to modify this resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PostboardError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing records; services convert that into
    NotFoundError so the handler can answer 404.
    """

    status_code = 404
    code = "not_found"

    def __init__(
        self,
        message: str = "The requested resource was not found",
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource:
            ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(PostboardError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The original
        error type is kept in `context` and logged server-side only.
    """

    status_code = 500
    code = "server_error"

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidTokenError(PostboardError):
    """
    Raised by TokenService.verify for any token that must not be trusted:
    malformed, wrong algorithm, bad signature, bad claims, or expired.
    """

    status_code = 401
    code = "unauthenticated"

    def __init__(self, reason: str = "invalid token"):
        super().__init__(message="Invalid token", context={"reason": reason})
        self.reason = reason
