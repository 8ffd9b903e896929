"""
MindfulSpace Backend — Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for every failure the API can report.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services, the auth guard and the database layer.

Exception Hierarchy:
    MindfulSpaceError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── AuthError         → 401 Unauthorized (missing/invalid token, bad credentials)
    ├── NotFoundError     → 404 Not Found (missing OR not owned by caller)
    ├── ConflictError     → 409 Conflict (uniqueness violation)
    ├── DependencyError   → 500 (store unreachable; fatal at boot)
    ├── TransientError    → 500 (pool exhaustion / timeout; safe to retry)
    └── DatabaseError     → 500 (unexpected store failure)

Messages of AuthError and NotFoundError are deliberately uniform: callers
cannot tell an unknown email from a wrong password, or a missing row from
someone else's row.
"""

from typing import Any, Dict, Optional


class MindfulSpaceError(Exception):
    """
    Base exception for all MindfulSpace application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for validation errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MindfulSpaceError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, blank content, short password,
             invalid status value, malformed filter.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Password must be at least 6 characters",
            "details": {"field": "password"}
        }
    """

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


class AuthError(MindfulSpaceError):
    """
    Raised when a request cannot be authenticated.

    When:    No bearer token, a malformed/forged/expired token, a token whose
             user no longer exists, or a failed login.
    HTTP:    401 Unauthorized with `WWW-Authenticate: Bearer`
    """

    def __init__(
        self,
        message: str = "Invalid token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(MindfulSpaceError):
    """
    Raised when a requested resource does not exist for the caller.

    Ownership-scoped queries return zero rows both when the row is missing
    and when it belongs to another user; both become this exception.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class ConflictError(MindfulSpaceError):
    """
    Raised when a write would violate a uniqueness rule.

    When:    Registering an existing email, repeating a friend request for
             the same ordered pair.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DependencyError(MindfulSpaceError):
    """
    Raised when the database cannot be reached.

    At startup this aborts the lifespan, so the process never serves
    requests with a broken store. At runtime it becomes a generic 500.
    """

    def __init__(
        self,
        message: str = "A required service is unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class TransientError(MindfulSpaceError):
    """
    Raised when a pooled connection could not be acquired in time.

    The request had no effect and may be retried by the caller.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "The server is busy. Please retry the request.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(MindfulSpaceError):
    """
    Raised when a database operation fails unexpectedly.

    The message returned to the client is always generic; the driver error
    is logged server-side only.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
