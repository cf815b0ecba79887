"""
ClassHub Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for every way a request chain can stop.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by dependencies, services and the data-access store.
When:  Whenever a step of a route's chain decides the request cannot proceed.

Exception Hierarchy:
    ClassHubError (base)
    ├── ValidationError     → 400 Bad Request (client can fix)
    ├── UnauthorizedError   → 401 Unauthorized (wrong role or not the owner)
    ├── ForbiddenError      → 403 Forbidden (no usable identity)
    ├── NotFoundError       → 500 (store not-found error, see below)
    └── DatabaseError       → 500 Internal Server Error

NotFoundError maps to 500: a lookup of a missing record is reported as a
failed store operation, the same way every other store failure is.
"""

from typing import Any, Dict, Optional


class ClassHubError(Exception):
    """
    Base exception for all ClassHub application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional info; returned only by handlers that expose details
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ClassHubError):
    """
    Raised when client input fails validation.

    When:    Malformed path id, unknown teacher/student reference, duplicate
             email, presence for a student outside the roster.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid classroom_id parameter in the request path.",
            "status": 400,
            "details": {"field": "classroom_id"}
        }
    """

    status_code = 400
    error_code = "validation_error"

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


class UnauthorizedError(ClassHubError):
    """
    Raised when a decoded identity may not access the requested classroom.

    When:    Wrong role for the route, malformed identity id, or the identity
             is neither the owning teacher nor an enrolled student.
    HTTP:    401 Unauthorized
    """

    status_code = 401
    error_code = "unauthorized"

    def __init__(
        self,
        message: str = "User is unauthorized to access this data.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(ClassHubError):
    """
    Raised when a protected route is called without a usable identity.

    HTTP:    403 Forbidden
    """

    status_code = 403
    error_code = "forbidden"

    def __init__(
        self,
        message: str = "Invalid Token for authentication, forbidden",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ClassHubError):
    """
    Raised when a requested record does not exist.

    When:    GET/DELETE /classrooms/{id} with an unknown id, a quiz id that does
             not belong to the classroom, etc.
    HTTP:    500 (reported as a failed store lookup)
    """

    status_code = 500
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Failed getting {resource}"
        if resource_id:
            message = f"Failed getting {resource}: {resource_id}"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(ClassHubError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the context is
    logged server-side only.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
