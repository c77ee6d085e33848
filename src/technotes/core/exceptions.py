"""
Application exception hierarchy.

Services raise these; the handlers registered in ``technotes.main`` turn them
into ``{"message": ...}`` responses with the matching status code.

    TechNotesError (base)      -> 500
    ├── ValidationError        -> 400
    ├── UnauthorizedError      -> 401
    ├── ForbiddenError         -> 403
    ├── NotFoundError          -> 404
    ├── ConflictError          -> 409
    └── DatabaseError          -> 500

``message`` is safe to return to the client. ``context`` is only logged.
"""

from typing import Any, Dict, Optional


class TechNotesError(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TechNotesError):
    """Client input is missing or malformed."""

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request data",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnauthorizedError(TechNotesError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class ForbiddenError(TechNotesError):
    status_code = 403

    def __init__(self, message: str = "Forbidden", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class NotFoundError(TechNotesError):
    """Requested resource doesn't exist, or can't be removed while in use."""

    status_code = 404

    def __init__(
        self,
        message: str = "Not found",
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


class ConflictError(TechNotesError):
    """Write would collide with an existing record."""

    status_code = 409

    def __init__(self, message: str = "Conflict", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class DatabaseError(TechNotesError):
    """Database unreachable or a query failed unexpectedly."""

    status_code = 500

    def __init__(
        self,
        message: str = "Database operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
