"""
StudyMate Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the three error kinds the API reports.
Why:   Repositories raise typed errors; global handlers in main.py turn them into
       JSON responses with the right status code, so routes contain no try/except.
How:   Each exception carries a client-safe message and an optional context dict
       that is logged but never returned for server errors.

Exception Hierarchy:
    StudyMateError (base)
    ├── ValidationError   → 400 Bad Request (malformed id, bad query/body)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error (generic message)
"""

from typing import Any, Dict, Optional


class StudyMateError(Exception):
    """
    Base exception for all StudyMate application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, not returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StudyMateError):
    """
    Raised when client input cannot be used.

    When:    Identifier is not a 24-hex ObjectId, sort is not asc/desc,
             request body is not a JSON object.
    HTTP:    400 Bad Request
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


class NotFoundError(StudyMateError):
    """
    Raised when no stored document matches the request.

    HTTP:    404 Not Found

    Note:
        A partner decrement whose count is already zero also raises this;
        the filter `partnerCount > 0` simply matches nothing.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(StudyMateError):
    """
    Raised when a MongoDB operation fails.

    When:    Server selection timeout, network loss, write errors.
    HTTP:    500 Internal Server Error

    Security Note:
        The client only ever sees a generic message. The driver error and the
        operation context are logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
