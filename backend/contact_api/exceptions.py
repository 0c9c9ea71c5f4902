"""
Contact API — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the contact directory and photo store.
Why:   Targeted error handling with the right HTTP status codes, without leaking
       internal details (file paths, SQL) to the client.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    ContactApiError (base)
    ├── NotFoundError   → 404 Not Found (unknown contact or photo file)
    ├── StorageError    → 500 Internal Server Error (photo I/O failed)
    └── DatabaseError   → 500 Internal Server Error (persistence failed)

There is deliberately no ValidationError: contact payloads carry no
field-level business rules. Type errors are still rejected by FastAPI (422).
"""

from typing import Any, Dict, Optional


class ContactApiError(Exception):
    """
    Base exception for all Contact API application errors.

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


class NotFoundError(ContactApiError):
    """
    Raised when a requested contact or photo file does not exist.

    When:    GET /contacts/{id} or PUT /contacts/photo with an unknown id,
             GET /contacts/image/{filename} for a file that was never stored.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows and the filesystem raises
    FileNotFoundError; both are converted into this exception in the
    service layer.
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


class StorageError(ContactApiError):
    """
    Raised when writing or reading a photo on the storage volume fails.

    When:    Disk full, permission denied, photo directory not creatable,
             invalid path.
    HTTP:    500 Internal Server Error

    The OS error and the absolute path go into `context` (logged server-side);
    the message returned to the client never contains file system paths.
    """

    def __init__(
        self,
        message: str = "Photo storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ContactApiError):
    """
    Raised when a database operation fails unexpectedly.

    When:    Connection lost mid-query, database unavailable, constraint violation.
    HTTP:    500 Internal Server Error

    The original SQLAlchemy exception is chained (`raise ... from e`) so the
    full cause is visible in server logs; the client only sees a generic message.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
