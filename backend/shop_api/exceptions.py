"""
Shop API Backend: Exception Hierarchy
======================================

What:  Application-specific exceptions for the few error scenarios the API has.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       plain-text responses carrying the raw message.
Who:   Raised by the database layer, services and routes.

Exception Hierarchy:
    ShopAPIError (base)      → 500
    ├── ValidationError      → 400 (standalone upload without a file)
    ├── NotFoundError        → 404 (unknown uploaded file)
    ├── FileStorageError     → 500
    └── DatabaseError        → 500 (raw driver message in the body)

The API has no structured error codes: clients receive the message text and
the status code, nothing else. The context dict is logged server-side only.
"""

from typing import Any, Dict, Optional


class ShopAPIError(Exception):
    """
    Base exception for all Shop API errors.

    Attributes:
        message:  Text returned as the response body
        context:  Additional debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ShopAPIError):
    """Raised when a request is missing something the endpoint cannot do without."""

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


class NotFoundError(ShopAPIError):
    """
    Raised when a requested resource does not exist.

    Only file serving uses it: product and user operations never distinguish
    "not found" from success, the stored procedures decide.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class FileStorageError(ShopAPIError):
    """
    Raised when writing an uploaded file fails.

    When:    Disk full, permission denied, upload directory missing.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ShopAPIError):
    """
    Raised when a query or stored procedure fails.

    What:    Wraps any SQLAlchemy/driver error.
    HTTP:    500 Internal Server Error
    Message: The underlying driver message, unmodified. Clients of this API
             rely on seeing e.g. the constraint violation raised by a
             procedure, so it is passed through as-is.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
