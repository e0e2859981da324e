"""
Customer API — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the failure kinds the API knows about.
How:   Each exception carries a user-facing message, an HTTP status code and an
       optional context dict. A single global handler (registered in main.py)
       renders any of them as {"error": message} with the carried status.
Who:   The store raises NotFoundError / StorageError; route handlers translate
       those into the message and status of the operation that failed.

Exception Hierarchy:
    CustomerAPIError (base)
    ├── ValidationError   → 422 Unprocessable Entity
    ├── NotFoundError     → 404 Not Found
    └── StorageError      → 500 Internal Server Error

Route handlers may override the default status when re-raising; for example a
storage failure during update is reported as 422 "Could not update customer".
"""

from typing import Any, Dict, Optional


class CustomerAPIError(Exception):
    """
    Base exception for all Customer API errors.

    Attributes:
        message:      User-facing error description (returned in the "error" key)
        status_code:  HTTP status used by the global exception handler
        context:      Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CustomerAPIError):
    """
    Raised when client input breaks a business rule.

    When:    Empty customer name on create, path/body id mismatch on update.
    HTTP:    422 Unprocessable Entity
    """

    status_code = 422

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(CustomerAPIError):
    """
    Raised when no customer matches the requested identifier.

    The driver returns None for a missing document (not an exception); the
    store converts that into NotFoundError so callers can tell it apart from
    an I/O failure.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Customer",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource} not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = dict(context or {})
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(CustomerAPIError):
    """
    Raised when a document store operation fails.

    When:    Server unreachable, unique index violation (duplicate id),
             index setup failure at startup, any other driver error.
    HTTP:    500 Internal Server Error (unless the route overrides it)

    The driver error is chained as __cause__ and summarised in context;
    it is never included in the response body.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A storage error occurred",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, status_code=status_code, context=context)
