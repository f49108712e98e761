"""
VRCX Companion API — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the few error scenarios this API has.
Why:   Services raise typed errors; global handlers in main.py turn them into
       HTTP responses, so route handlers stay free of try/except blocks.
How:   Each exception carries a message and an optional context dict. The
       message is what the client may see; context is logged only.

Exception Hierarchy:
    VrcxApiError (base)
    ├── ConfigurationError   → fatal at startup (schema setup failed)
    ├── StorageError         → 500 text/plain "<operation> failed"
    └── ValidationError      → 400, empty body

The users listing is the one path that does NOT propagate StorageError: it
degrades to an empty list (see services/user_service.py).
"""

from typing import Any, Dict, Optional


class VrcxApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Short description, safe to return to the client
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


class ConfigurationError(VrcxApiError):
    """
    Raised when the process cannot start with its configuration.

    When:    Storage unreachable during schema setup, CREATE TABLE rejected.
    Effect:  Propagates out of the lifespan handler and aborts startup.
    """

    def __init__(
        self,
        message: str = "Application configuration is invalid",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(VrcxApiError):
    """
    Raised when a storage call fails while serving a request.

    What:    Connectivity loss, pool timeout, constraint violation, bad query.
    HTTP:    500 with a short plain-text body naming the failed operation.

    The operation name (e.g. "list recent memos") is the only detail exposed;
    the driver error is kept in context for the server log.
    """

    def __init__(
        self,
        operation: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=f"{operation} failed", context=context)
        self.operation = operation


class ValidationError(VrcxApiError):
    """
    Raised when a request does not have the expected shape.

    HTTP:    400 Bad Request with no body details beyond the status.
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
