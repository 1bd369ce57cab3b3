"""
RetroBoard Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the different error scenarios.
Why:   Services raise these instead of building HTTP responses; the global
       handlers registered in main.py turn them into `{"error": message}`
       bodies with the right status code.
How:   Each exception carries a user-facing message, an optional context dict
       (logged, never returned), and the HTTP status it maps to.

Exception Hierarchy:
    RetroBoardError (base)
    ├── ValidationError        → 400 Bad Request (missing/empty/invalid field)
    ├── ParseError             → 400 Bad Request (malformed JSON body)
    ├── AuthError              → 401 Unauthorized (credential mismatch)
    ├── NotFoundError          → 404 Not Found
    ├── ConflictError          → 409 Conflict (duplicate unique key)
    ├── PayloadTooLargeError   → 413 Payload Too Large
    └── DatabaseError          → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class RetroBoardError(Exception):
    """
    Base exception for all RetroBoard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RetroBoardError):
    """
    Raised when client input fails a presence or enumeration check.

    Example response:
        {"error": "email/password required", "request_id": "a1b2c3d4"}
    """

    status_code = 400

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


class ParseError(RetroBoardError):
    """Raised when the request body is not a JSON object."""

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid JSON body",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthError(RetroBoardError):
    """Raised when login credentials do not match a stored user."""

    status_code = 401

    def __init__(
        self,
        message: str = "Invalid email or password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(RetroBoardError):
    """
    Raised when a referenced user, board or note does not exist.

    SQLAlchemy returns None for missing rows; services convert that None into
    this exception so the handler can answer 404.
    """

    status_code = 404

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


class ConflictError(RetroBoardError):
    """Raised when an insert would duplicate a unique key (e.g. email)."""

    status_code = 409

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PayloadTooLargeError(RetroBoardError):
    """Raised by the body parser once the streamed body passes the size cap."""

    status_code = 413

    def __init__(
        self,
        max_size: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["max_size"] = max_size
        super().__init__(
            message=f"Request body exceeds the {max_size} byte limit",
            context=ctx,
        )
        self.max_size = max_size


class DatabaseError(RetroBoardError):
    """
    Raised when database operations fail unexpectedly.

    Security Note:
        The message returned to the client is always generic. Constraint
        names, SQL and driver errors are logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
