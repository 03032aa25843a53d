"""
ProfileDesk Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions, one per HTTP failure class.
How:   Each exception carries a user-facing message and an optional context
       dict. Handlers registered in main.py turn them into the JSON envelope
       `{"success": false, "message": ..., "error": ...}`.
Who:   Raised by services and the auth gate; caught by global handlers.

Exception Hierarchy:
    ProfileDeskError (base)
    ├── ValidationError            → 400 Bad Request
    ├── UnauthorizedError          → 401 Unauthorized
    ├── NotFoundError              → 404 Not Found
    ├── ConflictError              → 409 Conflict
    ├── PayloadTooLargeError       → 413 Payload Too Large
    ├── UnsupportedMediaTypeError  → 415 Unsupported Media Type
    └── DatabaseError              → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class ProfileDeskError(Exception):
    """
    Base exception for all ProfileDesk application errors.

    Attributes:
        message:     User-facing error description (safe to return)
        context:     Debug info, logged but not returned for 5xx errors
        status_code: HTTP status the global handler responds with
        error_code:  Machine-readable code placed in the `error` field
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


class ValidationError(ProfileDeskError):
    """
    Client input is missing or malformed.

    Raised for missing multipart fields, a missing file, malformed ids and
    empty bulk bodies. Schema-level failures on JSON bodies come from
    FastAPI's RequestValidationError and are rendered the same way.
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


class UnauthorizedError(ProfileDeskError):
    """
    Missing, invalid or expired credential, or a failed login.

    The message is returned verbatim, so callers must not put anything in it
    that distinguishes an unknown account from a wrong password.
    """

    status_code = 401
    error_code = "unauthorized"

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ProfileDeskError):
    """A requested record does not exist."""

    status_code = 404
    error_code = "not_found"

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


class ConflictError(ProfileDeskError):
    """A unique field (account email) is already taken."""

    status_code = 409
    error_code = "conflict"

    def __init__(
        self,
        message: str = "Resource already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)


class PayloadTooLargeError(ProfileDeskError):
    """Uploaded file is over the configured size ceiling."""

    status_code = 413
    error_code = "payload_too_large"

    def __init__(
        self,
        max_size: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        max_mb = max_size / (1024 * 1024)
        ctx = context or {}
        ctx["max_size"] = max_size
        super().__init__(
            message=f"File too large. Maximum size is {max_mb:g}MB",
            context=ctx,
        )
        self.max_size = max_size


class UnsupportedMediaTypeError(ProfileDeskError):
    """Uploaded file does not declare an image/* MIME type."""

    status_code = 415
    error_code = "unsupported_media_type"

    def __init__(
        self,
        content_type: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["content_type"] = content_type
        super().__init__(message="Only image files are allowed!", context=ctx)
        self.content_type = content_type


class DatabaseError(ProfileDeskError):
    """
    A database operation failed unexpectedly.

    The response message is always generic; `context` keeps the original
    exception type for the server log.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
