"""
ProfileDesk Backend — Shared Response Envelope Schemas
=======================================================

Every JSON response carries `success` and `message`. Errors add `error`
(a detail string) and `request_id`; validation errors also add `errors`.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops the offset on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Envelope(BaseModel):
    success: bool = Field(default=True, description="False on every error response")
    message: str = Field(description="Human-readable outcome")


class FieldError(BaseModel):
    field: str = Field(description="Dotted path of the offending input")
    message: str = Field(description="What is wrong with it")


class ErrorResponse(Envelope):
    """
    Standardized error body for all API errors.

    Example:
        {
            "success": false,
            "message": "Invalid/Expired token",
            "error": "unauthorized",
            "request_id": "3f2a9c1e"
        }
    """
    success: bool = False
    error: Optional[str] = Field(default=None, description="Error detail")
    errors: Optional[List[FieldError]] = Field(default=None, description="Per-field validation errors")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
