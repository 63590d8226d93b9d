"""
FormBuilder Backend - Shared Response Schemas
==============================================

What:  Pydantic models shared by every route: plain messages, errors, health.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Body of operations that only confirm success."""
    message: str = Field(description="Human-readable success message")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "conflict", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "unauthorized",
            "message": "Unauthorized",
            "request_id": "1f3a9c2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for container and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
