"""
PetSoft Backend — Shared Response Schemas
===========================================

What:  Error and health response formats shared by all routes.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """
    Failure body returned by every action route.

    Example:
        {"message": "Pet not found."}
    """
    message: str = Field(description="User-facing error message")


class ErrorResponse(BaseModel):
    """
    What:  Error format produced by the global exception handlers.

    Fields:
        error: Machine-readable error code (e.g., "database_error")
        message: Human-readable description for display to users
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and load balancer health checks.
    """
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    payments: str = Field(description="Payment gateway: configured, not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")
