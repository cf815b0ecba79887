"""
ClassHub Backend — Shared Response Schemas
============================================

What:  Error and health response models shared by every router.
Who:   Referenced in route `responses=` declarations for OpenAPI docs.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Example (body validation failure):
        {
            "error": "validation_error",
            "message": "Request validation failed",
            "status": 400,
            "details": {
                "errors": {
                    "teacher": {
                        "message": "Field required",
                        "kind": "missing",
                        "path": "teacher"
                    }
                }
            },
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    status: int = Field(description="HTTP status code, repeated in the body")
    details: Optional[dict] = Field(default=None, description="Field-level errors or extra context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
