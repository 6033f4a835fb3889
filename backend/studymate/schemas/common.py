"""
StudyMate Backend — Shared Pydantic Response Schemas
======================================================

What:  Response envelopes shared by the partner and partner-request routes.
Why:   Keeps the JSON contract (camelCase keys the frontend already reads)
       in one place and documents it in the OpenAPI schema.

Stored documents themselves are NOT modelled here: partners and requests
accept arbitrary caller fields, so they travel as plain JSON objects.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain status message returned by GET /."""
    message: str = Field(description="Human-readable status text")


class SuccessResponse(BaseModel):
    """
    What:  Acknowledgement for mutations that return no data.
    Who:   PATCH increase/decrease-count, DELETE /partner-requests/{id}.
    """
    success: bool = Field(default=True)


class InsertResponse(BaseModel):
    """
    What:  Acknowledgement for POST /partners and POST /partner-requests.
    Why alias: Clients read `insertedId`, matching the driver's naming.
    """
    success: bool = Field(default=True)
    inserted_id: str = Field(alias="insertedId", description="New document identifier")

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models — Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code ("validation_error", "not_found", ...)
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "not_found",
            "message": "partner with ID '65f1c0ffee...' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and container health checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
