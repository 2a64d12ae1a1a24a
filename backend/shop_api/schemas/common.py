"""
Shop API Backend: Shared Response Schemas
==========================================
"""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Success indicator returned by update and delete."""
    message: str = Field(description="Human-readable success message")


class UploadResponse(BaseModel):
    """Returned by POST /upload."""
    imagePath: str = Field(
        description="Public path of the stored file",
        examples=["/uploads/1718031234567891234.png"],
    )


class HealthResponse(BaseModel):
    """
    Health check response.

    A backend that cannot reach its database is effectively down, so the
    database check decides the overall status.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
