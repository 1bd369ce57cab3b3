"""Schemas shared across endpoints: acknowledgements, errors, health."""

from typing import Optional

from pydantic import Field

from retroboard.schemas import CamelModel


class OkResponse(CamelModel):
    """Body of successful DELETE responses."""

    ok: bool = True


class ErrorResponse(CamelModel):
    """
    Error format for all API errors.

    Example:
        {"error": "userId and title required", "request_id": "a1b2c3d4"}
    """

    error: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(
        default=None,
        alias="request_id",
        description="Request correlation ID",
    )


class HealthResponse(CamelModel):
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
