"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected"] = Field(
        default="connected", description="Store connectivity status"
    )
    timestamp: str = Field(description="Time of the check (ISO-8601, UTC)")


class HealthErrorResponse(BaseModel):
    """Response body when the store is unreachable (HTTP 500)."""

    status: Literal["error"] = "error"
    environment: str
    database: Literal["disconnected"] = "disconnected"
    timestamp: str
    error: str
