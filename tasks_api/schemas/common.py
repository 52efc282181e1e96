"""Shared response schemas."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="What went wrong")
