"""
Common schemas shared across API endpoints.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response."""

    message: str = Field(..., description="Human-readable error message")
