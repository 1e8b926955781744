"""
Movie-related Pydantic schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from api.schemas.review import ReviewResponse


class MovieInput(BaseModel):
    """Request to create a movie or replace its title."""

    title: Optional[str] = Field(None, description="Movie title (must be unique)")


class MovieResponse(BaseModel):
    """A movie with its embedded reviews."""

    id: str = Field(..., description="Movie ID")
    title: str
    reviews: List[ReviewResponse] = Field(default_factory=list)
    createdAt: Optional[datetime] = Field(None, description="Creation timestamp")
    updatedAt: Optional[datetime] = Field(None, description="Last update timestamp")
