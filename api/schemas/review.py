"""
Review-related Pydantic schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ReviewInput(BaseModel):
    """Request to add a review to a movie."""

    rating: Optional[int] = Field(None, description="Rating from 1 to 5")
    comment: Optional[str] = Field(None, description="Review comment")


class ReviewUpdate(BaseModel):
    """Request to change a review's rating and/or comment."""

    rating: Optional[int] = Field(None, description="New rating from 1 to 5")
    comment: Optional[str] = Field(None, description="New comment")


class ReviewResponse(BaseModel):
    """A single review."""

    id: str = Field(..., description="Review ID")
    rating: int
    comment: str


class ReviewsResponse(BaseModel):
    """A movie's title and reviews."""

    movieId: str
    title: str
    reviews: List[ReviewResponse]
