"""Pydantic schemas for API request and response validation."""

from api.schemas.common import ErrorResponse
from api.schemas.review import (
    ReviewInput,
    ReviewResponse,
    ReviewsResponse,
    ReviewUpdate,
)
from api.schemas.movie import MovieInput, MovieResponse

__all__ = [
    # Common
    "ErrorResponse",
    # Movie
    "MovieInput",
    "MovieResponse",
    # Review
    "ReviewInput",
    "ReviewResponse",
    "ReviewsResponse",
    "ReviewUpdate",
]
