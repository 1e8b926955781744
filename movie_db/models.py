"""
Data models for the movie store.

Provides dataclasses for the Movie aggregate and its embedded reviews,
with conversions from MongoDB documents and to API-facing dictionaries.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId


MIN_RATING = 1
MAX_RATING = 5


def parse_object_id(value: str) -> Optional[ObjectId]:
    """Parse a 24-hex-char identifier, returning None when it is malformed."""
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def utc_now() -> datetime:
    """Current UTC time at the millisecond precision MongoDB stores."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def is_valid_rating(rating: Optional[int]) -> bool:
    """Check a rating is an integer within the inclusive 1-5 range."""
    if rating is None or isinstance(rating, bool):
        return False
    return MIN_RATING <= rating <= MAX_RATING


def is_blank(value: Optional[str]) -> bool:
    """Check for a missing, empty or whitespace-only string."""
    return value is None or not value.strip()


@dataclass
class Review:
    """A single review embedded in a movie."""

    id: str
    rating: int
    comment: str

    def to_dict(self) -> dict:
        """Convert to the API representation."""
        return {
            "id": self.id,
            "rating": self.rating,
            "comment": self.comment,
        }

    def to_document(self) -> dict:
        """Convert to the embedded MongoDB sub-document."""
        return {
            "_id": ObjectId(self.id),
            "rating": self.rating,
            "comment": self.comment,
        }

    @classmethod
    def new(cls, rating: int, comment: str) -> "Review":
        """Create a review with a freshly generated identifier."""
        return cls(id=str(ObjectId()), rating=rating, comment=comment)

    @classmethod
    def from_document(cls, doc: dict) -> "Review":
        """Create Review from an embedded MongoDB sub-document."""
        return cls(
            id=str(doc.get("_id")),
            rating=doc.get("rating"),
            comment=doc.get("comment"),
        )


@dataclass
class Movie:
    """A movie together with its embedded reviews."""

    id: str
    title: str
    reviews: List[Review] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to the API representation."""
        return {
            "id": self.id,
            "title": self.title,
            "reviews": [r.to_dict() for r in self.reviews],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def to_reviews_dict(self) -> dict:
        """Convert to the reviews-only representation."""
        return {
            "movieId": self.id,
            "title": self.title,
            "reviews": [r.to_dict() for r in self.reviews],
        }

    def find_review(self, review_id: str) -> Optional[Review]:
        """Get the embedded review with the given ID, if any."""
        for review in self.reviews:
            if review.id == review_id:
                return review
        return None

    @classmethod
    def from_document(cls, doc: dict) -> "Movie":
        """Create Movie from a MongoDB document."""
        return cls(
            id=str(doc.get("_id")),
            title=doc.get("title"),
            reviews=[Review.from_document(r) for r in doc.get("reviews") or []],
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )
