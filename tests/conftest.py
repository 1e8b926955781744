"""
Shared fixtures for Movie Review API tests.

Provides an in-memory movie store, sample data and a test client.
"""

import copy
import dataclasses
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from movie_db.database import DuplicateTitleError
from movie_db.models import Movie, Review, utc_now


# =============================================================================
# SAMPLE DATA
# =============================================================================

# Deliberately not in title order
SAMPLE_TITLES = [
    "The Dark Knight",
    "Inception",
    "Pulp Fiction",
    "Fight Club",
    "Interstellar",
]

SAMPLE_REVIEWS = {
    "Inception": [(5, "Mind-bending."), (4, "Great score.")],
    "Fight Club": [(3, "Overrated twist.")],
}


# =============================================================================
# MOCK STORE
# =============================================================================

class MockMovieStore:
    """In-memory stand-in for MovieStore with the same method surface."""

    def __init__(self):
        self.movies: Dict[str, Movie] = {}
        self.connect_calls = 0
        self.connected = False
        self.indexes_ensured = False
        self.calls: List[str] = []
        # Set to a PyMongoError to simulate an unreachable server
        self.fail_with: Optional[Exception] = None

    def reset(self):
        """Reset all data."""
        self.movies.clear()
        self.calls.clear()
        self.fail_with = None

    # Connection
    def connect(self) -> None:
        self.connect_calls += 1
        self.connected = True

    def close(self) -> None:
        self.connected = False

    def ensure_indexes(self) -> None:
        self.indexes_ensured = True

    def get_status(self) -> dict:
        return {
            "movies": len(self.movies),
            "reviews": sum(len(m.reviews) for m in self.movies.values()),
        }

    # Helpers
    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def _title_taken(self, title: str, exclude_id: Optional[str] = None) -> bool:
        return any(
            m.title == title and m.id != exclude_id for m in self.movies.values()
        )

    def _touch(self, movie: Movie) -> Movie:
        movie.updated_at = utc_now()
        return copy.deepcopy(movie)

    # Movie operations
    def list_movies(self) -> List[Movie]:
        self._enter("list_movies")
        return [copy.deepcopy(m) for m in sorted(self.movies.values(), key=lambda m: m.title)]

    def get_movie(self, movie_id: ObjectId) -> Optional[Movie]:
        self._enter("get_movie")
        movie = self.movies.get(str(movie_id))
        return copy.deepcopy(movie) if movie else None

    def get_reviews(self, movie_id: ObjectId) -> Optional[Movie]:
        self._enter("get_reviews")
        movie = self.movies.get(str(movie_id))
        if not movie:
            return None
        return Movie(id=movie.id, title=movie.title, reviews=copy.deepcopy(movie.reviews))

    def create_movie(self, title: str) -> Movie:
        self._enter("create_movie")
        if self._title_taken(title):
            raise DuplicateTitleError(title)
        now = utc_now()
        movie = Movie(id=str(ObjectId()), title=title, created_at=now, updated_at=now)
        self.movies[movie.id] = movie
        return copy.deepcopy(movie)

    def update_title(self, movie_id: ObjectId, title: str) -> Optional[Movie]:
        self._enter("update_title")
        movie = self.movies.get(str(movie_id))
        if not movie:
            return None
        if self._title_taken(title, exclude_id=movie.id):
            raise DuplicateTitleError(title)
        movie.title = title
        return self._touch(movie)

    def delete_movie(self, movie_id: ObjectId) -> Optional[Movie]:
        self._enter("delete_movie")
        return self.movies.pop(str(movie_id), None)

    # Review operations
    def add_review(self, movie_id: ObjectId, rating: int, comment: str) -> Optional[Movie]:
        self._enter("add_review")
        movie = self.movies.get(str(movie_id))
        if not movie:
            return None
        movie.reviews.append(Review.new(rating, comment))
        return self._touch(movie)

    def update_review(
        self,
        movie_id: ObjectId,
        review_id: ObjectId,
        rating: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> Optional[Movie]:
        self._enter("update_review")
        movie = self.movies.get(str(movie_id))
        if not movie:
            return None
        for index, review in enumerate(movie.reviews):
            if review.id == str(review_id):
                changes = {}
                if rating is not None:
                    changes["rating"] = rating
                if comment is not None:
                    changes["comment"] = comment
                movie.reviews[index] = dataclasses.replace(review, **changes)
                return self._touch(movie)
        return None

    def delete_review(self, movie_id: ObjectId, review_id: ObjectId) -> Optional[Movie]:
        self._enter("delete_review")
        movie = self.movies.get(str(movie_id))
        if not movie:
            return None
        movie.reviews = [r for r in movie.reviews if r.id != str(review_id)]
        return self._touch(movie)

    # Test helpers
    def find_by_title(self, title: str) -> Optional[Movie]:
        for movie in self.movies.values():
            if movie.title == title:
                return movie
        return None


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def mock_store():
    """Provide a fresh mock store for each test."""
    return MockMovieStore()


@pytest.fixture
def mock_store_with_data(mock_store):
    """Mock store pre-populated with sample movies and reviews."""
    for title in SAMPLE_TITLES:
        movie = mock_store.create_movie(title)
        for rating, comment in SAMPLE_REVIEWS.get(title, []):
            mock_store.add_review(ObjectId(movie.id), rating, comment)
    mock_store.calls.clear()
    return mock_store


@pytest.fixture
def api_client(mock_store_with_data):
    """Provide FastAPI test client with mocked dependencies."""
    from api.main import app
    from api import dependencies

    # Clear any cached config/store from previous runs
    dependencies.get_config.cache_clear()
    dependencies.get_store.cache_clear()

    def get_mock_store():
        return mock_store_with_data

    def get_mock_config():
        return MagicMock()

    app.dependency_overrides[dependencies.get_store] = get_mock_store
    app.dependency_overrides[dependencies.get_config] = get_mock_config

    with TestClient(app) as client:
        yield client

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture
def movie_id(mock_store_with_data):
    """ID of a sample movie that has two reviews."""
    return mock_store_with_data.find_by_title("Inception").id
