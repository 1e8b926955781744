"""
Dependency injection for the API.

Provides dependencies for database access and configuration.
"""

from functools import lru_cache

from bson import ObjectId

from api.exceptions import ValidationError
from movie_db.config import Config
from movie_db.database import MovieStore
from movie_db.models import parse_object_id


@lru_cache()
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()


@lru_cache()
def get_store() -> MovieStore:
    """Get cached MovieStore instance."""
    config = get_config()
    return MovieStore(config)


def to_object_id(value: str, resource: str = "movie") -> ObjectId:
    """
    Parse an identifier taken from the URL path.

    Args:
        value: Raw path segment
        resource: Resource name used in the error message

    Returns:
        The parsed ObjectId

    Raises:
        ValidationError: If the value is not a valid identifier
    """
    object_id = parse_object_id(value)
    if object_id is None:
        raise ValidationError(f"Invalid {resource} ID: {value}")
    return object_id
