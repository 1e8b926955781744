"""
Movie store - MongoDB persistence for the Movie Review API.

This package provides:
- Configuration loaded from the environment
- Movie and Review data models
- The MovieStore handle over the movies collection
- A small CLI for setup, status and serving the API
"""

from .config import Config
from .models import Movie, Review
from .database import DuplicateTitleError, MovieStore, MovieStoreError

__version__ = "1.1.0"
__all__ = [
    "Config",
    "Movie",
    "Review",
    "MovieStore",
    "MovieStoreError",
    "DuplicateTitleError",
]
