"""
Movie Review REST API.

This module provides a FastAPI-based REST API exposing CRUD operations
over movies and the reviews embedded in them.
"""

from api.main import app

__all__ = ["app"]
