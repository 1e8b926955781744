"""
Movie endpoints.

CRUD over the movies collection. Handlers are plain functions so
FastAPI runs the blocking store calls on its threadpool.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from api.dependencies import get_store, to_object_id
from api.exceptions import NotFoundError, ValidationError
from api.schemas.common import ErrorResponse
from api.schemas.movie import MovieInput, MovieResponse
from movie_db.database import DuplicateTitleError, MovieStore
from movie_db.models import is_blank

router = APIRouter()
logger = logging.getLogger("api.movies")

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Movie not found"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid input"}}


@router.get("/movies", response_model=List[MovieResponse])
def list_movies(store: MovieStore = Depends(get_store)):
    """
    Get all movies sorted alphabetically by title.
    """
    return [movie.to_dict() for movie in store.list_movies()]


@router.get(
    "/movies/{movie_id}",
    response_model=MovieResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def get_movie(
    movie_id: str,
    store: MovieStore = Depends(get_store),
):
    """
    Get a single movie including its reviews.
    """
    movie = store.get_movie(to_object_id(movie_id))
    if not movie:
        raise NotFoundError("movie")
    return movie.to_dict()


@router.post(
    "/movies",
    response_model=MovieResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
)
def create_movie(
    request: MovieInput,
    store: MovieStore = Depends(get_store),
):
    """
    Add a new movie. Titles must be unique.
    """
    if is_blank(request.title):
        logger.warning("Create movie rejected: title missing")
        raise ValidationError("TITLE REQUIRED!")

    try:
        movie = store.create_movie(request.title)
    except DuplicateTitleError as e:
        raise ValidationError(str(e)) from e

    logger.info(f"Movie created: id={movie.id} title={movie.title!r}")
    return movie.to_dict()


@router.put(
    "/movies/{movie_id}",
    response_model=MovieResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def update_movie(
    movie_id: str,
    request: MovieInput,
    store: MovieStore = Depends(get_store),
):
    """
    Replace the title of an existing movie.
    """
    if is_blank(request.title):
        logger.warning(f"Update movie rejected: movie_id={movie_id} title missing")
        raise ValidationError("NEW TITLE REQUIRED!")
    object_id = to_object_id(movie_id)

    try:
        movie = store.update_title(object_id, request.title)
    except DuplicateTitleError as e:
        raise ValidationError(str(e)) from e

    if not movie:
        raise NotFoundError("movie")

    logger.info(f"Movie updated: id={movie.id} title={movie.title!r}")
    return movie.to_dict()


@router.delete(
    "/movies/{movie_id}",
    response_model=MovieResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def delete_movie(
    movie_id: str,
    store: MovieStore = Depends(get_store),
):
    """
    Remove a movie and all of its reviews.

    Returns the movie as it was just before deletion.
    """
    movie = store.delete_movie(to_object_id(movie_id))
    if not movie:
        raise NotFoundError("movie")

    logger.info(f"Movie deleted: id={movie.id} reviews={len(movie.reviews)}")
    return movie.to_dict()
