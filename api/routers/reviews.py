"""
Review endpoints.

Reviews live inside their movie document, so every operation here
addresses the parent movie first and returns the whole movie.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_store, to_object_id
from api.exceptions import NotFoundError, ValidationError
from api.schemas.common import ErrorResponse
from api.schemas.movie import MovieResponse
from api.schemas.review import ReviewInput, ReviewsResponse, ReviewUpdate
from movie_db.database import MovieStore
from movie_db.models import is_blank, is_valid_rating

router = APIRouter()
logger = logging.getLogger("api.reviews")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or rating"},
    404: {"model": ErrorResponse, "description": "Movie or review not found"},
}


@router.get(
    "/movies/{movie_id}/reviews",
    response_model=ReviewsResponse,
    responses=ERROR_RESPONSES,
)
def list_reviews(
    movie_id: str,
    store: MovieStore = Depends(get_store),
):
    """
    Get all reviews posted for a movie.
    """
    movie = store.get_reviews(to_object_id(movie_id))
    if not movie:
        raise NotFoundError("movie")
    return movie.to_reviews_dict()


@router.post(
    "/movies/{movie_id}/reviews",
    response_model=MovieResponse,
    responses=ERROR_RESPONSES,
)
def add_review(
    movie_id: str,
    request: ReviewInput,
    store: MovieStore = Depends(get_store),
):
    """
    Add a review (rating 1-5 and comment) to a movie.

    The review is appended after any existing ones.
    """
    if not is_valid_rating(request.rating) or is_blank(request.comment):
        logger.warning(
            f"Add review rejected: movie_id={movie_id} rating={request.rating}"
        )
        raise ValidationError("INVALID COMMENT AND/OR RATING!")
    object_id = to_object_id(movie_id)

    movie = store.add_review(object_id, request.rating, request.comment)
    if not movie:
        raise NotFoundError("movie")

    logger.info(
        f"Review added: movie_id={movie.id} review_id={movie.reviews[-1].id} "
        f"rating={request.rating}"
    )
    return movie.to_dict()


@router.patch(
    "/movies/{movie_id}/reviews/{review_id}",
    response_model=MovieResponse,
    responses=ERROR_RESPONSES,
)
def update_review(
    movie_id: str,
    review_id: str,
    request: ReviewUpdate,
    store: MovieStore = Depends(get_store),
):
    """
    Change the rating and/or comment of one review.

    Fields left out of the body keep their current value.
    """
    nothing_to_update = request.rating is None and request.comment is None
    bad_rating = request.rating is not None and not is_valid_rating(request.rating)
    bad_comment = request.comment is not None and is_blank(request.comment)
    if nothing_to_update or bad_rating or bad_comment:
        logger.warning(
            f"Update review rejected: movie_id={movie_id} review_id={review_id}"
        )
        raise ValidationError("INVALID RATING (must be 1-5) OR MISSING DATA.")

    movie = store.update_review(
        to_object_id(movie_id),
        to_object_id(review_id, "review"),
        rating=request.rating,
        comment=request.comment,
    )
    if not movie:
        raise NotFoundError("review")

    logger.info(f"Review updated: movie_id={movie.id} review_id={review_id}")
    return movie.to_dict()


@router.delete(
    "/movies/{movie_id}/reviews/{review_id}",
    response_model=MovieResponse,
    responses=ERROR_RESPONSES,
)
def delete_review(
    movie_id: str,
    review_id: str,
    store: MovieStore = Depends(get_store),
):
    """
    Remove a review from a movie.

    Deleting a review the movie does not have is not an error;
    the movie comes back unchanged.
    """
    movie = store.delete_review(
        to_object_id(movie_id),
        to_object_id(review_id, "review"),
    )
    if not movie:
        raise NotFoundError("movie")

    logger.info(f"Review deleted: movie_id={movie.id} review_id={review_id}")
    return movie.to_dict()
