"""
Database manager for the movie store.

Handles all MongoDB operations including:
- Connection management with pymongo
- CRUD operations for movies
- Element-level operations on the embedded reviews array
- Index setup for the unique title constraint
"""

from threading import Lock
from typing import List, Optional

from bson import ObjectId
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from .config import DEFAULT_DB_NAME, Config
from .models import Movie, Review, utc_now
from .utils import setup_logger

TITLE_INDEX = "title_unique"


class MovieStoreError(Exception):
    """Base error raised by the movie store."""


class DuplicateTitleError(MovieStoreError):
    """A movie with the same title already exists."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"A movie titled '{title}' already exists")


class MovieStore:
    """
    Handles all database operations.

    Responsibilities:
    - Owning the MongoClient (connect once, reuse for every request)
    - Single-document reads and writes on the movies collection
    - Positional updates of embedded reviews

    Every method that mutates a movie returns the movie as it is after
    the mutation, except delete_movie which returns its last state.
    Methods return None when the targeted movie does not exist.
    """

    def __init__(self, config: Config):
        self.config = config
        self.logger = setup_logger("database", config.log_dir)
        self._client: Optional[MongoClient] = None
        self._collection: Optional[Collection] = None
        self._lock = Lock()

    # ============ CONNECTION ============

    def connect(self) -> None:
        """Create the MongoClient. Calling it again once connected does nothing."""
        with self._lock:
            if self._client is not None:
                return

            client = MongoClient(
                self.config.mongodb_uri,
                serverSelectionTimeoutMS=self.config.server_selection_timeout_ms,
                tz_aware=True,
            )
            if self.config.db_name:
                db = client[self.config.db_name]
            else:
                db = client.get_default_database(default=DEFAULT_DB_NAME)

            self._collection = db[self.config.collection_name]
            self._client = client
            self.logger.info(
                f"Connected to MongoDB database={db.name} "
                f"collection={self.config.collection_name}"
            )

    def close(self) -> None:
        """Close the MongoClient if one is open."""
        with self._lock:
            if self._client is None:
                return
            self._client.close()
            self._client = None
            self._collection = None
            self.logger.info("MongoDB connection closed")

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def collection(self) -> Collection:
        """The movies collection, connecting on first use."""
        if self._collection is None:
            self.connect()
        return self._collection

    def ensure_indexes(self) -> None:
        """Create the unique index backing the title constraint."""
        self.collection.create_index(
            [("title", ASCENDING)], unique=True, name=TITLE_INDEX
        )
        self.logger.info(f"Index ensured: {TITLE_INDEX}")

    def get_status(self) -> dict:
        """Get document counts for the movies collection."""
        movie_count = self.collection.count_documents({})
        result = list(self.collection.aggregate([
            {"$group": {
                "_id": None,
                "reviews": {"$sum": {"$size": {"$ifNull": ["$reviews", []]}}},
            }},
        ]))
        return {
            "movies": movie_count,
            "reviews": result[0]["reviews"] if result else 0,
        }

    # ============ MOVIE OPERATIONS ============

    def list_movies(self) -> List[Movie]:
        """Get all movies sorted by title."""
        cursor = self.collection.find().sort("title", ASCENDING)
        return [Movie.from_document(doc) for doc in cursor]

    def get_movie(self, movie_id: ObjectId) -> Optional[Movie]:
        """Get a movie with its reviews."""
        doc = self.collection.find_one({"_id": movie_id})
        return Movie.from_document(doc) if doc else None

    def get_reviews(self, movie_id: ObjectId) -> Optional[Movie]:
        """Get a movie's title and reviews only."""
        doc = self.collection.find_one({"_id": movie_id}, {"title": 1, "reviews": 1})
        return Movie.from_document(doc) if doc else None

    def create_movie(self, title: str) -> Movie:
        """
        Insert a new movie with no reviews.

        Raises:
            DuplicateTitleError: If the title is already taken.
        """
        now = utc_now()
        doc = {
            "title": title,
            "reviews": [],
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            self.logger.warning(f"Duplicate title '{title}': {e}")
            raise DuplicateTitleError(title) from e

        doc["_id"] = result.inserted_id
        return Movie.from_document(doc)

    def update_title(self, movie_id: ObjectId, title: str) -> Optional[Movie]:
        """
        Replace a movie's title.

        Raises:
            DuplicateTitleError: If another movie already has the title.
        """
        try:
            doc = self.collection.find_one_and_update(
                {"_id": movie_id},
                {"$set": {"title": title, "updatedAt": utc_now()}},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            self.logger.warning(f"Duplicate title '{title}' for movie {movie_id}: {e}")
            raise DuplicateTitleError(title) from e

        return Movie.from_document(doc) if doc else None

    def delete_movie(self, movie_id: ObjectId) -> Optional[Movie]:
        """Delete a movie and, with it, all embedded reviews."""
        doc = self.collection.find_one_and_delete({"_id": movie_id})
        return Movie.from_document(doc) if doc else None

    # ============ REVIEW OPERATIONS ============

    def add_review(self, movie_id: ObjectId, rating: int, comment: str) -> Optional[Movie]:
        """Append a review with a fresh ID to the end of a movie's reviews."""
        review = Review.new(rating, comment)
        doc = self.collection.find_one_and_update(
            {"_id": movie_id},
            {
                "$push": {"reviews": review.to_document()},
                "$set": {"updatedAt": utc_now()},
            },
            return_document=ReturnDocument.AFTER,
        )
        return Movie.from_document(doc) if doc else None

    def update_review(
        self,
        movie_id: ObjectId,
        review_id: ObjectId,
        rating: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> Optional[Movie]:
        """
        Update the given fields of one embedded review in place.

        The filter matches the movie only when it holds the review, so the
        positional operator addresses exactly that element. Returns None
        when either the movie or the review is missing.
        """
        fields = {"updatedAt": utc_now()}
        if rating is not None:
            fields["reviews.$.rating"] = rating
        if comment is not None:
            fields["reviews.$.comment"] = comment

        doc = self.collection.find_one_and_update(
            {"_id": movie_id, "reviews._id": review_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return Movie.from_document(doc) if doc else None

    def delete_review(self, movie_id: ObjectId, review_id: ObjectId) -> Optional[Movie]:
        """
        Remove one embedded review.

        A review ID that matches nothing leaves the reviews untouched;
        only a missing movie returns None.
        """
        doc = self.collection.find_one_and_update(
            {"_id": movie_id},
            {
                "$pull": {"reviews": {"_id": review_id}},
                "$set": {"updatedAt": utc_now()},
            },
            return_document=ReturnDocument.AFTER,
        )
        return Movie.from_document(doc) if doc else None
