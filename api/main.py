"""
FastAPI application for the Movie Review API.

CRUD for movies and their embedded reviews, backed by MongoDB.
Interactive docs are served at /api-docs.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from api.dependencies import get_store
from api.exceptions import (
    APIError,
    api_error_handler,
    database_error_handler,
    request_validation_handler,
)
from api.logging_config import (
    REQUEST_ID_HEADER,
    generate_request_id,
    level_for_status,
    logger,
    set_request_id,
)
from api.routers import movies, reviews

API_PREFIX = "/api/v1"
DOCS_URL = "/api-docs"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the movie store once at startup and close it on shutdown."""
    # Resolve through overrides so tests can swap the store
    store = app.dependency_overrides.get(get_store, get_store)()
    try:
        store.connect()
        store.ensure_indexes()
    except PyMongoError as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        raise
    logger.info("Movie store connected")

    yield

    store.close()


# Create FastAPI app
app = FastAPI(
    title="Movie Review API",
    description="REST API for movies and their reviews",
    version="1.1.0",
    docs_url=DOCS_URL,
    redoc_url=f"{DOCS_URL}/redoc",
    openapi_url=f"{DOCS_URL}/swagger.json",
    openapi_tags=[
        {"name": "Movies", "description": "CRUD operations for movies"},
        {"name": "Reviews", "description": "Operations for movie reviews"},
    ],
    lifespan=lifespan,
)

# Register exception handlers
app.add_exception_handler(APIError, api_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(PyMongoError, database_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Log all HTTP requests with timing and response status."""
    request_id = generate_request_id()
    set_request_id(request_id)

    # Skip logging for health checks and docs
    skip_paths = {"/", "/health", DOCS_URL, app.redoc_url, app.openapi_url}
    if request.url.path in skip_paths:
        return await call_next(request)

    start_time = time.time()
    client_ip = request.client.host if request.client else "unknown"

    logger.info(
        f"Request started: {request.method} {request.url.path} "
        f"from {client_ip}"
    )

    try:
        response = await call_next(request)
    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        logger.error(
            f"Request failed: {request.method} {request.url.path} "
            f"duration={duration_ms:.2f}ms error={str(e)}"
        )
        raise

    duration_ms = (time.time() - start_time) * 1000
    logger.log(
        level_for_status(response.status_code),
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration_ms:.2f}ms",
    )

    # Add request ID to response headers for debugging
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


app.include_router(movies.router, prefix=API_PREFIX, tags=["Movies"])
app.include_router(reviews.router, prefix=API_PREFIX, tags=["Reviews"])


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint points to the docs."""
    return {
        "message": "Movie Review API",
        "api": API_PREFIX,
        "docs": DOCS_URL,
        "redoc": app.redoc_url,
    }


@app.get("/health", include_in_schema=False)
async def health():
    """Simple health check endpoint."""
    return {"status": "ok"}
