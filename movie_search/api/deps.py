# FastAPI dependencies (store, services, search params)
# movie_search/api/deps.py

import logging
from typing import Optional

from fastapi import Depends, Query, Request

from movie_search.core.config import Settings, get_settings
from movie_search.core.exceptions import StoreUnavailableError
from movie_search.data_access.mongo_client import MongoStore, MovieRepository
from movie_search.models.search import MovieSearchParams
from movie_search.services.movie_service import MovieService

logger = logging.getLogger(__name__)


# --- Store Dependency ---

def get_store(request: Request) -> MongoStore:
    """
    Returns the store the application was created with.

    Raises:
        StoreUnavailableError: If the store is missing or not connected.
    """
    store: Optional[MongoStore] = getattr(request.app.state, "store", None)
    if store is None or not store.is_connected:
        logger.critical("MongoDB store is not available. Check initialization.")
        raise StoreUnavailableError(details="MongoDB client is not connected")
    return store


def get_movie_repository(store: MongoStore = Depends(get_store)) -> MovieRepository:
    return store.movies


def get_movie_service(repository: MovieRepository = Depends(get_movie_repository)) -> MovieService:
    return MovieService(repository=repository)


# --- Settings Dependency ---

def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with, else the process-wide ones."""
    return getattr(request.app.state, "settings", None) or get_settings()


# --- Search Params Dependency ---

def get_search_params(
    page: Optional[str] = Query(None, description="Page number (1-based, default 1)."),
    limit: Optional[str] = Query(None, description="Movies per page (default 50)."),
    language: Optional[str] = Query(None, description="Exact original language code."),
    min_rating: Optional[str] = Query(None, alias="minRating", description="Minimum average rating."),
    adult: Optional[str] = Query(None, description="'true' for adult titles, anything else for non-adult."),
    country: Optional[str] = Query(None, description="Case-insensitive production country substring."),
    year: Optional[str] = Query(None, description="Release year (±3 years)."),
    runtime: Optional[str] = Query(None, description="Runtime in minutes (±15 minutes)."),
    genre: Optional[str] = Query(None, description="Case-insensitive genre substring."),
    sort_by: Optional[str] = Query(
        None, alias="sortBy", description="rating (default), title, release_date or runtime."
    ),
    settings: Settings = Depends(get_app_settings),
) -> MovieSearchParams:
    """
    Collects the raw query-string values into a MovieSearchParams.

    Values are taken as strings and parsed leniently, so malformed input
    drops the matching filter rather than producing a 422.
    """
    return MovieSearchParams.from_query(
        {
            "page": page,
            "limit": limit,
            "language": language,
            "minRating": min_rating,
            "adult": adult,
            "country": country,
            "year": year,
            "runtime": runtime,
            "genre": genre,
            "sortBy": sort_by,
        },
        default_limit=settings.DEFAULT_PAGE_SIZE,
        max_limit=settings.MAX_PAGE_SIZE,
    )
