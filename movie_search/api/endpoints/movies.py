# movie_search/api/endpoints/movies.py

import logging

from fastapi import APIRouter, Depends

from movie_search.api.deps import get_movie_service, get_search_params
from movie_search.core.exceptions import MovieSearchError
from movie_search.models.movie import MovieSearchResponse
from movie_search.models.search import MovieSearchParams
from movie_search.services.movie_service import MovieService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "",  # GET /api/movies
    response_model=MovieSearchResponse,
    tags=["Movies"],
    summary="Search Movies",
    description=(
        "Retrieve a paginated list of movies filtered by language, minimum rating, "
        "adult flag, country, release year (±3), runtime (±15 min) and genre."
    ),
    responses={
        500: {"description": "The movie store failed"},
        503: {"description": "The movie store is not connected"},
    },
)
async def search_movies(
    params: MovieSearchParams = Depends(get_search_params),
    movie_service: MovieService = Depends(get_movie_service),
):
    """
    Fetches one page of movies matching the query-string filters.
    """
    logger.info(f"Request received at /api/movies: {params.model_dump(exclude_none=True)}")
    try:
        return await movie_service.search_movies(params)
    except MovieSearchError:
        raise
    except Exception as e:
        logger.error(f"Error in /api/movies: {e}", exc_info=True)
        raise MovieSearchError(details=str(e)) from e
