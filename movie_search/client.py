# HTTP client for the movie search API
# movie_search/client.py

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel, ValidationError

from movie_search.models.movie import Movie, MovieSearchResponse
from movie_search.utils.helpers import page_window

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_PAGE_SIZE = 20
POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"
CARD_GENRE_LIMIT = 3

__all__ = [
    "MovieSearchClient",
    "MovieSearchClientError",
    "SearchCriteria",
    "describe_criteria",
    "movie_card",
    "page_window",
]


class MovieSearchClientError(Exception):
    """The search could not be loaded; the caller may retry the same request."""


class SearchCriteria(BaseModel):
    """Criteria a user picked in the search form."""
    language: Optional[str] = None
    min_rating: Optional[float] = None
    adult: Optional[bool] = None
    country: Optional[str] = None
    release_year: Optional[int] = None
    runtime: Optional[int] = None
    genre: Optional[str] = None
    sort_by: Optional[str] = None


def describe_criteria(criteria: SearchCriteria) -> List[str]:
    """Human-readable summary lines for the chosen criteria."""
    lines = []
    if criteria.language:
        lines.append(f"Language: {criteria.language}")
    if criteria.min_rating:
        lines.append(f"Min Rating: {criteria.min_rating:g}")
    lines.append(f"Adult Content: {'Yes' if criteria.adult else 'No'}")
    if criteria.country:
        lines.append(f"Country: {criteria.country}")
    if criteria.release_year:
        lines.append(f"Year: {criteria.release_year} (±3)")
    if criteria.runtime:
        lines.append(f"Runtime: {criteria.runtime} min (±15)")
    if criteria.genre:
        lines.append(f"Genre: {criteria.genre}")
    return lines


def movie_card(movie: Movie) -> Dict[str, Any]:
    """Display values for one result card, with 'N/A' for missing fields."""
    return {
        "title": movie.title,
        "poster_url": f"{POSTER_BASE_URL}{movie.poster_path}" if movie.poster_path else None,
        "rating": f"{movie.average_rating:.1f}" if movie.average_rating else "N/A",
        "year": str(movie.release_date.year) if movie.release_date else "N/A",
        "runtime": f"{movie.runtime} min" if movie.runtime else "N/A",
        "language": movie.original_language or "N/A",
        "genres": movie.genres[:CARD_GENRE_LIMIT],
        "overview": movie.overview or "No description available.",
    }


class MovieSearchClient:
    """
    Calls GET /api/movies and decodes the paginated envelope.

    Args:
        base_url: Root URL of the API, without the /api prefix.
        session: Optional requests session, e.g. to share connection pooling.
        timeout: Per-request timeout in seconds.
        page_size: `limit` sent with every search.
    """
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.page_size = page_size

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/api/movies"

    def build_query(self, criteria: SearchCriteria, page: int = 1) -> Dict[str, str]:
        """Query-string parameters for a search; empty criteria are left out."""
        params: Dict[str, str] = {"page": str(page), "limit": str(self.page_size)}
        if criteria.language:
            params["language"] = criteria.language
        if criteria.min_rating:
            params["minRating"] = f"{criteria.min_rating:g}"
        if criteria.adult is not None:
            params["adult"] = "true" if criteria.adult else "false"
        if criteria.country:
            params["country"] = criteria.country
        if criteria.release_year:
            params["year"] = str(criteria.release_year)
        if criteria.runtime:
            params["runtime"] = str(criteria.runtime)
        if criteria.genre:
            params["genre"] = criteria.genre
        if criteria.sort_by:
            params["sortBy"] = criteria.sort_by
        return params

    def search(self, criteria: SearchCriteria, page: int = 1) -> MovieSearchResponse:
        """
        Loads one page of results.

        Raises:
            MovieSearchClientError: On transport errors, non-2xx responses or
                a body that is not a valid envelope.
        """
        params = self.build_query(criteria, page)
        try:
            response = self.session.get(self.search_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Error loading movies: {e}")
            raise MovieSearchClientError(f"Failed to fetch movies: {e}") from e
        except ValueError as e:
            logger.error(f"Movie search returned a non-JSON body: {e}")
            raise MovieSearchClientError("Failed to decode movie search response") from e

        try:
            result = MovieSearchResponse.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Movie search returned an unexpected envelope: {e}")
            raise MovieSearchClientError("Unexpected movie search response") from e

        logger.info(f"Total movies found: {result.total}; in current page: {len(result.movies)}")
        return result

    def pagination(self, result: MovieSearchResponse, max_buttons: int = 5) -> List[int]:
        """Page buttons to show for `result`; empty when everything fits on one page."""
        if result.total_pages <= 1:
            return []
        return page_window(result.current_page, result.total_pages, max_buttons)
