# movie_search/services/movie_service.py

import logging

from pydantic import ValidationError
from pymongo.errors import PyMongoError

from movie_search.core.exceptions import MovieSearchError
from movie_search.data_access.mongo_client import MovieRepository
from movie_search.models.movie import Movie, MovieSearchResponse
from movie_search.models.search import MovieSearchParams
from movie_search.services.query_builder import build_movie_filter, resolve_sort
from movie_search.utils.helpers import calculate_skip, calculate_total_pages

logger = logging.getLogger(__name__)


class MovieService:
    def __init__(self, repository: MovieRepository):
        """
        Initializes the Movie Service.

        Args:
            repository: Repository over the movies collection.
        """
        self.repository = repository

    async def search_movies(self, params: MovieSearchParams) -> MovieSearchResponse:
        """
        Retrieves one page of movies matching the search criteria.

        The total is counted separately from the page fetch, so the two can
        disagree if the collection changes in between. Pages past the end
        come back empty with the same total.

        Args:
            params: Normalized search request.

        Returns:
            A MovieSearchResponse envelope.

        Raises:
            MovieSearchError: If the store fails or returns unreadable documents.
        """
        query = build_movie_filter(params)
        sort = resolve_sort(params.sort_by)
        skip = calculate_skip(params.page, params.limit)

        try:
            total = await self.repository.count_with_filters(query)
            logger.info(f"Total matching movies: {total}")

            docs = await self.repository.find_with_filters(
                query, sort=sort, skip=skip, limit=params.limit
            )
            movies = [Movie.model_validate(doc) for doc in docs]
        except PyMongoError as e:
            logger.error(f"Database error while searching movies: {e}", exc_info=True)
            raise MovieSearchError(details=str(e)) from e
        except ValidationError as e:
            logger.error(f"Unreadable movie document in search results: {e}", exc_info=True)
            raise MovieSearchError(details=str(e)) from e

        total_pages = calculate_total_pages(total, params.limit)
        logger.info(
            f"Returning {len(movies)} movies (page {params.page}/{total_pages}) "
            f"sorted by {params.sort_by.value} with query: {query}"
        )
        return MovieSearchResponse(
            total=total,
            total_pages=total_pages,
            current_page=params.page,
            movies=movies,
        )
