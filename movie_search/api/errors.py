from fastapi import Request, status
from fastapi.responses import JSONResponse

from movie_search.core.exceptions import MovieSearchError, StoreUnavailableError


async def movie_search_error_handler(request: Request, exc: Exception):
    assert isinstance(exc, MovieSearchError)

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, StoreUnavailableError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(status_code=status_code, content=exc.to_dict())
