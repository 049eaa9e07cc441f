"""
Primary FastAPI application entry point
"""
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware

from movie_search.api.api import api_router
from movie_search.api.errors import movie_search_error_handler
from movie_search.core.config import Settings, get_settings
from movie_search.core.exceptions import MovieSearchError
from movie_search.data_access.mongo_client import MongoStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout,
        force=True,
    )


def build_store(settings: Settings) -> MongoStore:
    return MongoStore(
        uri=settings.MONGODB_URI.get_secret_value(),
        db_name=settings.MONGODB_DB_NAME,
        movies_collection=settings.MOVIES_COLLECTION,
    )


def create_app(store: Optional[MongoStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the FastAPI application around a store.

    The store is connected on startup and closed on shutdown. A failed
    initial connection raises out of the lifespan, which aborts startup.
    """
    settings = settings or get_settings()
    store = store or build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup: Initializing connections...")
        await store.connect()
        app.state.store = store
        yield
        logger.info("Application shutdown: Closing connections...")
        await store.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=f"{settings.API_PREFIX}/redoc",
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.add_exception_handler(MovieSearchError, movie_search_error_handler)

    @app.get("/", status_code=status.HTTP_200_OK)
    async def root():
        """Root endpoint to confirm the API is running."""
        return {"status": "Server is running"}

    return app


configure_logging(get_settings().LOG_LEVEL)
app = create_app()

# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("movie_search.server:app", host="0.0.0.0", port=5000, reload=True)
