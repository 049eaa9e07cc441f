import asyncio
import os

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/movies_test")

from datetime import datetime
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from movie_search.core.config import Settings
from movie_search.data_access.mongo_client import MongoStore, MovieRepository
from movie_search.server import create_app
from movie_search.services.movie_service import MovieService


SAMPLE_MOVIES = [
    {
        "title": "Amores Perros",
        "release_date": datetime(2000, 6, 16),
        "genres": ["Drama", "Thriller"],
        "original_language": "es",
        "average_rating": 7.9,
        "adult": False,
        "production_countries": "Mexico",
        "runtime": 154,
    },
    {
        "title": "Brother",
        "release_date": datetime(1997, 12, 12),
        "genres": ["Crime", "Drama"],
        "original_language": "ru",
        "average_rating": 8.1,
        "adult": False,
        "production_countries": "Russia",
        "runtime": 100,
    },
    {
        "title": "Chicken Run",
        "release_date": datetime(2000, 6, 23),
        "genres": ["Animation", "Comedy", "Family"],
        "original_language": "en",
        "average_rating": 6.9,
        "adult": False,
        "production_countries": "United Kingdom",
        "runtime": 84,
    },
    {
        "title": "Deep Throat Revisited",
        "release_date": datetime(2005, 3, 1),
        "genres": ["Documentary"],
        "original_language": "en",
        "average_rating": 5.2,
        "adult": True,
        "production_countries": "United States of America",
        "runtime": 92,
    },
    {
        "title": "Eraserhead",
        "release_date": datetime(1977, 3, 19),
        "genres": ["Horror", "Fantasy"],
        "original_language": "en",
        "average_rating": 7.3,
        "adult": False,
        "production_countries": "United States of America",
        "runtime": 89,
    },
]


@pytest.fixture
def movies_collection():
    return AsyncMongoMockClient()["movies_test"]["movies"]


async def seed(collection, movies):
    await collection.insert_many([dict(movie) for movie in movies])
    return collection


@pytest_asyncio.fixture
async def seeded_collection(movies_collection):
    return await seed(movies_collection, SAMPLE_MOVIES)


@pytest.fixture
def repository(seeded_collection):
    return MovieRepository(seeded_collection)


@pytest.fixture
def movie_service(repository):
    return MovieService(repository=repository)


@pytest.fixture
def settings():
    return Settings()


def make_store(repository) -> Mock:
    """Store double that 'connects' instantly and serves the given repository."""
    store = Mock(spec=MongoStore)
    store.connect = AsyncMock()
    store.close = AsyncMock()
    store.ping = AsyncMock(return_value=True)
    store.is_connected = True
    store.movies = repository
    return store


@pytest.fixture
def api_repository():
    # TestClient runs the app on its own event loop, so seed before it starts
    collection = AsyncMongoMockClient()["movies_api_test"]["movies"]
    asyncio.run(seed(collection, SAMPLE_MOVIES))
    return MovieRepository(collection)


@pytest.fixture
def store(api_repository):
    return make_store(api_repository)


@pytest.fixture
def client(store, settings):
    app = create_app(store=store, settings=settings)
    with TestClient(app) as test_client:
        yield test_client
