from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from movie_search.core.exceptions import StoreUnavailableError
from movie_search.data_access.mongo_client import MongoStore, MovieRepository


@pytest.fixture
def motor_client():
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    database = MagicMock()
    database.name = "movies"
    client.get_default_database.return_value = database
    return client


@pytest.fixture
def client_factory(motor_client):
    return MagicMock(return_value=motor_client)


@pytest.fixture
def store(client_factory):
    return MongoStore(
        uri="mongodb://db.example:27017/movies",
        db_name="fallback",
        movies_collection="films",
        client_factory=client_factory,
    )


class TestMongoStore:
    """Connection lifecycle of the store"""

    def test_nothing_connects_on_construction(self, store, client_factory):
        assert store.is_connected is False
        client_factory.assert_not_called()

    async def test_connect_pings_and_selects_database(self, store, client_factory, motor_client):
        await store.connect()

        client_factory.assert_called_once_with("mongodb://db.example:27017/movies")
        motor_client.admin.command.assert_awaited_once_with("ping")
        motor_client.get_default_database.assert_called_once_with(default="fallback")
        assert store.is_connected is True

    async def test_connect_failure_raises_and_closes_client(self, store, motor_client):
        motor_client.admin.command.side_effect = ServerSelectionTimeoutError("timed out")

        with pytest.raises(RuntimeError, match="Failed to connect to MongoDB"):
            await store.connect()

        motor_client.close.assert_called_once()
        assert store.is_connected is False

    async def test_movies_repository_uses_configured_collection(self, store, motor_client):
        await store.connect()

        repository = store.movies

        assert isinstance(repository, MovieRepository)
        motor_client.get_default_database.return_value.__getitem__.assert_called_with("films")

    def test_movies_before_connect_is_unavailable(self, store):
        with pytest.raises(StoreUnavailableError):
            store.movies

    async def test_close(self, store, motor_client):
        await store.connect()

        await store.close()

        motor_client.close.assert_called_once()
        assert store.is_connected is False
        with pytest.raises(StoreUnavailableError):
            store.movies

    async def test_close_without_connect_is_harmless(self, store):
        await store.close()

        assert store.is_connected is False

    async def test_ping(self, store, motor_client):
        assert await store.ping() is False

        await store.connect()
        assert await store.ping() is True

        motor_client.admin.command.side_effect = OperationFailure("not primary")
        assert await store.ping() is False


class TestMovieRepository:
    """Repository calls against a collection double"""

    async def test_count_with_filters(self):
        collection = MagicMock()
        collection.count_documents = AsyncMock(return_value=12)
        repository = MovieRepository(collection)

        assert await repository.count_with_filters({"adult": False}) == 12
        collection.count_documents.assert_awaited_once_with({"adult": False})

    async def test_find_with_filters(self):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[{"_id": "1"}])
        collection = MagicMock()
        collection.find.return_value = cursor
        repository = MovieRepository(collection)

        docs = await repository.find_with_filters(
            {"genres": {"$regex": "drama", "$options": "i"}},
            sort=[("title", 1)],
            skip=40,
            limit=20,
        )

        assert docs == [{"_id": "1"}]
        collection.find.assert_called_once_with(
            {"genres": {"$regex": "drama", "$options": "i"}},
            sort=[("title", 1)],
            skip=40,
            limit=20,
        )
        cursor.to_list.assert_awaited_once_with(length=20)

    async def test_errors_propagate(self):
        collection = MagicMock()
        collection.count_documents = AsyncMock(side_effect=OperationFailure("unauthorized"))
        repository = MovieRepository(collection)

        with pytest.raises(OperationFailure):
            await repository.count_with_filters({})
