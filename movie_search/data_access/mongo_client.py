# MongoDB connection and repository logic
# movie_search/data_access/mongo_client.py

import logging
from typing import Any, Callable, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from movie_search.core.exceptions import StoreUnavailableError
from movie_search.models.search import SortSpec

logger = logging.getLogger(__name__)


# --- Base Repository ---
class BaseRepository:
    """Common repository logic for a single collection."""
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection
        logger.debug(f"Initialized repository for collection: {collection.name}")


# --- Movie Repository ---
class MovieRepository(BaseRepository):
    """Read-only access to the movies collection."""

    async def count_with_filters(self, query: Dict[str, Any]) -> int:
        """Counts documents matching a query."""
        try:
            return await self.collection.count_documents(query)
        except PyMongoError as e:
            logger.error(f"DB error counting movies with filters {query}: {e}", exc_info=True)
            raise

    async def find_with_filters(
        self, query: Dict[str, Any], sort: SortSpec, skip: int, limit: int
    ) -> List[Dict[str, Any]]:
        """Finds one page of movies matching a query, in sort order."""
        try:
            cursor = self.collection.find(query, sort=sort, skip=skip, limit=limit)
            return await cursor.to_list(length=limit)
        except PyMongoError as e:
            logger.error(f"DB error finding movies with filters {query}: {e}", exc_info=True)
            raise


# --- Store ---
class MongoStore:
    """
    Owns the Motor client for the lifetime of the application.

    Nothing connects on construction: call `connect()` at startup and
    `close()` at shutdown, then hand the store to whatever needs it.

    Args:
        uri: MongoDB connection string.
        db_name: Database to use when the URI does not name one.
        movies_collection: Name of the movies collection.
        client_factory: Callable building the Motor client from the URI.
    """
    def __init__(
        self,
        uri: str,
        db_name: str = "movies",
        movies_collection: str = "movies",
        client_factory: Callable[..., AsyncIOMotorClient] = AsyncIOMotorClient,
    ):
        self._uri = uri
        self._db_name = db_name
        self._movies_collection = movies_collection
        self._client_factory = client_factory
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    @property
    def is_connected(self) -> bool:
        return self.db is not None

    async def connect(self) -> None:
        """
        Creates the client and pings the server.

        Raises:
            RuntimeError: If the server cannot be reached.
        """
        logger.info(f"Attempting to connect to MongoDB: {self._uri[:15]}...")
        client = self._client_factory(self._uri)
        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            logger.critical(f"MongoDB connection failed during initialization: {e}", exc_info=True)
            client.close()
            raise RuntimeError(f"Failed to connect to MongoDB: {e}") from e

        db = client.get_default_database(default=self._db_name)
        self.client = client
        self.db = db
        logger.info(f"MongoDB client initialized successfully. Using database: '{db.name}'")

    async def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB client closed.")
        self.client = None
        self.db = None

    async def ping(self) -> bool:
        """True when the server answers a ping."""
        if self.client is None:
            return False
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    @property
    def movies(self) -> MovieRepository:
        if self.db is None:
            logger.critical("MongoDB database instance is not available. Check initialization.")
            raise StoreUnavailableError(details="MongoDB client is not connected")
        return MovieRepository(self.db[self._movies_collection])
