# Functions to connect to MongoDB from the import scripts
# data_processing/common/db_connect.py

import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConfigurationError, ConnectionFailure

logger = logging.getLogger(__name__)

load_dotenv()

FALLBACK_DB_NAME = "movies"

_mongo_client: Optional[MongoClient] = None


def get_mongo_client() -> MongoClient:
    """
    Establishes and returns a pymongo MongoClient instance.
    Caches the client instance for reuse within a script run.

    Returns:
        A MongoClient instance.

    Raises:
        ConnectionFailure: If the connection to MongoDB fails.
        ConfigurationError: If the URI is invalid.
        ValueError: If MONGODB_URI environment variable is not set.
    """
    global _mongo_client
    if _mongo_client:
        return _mongo_client

    mongodb_uri = os.environ.get("MONGODB_URI")
    if not mongodb_uri:
        logger.critical("MONGODB_URI environment variable not set.")
        raise ValueError("MONGODB_URI environment variable is required.")

    logger.info(f"Connecting to MongoDB at {mongodb_uri[:15]}...")
    try:
        client = MongoClient(mongodb_uri, serverSelectionTimeoutMS=5000)
        client.admin.command('ping')
        logger.info("MongoDB connection successful.")
        _mongo_client = client
        return client
    except ConfigurationError as e:
        logger.critical(f"MongoDB configuration error: {e}", exc_info=True)
        raise
    except ConnectionFailure as e:
        logger.critical(f"MongoDB connection failed: {e}", exc_info=True)
        raise


def close_mongo_client() -> None:
    global _mongo_client
    if _mongo_client:
        _mongo_client.close()
        logger.info("MongoDB connection closed.")
    _mongo_client = None


def get_mongo_database(client: Optional[MongoClient] = None, db_name: Optional[str] = None) -> Database:
    """
    Returns a pymongo Database instance.

    Args:
        client: Optional MongoClient instance. If None, the cached one is used.
        db_name: Optional database name. If None, taken from the URI, then
            MONGODB_DB_NAME, then a fallback.
    """
    if client is None:
        client = get_mongo_client()

    if db_name:
        logger.debug(f"Using provided database name: {db_name}")
        return client[db_name]

    fallback = os.environ.get("MONGODB_DB_NAME", FALLBACK_DB_NAME)
    db = client.get_default_database(default=fallback)
    logger.debug(f"Using database: {db.name}")
    return db


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        db = get_mongo_database()
        print(f"Successfully connected to database: {db.name}")
        print(f"Collections: {db.list_collection_names()}")
        close_mongo_client()
    except (ValueError, ConnectionFailure, ConfigurationError) as e:
        print(f"Failed to connect to MongoDB: {e}", file=sys.stderr)
        sys.exit(1)
