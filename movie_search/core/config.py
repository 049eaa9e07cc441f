# Settings management (reads env vars/.env)
# movie_search/core/config.py

import logging
import os
from functools import lru_cache
from typing import List, Optional, Union

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables or .env file.
    """
    # --- Project Info ---
    PROJECT_NAME: str = Field("Movie Search API", validation_alias="PROJECT_NAME")
    API_PREFIX: str = Field("/api", validation_alias="API_PREFIX")
    VERSION: str = Field("1.0.0", validation_alias="APP_VERSION")

    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", validation_alias="LOG_LEVEL")

    # --- Database (MongoDB) ---
    # SecretStr keeps credentials embedded in the URI out of logs and reprs
    MONGODB_URI: SecretStr = Field(
        SecretStr("mongodb://localhost:27017/movies"), validation_alias="MONGODB_URI"
    )
    MONGODB_DB_NAME: str = Field(
        "movies",
        validation_alias="MONGODB_DB_NAME",
        description="Database used when the connection string does not name one.",
    )
    MOVIES_COLLECTION: str = Field("movies", validation_alias="MOVIES_COLLECTION")

    # --- Pagination ---
    DEFAULT_PAGE_SIZE: int = Field(
        default=50,
        ge=1,
        validation_alias="DEFAULT_PAGE_SIZE",
        description="Page size used when the request omits or mangles `limit`.",
    )
    MAX_PAGE_SIZE: Optional[int] = Field(
        default=None,
        ge=1,
        validation_alias="MAX_PAGE_SIZE",
        description="Optional upper bound applied to the requested `limit`; unbounded when unset.",
    )

    # --- CORS ---
    # Expects a comma-separated string in env var like "http://localhost:3000,https://movies.example.com"
    BACKEND_CORS_ORIGINS: List[str] = Field(
        default=["*"],
        validation_alias="BACKEND_CORS_ORIGINS"
    )

    @field_validator("BACKEND_CORS_ORIGINS", mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        raise ValueError(f"Invalid BACKEND_CORS_ORIGINS format: {v}")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    def mongodb_uri_prefix(self, length: int = 15) -> str:
        """Leading part of the connection string, safe to log."""
        return self.MONGODB_URI.get_secret_value()[:length]


@lru_cache()
def get_settings() -> Settings:
    """Returns the application settings instance."""
    logger.info("Attempting to load application settings...")
    try:
        settings_instance = Settings()
        logger.info(f"Settings loaded successfully for Project: {settings_instance.PROJECT_NAME}")
        logger.info(f"Log Level: {settings_instance.LOG_LEVEL}")
        logger.info(f"MongoDB URI: {settings_instance.mongodb_uri_prefix()}...")
        logger.info(f"CORS Origins: {settings_instance.BACKEND_CORS_ORIGINS}")
        logger.info(
            f"Paging: default={settings_instance.DEFAULT_PAGE_SIZE}, max={settings_instance.MAX_PAGE_SIZE or 'unbounded'}"
        )
        return settings_instance
    except Exception as e:
        logger.critical(f"CRITICAL ERROR: Failed to load application settings: {e}", exc_info=True)
        raise RuntimeError(f"Could not load settings: {e}")


settings: Settings = get_settings()
