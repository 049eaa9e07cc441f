# movie_search/models/search.py

import logging
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from movie_search.utils.helpers import normalize_text, parse_float, parse_int

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50

SortSpec = List[Tuple[str, int]]


class SortBy(str, Enum):
    """Supported `sortBy` values."""
    RATING = "rating"
    TITLE = "title"
    RELEASE_DATE = "release_date"
    RUNTIME = "runtime"

    @property
    def spec(self) -> SortSpec:
        """PyMongo sort specification for this key."""
        return list(SORT_SPECS[self])

    @classmethod
    def resolve(cls, value: Any) -> "SortBy":
        """Maps a raw `sortBy` value to a member, falling back to RATING."""
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.RATING
        try:
            return cls(str(value))
        except ValueError:
            logger.debug(f"Unknown sortBy value {value!r}, using '{cls.RATING.value}'")
            return cls.RATING


SORT_SPECS = {
    SortBy.RATING: (("average_rating", -1),),
    SortBy.TITLE: (("title", 1),),
    SortBy.RELEASE_DATE: (("release_date", -1),),
    SortBy.RUNTIME: (("runtime", -1),),
}


class MovieSearchParams(BaseModel):
    """
    A movie search request built from query-string parameters.

    Parsing is lenient: a value that cannot be read leaves its filter out
    instead of failing the request. Paging values are always normalized to
    positive integers; the default and maximum page size can be supplied via
    validation context (`default_limit`, `max_limit`).
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    page: int = Field(None, validate_default=True, description="Page number (1-based).")
    limit: int = Field(None, validate_default=True, description="Number of movies per page.")
    language: Optional[str] = Field(None, description="Exact original_language code, e.g. 'en'.")
    min_rating: Optional[float] = Field(None, alias="minRating", description="Minimum average_rating.")
    adult: Optional[bool] = Field(
        None, description="Adult flag; any value other than 'true' means False."
    )
    country: Optional[str] = Field(None, description="Case-insensitive substring of production_countries.")
    year: Optional[int] = Field(None, description="Release year, matched with a ±3 year tolerance.")
    runtime: Optional[int] = Field(None, description="Runtime in minutes, matched with a ±15 minute tolerance.")
    genre: Optional[str] = Field(None, description="Case-insensitive substring of genres.")
    sort_by: SortBy = Field(SortBy.RATING, alias="sortBy", validate_default=True)

    @field_validator("page", mode="before")
    @classmethod
    def _parse_page(cls, v: Any) -> int:
        page = parse_int(v)
        return page if page is not None and page >= 1 else 1

    @field_validator("limit", mode="before")
    @classmethod
    def _parse_limit(cls, v: Any, info: ValidationInfo) -> int:
        context = info.context or {}
        default_limit = context.get("default_limit", DEFAULT_PAGE_SIZE)
        max_limit = context.get("max_limit")

        limit = parse_int(v)
        if limit is None or limit < 1:
            limit = default_limit
        if max_limit is not None:
            limit = min(limit, max_limit)
        return limit

    @field_validator("language", "country", "genre", mode="before")
    @classmethod
    def _parse_text(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return normalize_text(str(v))

    @field_validator("min_rating", mode="before")
    @classmethod
    def _parse_rating(cls, v: Any) -> Optional[float]:
        return parse_float(v)

    @field_validator("year", "runtime", mode="before")
    @classmethod
    def _parse_whole_number(cls, v: Any) -> Optional[int]:
        return parse_int(v)

    @field_validator("adult", mode="before")
    @classmethod
    def _parse_adult(cls, v: Any) -> Optional[bool]:
        # Presence matters: an empty or "false" value still constrains the search.
        if v is None or isinstance(v, bool):
            return v
        return str(v).strip().lower() == "true"

    @field_validator("sort_by", mode="before")
    @classmethod
    def _parse_sort_by(cls, v: Any) -> SortBy:
        return SortBy.resolve(v)

    @classmethod
    def from_query(
        cls,
        query: dict,
        default_limit: int = DEFAULT_PAGE_SIZE,
        max_limit: Optional[int] = None,
    ) -> "MovieSearchParams":
        """Builds params from a mapping of raw query-string values (camelCase keys)."""
        return cls.model_validate(
            query, context={"default_limit": default_limit, "max_limit": max_limit}
        )
