# movie_search/models/movie.py

from datetime import datetime
from typing import Any, List, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from movie_search.utils.helpers import parse_bool, parse_float, parse_int, split_list

_DATETIME = TypeAdapter(datetime)


class Movie(BaseModel):
    """
    A movie document as stored in the `movies` collection.

    The collection has no enforced schema: only the identifier is required,
    every other field may be missing, and fields not listed here are kept
    as-is. Known fields holding a value of the wrong type read as missing
    instead of failing the whole search. `genres` and `cast` are normalized
    to lists at this boundary.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    id: str = Field(..., alias="_id", description="Internal database ID (MongoDB ObjectId as string).")
    title: Optional[str] = None
    year: Optional[int] = None
    release_date: Optional[datetime] = None
    cast: List[str] = Field(default_factory=list)
    genres: List[str] = Field(default_factory=list)
    original_language: Optional[str] = None
    average_rating: Optional[float] = None
    adult: Optional[bool] = None
    production_countries: Optional[Union[str, List[Any]]] = None
    runtime: Optional[Union[int, float]] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_object_id(cls, v: Any) -> Any:
        if isinstance(v, ObjectId):
            return str(v)
        return v

    @field_validator("title", "original_language", "overview", "poster_path", mode="before")
    @classmethod
    def _loose_text(cls, v: Any) -> Optional[str]:
        if isinstance(v, bool) or not isinstance(v, (str, int, float)):
            return None
        return str(v)

    @field_validator("year", mode="before")
    @classmethod
    def _loose_year(cls, v: Any) -> Optional[int]:
        return parse_int(v)

    @field_validator("average_rating", mode="before")
    @classmethod
    def _loose_rating(cls, v: Any) -> Optional[float]:
        return parse_float(v)

    @field_validator("runtime", mode="before")
    @classmethod
    def _loose_runtime(cls, v: Any) -> Optional[Union[int, float]]:
        if isinstance(v, int) and not isinstance(v, bool):
            return v
        return parse_float(v)

    @field_validator("adult", mode="before")
    @classmethod
    def _loose_adult(cls, v: Any) -> Optional[bool]:
        return parse_bool(v)

    @field_validator("release_date", mode="before")
    @classmethod
    def _loose_date(cls, v: Any) -> Optional[datetime]:
        if v is None or isinstance(v, datetime):
            return v
        if isinstance(v, str) and not v.strip():
            return None
        try:
            return _DATETIME.validate_python(v)
        except ValidationError:
            return None

    @field_validator("production_countries", mode="before")
    @classmethod
    def _loose_countries(cls, v: Any) -> Any:
        return v if isinstance(v, (str, list)) else None

    @field_validator("genres", "cast", mode="before")
    @classmethod
    def _normalize_list(cls, v: Any) -> List[str]:
        if not isinstance(v, (str, list, tuple)):
            return []
        return split_list(v)


class MovieSearchResponse(BaseModel):
    """Paginated envelope returned by GET /api/movies."""
    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(..., ge=0, description="Number of movies matching the filters.")
    total_pages: int = Field(..., ge=0, alias="totalPages", description="ceil(total / limit).")
    current_page: int = Field(..., ge=1, alias="currentPage", description="Echo of the requested page.")
    movies: List[Movie] = Field(default_factory=list)
