# Translates a search request into a MongoDB filter and sort
# movie_search/services/query_builder.py

import logging
import re
from datetime import datetime, MINYEAR, MAXYEAR
from typing import Any, Dict, Optional

from movie_search.models.search import MovieSearchParams, SortBy, SortSpec

logger = logging.getLogger(__name__)

YEAR_TOLERANCE = 3
RUNTIME_TOLERANCE = 15


def _substring_match(value: str) -> Dict[str, Any]:
    # Literal, unanchored and case-insensitive: "us" also matches "Russia".
    return {"$regex": re.escape(value), "$options": "i"}


def release_date_range(year: int) -> Optional[Dict[str, datetime]]:
    """
    Release-date bounds for `year` ± YEAR_TOLERANCE.

    Covers Jan 1 of (year - 3) through the whole of Dec 31 of (year + 3).
    Returns None when the window falls outside the representable calendar.
    """
    first_year = year - YEAR_TOLERANCE
    end_year = year + YEAR_TOLERANCE + 1
    if first_year < MINYEAR or end_year > MAXYEAR:
        logger.debug(f"Ignoring out-of-range year filter: {year}")
        return None
    return {"$gte": datetime(first_year, 1, 1), "$lt": datetime(end_year, 1, 1)}


def build_movie_filter(params: MovieSearchParams) -> Dict[str, Any]:
    """
    Builds the MongoDB query filter for a movie search.

    Each supplied criterion adds one top-level key, so all of them must hold.
    Criteria left out of the request are not constrained at all; an empty
    dict matches every movie.
    """
    query: Dict[str, Any] = {}

    if params.language:
        query["original_language"] = params.language

    if params.min_rating is not None:
        query["average_rating"] = {"$gte": params.min_rating}

    if params.adult is not None:
        query["adult"] = params.adult

    if params.country:
        query["production_countries"] = _substring_match(params.country)

    if params.year is not None:
        date_range = release_date_range(params.year)
        if date_range:
            query["release_date"] = date_range

    if params.runtime is not None:
        query["runtime"] = {
            "$gte": params.runtime - RUNTIME_TOLERANCE,
            "$lte": params.runtime + RUNTIME_TOLERANCE,
        }

    if params.genre:
        query["genres"] = _substring_match(params.genre)

    return query


def resolve_sort(sort_by: Any = None) -> SortSpec:
    """
    Sort specification for a `sortBy` value.

    Only one key is ever used; ties come back in the store's natural order.
    Unknown or missing values sort by rating.
    """
    return SortBy.resolve(sort_by).spec
