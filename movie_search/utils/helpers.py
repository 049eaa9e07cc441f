# movie_search/utils/helpers.py

import logging
import math
import re
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

# Leading numeric prefix, the way query-string numbers were read historically:
# "2000abc" -> 2000, "7.5 stars" -> 7.5, "abc" -> no value.
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# --- Text Processing ---

def normalize_text(text: Optional[str]) -> Optional[str]:
    """
    Strips whitespace from a string, mapping empty strings to None.

    Args:
        text: The input string or None.

    Returns:
        The stripped string, or None if nothing is left.
    """
    if text is None:
        return None
    text = text.strip()
    return text or None

def split_list(value: Any, separator: str = ",") -> List[str]:
    """
    Normalizes a string-or-sequence field into a list of non-empty strings.

    "Drama, Crime" and ["Drama", "Crime"] both become ["Drama", "Crime"].
    None becomes an empty list. Order is kept.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(separator)
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ValueError(f"Expected a string or a list, got {type(value).__name__}")
    return [str(item).strip() for item in items if item is not None and str(item).strip()]

# --- Lenient Number Parsing ---

def parse_int(value: Any) -> Optional[int]:
    """
    Reads an integer from a query-string value, returning None when there is none.

    Only the leading digits are used, so "12.9" reads as 12.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else None

def parse_float(value: Any) -> Optional[float]:
    """Reads a float from a query-string value, returning None when there is none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = float(value)
        return value if math.isfinite(value) else None
    match = _FLOAT_PREFIX.match(str(value))
    return float(match.group(1)) if match else None

def parse_bool(value: Any) -> Optional[bool]:
    """Reads true/false, 1/0 or yes/no (any case); anything else is None."""
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    return None

# --- Pagination Helpers ---

def calculate_skip(page: int, limit: int) -> int:
    """
    Calculates the number of documents to skip for pagination.

    Args:
        page: The current page number (1-based).
        limit: The number of items per page.

    Returns:
        The number of documents to skip.

    Raises:
        ValueError: If page or limit are not positive integers.
    """
    if not isinstance(page, int) or page < 1:
        raise ValueError("Page number must be a positive integer.")
    if not isinstance(limit, int) or limit < 1:
        raise ValueError("Page limit must be a positive integer.")
    return (page - 1) * limit

def calculate_total_pages(total_items: int, limit: int) -> int:
    """
    Calculates the total number of pages required.

    An empty result set has zero pages.

    Raises:
        ValueError: If limit is not a positive integer or total_items is negative.
    """
    if not isinstance(limit, int) or limit < 1:
        raise ValueError("Page limit must be a positive integer.")
    if total_items < 0:
        raise ValueError("Total items cannot be negative.")
    return math.ceil(total_items / limit)

def page_window(current_page: int, total_pages: int, max_buttons: int = 5) -> List[int]:
    """
    Page numbers to show in a pagination control.

    At most `max_buttons` consecutive pages, centered on `current_page` and
    clamped so the window never runs past the first or last page.

    Examples:
        page_window(1, 10) -> [1, 2, 3, 4, 5]
        page_window(6, 10) -> [4, 5, 6, 7, 8]
        page_window(10, 10) -> [6, 7, 8, 9, 10]
    """
    if max_buttons < 1:
        raise ValueError("max_buttons must be a positive integer.")
    if total_pages < 1:
        return []

    size = min(max_buttons, total_pages)
    current_page = min(max(current_page, 1), total_pages)
    start = current_page - (max_buttons - 1) // 2
    start = max(1, min(start, total_pages - size + 1))
    return list(range(start, start + size))
