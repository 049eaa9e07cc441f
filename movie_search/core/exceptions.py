# Domain exceptions shared by the service and API layers
# movie_search/core/exceptions.py

from typing import Any, Dict, Optional


class MovieSearchError(Exception):
    """Raised when a search cannot be served because the store failed."""
    code = "SEARCH_FAILED"
    message = "Failed to load data"

    def __init__(self, details: Optional[str] = None, message: Optional[str] = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


class StoreUnavailableError(MovieSearchError):
    """The store client was used before `connect()` succeeded, or after `close()`."""
    code = "STORE_UNAVAILABLE"
    message = "Database service not available"
