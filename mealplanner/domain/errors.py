"""Error types surfaced by the planning engine and the catalog client."""
from typing import Any, Dict, Optional

from mealplanner.utilities.constants import POOL_EXHAUSTED_MESSAGE


class ApiError(Exception):
    """Error carrying an HTTP status code for the web layer."""

    def __init__(self, message: str, status_code: int = 500, errors: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class CatalogQueryFailure(ApiError):
    """The recipe catalog could not be queried or returned an unusable payload."""


class PoolExhausted(ApiError):
    """No candidate recipes exist after every relaxation tier."""

    def __init__(self, message: str = POOL_EXHAUSTED_MESSAGE):
        super().__init__(message, 404)


__all__ = ["ApiError", "CatalogQueryFailure", "PoolExhausted"]
