"""Recipe catalog client (Spoonacular).

Provides SpoonacularCatalog.search_recipes(...) returning CandidateRecipe records and
get_recipe(id) for single recipe details. Responses are cached in-process for
CATALOG_CACHE_TTL seconds, keyed by the query parameters (API key excluded).
"""
import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

import httpx
from pydantic import ValidationError

from mealplanner.domain.Recipe import CandidateRecipe
from mealplanner.domain.errors import CatalogQueryFailure
from mealplanner.utilities.config import (
    CATALOG_CACHE_TTL,
    CATALOG_TIMEOUT,
    SPOONACULAR_API_KEY,
    SPOONACULAR_BASE_URL,
)
from mealplanner.utilities.constants import CATALOG_MAX_PAGE_SIZE

logger = logging.getLogger(__name__)


class CatalogProvider(Protocol):
    def search_recipes(self, *, diet: Optional[str] = None, exclude_ingredients: Optional[Iterable[str]] = None,
                       cuisines: Optional[Iterable[str]] = None, max_ready_time: Optional[int] = None,
                       number: int = 20) -> List[CandidateRecipe]:
        ...


def _join(values: Optional[Iterable[str]]) -> Optional[str]:
    items = [v.strip() for v in (values or []) if v and v.strip()]
    return ",".join(items) if items else None


class SpoonacularCatalog:
    def __init__(self, api_key: str = SPOONACULAR_API_KEY, base_url: str = SPOONACULAR_BASE_URL,
                 client: Optional[httpx.Client] = None, cache_ttl: float = CATALOG_CACHE_TTL,
                 clock=time.monotonic):
        self.api_key = api_key
        self._client = client or httpx.Client(base_url=base_url, timeout=CATALOG_TIMEOUT)
        self._cache_ttl = cache_ttl
        self._clock = clock
        self._cache: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], Tuple[float, Any]] = {}

    def close(self):
        self._client.close()

    # -------------------- public API --------------------
    def search_recipes(self, *, diet: Optional[str] = None, exclude_ingredients: Optional[Iterable[str]] = None,
                       cuisines: Optional[Iterable[str]] = None, max_ready_time: Optional[int] = None,
                       number: int = 20) -> List[CandidateRecipe]:
        """Search the catalog with coarse filters; unset filters are not sent.

        Raises:
            CatalogQueryFailure: on transport errors, error statuses or malformed payloads.
        """
        params: Dict[str, Any] = {
            "addRecipeInformation": "true",
            "addRecipeNutrition": "true",
            "fillIngredients": "true",
            "number": max(1, min(int(number), CATALOG_MAX_PAGE_SIZE)),
        }
        optional = {
            "diet": diet,
            "excludeIngredients": _join(exclude_ingredients),
            "cuisine": _join(cuisines),
            "maxReadyTime": int(max_ready_time) if max_ready_time else None,
        }
        params.update({k: v for k, v in optional.items() if v})

        data = self._get("/recipes/complexSearch", params)
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise CatalogQueryFailure("Invalid response from recipe catalog", 500)
        return self._parse_recipes(data["results"])

    def get_recipe(self, recipe_id: int) -> CandidateRecipe:
        data = self._get(f"/recipes/{int(recipe_id)}/information", {"includeNutrition": "true"})
        recipes = self._parse_recipes([data]) if isinstance(data, dict) else []
        if not recipes:
            raise CatalogQueryFailure("Invalid response from recipe catalog", 500)
        return recipes[0]

    # -------------------- helpers --------------------
    @staticmethod
    def _parse_recipes(results: List[Any]) -> List[CandidateRecipe]:
        recipes = []
        for raw in results:
            try:
                recipes.append(CandidateRecipe.model_validate(raw))
            except ValidationError as e:
                logger.warning("Skipping malformed catalog recipe %r: %s",
                               raw.get("id") if isinstance(raw, dict) else raw, e)
        return recipes

    def _get(self, path: str, params: Dict[str, Any]) -> Any:
        if not self.api_key:
            raise CatalogQueryFailure("Spoonacular API key not configured", 500)

        cache_key = (path, tuple(sorted((k, str(v)) for k, v in params.items())))
        cached = self._cache.get(cache_key)
        now = self._clock()
        if cached and now - cached[0] < self._cache_ttl:
            logger.debug("Returning cached catalog response for %s", path)
            return cached[1]

        try:
            response = self._client.get(path, params={**params, "apiKey": self.api_key})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise _map_status_error(e.response) from e
        except (httpx.ConnectError, httpx.TimeoutException) as e:
            logger.error("Catalog unreachable: %s", e)
            raise CatalogQueryFailure("Unable to connect to recipe service", 503) from e
        except httpx.HTTPError as e:
            logger.error("Catalog request failed: %s", e)
            raise CatalogQueryFailure("Error communicating with recipe service", 500) from e
        except ValueError as e:
            raise CatalogQueryFailure("Invalid response from recipe catalog", 500) from e

        self._evict_expired(now)
        self._cache[cache_key] = (now, data)
        return data

    def _evict_expired(self, now: float):
        stale = [k for k, (stored_at, _) in self._cache.items() if now - stored_at >= self._cache_ttl]
        for k in stale:
            del self._cache[k]


def _map_status_error(response: httpx.Response) -> CatalogQueryFailure:
    status = response.status_code
    logger.error("Catalog returned HTTP %s: %s", status, response.text[:200])
    if status == 402:
        return CatalogQueryFailure("Daily API quota exceeded. Please try again tomorrow.", 429)
    if status == 401:
        return CatalogQueryFailure("Authentication failed with recipe catalog", 500)
    try:
        body = response.json()
        message = body.get("message") if isinstance(body, dict) else None
    except ValueError:
        message = None
    if message:
        return CatalogQueryFailure(f"Recipe catalog error: {message}", status)
    return CatalogQueryFailure("Error communicating with recipe service", 500)


__all__ = ["CatalogProvider", "SpoonacularCatalog"]
