"""Shared FastAPI dependencies."""
from functools import lru_cache

from mealplanner.infra.Catalog_Client import SpoonacularCatalog


@lru_cache(maxsize=1)
def get_catalog() -> SpoonacularCatalog:
    """Process-wide catalog client (one httpx connection pool and response cache)."""
    return SpoonacularCatalog()
