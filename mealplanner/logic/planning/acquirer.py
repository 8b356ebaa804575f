"""Candidate pool acquisition with progressive relaxation of catalog filters.

Tiers (each issued only while the merged pool is below meal_count * 3):
  primary   -> diet, exclusions, cuisines, max prep time
  no_diet   -> same without the diet
  unfiltered-> page size only
"""
import logging
import time
from typing import Any, Callable, Dict, List, Tuple

from mealplanner.domain.Constraints import Constraints
from mealplanner.domain.Recipe import CandidateRecipe
from mealplanner.domain.errors import CatalogQueryFailure, PoolExhausted
from mealplanner.events.event_helpers import publish_pool_expanded
from mealplanner.infra.Catalog_Client import CatalogProvider
from mealplanner.utilities.config import CATALOG_REQUEST_DELAY
from mealplanner.utilities.constants import POOL_MIN_PER_MEAL, POOL_MULTIPLIER

logger = logging.getLogger(__name__)

TIER_PRIMARY = "primary"
TIER_NO_DIET = "no_diet"
TIER_UNFILTERED = "unfiltered"


def request_size(constraints: Constraints) -> int:
    return constraints.meal_count * POOL_MULTIPLIER[constraints.time_frame]


def minimum_pool_size(constraints: Constraints) -> int:
    return constraints.meal_count * POOL_MIN_PER_MEAL


def query_tiers(constraints: Constraints) -> List[Tuple[str, Dict[str, Any]]]:
    """Catalog query parameters per relaxation tier, most restrictive first."""
    number = request_size(constraints)
    no_diet = {
        "exclude_ingredients": list(constraints.allergies) or None,
        "cuisines": list(constraints.cuisines) or None,
        "max_ready_time": constraints.max_prep_time,
        "number": number,
    }
    return [
        (TIER_PRIMARY, {"diet": constraints.diet, **no_diet}),
        (TIER_NO_DIET, no_diet),
        (TIER_UNFILTERED, {"number": number}),
    ]


def merge_unique(pool: List[CandidateRecipe], batch: List[CandidateRecipe], seen: set) -> int:
    """Append recipes with unseen ids to pool; returns how many were added."""
    added = 0
    for recipe in batch:
        if recipe.id in seen:
            continue
        seen.add(recipe.id)
        pool.append(recipe)
        added += 1
    return added


def acquire_candidate_pool(catalog: CatalogProvider, constraints: Constraints,
                           delay: float = CATALOG_REQUEST_DELAY,
                           sleep: Callable[[float], None] = time.sleep) -> Tuple[List[CandidateRecipe], List[str]]:
    """Fetch a unique-by-id candidate pool, relaxing filters while it is too small.

    Returns:
        (pool, names of the tiers that were queried)
    Raises:
        PoolExhausted: every tier returned nothing (or failed).
    """
    minimum = minimum_pool_size(constraints)
    pool: List[CandidateRecipe] = []
    seen: set = set()
    tiers_used: List[str] = []

    for index, (tier, params) in enumerate(query_tiers(constraints)):
        if index and len(pool) >= minimum:
            break
        if index:
            logger.info("Only %d candidate recipes (want %d); retrying with tier '%s'", len(pool), minimum, tier)
            if delay > 0:
                sleep(delay)
        tiers_used.append(tier)
        try:
            batch = catalog.search_recipes(**params)
        except CatalogQueryFailure as e:
            logger.warning("Catalog query for tier '%s' failed: %s", tier, e.message)
            batch = []
        added = merge_unique(pool, batch, seen)
        logger.info("Tier '%s' returned %d recipes (%d new); pool size %d", tier, len(batch), added, len(pool))
        if index:
            publish_pool_expanded(tier, len(batch), len(pool))

    if not pool:
        logger.error("No candidate recipes available after all attempts")
        raise PoolExhausted()
    return pool, tiers_used


__all__ = [
    "acquire_candidate_pool", "query_tiers", "merge_unique", "request_size", "minimum_pool_size",
    "TIER_PRIMARY", "TIER_NO_DIET", "TIER_UNFILTERED",
]
