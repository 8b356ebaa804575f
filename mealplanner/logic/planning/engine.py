"""Meal plan generation: acquire -> filter -> classify -> assign.

Only PoolExhausted escapes; every other shortage degrades to relaxed filters or
skipped slots, reported in MealPlan.warnings and on the event bus.
"""
import logging
import random
import time
from datetime import date, timedelta
from typing import Callable, Optional

from mealplanner.domain.Constraints import Constraints
from mealplanner.domain.Plan import MealPlan
from mealplanner.infra.Catalog_Client import CatalogProvider
from mealplanner.logic.planning.acquirer import acquire_candidate_pool
from mealplanner.logic.planning.assignor import assign_meals
from mealplanner.logic.planning.classifier import categorize_meals_by_type
from mealplanner.logic.planning.filtering import filter_candidates
from mealplanner.logic.planning.state import PlanningState
from mealplanner.logic.reporting.nutrition import summarize_plan_nutrition
from mealplanner.logic.shopping.list_builder import build_shopping_list
from mealplanner.utilities.config import CATALOG_REQUEST_DELAY
from mealplanner.utilities.constants import SCORE_JITTER

logger = logging.getLogger(__name__)


def plan_from_pool(candidates, constraints: Constraints, start_date: date,
                   rng: Optional[random.Random] = None, jitter: float = SCORE_JITTER) -> MealPlan:
    """Build a plan from an already acquired candidate pool."""
    rng = rng or random.SystemRandom()
    filtered, filter_level = filter_candidates(candidates, constraints)
    logger.info("After filtering (%s), %d recipes remain", filter_level, len(filtered))

    buckets = categorize_meals_by_type(filtered, rng)
    state = PlanningState.initial(buckets, filtered)
    days, warnings = assign_meals(state, start_date, constraints.days, constraints.meal_count,
                                  constraints.daily_calories, rng, jitter)
    return MealPlan(
        time_frame=constraints.time_frame,
        start_date=start_date,
        end_date=start_date + timedelta(days=constraints.days - 1),
        days=tuple(days),
        nutrition_summary=summarize_plan_nutrition(days),
        warnings=tuple(warnings),
        filter_level=filter_level,
    )


def generate_meal_plan(catalog: CatalogProvider, constraints: Constraints, *,
                       start_date: Optional[date] = None,
                       rng: Optional[random.Random] = None,
                       jitter: float = SCORE_JITTER,
                       include_shopping_list: bool = False,
                       delay: float = CATALOG_REQUEST_DELAY,
                       sleep: Callable[[float], None] = time.sleep) -> MealPlan:
    """Generate a day or week meal plan for the given constraints.

    Args:
        catalog: recipe search provider.
        constraints: normalized planning constraints.
        start_date: first plan day, today when omitted.
        rng: random source for shuffles and score jitter (seed it for reproducible plans).
        jitter: width of the random score perturbation; 0 disables it.
        include_shopping_list: attach the aggregated ingredient list.
        delay/sleep: pause between successive catalog queries.
    Raises:
        PoolExhausted: the catalog returned no recipes under any relaxation tier.
    """
    start_date = start_date or date.today()
    logger.info("Starting meal selection for %s plan from %s (meals/day=%d, diet=%s)",
                constraints.time_frame, start_date.isoformat(), constraints.meal_count, constraints.diet or "none")

    candidates, tiers = acquire_candidate_pool(catalog, constraints, delay=delay, sleep=sleep)
    plan = plan_from_pool(candidates, constraints, start_date, rng=rng, jitter=jitter)

    update = {"pool_tiers": tuple(tiers)}
    if include_shopping_list:
        update["shopping_list"] = build_shopping_list(plan)
    plan = plan.model_copy(update=update)

    logger.info("Generated plan with %d meals over %d day(s); %d slot(s) skipped",
                len(plan.meals), len(plan.days), len(plan.warnings))
    return plan


__all__ = ["generate_meal_plan", "plan_from_pool"]
