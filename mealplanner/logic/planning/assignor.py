"""Day/slot assignor: fills each (day, meal type) slot with the best unused candidate."""
import logging
import random
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

from mealplanner.domain.Plan import DayPlan, SelectedMeal
from mealplanner.domain.Recipe import CandidateRecipe
from mealplanner.events.event_helpers import publish_slot_skipped
from mealplanner.logic.planning.state import PlanningState, consume, start_day
from mealplanner.logic.reporting.nutrition import recipe_calories
from mealplanner.utilities.constants import MAIN_MEALS, SCORE_JITTER

logger = logging.getLogger(__name__)


def slot_sequence(meal_count: int) -> List[str]:
    """Meal types for one day: main meals first, then one snack per extra meal."""
    main = list(MAIN_MEALS[:max(meal_count, 0)])
    return main + ["snack"] * max(meal_count - len(MAIN_MEALS), 0)


def slot_calorie_target(daily_calories: float, meal_count: int, meal_type: str) -> float:
    per_meal = daily_calories / meal_count
    return per_meal / 2 if meal_type == "snack" else per_meal


def calorie_closeness(calories: float, target: float) -> float:
    """1 for an exact hit, falling linearly to 0 at a deviation of 100% of target."""
    if target <= 0:
        return 0.0
    return 1 - min(1.0, abs(calories - target) / target)


def score_candidate(recipe: CandidateRecipe, target: float, rng: random.Random, jitter: float = SCORE_JITTER) -> float:
    return calorie_closeness(recipe_calories(recipe), target) + rng.random() * jitter


def select_best_recipe(candidates: Sequence[CandidateRecipe], target: float, rng: random.Random,
                       jitter: float = SCORE_JITTER) -> Optional[CandidateRecipe]:
    """Highest scoring candidate (first one on ties), or None if there are no candidates."""
    best, best_score = None, float("-inf")
    for recipe in candidates:
        score = score_candidate(recipe, target, rng, jitter)
        if score > best_score:
            best, best_score = recipe, score
    return best


def assign_day(state: PlanningState, day: date, meal_types: Sequence[str], daily_calories: float,
               rng: random.Random, jitter: float = SCORE_JITTER) -> Tuple[PlanningState, DayPlan, List[str]]:
    """Fill one day's slots.

    Returns:
        (updated state, the day's plan with its own nutrition totals, warnings for skipped slots)
    """
    state = start_day(state)
    meals: List[SelectedMeal] = []
    warnings: List[str] = []
    meal_count = len(meal_types)

    for meal_type in meal_types:
        if not state.bucket(meal_type):
            logger.warning("No recipes available for %s. Using general pool.", meal_type)
        candidates = state.available(meal_type)
        if not candidates:
            message = f"{day.isoformat()} {meal_type}: no unused recipe left, slot skipped"
            logger.warning("No recipes available for %s on %s even from general pool; skipping slot",
                           meal_type, day.isoformat())
            publish_slot_skipped(day, meal_type, "pool exhausted")
            warnings.append(message)
            continue

        target = slot_calorie_target(daily_calories, meal_count, meal_type)
        selected = select_best_recipe(candidates, target, rng, jitter)
        meals.append(SelectedMeal(date=day, meal_type=meal_type, recipe=selected))
        state = consume(state, selected)
        logger.debug("%s %s -> #%s %s (target %.0f kcal)", day.isoformat(), meal_type,
                     selected.id, selected.title, target)

    return state, DayPlan(date=day, meals=tuple(meals), nutrition=state.totals), warnings


def assign_meals(state: PlanningState, start: date, days: int, meal_count: int, daily_calories: float,
                 rng: random.Random, jitter: float = SCORE_JITTER) -> Tuple[List[DayPlan], List[str]]:
    """Fill every slot of a days-long plan starting at start, never repeating a recipe."""
    meal_types = slot_sequence(meal_count)
    plans: List[DayPlan] = []
    warnings: List[str] = []
    for day_index in range(days):
        day = start + timedelta(days=day_index)
        state, day_plan, day_warnings = assign_day(state, day, meal_types, daily_calories, rng, jitter)
        plans.append(day_plan)
        warnings.extend(day_warnings)
    return plans, warnings


__all__ = [
    "slot_sequence", "slot_calorie_target", "calorie_closeness", "score_candidate",
    "select_best_recipe", "assign_day", "assign_meals",
]
