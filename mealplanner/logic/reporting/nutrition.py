"""Nutrition aggregation logic.

Reads calories and macros from a recipe's nutrient list and accumulates them into
DailyNutritionTotals. Recipes without nutrient data contribute an estimated calorie
value only.
"""
import logging
from typing import Iterable, Optional

from mealplanner.domain.Plan import DailyNutritionTotals, DayPlan
from mealplanner.domain.Recipe import CandidateRecipe
from mealplanner.utilities.constants import CALORIES_PER_PREP_MINUTE, FALLBACK_CALORIES

logger = logging.getLogger(__name__)

CALORIE_NAMES = ("calories", "energy")
PROTEIN_NAMES = ("protein",)
CARB_NAMES = ("carbohydrates", "carbs")
FAT_NAMES = ("fat",)


def nutrient_amount(recipe: CandidateRecipe, names: Iterable[str]) -> Optional[float]:
    """Return the amount of the first nutrient whose name matches (case-insensitive), or None."""
    wanted = set(names)
    for n in recipe.nutrients:
        if (n.name or '').strip().lower() in wanted:
            return n.amount or 0
    return None


def estimate_calories(recipe: CandidateRecipe) -> float:
    """Calorie estimate for a recipe without a calorie nutrient.

    Dish-type defaults first (breakfast, lunch, dinner, snack in that order),
    then prep time x 10 as last resort.
    """
    dish_types = recipe.lower_dish_types()
    for meal_type, kcal in FALLBACK_CALORIES.items():
        if any(meal_type in t for t in dish_types):
            return kcal
    return recipe.ready_in_minutes * CALORIES_PER_PREP_MINUTE


def recipe_calories(recipe: CandidateRecipe) -> float:
    calories = nutrient_amount(recipe, CALORIE_NAMES)
    if calories is None:
        return estimate_calories(recipe)
    return calories


def add_recipe_nutrition(totals: DailyNutritionTotals, recipe: CandidateRecipe) -> DailyNutritionTotals:
    """Return totals increased by one serving of recipe.

    Nutrients missing from the list add 0. Only an absent nutrient list falls back
    to the calorie estimate, leaving protein/carbs/fat untouched.
    """
    if not recipe.has_nutrition:
        logger.debug("Recipe %s has no nutrition data; using estimated calories", recipe.id)
        return totals.add(calories=estimate_calories(recipe))
    return totals.add(
        calories=nutrient_amount(recipe, CALORIE_NAMES) or 0,
        protein=nutrient_amount(recipe, PROTEIN_NAMES) or 0,
        carbs=nutrient_amount(recipe, CARB_NAMES) or 0,
        fat=nutrient_amount(recipe, FAT_NAMES) or 0,
    )


def summarize_plan_nutrition(days: Iterable[DayPlan]) -> DailyNutritionTotals:
    """Plan-wide totals: the sum of every day's totals."""
    summary = DailyNutritionTotals()
    for day in days:
        summary = summary + day.nutrition
    return summary


__all__ = [
    "nutrient_amount", "estimate_calories", "recipe_calories",
    "add_recipe_nutrition", "summarize_plan_nutrition",
]
