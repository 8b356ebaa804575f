"""Meal-type classifier: partitions candidates into breakfast/lunch/dinner/snack buckets."""
import logging
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from mealplanner.domain.Recipe import CandidateRecipe
from mealplanner.utilities.constants import BUCKET_FLOOR, MEAL_TYPES

logger = logging.getLogger(__name__)

Predicate = Callable[[Tuple[str, ...]], bool]


def _tags_contain(*fragments: str) -> Predicate:
    return lambda tags: any(f in t for t in tags for f in fragments)


# Evaluated top to bottom on lowercased dish types; first match wins.
CLASSIFICATION_RULES: List[Tuple[Predicate, str]] = [
    (_tags_contain("breakfast", "morning meal"), "breakfast"),
    (_tags_contain("lunch", "main course", "main dish"), "lunch"),
    (_tags_contain("dinner", "main course", "main dish"), "dinner"),
    (_tags_contain("snack", "appetizer", "side dish", "dessert"), "snack"),
]


def classify_by_tags(recipe: CandidateRecipe,
                     rules: Sequence[Tuple[Predicate, str]] = CLASSIFICATION_RULES) -> Optional[str]:
    """Return the bucket of the first matching rule, or None when no tag matches."""
    tags = recipe.lower_dish_types()
    if not tags:
        return None
    for predicate, meal_type in rules:
        if predicate(tags):
            return meal_type
    return None


def classify_by_time(recipe: CandidateRecipe, buckets: Dict[str, List[CandidateRecipe]]) -> str:
    minutes = recipe.ready_in_minutes
    if minutes <= 15:
        # Quick recipes balance between breakfast and snack
        return "breakfast" if len(buckets["breakfast"]) <= len(buckets["snack"]) else "snack"
    if minutes <= 30:
        return "lunch"
    return "dinner"


def _enforce_floor(buckets: Dict[str, List[CandidateRecipe]], rng: random.Random, floor: int = BUCKET_FLOOR):
    for target in MEAL_TYPES:
        needed = floor - len(buckets[target])
        if needed <= 0:
            continue
        donors = sorted((b for b in MEAL_TYPES if b != target), key=lambda b: len(buckets[b]), reverse=True)
        for donor in donors:
            while needed > 0 and len(buckets[donor]) > floor:
                recipe = buckets[donor].pop(rng.randrange(len(buckets[donor])))
                buckets[target].append(recipe)
                needed -= 1
            if needed <= 0:
                break


def _fill_empty_from_leftovers(buckets: Dict[str, List[CandidateRecipe]], shuffled: Sequence[CandidateRecipe]):
    placed = {r.id for members in buckets.values() for r in members}
    leftovers = [r for r in shuffled if r.id not in placed]
    if not leftovers:
        return
    slices = {"breakfast": (0, 3), "lunch": (3, 6), "dinner": (6, 9), "snack": (9, None)}
    for meal_type in MEAL_TYPES:
        start, stop = slices[meal_type]
        if not buckets[meal_type] and len(leftovers) > start:
            buckets[meal_type].extend(leftovers[start:stop])


def categorize_meals_by_type(recipes: Sequence[CandidateRecipe], rng: random.Random) -> Dict[str, List[CandidateRecipe]]:
    """Sort recipes into meal-type buckets.

    Passes:
      1. dish-type tags via CLASSIFICATION_RULES (on a shuffled copy)
      2. prep-time heuristic for untagged recipes
      3. borrow from the largest buckets until each has BUCKET_FLOOR recipes
      4. slices of unplaced leftovers for buckets that are still empty

    Returns:
        dict meal_type -> list of recipes; each recipe is in at most one bucket.
    """
    shuffled = list(recipes)
    rng.shuffle(shuffled)

    buckets: Dict[str, List[CandidateRecipe]] = {meal_type: [] for meal_type in MEAL_TYPES}
    uncategorized = []
    for recipe in shuffled:
        meal_type = classify_by_tags(recipe)
        if meal_type is None:
            uncategorized.append(recipe)
        else:
            buckets[meal_type].append(recipe)

    for recipe in uncategorized:
        buckets[classify_by_time(recipe, buckets)].append(recipe)

    _enforce_floor(buckets, rng)
    _fill_empty_from_leftovers(buckets, shuffled)

    logger.info("Categorized recipes: Breakfast=%d, Lunch=%d, Dinner=%d, Snack=%d",
                *(len(buckets[m]) for m in MEAL_TYPES))
    return buckets


__all__ = ["CLASSIFICATION_RULES", "classify_by_tags", "classify_by_time", "categorize_meals_by_type"]
