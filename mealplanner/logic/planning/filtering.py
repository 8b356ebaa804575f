"""Constraint filter: diet and prep-time matching with a relaxation ladder.

Ladder (applied when fewer than meal_count recipes survive):
  strict     -> diet + prep time
  lenient    -> prep time only, ceiling relaxed to 1.5x
  unfiltered -> the raw candidate list
"""
import logging
import re
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from mealplanner.domain.Constraints import Constraints
from mealplanner.domain.Recipe import CandidateRecipe
from mealplanner.events.event_helpers import publish_filter_relaxed
from mealplanner.utilities.constants import LENIENT_TIME_FACTOR

logger = logging.getLogger(__name__)

FILTER_STRICT = "strict"
FILTER_LENIENT = "lenient"
FILTER_UNFILTERED = "unfiltered"

_SEPARATORS = re.compile(r"[-\s]")


def _squash(label: str) -> str:
    return _SEPARATORS.sub("", label.lower())


def _fuzzy_match(diet: str, recipe_diets: Sequence[str]) -> bool:
    wanted = _squash(diet)
    for d in recipe_diets:
        have = _squash(d)
        if have and (wanted in have or have in wanted):
            return True
    return False


# Diets with known semantics. Only vegetarian accepts a stricter diet (vegan);
# other hierarchies (e.g. pescatarian over vegetarian) are not modelled.
DIET_RULES: Dict[str, Callable[[Sequence[str]], bool]] = {
    "vegetarian": lambda diets: any("vegetarian" in d or d == "vegan" for d in diets),
    "vegan": lambda diets: "vegan" in diets,
    "gluten free": lambda diets: any("gluten free" in d or "gluten-free" in d for d in diets),
}


def matches_diet(recipe: CandidateRecipe, diet: Optional[str]) -> bool:
    """True if the recipe satisfies the (already normalized) diet label.

    Recipes that declare no diets are never excluded.
    """
    if not diet:
        return True
    recipe_diets = recipe.lower_diets()
    if not recipe_diets:
        return True
    rule = DIET_RULES.get(diet.lower())
    if rule is not None:
        return rule(recipe_diets)
    return _fuzzy_match(diet, recipe_diets)


def within_time(recipe: CandidateRecipe, max_minutes: Optional[float]) -> bool:
    return not max_minutes or recipe.ready_in_minutes <= max_minutes


def filter_candidates(recipes: Sequence[CandidateRecipe], constraints: Constraints) -> Tuple[List[CandidateRecipe], str]:
    """Apply hard constraints, relaxing them until at least meal_count recipes remain.

    Returns:
        (filtered recipes, ladder level used)
    """
    needed = constraints.meal_count
    logger.info("Filtering %d recipes with diet=%s max_prep_time=%s",
                len(recipes), constraints.diet or "none", constraints.max_prep_time)

    strict = [r for r in recipes
              if matches_diet(r, constraints.diet) and within_time(r, constraints.max_prep_time)]
    if len(strict) >= needed:
        return strict, FILTER_STRICT

    relaxed_time = constraints.max_prep_time * LENIENT_TIME_FACTOR if constraints.max_prep_time else None
    lenient = [r for r in recipes if within_time(r, relaxed_time)]
    if len(lenient) >= needed:
        logger.warning("Only %d recipes match constraints (need %d); ignoring diet, prep time up to %s",
                       len(strict), needed, relaxed_time)
        publish_filter_relaxed(FILTER_LENIENT, len(lenient), needed)
        return lenient, FILTER_LENIENT

    logger.warning("Not enough recipes even with lenient filtering (%d < %d); using all %d candidates",
                   len(lenient), needed, len(recipes))
    publish_filter_relaxed(FILTER_UNFILTERED, len(recipes), needed)
    return list(recipes), FILTER_UNFILTERED


__all__ = [
    "DIET_RULES", "matches_diet", "within_time", "filter_candidates",
    "FILTER_STRICT", "FILTER_LENIENT", "FILTER_UNFILTERED",
]
