"""Planning state threaded through the slot assignment.

PlanningState is an immutable value: every operation returns a new state, so
buckets are never shared by reference between steps.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, List, Tuple

from mealplanner.domain.Plan import DailyNutritionTotals
from mealplanner.domain.Recipe import CandidateRecipe
from mealplanner.logic.reporting.nutrition import add_recipe_nutrition
from mealplanner.utilities.constants import MEAL_TYPES

Buckets = Dict[str, Tuple[CandidateRecipe, ...]]


def freeze_buckets(buckets: Dict[str, List[CandidateRecipe]]) -> Buckets:
    """Copy mutable bucket lists into tuples, one entry per meal type."""
    return {meal_type: tuple(buckets.get(meal_type, ())) for meal_type in MEAL_TYPES}


@dataclass(frozen=True)
class PlanningState:
    buckets: Buckets
    pool: Tuple[CandidateRecipe, ...] = ()
    used_ids: FrozenSet[int] = field(default_factory=frozenset)
    totals: DailyNutritionTotals = field(default_factory=DailyNutritionTotals)

    @classmethod
    def initial(cls, buckets: Dict[str, Iterable[CandidateRecipe]], pool: Iterable[CandidateRecipe]) -> "PlanningState":
        return cls(buckets=freeze_buckets({k: list(v) for k, v in buckets.items()}), pool=tuple(pool))

    def bucket(self, meal_type: str) -> Tuple[CandidateRecipe, ...]:
        return self.buckets.get(meal_type, ())

    def available(self, meal_type: str) -> Tuple[CandidateRecipe, ...]:
        """Unused candidates for a slot: its bucket, else the whole filtered pool."""
        remaining = tuple(r for r in self.bucket(meal_type) if r.id not in self.used_ids)
        if remaining:
            return remaining
        return tuple(r for r in self.pool if r.id not in self.used_ids)


def start_day(state: PlanningState) -> PlanningState:
    """New day: reset the running nutrition totals, keep buckets and used ids."""
    return replace(state, totals=DailyNutritionTotals())


def consume(state: PlanningState, recipe: CandidateRecipe) -> PlanningState:
    """Record a selection: drop the recipe from every bucket, mark it used, add its nutrition."""
    buckets = {
        meal_type: tuple(r for r in members if r.id != recipe.id)
        for meal_type, members in state.buckets.items()
    }
    return replace(
        state,
        buckets=buckets,
        used_ids=state.used_ids | {recipe.id},
        totals=add_recipe_nutrition(state.totals, recipe),
    )


__all__ = ["Buckets", "PlanningState", "freeze_buckets", "start_day", "consume"]
