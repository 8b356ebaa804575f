"""Constraints domain entity: the hard and soft limits one planning request must respect."""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from mealplanner.utilities.constants import (
    DAYS_PER_TIME_FRAME,
    DEFAULT_DAILY_CALORIES,
    DEFAULT_MAX_PREP_TIME,
    DEFAULT_MEAL_COUNT,
    DIET_SYNONYMS,
    MAX_MEAL_COUNT,
)


def normalize_diet(label: Optional[str]) -> Optional[str]:
    """Map a user supplied diet label onto the catalog vocabulary.

    Unknown labels are lowercased and passed through; empty or 'none' means no diet.
    """
    if not label:
        return None
    key = label.strip().lower()
    if not key or key == "none":
        return None
    return DIET_SYNONYMS.get(key, key)


class Constraints(BaseModel):
    model_config = ConfigDict(frozen=True)

    diet: Optional[str] = None
    allergies: Tuple[str, ...] = ()
    cuisines: Tuple[str, ...] = ()
    max_prep_time: Optional[int] = Field(None, gt=0)
    daily_calories: int = Field(DEFAULT_DAILY_CALORIES, gt=0)
    meal_count: int = Field(DEFAULT_MEAL_COUNT, ge=1, le=MAX_MEAL_COUNT)
    days: int = Field(1, ge=1, le=7)

    @property
    def time_frame(self) -> str:
        return "week" if self.days > 1 else "day"

    @classmethod
    def build(cls, *, diet=None, allergies=(), cuisines=(), max_prep_time=None,
              daily_calories=None, meal_count=DEFAULT_MEAL_COUNT, time_frame="day"):
        """Create normalized constraints (diet synonyms resolved, defaults applied).

        An omitted prep time falls back to DEFAULT_MAX_PREP_TIME.
        """
        return cls(
            diet=normalize_diet(diet),
            allergies=tuple(allergies or ()),
            cuisines=tuple(cuisines or ()),
            max_prep_time=max_prep_time or DEFAULT_MAX_PREP_TIME,
            daily_calories=daily_calories or DEFAULT_DAILY_CALORIES,
            meal_count=meal_count,
            days=DAYS_PER_TIME_FRAME[time_frame],
        )

    @classmethod
    def from_request(cls, request) -> "Constraints":
        """Build constraints from a validated MealPlanRequest."""
        prefs = request.preferences
        return cls.build(
            diet=request.diet,
            allergies=request.exclude,
            cuisines=prefs.cuisines,
            max_prep_time=prefs.ready_time,
            daily_calories=request.target_calories,
            meal_count=prefs.meal_count,
            time_frame=request.time_frame,
        )


__all__ = ["Constraints", "normalize_diet"]
