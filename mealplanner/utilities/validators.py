"""
Input validation schemas using Pydantic for the meal plan endpoints.
"""
from datetime import date as _date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mealplanner.utilities.constants import DEFAULT_MEAL_COUNT, MAX_MEAL_COUNT


class PlanPreferencesInput(BaseModel):
    """Optional per-request overrides of the user's planning preferences."""
    model_config = ConfigDict(populate_by_name=True)

    cuisines: List[str] = Field(default_factory=list)
    meal_count: int = Field(DEFAULT_MEAL_COUNT, ge=1, le=MAX_MEAL_COUNT, alias="mealCount")
    ready_time: Optional[int] = Field(None, gt=0, alias="readyTime")

    @field_validator('cuisines')
    @classmethod
    def validate_cuisines(cls, v):
        """Drop blank cuisine names."""
        return [c.strip() for c in v if c and c.strip()]


class MealPlanRequest(BaseModel):
    """Schema for meal plan generation requests."""
    model_config = ConfigDict(populate_by_name=True)

    time_frame: Literal["day", "week"] = Field(..., alias="timeFrame")
    target_calories: Optional[int] = Field(None, gt=0, le=10000, alias="targetCalories")
    diet: Optional[str] = None
    exclude: List[str] = Field(default_factory=list)
    preferences: PlanPreferencesInput = Field(default_factory=PlanPreferencesInput)
    date: Optional[_date] = None
    include_shopping_list: bool = Field(False, alias="includeShoppingList")

    @field_validator('diet')
    @classmethod
    def blank_diet_is_none(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator('exclude', mode='before')
    @classmethod
    def split_exclusions(cls, v):
        """Accept a comma separated string as well as a list; strip and drop blanks."""
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(',')
        return [term.strip() for term in v if isinstance(term, str) and term.strip()]

