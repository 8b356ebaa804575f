"""Plan domain entities: selected meals, per-day plans and the generated meal plan."""
from datetime import date as _date
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from mealplanner.domain.Recipe import CandidateRecipe


class DailyNutritionTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0

    def add(self, calories: float = 0, protein: float = 0, carbs: float = 0, fat: float = 0) -> "DailyNutritionTotals":
        return DailyNutritionTotals(
            calories=self.calories + calories,
            protein=self.protein + protein,
            carbs=self.carbs + carbs,
            fat=self.fat + fat,
        )

    def __add__(self, other: "DailyNutritionTotals") -> "DailyNutritionTotals":
        return self.add(other.calories, other.protein, other.carbs, other.fat)

    def to_dict(self) -> Dict[str, float]:
        return {k: round(v, 2) for k, v in self.model_dump().items()}


class SelectedMeal(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: _date
    meal_type: str
    recipe: CandidateRecipe

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mealType": self.meal_type,
            "recipeId": self.recipe.id,
            "title": self.recipe.title,
            "readyInMinutes": self.recipe.ready_in_minutes,
            "servings": self.recipe.servings,
            "image": self.recipe.image,
        }


class DayPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: _date
    meals: Tuple[SelectedMeal, ...] = ()
    nutrition: DailyNutritionTotals = DailyNutritionTotals()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "meals": [m.to_dict() for m in self.meals],
            "nutrition": self.nutrition.to_dict(),
        }


class MealPlan(BaseModel):
    """Result of one planning request, ready to be serialized for the caller."""
    model_config = ConfigDict(frozen=True)

    time_frame: str
    start_date: _date
    end_date: _date
    days: Tuple[DayPlan, ...] = ()
    nutrition_summary: DailyNutritionTotals = DailyNutritionTotals()
    warnings: Tuple[str, ...] = ()
    pool_tiers: Tuple[str, ...] = ()
    filter_level: str = "strict"
    shopping_list: Optional[List[Dict[str, Any]]] = None

    @property
    def meals(self) -> List[SelectedMeal]:
        """All selected meals in plan order (day by day, slot by slot)."""
        return [m for day in self.days for m in day.meals]

    def recipe_ids(self) -> List[int]:
        return [m.recipe.id for m in self.meals]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "timeFrame": self.time_frame,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "days": [d.to_dict() for d in self.days],
            "nutritionSummary": self.nutrition_summary.to_dict(),
            "warnings": list(self.warnings),
            "relaxation": {"poolTiers": list(self.pool_tiers), "filterLevel": self.filter_level},
        }
        if self.shopping_list is not None:
            data["shoppingList"] = self.shopping_list
        return data


__all__ = ["DailyNutritionTotals", "SelectedMeal", "DayPlan", "MealPlan"]
