"""Recipe domain entity: a catalog recipe considered as a meal plan candidate."""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Nutrient(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    amount: float = 0
    unit: str = ""


class Nutrition(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    nutrients: Tuple[Nutrient, ...] = ()


class RecipeIngredient(BaseModel):
    """One line of a recipe's ingredient list (catalog 'extendedIngredients')."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = ""
    amount: float = 0
    unit: str = ""
    aisle: Optional[str] = None

    @field_validator("name", "unit", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or ""


class CandidateRecipe(BaseModel):
    """Immutable recipe record as returned by the catalog search.

    Field aliases follow the catalog payload (readyInMinutes, dishTypes, ...) so
    a search result can be validated directly with CandidateRecipe.model_validate.
    """
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: int
    title: str = ""
    image: Optional[str] = None
    ready_in_minutes: int = Field(0, alias="readyInMinutes")
    servings: int = 1
    nutrition: Optional[Nutrition] = None
    dish_types: Optional[Tuple[str, ...]] = Field(None, alias="dishTypes")
    diets: Optional[Tuple[str, ...]] = None
    cuisines: Optional[Tuple[str, ...]] = None
    ingredients: Optional[Tuple[RecipeIngredient, ...]] = Field(None, alias="extendedIngredients")

    @field_validator("ready_in_minutes", "servings", mode="before")
    @classmethod
    def none_to_zero(cls, v):
        return v if v is not None else 0

    @property
    def nutrients(self) -> Tuple[Nutrient, ...]:
        return self.nutrition.nutrients if self.nutrition else ()

    @property
    def has_nutrition(self) -> bool:
        return bool(self.nutrients)

    def lower_dish_types(self) -> Tuple[str, ...]:
        return tuple(t.lower() for t in (self.dish_types or ()))

    def lower_diets(self) -> Tuple[str, ...]:
        return tuple(d.lower() for d in (self.diets or ()))

    def __str__(self) -> str:
        return f"#{self.id} {self.title} - {self.ready_in_minutes} min - Diets: {', '.join(self.diets or ()) or 'none'}"


__all__ = ["CandidateRecipe", "Nutrient", "Nutrition", "RecipeIngredient"]
