from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from mealplanner.api.dependencies import get_catalog
from mealplanner.domain.Constraints import normalize_diet

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("/search")
def search_recipes(
    diet: Optional[str] = Query(default=None),
    cuisine: List[str] = Query(default=[]),
    exclude: List[str] = Query(default=[]),
    max_ready_time: Optional[int] = Query(default=None, gt=0, alias="maxReadyTime"),
    number: int = Query(default=20, ge=1, le=100),
    catalog=Depends(get_catalog),
):
    """Pass-through catalog search; diet labels go through the same synonym table as planning."""
    recipes = catalog.search_recipes(
        diet=normalize_diet(diet),
        exclude_ingredients=exclude,
        cuisines=cuisine,
        max_ready_time=max_ready_time,
        number=number,
    )
    return {
        "count": len(recipes),
        "recipes": [r.model_dump(mode="json", by_alias=True) for r in recipes],
    }


@router.get("/{recipe_id}")
def recipe_detail(recipe_id: int, catalog=Depends(get_catalog)):
    return catalog.get_recipe(recipe_id).model_dump(mode="json", by_alias=True)
