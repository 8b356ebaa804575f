from fastapi import FastAPI, Request, Query, Depends
from fastapi.responses import JSONResponse

from typing import Optional
import logging

from mealplanner.api.dependencies import get_catalog
from mealplanner.api.routes import recipes
from mealplanner.domain.Constraints import Constraints
from mealplanner.domain.errors import ApiError
from mealplanner.events.web_observers import start as start_event_observers, get_events as get_web_events
from mealplanner.logic.planning.engine import generate_meal_plan
from mealplanner.utilities.validators import MealPlanRequest

# Logging
logger = logging.getLogger("mealplanner_app")

# Initialize FastAPI app
app = FastAPI(title="Meal Plan Generation API")

# Include routers
app.include_router(recipes.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for planning events when the app starts."""
    start_event_observers()
    logger.info("Web observers for planning events started")


@app.exception_handler(ApiError)
async def _api_error_handler(request: Request, exc: ApiError):
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# -------------------- API: Meal plan generation --------------------
@app.post('/api/meal-plans/generate', status_code=201)
def api_generate_meal_plan(payload: MealPlanRequest, catalog=Depends(get_catalog)):
    """Generate a day or week meal plan.

    Response JSON structure:
        {
          "success": true,
          "mealPlan": {
            "timeFrame", "startDate", "endDate",
            "days": [ { date, meals: [ { mealType, recipeId, title, ... } ], nutrition } ],
            "nutritionSummary": { calories, protein, carbs, fat },
            "warnings": [...],
            "relaxation": { poolTiers, filterLevel },
            "shoppingList": [...]   (only when includeShoppingList is true)
          }
        }
    """
    constraints = Constraints.from_request(payload)
    logger.info("Meal plan request: %s", payload.model_dump(mode="json", by_alias=True))
    plan = generate_meal_plan(
        catalog,
        constraints,
        start_date=payload.date,
        include_shopping_list=payload.include_shopping_list,
    )
    return {"success": True, "mealPlan": plan.to_dict()}


# -------------------- API: Planning events (polled by frontend) --------------------
@app.get('/api/planning/events')
def api_planning_events(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value")
):
    """
    Return recent planning events (pool expanded, filter relaxed, slot skipped).

    Client polling strategy:
        1. First call without 'since' to load current backlog.
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/planning/events?since=<next_cursor>
    """
    return get_web_events(since)


@app.get('/api/health')
def api_health():
    return {"status": "ok"}
