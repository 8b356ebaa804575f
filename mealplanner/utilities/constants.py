from typing import Final

MEAL_TYPES: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner", "snack")
MAIN_MEALS: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")

DEFAULT_DAILY_CALORIES: Final[int] = 2000
DEFAULT_MEAL_COUNT: Final[int] = 3
DEFAULT_MAX_PREP_TIME: Final[int] = 60  # minutes
MAX_MEAL_COUNT: Final[int] = 6
DAYS_PER_TIME_FRAME: Final[dict[str, int]] = {"day": 1, "week": 7}

# Candidate pool sizing: recipes requested per meal slot, by time frame
POOL_MULTIPLIER: Final[dict[str, int]] = {"day": 20, "week": 70}
POOL_MIN_PER_MEAL: Final[int] = 3
CATALOG_MAX_PAGE_SIZE: Final[int] = 100

LENIENT_TIME_FACTOR: Final[float] = 1.5
BUCKET_FLOOR: Final[int] = 3
SCORE_JITTER: Final[float] = 0.2

# Used when a recipe carries no calorie nutrient
FALLBACK_CALORIES: Final[dict[str, int]] = {"breakfast": 400, "lunch": 600, "dinner": 700, "snack": 200}
CALORIES_PER_PREP_MINUTE: Final[int] = 10

# Frontend diet labels -> catalog diet labels
DIET_SYNONYMS: Final[dict[str, str]] = {
    "balanced": "balanced",
    "vegetarian": "vegetarian",
    "lacto-vegetarian": "lacto vegetarian",
    "ovo-vegetarian": "ovo vegetarian",
    "vegan": "vegan",
    "paleo": "paleo",
    "paleolithic": "paleo",
    "primal": "primal",
    "keto": "ketogenic",
    "ketogenic": "ketogenic",
    "gluten-free": "gluten free",
    "gluten free": "gluten free",
    "glutenfree": "gluten free",
    "dairy-free": "dairy free",
    "pescetarian": "pescatarian",
    "pescatarian": "pescatarian",
    "whole30": "whole 30",
    "whole-30": "whole 30",
    "low-fodmap": "low fodmap",
}

POOL_EXHAUSTED_MESSAGE: Final[str] = "No recipes found matching your criteria. Try relaxing some constraints."
