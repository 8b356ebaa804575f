import unittest
from datetime import date

from mealplanner.domain.Plan import DailyNutritionTotals, DayPlan
from mealplanner.logic.reporting.nutrition import (
    add_recipe_nutrition,
    estimate_calories,
    nutrient_amount,
    recipe_calories,
    summarize_plan_nutrition,
)
from mealplanner.tests.recipe_factory import make_recipe


class TestNutrition(unittest.TestCase):
    def test_nutrient_lookup_is_case_insensitive(self):
        recipe = make_recipe(1, calories=512, protein=21)
        self.assertEqual(nutrient_amount(recipe, ("calories",)), 512)
        self.assertEqual(nutrient_amount(recipe, ("protein",)), 21)
        self.assertIsNone(nutrient_amount(recipe, ("fat",)))

    def test_estimate_prefers_dish_type(self):
        self.assertEqual(estimate_calories(make_recipe(1, dish_types=["Breakfast"], minutes=90)), 400)
        self.assertEqual(estimate_calories(make_recipe(2, dish_types=["dinner"])), 700)
        self.assertEqual(estimate_calories(make_recipe(3, dish_types=["sauce"], minutes=12)), 120)

    def test_recipe_calories_falls_back_to_estimate(self):
        self.assertEqual(recipe_calories(make_recipe(1, calories=333)), 333)
        self.assertEqual(recipe_calories(make_recipe(2, protein=10, dish_types=["snack"])), 200)

    def test_add_recipe_nutrition(self):
        totals = add_recipe_nutrition(DailyNutritionTotals(), make_recipe(1, calories=500, protein=20, carbs=60, fat=10))
        totals = add_recipe_nutrition(totals, make_recipe(2, minutes=30))
        self.assertEqual(totals, DailyNutritionTotals(calories=800, protein=20, carbs=60, fat=10))

    def test_nutrient_list_without_calories_adds_zero(self):
        recipe = make_recipe(1, protein=30, dish_types=["dinner"])
        totals = add_recipe_nutrition(DailyNutritionTotals(), recipe)
        self.assertEqual(totals, DailyNutritionTotals(calories=0, protein=30))
        self.assertEqual(recipe_calories(recipe), 700)

    def test_summary_is_sum_of_days(self):
        days = [
            DayPlan(date=date(2025, 6, 1), nutrition=DailyNutritionTotals(calories=1800, protein=90)),
            DayPlan(date=date(2025, 6, 2), nutrition=DailyNutritionTotals(calories=2100.25, fat=70)),
        ]
        summary = summarize_plan_nutrition(days)
        self.assertEqual(summary.to_dict(), {"calories": 3900.25, "protein": 90, "carbs": 0, "fat": 70})


if __name__ == '__main__':
    unittest.main()
