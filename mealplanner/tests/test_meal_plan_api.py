import unittest

from fastapi.testclient import TestClient

from mealplanner.api.api_run import app
from mealplanner.api.dependencies import get_catalog
from mealplanner.domain.errors import CatalogQueryFailure
from mealplanner.events import web_observers
from mealplanner.tests.recipe_factory import ScriptedCatalog, make_pool, make_recipe


class TestMealPlanAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        web_observers.start()
        cls.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _use_catalog(self, catalog):
        app.dependency_overrides[get_catalog] = lambda: catalog
        return catalog

    def test_generate_day_plan(self):
        catalog = self._use_catalog(ScriptedCatalog(make_pool(30, calories=600, diets=["vegetarian"])))
        r = self.client.post('/api/meal-plans/generate', json={
            "timeFrame": "day",
            "targetCalories": 1800,
            "diet": "Vegetarian",
            "exclude": "peanuts, shellfish",
            "preferences": {"mealCount": 3, "cuisines": ["italian"]},
            "date": "2025-06-01",
        })
        self.assertEqual(r.status_code, 201, r.text)
        body = r.json()
        self.assertTrue(body["success"])
        plan = body["mealPlan"]
        self.assertEqual(plan["startDate"], "2025-06-01")
        self.assertEqual(len(plan["days"][0]["meals"]), 3)
        self.assertNotIn("shoppingList", plan)
        self.assertEqual(catalog.calls[0]["diet"], "vegetarian")
        self.assertEqual(catalog.calls[0]["exclude_ingredients"], ["peanuts", "shellfish"])
        self.assertEqual(catalog.calls[0]["number"], 60)

    def test_generate_with_shopping_list(self):
        ingredients = [{"name": "eggs", "amount": 2, "unit": "", "aisle": "Milk, Eggs, Other Dairy"}]
        self._use_catalog(ScriptedCatalog(make_pool(20, calories=600, ingredients=ingredients)))
        r = self.client.post('/api/meal-plans/generate', json={"timeFrame": "day", "includeShoppingList": True})
        self.assertEqual(r.status_code, 201, r.text)
        self.assertEqual(r.json()["mealPlan"]["shoppingList"][0]["amount"], 6)

    def test_no_recipes_returns_404(self):
        self._use_catalog(ScriptedCatalog([], [], []))
        r = self.client.post('/api/meal-plans/generate', json={"timeFrame": "week"})
        self.assertEqual(r.status_code, 404)
        self.assertIn("No recipes found", r.json()["error"])

    def test_invalid_time_frame_is_rejected(self):
        self._use_catalog(ScriptedCatalog())
        r = self.client.post('/api/meal-plans/generate', json={"timeFrame": "month"})
        self.assertEqual(r.status_code, 422)
        r = self.client.post('/api/meal-plans/generate', json={"timeFrame": "day", "preferences": {"mealCount": 7}})
        self.assertEqual(r.status_code, 422)

    def test_skipped_slots_are_reported_as_events(self):
        self._use_catalog(ScriptedCatalog([make_recipe(1, calories=500)], [], []))
        cursor = self.client.get('/api/planning/events').json()["next_cursor"]
        r = self.client.post('/api/meal-plans/generate', json={"timeFrame": "day"})
        self.assertEqual(r.status_code, 201, r.text)
        self.assertEqual(len(r.json()["mealPlan"]["warnings"]), 2)

        events = self.client.get(f'/api/planning/events?since={cursor}').json()["events"]
        types = [e["type"] for e in events]
        self.assertIn("planning.pool_expanded", types)
        self.assertIn("planning.filter_relaxed", types)
        self.assertEqual(types.count("planning.slot_skipped"), 2)

    def test_recipe_search_passthrough(self):
        catalog = self._use_catalog(ScriptedCatalog(make_pool(2)))
        r = self.client.get('/api/recipes/search?diet=keto&number=5&cuisine=thai')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["count"], 2)
        self.assertEqual(catalog.calls[0]["diet"], "ketogenic")
        self.assertEqual(catalog.calls[0]["cuisines"], ["thai"])

    def test_catalog_failure_status_is_forwarded(self):
        self._use_catalog(ScriptedCatalog(CatalogQueryFailure("Daily API quota exceeded.", 429)))
        r = self.client.get('/api/recipes/search')
        self.assertEqual(r.status_code, 429)
        self.assertEqual(r.json(), {"error": "Daily API quota exceeded."})


if __name__ == '__main__':
    unittest.main()
