import unittest

import httpx

from mealplanner.domain.errors import CatalogQueryFailure
from mealplanner.infra.Catalog_Client import SpoonacularCatalog

BASE_URL = "https://catalog.test"

SEARCH_BODY = {
    "results": [
        {
            "id": 715415,
            "title": "Red Lentil Soup",
            "readyInMinutes": 55,
            "servings": 6,
            "diets": ["gluten free", "dairy free"],
            "dishTypes": ["lunch", "main course"],
            "nutrition": {"nutrients": [{"name": "Calories", "amount": 477.1, "unit": "kcal"}]},
            "extendedIngredients": [{"name": "red lentils", "amount": 1.5, "unit": "cups", "aisle": "Pasta and Rice"}],
        },
        {"title": "missing id"},
    ],
    "totalResults": 2,
}


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestSpoonacularCatalog(unittest.TestCase):
    def setUp(self):
        self.requests = []
        self.responses = []
        self.clock = FakeClock()

    def _handler(self, request):
        self.requests.append(request)
        response = self.responses.pop(0) if self.responses else httpx.Response(200, json=SEARCH_BODY)
        if isinstance(response, Exception):
            raise response
        return response

    def _catalog(self, api_key="secret"):
        client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(self._handler))
        return SpoonacularCatalog(api_key=api_key, client=client, cache_ttl=60, clock=self.clock)

    def test_search_sends_only_set_filters(self):
        recipes = self._catalog().search_recipes(diet="vegan", exclude_ingredients=["peanut", " shellfish "],
                                                 cuisines=[], max_ready_time=30, number=500)
        params = self.requests[0].url.params
        self.assertEqual(self.requests[0].url.path, "/recipes/complexSearch")
        self.assertEqual(params["diet"], "vegan")
        self.assertEqual(params["excludeIngredients"], "peanut,shellfish")
        self.assertEqual(params["maxReadyTime"], "30")
        self.assertEqual(params["number"], "100")
        self.assertEqual(params["apiKey"], "secret")
        self.assertNotIn("cuisine", params)
        self.assertEqual(params["addRecipeNutrition"], "true")
        self.assertEqual(len(recipes), 1)
        self.assertEqual(recipes[0].ready_in_minutes, 55)
        self.assertEqual(recipes[0].ingredients[0].name, "red lentils")

    def test_responses_are_cached_until_ttl(self):
        catalog = self._catalog()
        catalog.search_recipes(number=10)
        catalog.search_recipes(number=10)
        self.assertEqual(len(self.requests), 1)
        self.clock.now = 61
        catalog.search_recipes(number=10)
        self.assertEqual(len(self.requests), 2)

    def test_expired_entries_are_evicted(self):
        catalog = self._catalog()
        catalog.search_recipes(number=10)
        catalog.search_recipes(number=20)
        self.assertEqual(len(catalog._cache), 2)
        self.clock.now = 61
        catalog.search_recipes(number=30)
        self.assertEqual(len(catalog._cache), 1)
        self.assertEqual(len(self.requests), 3)

    def test_missing_api_key(self):
        with self.assertRaises(CatalogQueryFailure) as ctx:
            self._catalog(api_key="").search_recipes()
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(self.requests, [])

    def test_quota_exceeded_maps_to_429(self):
        self.responses.append(httpx.Response(402, json={"message": "quota"}))
        with self.assertRaises(CatalogQueryFailure) as ctx:
            self._catalog().search_recipes()
        self.assertEqual(ctx.exception.status_code, 429)

    def test_unauthorized_maps_to_500(self):
        self.responses.append(httpx.Response(401, json={"message": "bad key"}))
        with self.assertRaises(CatalogQueryFailure) as ctx:
            self._catalog().search_recipes()
        self.assertEqual(ctx.exception.status_code, 500)

    def test_provider_message_keeps_status(self):
        self.responses.append(httpx.Response(400, json={"message": "bad diet"}))
        with self.assertRaises(CatalogQueryFailure) as ctx:
            self._catalog().search_recipes()
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertIn("bad diet", ctx.exception.message)

    def test_connect_error_maps_to_503(self):
        self.responses.append(httpx.ConnectError("refused"))
        with self.assertRaises(CatalogQueryFailure) as ctx:
            self._catalog().search_recipes()
        self.assertEqual(ctx.exception.status_code, 503)

    def test_malformed_payload(self):
        self.responses.append(httpx.Response(200, json={"unexpected": True}))
        with self.assertRaises(CatalogQueryFailure) as ctx:
            self._catalog().search_recipes()
        self.assertEqual(ctx.exception.status_code, 500)

    def test_get_recipe(self):
        self.responses.append(httpx.Response(200, json=SEARCH_BODY["results"][0]))
        recipe = self._catalog().get_recipe(715415)
        self.assertEqual(self.requests[0].url.path, "/recipes/715415/information")
        self.assertEqual(recipe.title, "Red Lentil Soup")


if __name__ == '__main__':
    unittest.main()
