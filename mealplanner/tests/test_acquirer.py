import unittest

from mealplanner.domain.Constraints import Constraints
from mealplanner.domain.errors import CatalogQueryFailure, PoolExhausted
from mealplanner.logic.planning.acquirer import (
    TIER_NO_DIET,
    TIER_PRIMARY,
    TIER_UNFILTERED,
    acquire_candidate_pool,
    query_tiers,
    request_size,
)
from mealplanner.tests.recipe_factory import ScriptedCatalog, make_pool


class TestQueryTiers(unittest.TestCase):
    def test_request_size_by_time_frame(self):
        self.assertEqual(request_size(Constraints.build(meal_count=3, time_frame="day")), 60)
        self.assertEqual(request_size(Constraints.build(meal_count=3, time_frame="week")), 210)

    def test_tiers_drop_filters_progressively(self):
        constraints = Constraints.build(diet="vegan", allergies=["peanut"], cuisines=["thai"], max_prep_time=30)
        tiers = dict(query_tiers(constraints))
        self.assertEqual(tiers[TIER_PRIMARY]["diet"], "vegan")
        self.assertEqual(tiers[TIER_PRIMARY]["exclude_ingredients"], ["peanut"])
        self.assertNotIn("diet", tiers[TIER_NO_DIET])
        self.assertEqual(tiers[TIER_NO_DIET]["max_ready_time"], 30)
        self.assertEqual(tiers[TIER_UNFILTERED], {"number": 60})

    def test_omitted_prep_time_defaults_to_an_hour(self):
        tiers = dict(query_tiers(Constraints.build(meal_count=1)))
        self.assertEqual(tiers[TIER_PRIMARY]["max_ready_time"], 60)
        self.assertEqual(tiers[TIER_NO_DIET]["max_ready_time"], 60)
        self.assertNotIn("max_ready_time", tiers[TIER_UNFILTERED])


class TestAcquireCandidatePool(unittest.TestCase):
    def setUp(self):
        self.constraints = Constraints.build(diet="vegan", meal_count=3)
        self.sleeps = []

    def _acquire(self, catalog):
        return acquire_candidate_pool(catalog, self.constraints, delay=1.0, sleep=self.sleeps.append)

    def test_single_query_when_primary_is_large_enough(self):
        catalog = ScriptedCatalog(make_pool(9))
        pool, tiers = self._acquire(catalog)
        self.assertEqual(len(pool), 9)
        self.assertEqual(tiers, [TIER_PRIMARY])
        self.assertEqual(len(catalog.calls), 1)
        self.assertEqual(self.sleeps, [])

    def test_relaxes_and_merges_unique_by_id(self):
        catalog = ScriptedCatalog(make_pool(3), make_pool(4, start_id=2), make_pool(5, start_id=100))
        pool, tiers = self._acquire(catalog)
        self.assertEqual(tiers, [TIER_PRIMARY, TIER_NO_DIET, TIER_UNFILTERED])
        ids = [r.id for r in pool]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(len(pool), 10)
        self.assertEqual(self.sleeps, [1.0, 1.0])

    def test_failed_tier_counts_as_empty(self):
        catalog = ScriptedCatalog(CatalogQueryFailure("boom", 503), make_pool(9))
        pool, tiers = self._acquire(catalog)
        self.assertEqual(len(pool), 9)
        self.assertEqual(tiers, [TIER_PRIMARY, TIER_NO_DIET])

    def test_empty_everywhere_raises_pool_exhausted(self):
        catalog = ScriptedCatalog([], [], [])
        with self.assertRaises(PoolExhausted) as ctx:
            self._acquire(catalog)
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(len(catalog.calls), 3)


if __name__ == '__main__':
    unittest.main()
