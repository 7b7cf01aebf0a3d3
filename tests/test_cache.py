import unittest
from unittest.mock import patch

from tests.support import BrokenRedis, FakeRedis

from scheduleboard import cache as cache_module
from scheduleboard.cache import (
    GridCache,
    build_grid_key,
    get_grid_cached,
    invalidate_all_grids,
    invalidate_grid_cache,
    set_grid_cached,
)
from scheduleboard.domain.assignments.reconciler import WriteReconciler
from scheduleboard.domain.assignments.schemas import AssignmentDraft
from scheduleboard.domain.grid.service import GridService
from scheduleboard.storage import MemoryStorage


class WriteDuringReadStorage(MemoryStorage):
    """Lands one assignment write (and its invalidation) while a grid is being loaded"""

    def __init__(self):
        super().__init__()
        self.writes_pending = 1

    def list_assignments(self, weekday=None, professional_id=None):
        if self.writes_pending:
            self.writes_pending -= 1
            invalidate_grid_cache(weekday)
        return super().list_assignments(weekday, professional_id)


class TestGridCacheWrapper(unittest.TestCase):
    def test_disabled_cache_is_a_noop(self):
        cache = GridCache(enabled=False)
        self.assertFalse(cache.store("segunda", {"a": 1}))
        self.assertIsNone(cache.load("segunda"))
        self.assertEqual(cache.purge("grid:*"), 0)

    def test_round_trip_and_pattern_purge(self):
        cache = GridCache(enabled=True, ttl=60)
        cache.redis_client = FakeRedis()

        self.assertTrue(cache.store("segunda", {"rows": []}))
        cache.store("segunda", {"rows": []}, base_only=True)
        cache.store("terca", {"rows": []})

        self.assertEqual(cache.load("segunda"), {"rows": []})
        self.assertEqual(cache.purge("grid:segunda:*"), 2)
        self.assertIsNone(cache.load("segunda"))
        self.assertEqual(cache.load("terca"), {"rows": []})

    def test_redis_failures_fail_open(self):
        cache = GridCache(enabled=True)
        cache.redis_client = BrokenRedis()
        self.assertIsNone(cache.load("segunda"))
        self.assertFalse(cache.store("segunda", {}))
        self.assertEqual(cache.purge("grid:*"), 0)

    def test_grid_key(self):
        self.assertEqual(build_grid_key("segunda"), "grid:segunda:0:0")
        self.assertEqual(build_grid_key("quarta", base_only=True, include_inactive=True), "grid:quarta:1:1")


class GridCacheTestCase(unittest.TestCase):
    def setUp(self):
        self.fake = FakeRedis()
        patcher_enabled = patch.object(cache_module.grid_cache, "enabled", True)
        patcher_client = patch.object(cache_module.grid_cache, "redis_client", self.fake)
        patcher_enabled.start()
        patcher_client.start()
        self.addCleanup(patcher_enabled.stop)
        self.addCleanup(patcher_client.stop)


class TestGridInvalidation(GridCacheTestCase):
    def test_weekday_invalidation_leaves_other_days(self):
        set_grid_cached("segunda", {"weekday": "segunda"})
        set_grid_cached("segunda", {"weekday": "segunda"}, base_only=True)
        set_grid_cached("terca", {"weekday": "terca"})

        self.assertEqual(invalidate_grid_cache("segunda"), 2)
        self.assertIsNone(get_grid_cached("segunda"))
        self.assertEqual(get_grid_cached("terca"), {"weekday": "terca"})

        self.assertEqual(invalidate_all_grids(), 1)
        self.assertEqual([k for k in self.fake.store if k.startswith("grid:")], [])
        self.assertEqual(self.fake.store["gridver:segunda"], 2)
        self.assertEqual(self.fake.store["gridver:terca"], 1)

    def test_writes_invalidate_cached_grid(self):
        storage = MemoryStorage()
        storage.add_activity_kind("aula", "Aula", "#3b82f6")
        storage.add_time_slot("08:00", "09:00", 60)
        paulo = storage.add_professional("Prof. Paulo", "PP")
        service = GridService(storage, min_cell_height=70)
        reconciler = WriteReconciler(storage)

        first = service.get_grid("segunda")
        self.assertTrue(first.rows[0].cells[0].empty)
        self.assertIn(build_grid_key("segunda"), self.fake.store)

        reconciler.upsert(
            AssignmentDraft(
                professionalId=paulo.id, weekday="segunda", startTime="08:00", endTime="09:00", activity="aula"
            )
        )
        self.assertNotIn(build_grid_key("segunda"), self.fake.store)

        second = service.get_grid("segunda")
        self.assertFalse(second.rows[0].cells[0].empty)
        self.assertEqual(second.rows[0].cells[0].activity.name, "Aula")

    def test_cached_grid_is_served_without_storage(self):
        storage = MemoryStorage()
        storage.add_time_slot("08:00", "09:00", 60)
        storage.add_professional("Prof. Paulo", "PP")
        service = GridService(storage, min_cell_height=70)
        built = service.get_grid("quarta")

        storage.time_slots.clear()
        cached = service.get_grid("quarta")
        self.assertEqual(cached, built)

    def test_write_during_read_is_not_cached(self):
        storage = WriteDuringReadStorage()
        storage.add_time_slot("08:00", "09:00", 60)
        storage.add_professional("Prof. Paulo", "PP")
        service = GridService(storage, min_cell_height=70)

        service.get_grid("segunda")
        self.assertNotIn(build_grid_key("segunda"), self.fake.store)

        # the next read sees no concurrent write and is cached
        service.get_grid("segunda")
        self.assertIn(build_grid_key("segunda"), self.fake.store)

    def test_store_with_stale_version_is_skipped(self):
        version = cache_module.get_grid_version("quinta")
        invalidate_grid_cache("quinta")
        self.assertFalse(set_grid_cached("quinta", {"weekday": "quinta"}, version=version))
        self.assertTrue(set_grid_cached("quinta", {"weekday": "quinta"}, version=cache_module.get_grid_version("quinta")))


if __name__ == "__main__":
    unittest.main(verbosity=2)
