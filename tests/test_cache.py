"""Tests for the bounded simplification cache."""

import pytest

from polycap import CyclicPolygon, ConfigurationError, SimplificationCache
from polycap.cache import default_cache, reset_default_cache


@pytest.fixture
def snapshot():
    return CyclicPolygon([(0, 0), (1, 0), (1, 1), (0, 1)]).snapshot()


class TestSimplificationCache:
    """Tests for SimplificationCache."""

    def test_get_missing(self):
        """Unknown keys miss and count as a miss."""
        cache = SimplificationCache()
        assert cache.get("abc", 5) is None
        assert cache.misses == 1

    def test_put_and_get(self, snapshot):
        """Stored snapshots come back by identity."""
        cache = SimplificationCache()
        cache.put("abc", 4, snapshot)
        assert cache.get("abc", 4) is snapshot
        assert ("abc", 4) in cache
        assert cache.hits == 1

    def test_evicts_least_recently_used(self, snapshot):
        """A full cache drops the entry used longest ago."""
        cache = SimplificationCache(maxsize=2)
        cache.put("a", 4, snapshot)
        cache.put("b", 4, snapshot)
        cache.get("a", 4)
        cache.put("c", 4, snapshot)

        assert len(cache) == 2
        assert ("a", 4) in cache
        assert ("b", 4) not in cache
        assert ("c", 4) in cache

    def test_zero_size_stores_nothing(self, snapshot):
        """Capacity 0 turns storage off."""
        cache = SimplificationCache(maxsize=0)
        cache.put("a", 4, snapshot)
        assert len(cache) == 0

    def test_negative_size_rejected(self):
        with pytest.raises(ConfigurationError):
            SimplificationCache(maxsize=-1)

    def test_closest_picks_smallest_qualifying_length(self, snapshot):
        """Resumption prefers the state nearest to the target."""
        cache = SimplificationCache()
        for length in (9, 7, 12, 5):
            cache.put("a", length, snapshot)
        cache.put("b", 6, snapshot)

        assert cache.closest("a", 6, 12) == (7, snapshot)
        assert cache.closest("a", 5, 20)[0] == 5
        assert cache.closest("a", 10, 12) is None
        assert cache.closest("c", 3, 20) is None

    def test_resize_evicts_least_recently_used(self, snapshot):
        """Shrinking keeps the most recently used entries."""
        cache = SimplificationCache(maxsize=3)
        for name in ("a", "b", "c"):
            cache.put(name, 4, snapshot)
        cache.get("a", 4)

        cache.resize(2)

        assert cache.maxsize == 2
        assert ("a", 4) in cache
        assert ("b", 4) not in cache
        assert ("c", 4) in cache

    def test_resize_rejects_negative(self):
        """Negative capacities are a configuration error."""
        with pytest.raises(ConfigurationError):
            SimplificationCache().resize(-1)

    def test_clear(self, snapshot):
        """Clearing drops entries and counters."""
        cache = SimplificationCache()
        cache.put("a", 4, snapshot)
        cache.get("a", 4)
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0


class TestDefaultCache:
    """Tests for the process-wide cache."""

    def test_shared_instance(self):
        assert default_cache() is default_cache()

    def test_reset_replaces_instance(self):
        """Resetting installs a new, empty cache."""
        before = default_cache()
        after = reset_default_cache(maxsize=3)
        assert after is not before
        assert default_cache() is after
        assert after.maxsize == 3

    def test_requested_size_resizes_shared_instance(self):
        """A positive size resizes the shared cache in place."""
        before = default_cache()
        after = default_cache(5)
        assert after is before
        assert after.maxsize == 5

    def test_zero_size_leaves_capacity(self):
        """Size 0 means no memoization, not an empty shared cache."""
        assert default_cache(0).maxsize == default_cache().maxsize
