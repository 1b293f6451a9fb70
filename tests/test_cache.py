"""Unit tests for the raster ResourceCache.

Tests cover:
- Misses and hits with statistics
- LRU eviction past max_size
- get_or_create building only on a miss
- Single-slot behavior used by light rasters
- Clearing and validation
"""

import pytest


class TestResourceCache:
    """Tests for ResourceCache lookups and storage."""

    def test_miss_returns_none(self):
        """Test that an unknown key misses."""
        from src.lightcast.core.cache import ResourceCache

        cache = ResourceCache[str, int]("test")
        assert cache.get("missing") is None
        assert cache.stats.misses == 1
        assert cache.stats.hits == 0

    def test_store_then_hit(self):
        """Test that a stored key hits."""
        from src.lightcast.core.cache import ResourceCache

        cache = ResourceCache[str, int]("test")
        cache.store("a", 1)
        assert cache.get("a") == 1
        assert cache.stats.hits == 1
        assert "a" in cache
        assert len(cache) == 1

    def test_lru_eviction(self):
        """Test that the least recently used entry is evicted first."""
        from src.lightcast.core.cache import ResourceCache

        cache = ResourceCache[str, int]("test", max_size=2)
        cache.store("a", 1)
        cache.store("b", 2)
        cache.get("a")
        cache.store("c", 3)

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_single_slot_replaces_on_new_key(self):
        """Test that max_size=1 keeps only the latest key."""
        from src.lightcast.core.cache import ResourceCache

        cache = ResourceCache[tuple, str]("test", max_size=1)
        cache.store(("red", 100), "first")
        cache.store(("blue", 100), "second")

        assert len(cache) == 1
        assert cache.get(("red", 100)) is None
        assert cache.get(("blue", 100)) == "second"

    def test_get_or_create_builds_once(self):
        """Test that the factory only runs on a miss."""
        from src.lightcast.core.cache import ResourceCache

        calls = []

        def factory():
            calls.append(1)
            return object()

        cache = ResourceCache[int, object]("test", max_size=1)
        first = cache.get_or_create(7, factory)
        second = cache.get_or_create(7, factory)

        assert first is second
        assert len(calls) == 1
        assert cache.stats.misses == 1
        assert cache.stats.hits == 1

    def test_clear_resets(self):
        """Test that clear drops entries and statistics."""
        from src.lightcast.core.cache import ResourceCache

        cache = ResourceCache[str, int]("test")
        cache.store("a", 1)
        cache.get("a")
        cache.clear()

        assert len(cache) == 0
        assert cache.stats.total_lookups == 0

    def test_invalid_max_size(self):
        """Test that max_size must be positive."""
        from src.lightcast.core.cache import ResourceCache

        with pytest.raises(ValueError):
            ResourceCache[str, int]("test", max_size=0)


class TestCacheStats:
    """Tests for CacheStats."""

    def test_hit_rate(self):
        """Test the hit rate percentage."""
        from src.lightcast.core.cache import CacheStats

        stats = CacheStats(hits=3, misses=1)
        assert stats.total_lookups == 4
        assert stats.hit_rate == pytest.approx(75.0)
        assert CacheStats().hit_rate == 0.0
