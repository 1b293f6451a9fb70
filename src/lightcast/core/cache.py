"""Keyed caches for expensive rasters.

Gradient and mask bitmaps only depend on a handful of parameters (color,
distance, orientation). They are stored under a tuple of exactly those
parameters and rebuilt only when the tuple changes.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

KeyType = TypeVar("KeyType", bound=Hashable)
ValueType = TypeVar("ValueType")


@dataclass
class CacheStats:
    """Hit and miss counters for a cache."""

    hits: int = 0
    misses: int = 0

    @property
    def total_lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        if self.total_lookups == 0:
            return 0.0
        return (self.hits / self.total_lookups) * 100.0

    def __repr__(self) -> str:
        return f"{self.hits} hits, {self.misses} misses ({self.hit_rate:.1f}% hit rate)"


class ResourceCache(Generic[KeyType, ValueType]):
    """A size-limited least-recently-used cache.

    With ``max_size=1`` the cache holds a single entry, so storing under a
    new key drops the previous raster. Lights use it that way: the cached
    bitmap is valid exactly as long as its key matches.
    """

    def __init__(self, name: str, max_size: int = 16) -> None:
        if max_size <= 0:
            raise ValueError("Cache max_size must be a positive integer.")
        self.name = name
        self.max_size = max_size
        self._cache: OrderedDict[KeyType, ValueType] = OrderedDict()
        self.stats = CacheStats()

    def get(self, key: KeyType) -> ValueType | None:
        """Retrieve an item, or None on a miss."""
        if key not in self._cache:
            self.stats.misses += 1
            return None

        self._cache.move_to_end(key)
        self.stats.hits += 1
        return self._cache[key]

    def store(self, key: KeyType, value: ValueType) -> None:
        """Store an item, evicting the least recently used ones past max_size."""
        self._cache[key] = value
        self._cache.move_to_end(key)
        while len(self._cache) > self.max_size:
            evicted_key, _ = self._cache.popitem(last=False)
            logger.debug("%s cache evicted %r", self.name, evicted_key)

    def get_or_create(self, key: KeyType, factory: Callable[[], ValueType]) -> ValueType:
        """Return the cached item for key, building and storing it on a miss."""
        value = self.get(key)
        if value is None:
            logger.debug("%s cache rebuilding for key %r", self.name, key)
            value = factory()
            self.store(key, value)
        return value

    def clear(self) -> None:
        """Drop all entries and reset the statistics."""
        self._cache.clear()
        self.stats = CacheStats()

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def __str__(self) -> str:
        return (
            f"{self.name} Cache: {self.stats.hits} hits, {self.stats.misses} misses "
            f"({self.stats.hit_rate:.1f}% hit rate)"
        )

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} '{self.name}' "
            f"size={len(self)}/{self.max_size}, stats={self.stats!r}>"
        )
