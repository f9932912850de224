"""
Generic LRU cache implementation.

This module provides the LRU (Least Recently Used) cache used by the graph
engine to memoize path queries, with performance metrics tracking.

Features:
- LRU eviction policy
- Explicit invalidation through clear()
- Performance metrics
"""

from collections import OrderedDict
from typing import Dict, Generic, Hashable, Optional, TypeVar

T = TypeVar("T")  # Type of cached values


class LRUCache(Generic[T]):
    """
    Size-bounded LRU cache.

    The cache evicts the least recently used entry when it reaches its size
    limit. A max_size of zero disables caching entirely.

    Attributes:
        max_size: Maximum number of entries to store
    """

    def __init__(self, max_size: int):
        """Initialize cache with given size limit."""
        if max_size < 0:
            raise ValueError("max_size must be non-negative")
        self._cache: "OrderedDict[Hashable, T]" = OrderedDict()
        self._max_size = max_size

        # Metrics
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._cache)

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: Hashable) -> Optional[T]:
        """
        Get value from cache.

        Args:
            key: Cache key to look up

        Returns:
            Cached value if found, None otherwise
        """
        if key in self._cache:
            self._hits += 1
            # Move to end (most recently used)
            self._cache.move_to_end(key)
            return self._cache[key]

        self._misses += 1
        return None

    def put(self, key: Hashable, value: T) -> None:
        """
        Store value in cache.

        Args:
            key: Cache key to store value under
            value: Value to cache
        """
        if self._max_size == 0:
            return
        if key in self._cache:
            self._cache.pop(key)
        self._cache[key] = value

        while len(self._cache) > self._max_size:
            self._cache.popitem(last=False)

    def remove(self, key: Hashable) -> None:
        """Remove an item from the cache."""
        self._cache.pop(key, None)

    def clear(self) -> None:
        """Clear all entries from cache. Metrics are kept."""
        self._cache.clear()

    def get_metrics(self) -> Dict[str, float]:
        """
        Get cache performance metrics.

        Returns:
            Dictionary containing:
            - hits: Number of cache hits
            - misses: Number of cache misses
            - size: Current cache size
            - hit_rate: Cache hit rate
        """
        total_accesses = self._hits + self._misses
        hit_rate = float(self._hits) / total_accesses if total_accesses > 0 else 0.0
        return {
            "hits": float(self._hits),
            "misses": float(self._misses),
            "size": float(len(self._cache)),
            "hit_rate": hit_rate,
        }
