"""
LRU (Least Recently Used) Cache implementation.

Holds classification verdicts behind the ICache interface.
Uses OrderedDict for O(1) access and efficient LRU eviction.
"""

import logging
import threading
from typing import Hashable, List, Optional, OrderedDict as OrderedDictType
from collections import OrderedDict
from ..interfaces.cache import ICache, CacheStats

logger = logging.getLogger(__name__)


class LRUCache(ICache):
    """
    LRU Cache implementation using OrderedDict.

    The first item of the OrderedDict is always the least recently used
    entry; every read or write moves its key to the end.

    Features:
    - O(1) get/set operations
    - Eviction of exactly one entry when a new key arrives at capacity
    - Hit/miss/eviction tracking
    - Each public operation runs under a lock, so a get (lookup then
      reorder) is atomic across threads
    """

    def __init__(self, max_size: int = 1000):
        """
        Initialize LRU cache.

        Args:
            max_size: Maximum number of entries (default: 1000)

        Raises:
            ValueError: If max_size is smaller than 1
        """
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")

        self._cache: OrderedDictType[Hashable, bool] = OrderedDict()
        self._max_size = max_size
        self._lock = threading.Lock()

        # Statistics tracking
        self._stats = CacheStats()

    def get(self, key: Hashable) -> Optional[bool]:
        """
        Retrieve verdict from cache with LRU tracking.

        Args:
            key: Cache key

        Returns:
            Cached verdict or None if not found
        """
        with self._lock:
            if key in self._cache:
                # Cache hit - move to end (most recently used)
                self._cache.move_to_end(key)
                self._stats.hits += 1
                return self._cache[key]

            # Cache miss
            self._stats.misses += 1
            return None

    def set(self, key: Hashable, value: bool) -> None:
        """
        Store verdict in cache with LRU eviction if needed.

        Args:
            key: Cache key
            value: Verdict to cache
        """
        with self._lock:
            # If key exists, update and move to end
            if key in self._cache:
                self._cache.move_to_end(key)
                self._cache[key] = value
                return

            # If at capacity, evict LRU item
            if len(self._cache) >= self._max_size:
                self._evict_lru()

            # Add new entry
            self._cache[key] = value
            self._stats.size = len(self._cache)

    def evict(self, key: Hashable) -> None:
        """
        Remove specific key from cache.

        Args:
            key: Cache key to evict
        """
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                self._stats.evictions += 1
                self._stats.size = len(self._cache)

    def clear(self) -> None:
        """Clear all entries from cache."""
        with self._lock:
            self._cache.clear()
            self._stats = CacheStats()  # Reset stats
        logger.debug("Verdict cache cleared")

    def get_stats(self) -> CacheStats:
        """
        Get cache performance statistics.

        Returns:
            Snapshot of CacheStats with hits, misses, evictions, size and hit_rate
        """
        with self._lock:
            self._stats.size = len(self._cache)
            return self._stats.model_copy()

    def keys(self) -> List[Hashable]:
        """Keys in recency order, least recently used first."""
        with self._lock:
            return list(self._cache.keys())

    def _evict_lru(self) -> None:
        """Evict the least recently used item (first item in OrderedDict)."""
        if self._cache:
            evicted_key, _ = self._cache.popitem(last=False)  # FIFO = oldest first
            self._stats.evictions += 1
            logger.debug(f"Evicted LRU verdict for {evicted_key!r}")

    def get_size(self) -> int:
        """Get current cache size."""
        with self._lock:
            return len(self._cache)

    def get_max_size(self) -> int:
        """Get maximum cache size."""
        return self._max_size

    def __len__(self) -> int:
        return self.get_size()

    def __contains__(self, key: Hashable) -> bool:
        # Membership does not count as a use
        with self._lock:
            return key in self._cache
