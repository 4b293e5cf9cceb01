"""
Cache interface - contract for verdict caches used by the classifier.
"""

from abc import ABC, abstractmethod
from typing import Hashable, Optional
from pydantic import BaseModel


class CacheStats(BaseModel):
    """Statistics about cache performance"""
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate"""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class ICache(ABC):
    """
    Cache interface for memoized classification verdicts.

    Keys are hashable (plain strings or tagged tuples), values are the
    boolean verdicts produced by the classifier. A lookup that misses
    returns None rather than raising.
    """

    @abstractmethod
    def get(self, key: Hashable) -> Optional[bool]:
        """
        Retrieve a verdict from the cache.

        Args:
            key: Cache key

        Returns:
            Cached verdict or None if not found
        """
        pass

    @abstractmethod
    def set(self, key: Hashable, value: bool) -> None:
        """
        Store a verdict in the cache.

        Args:
            key: Cache key
            value: Verdict to cache
        """
        pass

    @abstractmethod
    def evict(self, key: Hashable) -> None:
        """
        Remove specific key from cache.

        Args:
            key: Cache key to evict
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all entries from cache."""
        pass

    @abstractmethod
    def get_stats(self) -> CacheStats:
        """
        Get cache performance statistics.

        Returns:
            CacheStats with hits, misses, evictions, and size
        """
        pass
