"""
Caching implementations for classification verdicts.

All cache implementations implement the ICache interface, making them
interchangeable and testable.
"""

from .lru_cache import LRUCache

__all__ = [
    "LRUCache",
]
