from .cache import ICache, CacheStats

__all__ = [
    "ICache",
    "CacheStats",
]
