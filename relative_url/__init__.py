"""
Relative URL detection with memoized verdicts.

    >>> from relative_url import is_relative_url
    >>> is_relative_url("/path/to/resource")
    True
    >>> is_relative_url("//example.com", {"allowProtocolRelative": False})
    False
"""

from .caching import LRUCache
from .config import settings
from .models import ClassificationOptions
from .services import UrlClassifier, cache, is_absolute_url, is_relative_url

__all__ = [
    "LRUCache",
    "ClassificationOptions",
    "UrlClassifier",
    "cache",
    "is_absolute_url",
    "is_relative_url",
    "settings",
]
