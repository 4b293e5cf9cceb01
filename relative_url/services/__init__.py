from .classifier import (
    UrlClassifier,
    cache,
    default_classifier,
    is_absolute_url,
    is_relative_url,
    match_fast_path,
    matches_scheme,
)

__all__ = [
    "UrlClassifier",
    "cache",
    "default_classifier",
    "is_absolute_url",
    "is_relative_url",
    "match_fast_path",
    "matches_scheme",
]
