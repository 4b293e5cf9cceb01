"""
URL classification service.

Decides whether a candidate string is a relative URL reference.

Absolute detection is two-tiered:
1. Literal prefixes for the most common schemes (cheap string compares)
2. The general RFC 3986 scheme grammar, which is the source of truth

The fast path must never disagree with the general rule; it only skips
the regex for inputs the regex would accept anyway. Verdicts are memoized
in an injected ICache keyed by the candidate and the protocol-relative option.
"""

import logging
import re
from typing import Any, Hashable, Mapping, Optional, Union

from ..caching.lru_cache import LRUCache
from ..config import settings
from ..interfaces.cache import ICache
from ..models.options import ClassificationOptions

logger = logging.getLogger(__name__)

# Scheme: https://tools.ietf.org/html/rfc3986#section-3.1
# Absolute URL: https://tools.ietf.org/html/rfc3986#section-4.3
ABSOLUTE_URL_REGEX = re.compile(r"[a-zA-Z][a-zA-Z0-9+\-.]*:")

# Windows paths like `c:\`
WINDOWS_PATH_REGEX = re.compile(r"[a-zA-Z]:\\")

PROTOCOL_RELATIVE_PREFIX = "//"

FAST_PATH_PREFIXES = (
    "http://",
    "https://",
    "file://",
    "data:",
    "ftp://",
    "ws://",
    "wss://",
)
FAST_PATH_MIN_LENGTH = 8

STRICT_KEY_TAG = "strict"

OptionsInput = Union[ClassificationOptions, Mapping[str, Any], None]


def match_fast_path(url: str) -> bool:
    """True if url is long enough for the fast path and starts with a common scheme prefix."""
    if len(url) < FAST_PATH_MIN_LENGTH:
        return False
    return url.startswith(FAST_PATH_PREFIXES)


def is_windows_path(url: str) -> bool:
    return WINDOWS_PATH_REGEX.match(url) is not None


def matches_scheme(url: str) -> bool:
    """True if url starts with a scheme followed by a colon."""
    return ABSOLUTE_URL_REGEX.match(url) is not None


def is_absolute_url(url: str) -> bool:
    """
    Detect whether a string is an absolute URL.

    Args:
        url: Candidate string

    Returns:
        True if the string carries a scheme prefix, False otherwise.
        Windows drive paths such as ``C:\\dir`` look scheme-like but are
        not absolute URLs.
    """
    if match_fast_path(url):
        return True

    if is_windows_path(url):
        return False

    return matches_scheme(url)


def make_cache_key(url: str, allow_protocol_relative: bool) -> Hashable:
    """
    Build the cache key for a classification.

    Plain strings are used for the default option; the strict option uses a
    tagged tuple, which can never collide with any string key.
    """
    if allow_protocol_relative:
        return url
    return (STRICT_KEY_TAG, url)


class UrlClassifier:
    """
    Classifies candidate URLs as relative or absolute, memoizing verdicts.

    The cache is injected so each owner (module default, tests, benchmark
    runs) can hold its own isolated instance.
    """

    def __init__(
        self,
        cache: Optional[ICache] = None,
        default_options: Optional[ClassificationOptions] = None
    ):
        """
        Initialize classifier.

        Args:
            cache: Verdict cache (default: LRUCache sized from settings)
            default_options: Options used when a call passes none
                (default: built from settings)
        """
        self._cache = cache if cache is not None else LRUCache(max_size=settings.cache_max_size)
        self._default_options = default_options or ClassificationOptions(
            allow_protocol_relative=settings.allow_protocol_relative
        )
        logger.debug(
            f"UrlClassifier ready (cache={type(self._cache).__name__}, "
            f"allow_protocol_relative={self._default_options.allow_protocol_relative})"
        )

    @property
    def cache(self) -> ICache:
        return self._cache

    def resolve_options(self, options: OptionsInput) -> ClassificationOptions:
        """
        Turn caller-supplied options into a ClassificationOptions.

        Raises:
            pydantic.ValidationError: If a mapping holds values that cannot be validated
        """
        if options is None:
            return self._default_options
        if isinstance(options, ClassificationOptions):
            return options
        return ClassificationOptions.model_validate(options)

    def is_relative(self, candidate: Any, options: OptionsInput = None) -> bool:
        """
        Decide whether candidate is a relative URL reference.

        Flow:
        1. Non-string candidates are relative
        2. The empty string is relative
        3. With protocol-relative references disallowed, '//...' is absolute
           (answered without touching the cache)
        4. Cache lookup
        5. On a miss, run absolute detection and cache the verdict

        Args:
            candidate: Value to classify; anything that is not a str is relative
            options: ClassificationOptions, a mapping of option values, or None

        Returns:
            True if relative, False if absolute
        """
        if not isinstance(candidate, str):
            return True

        if not candidate:
            return True

        allow_protocol_relative = self.resolve_options(options).allow_protocol_relative

        if not allow_protocol_relative and candidate.startswith(PROTOCOL_RELATIVE_PREFIX):
            return False

        cache_key = make_cache_key(candidate, allow_protocol_relative)

        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        result = not is_absolute_url(candidate)
        self._cache.set(cache_key, result)

        return result


default_classifier = UrlClassifier()

# Shared verdict cache, exported for inspection, testing and benchmarking
cache = default_classifier.cache


def is_relative_url(candidate: Any, options: OptionsInput = None) -> bool:
    """Classify candidate with the process-wide default classifier."""
    return default_classifier.is_relative(candidate, options)
