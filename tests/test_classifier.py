"""
Tests for relative URL classification and verdict memoization.
"""

import pytest
from pydantic import ValidationError

import relative_url
from relative_url import ClassificationOptions, LRUCache, UrlClassifier, is_relative_url
from relative_url.services.classifier import make_cache_key

STRICT = {"allowProtocolRelative": False}


@pytest.fixture
def cache():
    return LRUCache(max_size=100)


@pytest.fixture
def classifier(cache):
    return UrlClassifier(cache=cache)


class TestVerdicts:
    """Relative/absolute verdicts for representative inputs"""

    @pytest.mark.parametrize("value", [None, 0, 123, 1.5, True, b"http://example.com", ["http://x"], {"url": "x"}, object()])
    def test_non_strings_are_relative(self, classifier, value):
        assert classifier.is_relative(value) is True

    def test_empty_string_is_relative(self, classifier):
        assert classifier.is_relative("") is True

    @pytest.mark.parametrize("url", [
        "http://example.com",
        "https://example.com/path/to/resource",
        "file://path/to/file",
        "data:text/plain;charset=utf-8,Hello%20World",
        "ftp://ftp.example.com",
        "ws://websocket.example.com",
        "wss://secure-websocket.example.com",
    ])
    def test_common_schemes_are_absolute(self, classifier, url):
        assert classifier.is_relative(url) is False

    @pytest.mark.parametrize("url", ["http:", "ws://a", "data:x", "https:/"])
    def test_short_scheme_strings_are_absolute(self, classifier, url):
        assert classifier.is_relative(url) is False

    @pytest.mark.parametrize("url", [
        "mailto:test@example.com",
        "tel:+1234567890",
        "urn:isbn:0451450523",
        "git+ssh://git@example.com/repo.git",
        "view-source:https://example.com",
        "x.y-z+w:rest",
        "HTTPS://EXAMPLE.COM",
        "a:",
    ])
    def test_other_schemes_are_absolute(self, classifier, url):
        assert classifier.is_relative(url) is False

    @pytest.mark.parametrize("url", ["C:\\foo", "c:\\", "Z:\\Program Files\\app.exe"])
    def test_windows_drive_paths_are_relative(self, classifier, url):
        assert classifier.is_relative(url) is True

    @pytest.mark.parametrize("url", [
        "/path/to/resource",
        "path/to/resource",
        "./relative/path",
        "../parent/path",
        "resource",
        "?query=1",
        "#fragment",
        "1http://example.com",
        "+scheme:x",
        ":no-scheme",
        "pa th:x",
    ])
    def test_paths_are_relative(self, classifier, url):
        assert classifier.is_relative(url) is True

    def test_drive_letter_without_backslash_is_a_scheme(self, classifier):
        # Only a backslash marks a drive path
        assert classifier.is_relative("C:/forward/slash") is False
        assert classifier.is_relative("C:foo") is False

    def test_protocol_relative_default_is_relative(self, classifier):
        assert classifier.is_relative("//example.com") is True

    def test_protocol_relative_strict_is_absolute(self, classifier):
        assert classifier.is_relative("//example.com", STRICT) is False

    def test_strict_option_leaves_other_verdicts_alone(self, classifier):
        assert classifier.is_relative("/path", STRICT) is True
        assert classifier.is_relative("https://example.com", STRICT) is False
        assert classifier.is_relative("", STRICT) is True
        assert classifier.is_relative(None, STRICT) is True


class TestOptions:
    """Option input forms"""

    @pytest.mark.parametrize("options", [
        ClassificationOptions(allow_protocol_relative=False),
        ClassificationOptions(allowProtocolRelative=False),
        {"allowProtocolRelative": False},
        {"allow_protocol_relative": False},
    ])
    def test_accepted_forms(self, classifier, options):
        assert classifier.is_relative("//example.com", options) is False

    def test_empty_mapping_uses_defaults(self, classifier):
        assert classifier.is_relative("//example.com", {}) is True

    def test_default_options_are_injectable(self, cache):
        strict = UrlClassifier(cache=cache, default_options=ClassificationOptions(allow_protocol_relative=False))
        assert strict.is_relative("//example.com") is False
        assert strict.is_relative("//example.com", {"allowProtocolRelative": True}) is True

    def test_invalid_option_value_raises(self, classifier):
        with pytest.raises(ValidationError):
            classifier.is_relative("//example.com", {"allowProtocolRelative": "sometimes"})

    def test_options_are_immutable(self):
        options = ClassificationOptions()
        with pytest.raises(ValidationError):
            options.allow_protocol_relative = False


class TestMemoization:
    """Interaction between the classifier and its cache"""

    def test_miss_populates_cache(self, classifier, cache):
        assert classifier.is_relative("/path") is True
        assert cache.get("/path") is True

    def test_cached_verdict_is_served(self, cache):
        classifier = UrlClassifier(cache=cache)
        cache.set("/planted", False)

        assert classifier.is_relative("/planted") is False

    def test_repeated_calls_are_deterministic(self, classifier, cache):
        urls = ["https://example.com", "/a", "mailto:x", "C:\\x", "//host"]
        first = [classifier.is_relative(url) for url in urls]
        second = [classifier.is_relative(url) for url in urls]
        cache.clear()
        third = [classifier.is_relative(url) for url in urls]

        assert first == second == third
        assert cache.get_stats().hits == 0
        assert cache.get_stats().misses == len(urls)

    def test_hits_are_counted(self, classifier, cache):
        classifier.is_relative("/a")
        classifier.is_relative("/a")
        assert cache.get_stats().hits == 1

    def test_fast_paths_skip_cache(self, classifier, cache):
        classifier.is_relative("")
        classifier.is_relative(42)

        assert len(cache) == 0
        assert cache.get_stats().misses == 0

    def test_strict_protocol_relative_never_touches_cache(self, classifier, cache):
        assert classifier.is_relative("//example.com", STRICT) is False

        assert len(cache) == 0
        assert cache.get_stats().misses == 0
        assert cache.get(("strict", "//example.com")) is None

    def test_strict_and_default_keys_do_not_collide(self, classifier, cache):
        assert classifier.is_relative("//example.com") is True
        assert classifier.is_relative("//example.com", STRICT) is False
        assert classifier.is_relative("//example.com") is True

        assert cache.keys() == ["//example.com"]

    def test_strict_results_cached_under_tagged_key(self, classifier, cache):
        classifier.is_relative("/path", STRICT)
        classifier.is_relative("/path")

        assert cache.keys() == [("strict", "/path"), "/path"]

    def test_tag_lookalike_string_does_not_collide(self, classifier):
        # "strict:foo" is a scheme; "foo" in strict mode is a relative path
        assert classifier.is_relative("strict:foo") is False
        assert classifier.is_relative("foo", STRICT) is True
        assert classifier.is_relative("strict:foo") is False

    def test_cache_key(self):
        assert make_cache_key("/a", True) == "/a"
        assert make_cache_key("/a", False) == ("strict", "/a")
        assert make_cache_key("/a", False) != "strict:/a"

    def test_capacity_bound_through_classifier(self):
        cache = LRUCache(max_size=3)
        classifier = UrlClassifier(cache=cache)
        for url in ["/a", "/b", "/c", "/d"]:
            classifier.is_relative(url)

        assert cache.keys() == ["/b", "/c", "/d"]

    def test_default_cache_sized_from_settings(self):
        classifier = UrlClassifier()
        assert classifier.cache.get_max_size() == relative_url.settings.cache_max_size


class TestModuleSurface:
    """Process-wide default classifier and cache"""

    @pytest.fixture(autouse=True)
    def clean_shared_cache(self):
        relative_url.cache.clear()
        yield
        relative_url.cache.clear()

    def test_is_relative_url(self):
        assert is_relative_url("/path/to/resource") is True
        assert is_relative_url("https://example.com") is False
        assert is_relative_url("//example.com") is True
        assert is_relative_url("//example.com", {"allowProtocolRelative": False}) is False

    def test_shared_cache_is_exposed(self):
        is_relative_url("https://example.com")

        assert len(relative_url.cache) == 1
        assert relative_url.cache.get("https://example.com") is False

    def test_shared_cache_clear(self):
        is_relative_url("/a")
        relative_url.cache.clear()

        assert relative_url.cache.get("/a") is None
        assert relative_url.cache.get_max_size() == 1000
