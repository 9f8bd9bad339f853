# File: tests/test_link_resolver.py
import pytest

from meta_scout.crawler.link_resolver import ResolutionError, hostname, normalize_url, resolve, same_host

BASE = "http://example.test/docs/page.html"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("/pricing", "http://example.test/pricing"),
        ("other.html", "http://example.test/docs/other.html"),
        ("../up", "http://example.test/up"),
        ("?q=1", "http://example.test/docs/page.html?q=1"),
        ("//cdn.test/x", "http://cdn.test/x"),
        ("https://Other.TEST", "https://other.test/"),
        ("  /spaced  ", "http://example.test/spaced"),
        ("/frag#section", "http://example.test/frag"),
    ],
)
def test_resolve(raw, expected):
    assert resolve(BASE, raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["", "   ", None, "mailto:a@example.test", "javascript:void(0)", "tel:+100", "http://[::1", "http://host:99999/", "http:relative"],
)
def test_resolve_rejects(raw):
    with pytest.raises(ResolutionError):
        resolve(BASE, raw)


def test_resolution_error_is_value_error():
    assert issubclass(ResolutionError, ValueError)


def test_normalize_url():
    assert normalize_url("HTTP://Example.TEST") == "http://example.test/"
    assert normalize_url("http://example.test/a?b=1#c") == "http://example.test/a?b=1"


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("http://Example.test/a", "https://example.TEST/b", True),
        ("http://example.test:8080/", "example.test", True),
        ("http://example.test/", "http://sub.example.test/", False),
        ("http://example.test/", "", False),
    ],
)
def test_same_host(a, b, expected):
    assert same_host(a, b) is expected


def test_hostname_of_bare_host():
    assert hostname("Example.TEST") == "example.test"
    assert hostname("http://[::1") == ""
