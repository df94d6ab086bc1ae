import pytest

from linkcrawler.urls import is_valid_url, normalize_url


def test_normalize_strips_query_and_fragment():
    assert normalize_url("http://x.com/a?b=1#c") == "http://x.com/a/"


def test_normalize_cuts_at_first_fragment_even_before_query():
    assert normalize_url("http://x.com/a#frag?b=1") == "http://x.com/a/"


def test_normalize_keeps_existing_trailing_slash():
    assert normalize_url("https://x.com/docs/") == "https://x.com/docs/"


def test_normalize_is_case_sensitive():
    assert normalize_url("http://X.com/Page") == "http://X.com/Page/"
    assert normalize_url("http://X.com/Page") != normalize_url("http://x.com/page")


def test_normalize_never_fails():
    assert normalize_url("") == "/"
    assert normalize_url("#") == "/"
    assert normalize_url("not a url") == "not a url/"


@pytest.mark.parametrize("raw", [
    "",
    "/",
    "http://x.com",
    "http://x.com/a?b=1#c",
    "https://x.com/?q",
    "http://x.com/a//",
    "??##",
    "relative/path?x",
])
def test_normalize_is_idempotent(raw):
    once = normalize_url(raw)
    assert normalize_url(once) == once


@pytest.mark.parametrize("candidate", [
    "http://example.com",
    "https://example.com/path?q=1",
    "HTTPS://example.com/",
    "http://127.0.0.1:8080/x",
])
def test_valid_urls(candidate):
    assert is_valid_url(candidate)


@pytest.mark.parametrize("candidate", [
    "",
    "/relative/path",
    "page.html",
    "ftp://example.com/file",
    "mailto:someone@example.com",
    "javascript:void(0)",
    "http://",
    "http:example.com",
    "http://[::1",
])
def test_invalid_urls(candidate):
    assert not is_valid_url(candidate)
