# File: tests/test_utils.py
import pytest

from sitecrawl.exceptions import LinkResolutionError
from sitecrawl.utils import (
    has_skipped_extension,
    is_same_origin,
    normalize_url,
    resolve_link,
    url_origin,
)


@pytest.mark.parametrize(
    "href,expected",
    [
        ("/about", "https://a.com/about"),
        ("contact", "https://a.com/dir/contact"),
        ("../up", "https://a.com/up"),
        ("?q=1", "https://a.com/dir/page?q=1"),
        ("#section", "https://a.com/dir/page"),
        ("", "https://a.com/dir/page"),
        ("  /padded  ", "https://a.com/padded"),
        ("//a.com/proto-relative", "https://a.com/proto-relative"),
        ("https://a.com/abs#frag", "https://a.com/abs"),
    ],
)
def test_resolve_link(href, expected):
    assert resolve_link("https://a.com/dir/page", href) == expected


def test_resolve_link_malformed():
    with pytest.raises(LinkResolutionError) as info:
        resolve_link("https://a.com/", "http://[::1")
    assert info.value.href == "http://[::1"


def test_resolve_link_bad_port():
    with pytest.raises(LinkResolutionError):
        resolve_link("https://a.com/", "https://a.com:99999999/")


def test_fragment_variants_share_one_key():
    assert normalize_url("https://a.com/x") == normalize_url("https://a.com/x#sec")


@pytest.mark.parametrize(
    "url,expected",
    [
        ("HTTPS://A.COM/Path", "https://a.com/Path"),
        ("https://a.com", "https://a.com/"),
        ("https://a.com:443/x", "https://a.com/x"),
        ("http://a.com:80/x", "http://a.com/x"),
        ("http://a.com:8080/x", "http://a.com:8080/x"),
        ("https://a.com/dir/", "https://a.com/dir/"),
        ("https://a.com/x?b=2&a=1", "https://a.com/x?b=2&a=1"),
        ("https://user@a.com/x", "https://user@a.com/x"),
        ("http://[::1]:8000/x", "http://[::1]:8000/x"),
    ],
)
def test_normalize_url(url, expected):
    assert normalize_url(url) == expected


def test_normalize_is_idempotent():
    url = normalize_url("HTTP://Ex.com:80/a/b/?x=1#y")
    assert normalize_url(url) == url


def test_same_origin_is_exact():
    origin = ("https", "a.com", 443)
    assert is_same_origin("https://a.com/x", origin)
    assert is_same_origin("https://A.com:443/x", origin)
    assert not is_same_origin("https://sub.a.com/x", origin)
    assert not is_same_origin("https://a.com/x", ("https", "sub.a.com", 443))
    assert not is_same_origin("https://nota.com/x", origin)
    assert not is_same_origin("mailto:me@a.com", origin)
    assert not is_same_origin("ftp://a.com/file", origin)


def test_same_origin_rejects_other_scheme_and_port():
    origin = ("https", "ex.com", 443)
    assert not is_same_origin("http://ex.com/a", origin)
    assert not is_same_origin("http://ex.com:8081/a", origin)
    assert not is_same_origin("https://ex.com:8443/a", origin)
    assert not is_same_origin("https://ex.com:bad/a", origin)


def test_url_origin():
    assert url_origin("https://Sub.A.com:8443/x") == ("https", "sub.a.com", 8443)
    assert url_origin("http://a.com/") == ("http", "a.com", 80)
    assert url_origin("/relative") is None
    assert url_origin("ftp://a.com/") is None


def test_has_skipped_extension():
    assert has_skipped_extension("https://a.com/doc.PDF", (".pdf",))
    assert not has_skipped_extension("https://a.com/doc.pdf?x", ())
    assert not has_skipped_extension("https://a.com/pdf", (".pdf",))
