# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from urllib.parse import parse_qsl, urlsplit

import pytest

from restclient.http.models import Method, Request
from restclient.http.url import append_query, build_query, urlencode_rfc3986


def test_to_url_expands_nested_parameters_with_brackets():
    request = Request(Method.GET, "http://example/api", {"a": {"b": 1, "c": [1, "x y"]}, "q": "plain"})
    url = request.to_url()
    assert url == "http://example/api?a[b]=1&a[c][0]=1&a[c][1]=x%20y&q=plain"
    assert parse_qsl(urlsplit(url).query) == [
        ("a[b]", "1"),
        ("a[c][0]", "1"),
        ("a[c][1]", "x y"),
        ("q", "plain"),
    ]


def test_to_url_without_parameters_returns_base_url():
    assert Request(Method.GET, "http://example/api").to_url() == "http://example/api"


def test_to_url_appends_to_existing_query():
    request = Request(Method.GET, "http://example/?v=1", {"a": 2})
    assert request.to_url() == "http://example/?v=1&a=2"


def test_urlencode_rfc3986_scalars_and_containers():
    assert urlencode_rfc3986("a~b c+d/e") == "a~b%20c%2Bd%2Fe"
    assert urlencode_rfc3986(42) == "42"
    assert urlencode_rfc3986(True) == "1"
    assert urlencode_rfc3986(False) == ""
    assert urlencode_rfc3986(None) == ""
    assert urlencode_rfc3986(object()) == ""
    assert urlencode_rfc3986(["a b", {"k": "é"}]) == ["a%20b", {"k": "%C3%A9"}]


def test_unsupported_values_encode_to_empty_string_without_dropping_keys():
    query = build_query({"obj": object(), "none": None, "flag": True, "tags": []})
    assert query == "obj=&none=&flag=1&tags="


def test_keys_are_encoded():
    assert build_query({"a key": {"sub key": "v"}}) == "a%20key[sub%20key]=v"


def test_append_query_handles_trailing_separator():
    assert append_query("http://x/?", "a=1") == "http://x/?a=1"
    assert append_query("http://x/?b=2&", "a=1") == "http://x/?b=2&a=1"
    assert append_query("http://x/", "") == "http://x/"


def test_set_header_is_case_insensitive_and_keeps_last_value():
    request = Request(Method.GET, "http://example")
    request.set_header("content-type", "text/plain")
    request.set_header("X-One", "1")
    request.set_header("Content-Type", "application/json")
    assert request.get_headers() == ["Content-Type: application/json", "X-One: 1"]
    assert request.get_header("CONTENT-TYPE") == "application/json"
    assert request.get_header("missing", "default") == "default"


def test_initial_headers_and_remove_header():
    request = Request(Method.GET, "http://example", initial_headers={"Accept": "text/plain", "X-Num": 5})
    assert request.get_headers() == ["Accept: text/plain", "X-Num: 5"]
    request.remove_header("accept")
    assert request.get_headers() == ["X-Num: 5"]


def test_has_body_and_body_coercion():
    assert Request(Method.POST, "http://example", body=b"").has_body() is False
    assert Request(Method.POST, "http://example").has_body() is False
    request = Request(Method.POST, "http://example", body="héllo")
    assert request.has_body() is True
    assert request.get_body() == "héllo".encode("utf-8")


def test_method_coercion():
    assert Request("delete", "http://example").method is Method.DELETE
    assert Request(Method.PUT, "http://example").get_method() == "PUT"
    with pytest.raises(ValueError):
        Method.coerce("PATCH")


def test_to_url_keeps_fragment_after_query():
    assert Request(Method.GET, "http://example/#frag", {"a": 1}).to_url() == "http://example/?a=1#frag"
    assert append_query("http://example/?v=1#frag", "a=2") == "http://example/?v=1&a=2#frag"
