# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Query-string encoding shared by requests and authentication hooks."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlsplit, urlunsplit


def urlencode_rfc3986(value: Any) -> Any:
    """
    Percent-encode a value the way legacy OAuth-era REST APIs expect.

    Scalars are RFC 3986 encoded with `+` mapped back to a space and `%7E` back to `~`.
    Lists and mappings are encoded element-wise and keep their shape; anything else
    (None, arbitrary objects) encodes to an empty string.
    """
    if isinstance(value, Mapping):
        return {key: urlencode_rfc3986(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [urlencode_rfc3986(item) for item in value]
    if isinstance(value, bool):
        # PHP string casting: true -> "1", false -> "".
        return "1" if value else ""
    if isinstance(value, (str, bytes, int, float)):
        raw = value if isinstance(value, (str, bytes)) else str(value)
        return quote(raw, safe="").replace("%7E", "~").replace("+", " ")
    return ""


def _flatten(prefix: str, value: Any, pairs: list[tuple[str, str]]) -> None:
    if isinstance(value, Mapping):
        items = list(value.items())
    elif isinstance(value, (list, tuple)):
        items = list(enumerate(value))
    else:
        pairs.append((prefix, urlencode_rfc3986(value)))
        return

    if not items:
        # Keep the key visible rather than dropping it.
        pairs.append((prefix, ""))
        return
    for key, item in items:
        _flatten(f"{prefix}[{urlencode_rfc3986(str(key))}]", item, pairs)


def query_pairs(parameters: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Expand parameters into encoded (key, value) pairs using bracket notation for nesting."""
    pairs: list[tuple[str, str]] = []
    for key, value in (parameters or {}).items():
        _flatten(urlencode_rfc3986(str(key)), value, pairs)
    return pairs


def build_query(parameters: Mapping[str, Any] | None) -> str:
    """
    Build an encoded query string.

    Example:
      {"a": {"b": 1}, "tags": ["x", "y z"]} -> a[b]=1&tags[0]=x&tags[1]=y%20z
    """
    return "&".join(f"{key}={value}" for key, value in query_pairs(parameters))


def append_query(url: str, query: str) -> str:
    """Append an encoded query string before any fragment, after a query the URL already carries."""
    if not query:
        return url
    parts = urlsplit(url)
    if parts.query and not parts.query.endswith("&"):
        merged = f"{parts.query}&{query}"
    else:
        merged = f"{parts.query}{query}"
    return urlunsplit(parts._replace(query=merged))


__all__ = ["append_query", "build_query", "query_pairs", "urlencode_rfc3986"]
