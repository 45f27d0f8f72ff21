# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Body formatters.

A formatter turns request payloads into bytes and response bodies back into data. The
bundled `BaseFormatter` speaks two formats: PHP's native `serialize()` encoding (via the
`phpserialize` package, byte-compatible with PHP) and JSON.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

import phpserialize

from .errors import DeserializationFailed, InvalidConfiguration

PHP_CONTENT_TYPE = "application/vnd.php.serialized"
JSON_CONTENT_TYPE = "application/json"


@runtime_checkable
class Formatter(Protocol):
    """Capability required from anything attached to a client as its formatter."""

    def serialize(self, data: Any) -> bytes: ...

    def deserialize(self, data: bytes | str) -> Any: ...


def _as_bytes(data: bytes | str | None) -> bytes:
    if data is None:
        return b""
    if isinstance(data, str):
        return data.encode("utf-8", "surrogateescape")
    return bytes(data)


def _php_serialize(data: Any) -> bytes:
    return phpserialize.dumps(data, charset="utf-8")


def _php_deserialize(data: bytes | str) -> Any:
    raw = _as_bytes(data)
    if not raw:
        return None
    try:
        return phpserialize.loads(
            raw,
            charset="utf-8",
            decode_strings=True,
            object_hook=phpserialize.phpobject,
        )
    except (ValueError, TypeError, IndexError, KeyError) as exc:
        raise DeserializationFailed("Unserialization of response body failed.", data) from exc


def _json_serialize(data: Any) -> bytes:
    return json.dumps(data).encode("utf-8")


def _json_deserialize(data: bytes | str) -> Any:
    raw = _as_bytes(data)
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class Codec:
    serialize: Callable[[Any], bytes]
    deserialize: Callable[[bytes | str], Any]
    content_type: str


class Format(str, Enum):
    PHP = "php"
    JSON = "json"

    @classmethod
    def parse(cls, value: Format | str) -> Format:
        """Resolve a format name case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            supported = ", ".join(member.value for member in cls)
            raise InvalidConfiguration(
                f"Unsupported format {value!r}; BaseFormatter can only handle: {supported}."
            ) from None

    @property
    def codec(self) -> Codec:
        return _CODECS[self]


_CODECS: dict[Format, Codec] = {
    Format.PHP: Codec(_php_serialize, _php_deserialize, PHP_CONTENT_TYPE),
    Format.JSON: Codec(_json_serialize, _json_deserialize, JSON_CONTENT_TYPE),
}


class BaseFormatter:
    """
    Formatter for serialized PHP or JSON bodies.

    The two variants fail differently on bad input: PHP raises DeserializationFailed,
    JSON returns None.
    """

    def __init__(self, format: Format | str = Format.PHP):
        self.format = Format.parse(format)
        self._codec = self.format.codec

    @property
    def content_type(self) -> str:
        return self._codec.content_type

    def serialize(self, data: Any) -> bytes:
        return self._codec.serialize(data)

    def deserialize(self, data: bytes | str) -> Any:
        return self._codec.deserialize(data)

    def __repr__(self) -> str:
        return f"BaseFormatter(format={self.format.value!r})"


__all__ = [
    "BaseFormatter",
    "Codec",
    "Format",
    "Formatter",
    "JSON_CONTENT_TYPE",
    "PHP_CONTENT_TYPE",
]
