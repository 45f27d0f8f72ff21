# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request/response data models used by the client and its collaborators."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import InitVar, dataclass, field
from enum import Enum
from typing import Any

from ..errors import ErrorCategory
from .headers import header_value
from .url import append_query, build_query


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def coerce(cls, value: Method | str) -> Method:
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())


@dataclass
class Request:
    """
    One outgoing HTTP call.

    Built per call by the client, altered and authenticated in place, then handed to a
    transport exactly once. Header names are matched case-insensitively but keep the
    casing of the most recent `set_header` call on output.
    """

    method: Method
    url: str
    parameters: dict[str, Any] = field(default_factory=dict)
    body: bytes | None = None
    initial_headers: InitVar[Mapping[str, Any] | None] = None
    _headers: dict[str, tuple[str, str]] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self, initial_headers: Mapping[str, Any] | None) -> None:
        self.method = Method.coerce(self.method)
        self.parameters = dict(self.parameters or {})
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")
        elif self.body is not None:
            self.body = bytes(self.body)
        for name, value in (initial_headers or {}).items():
            self.set_header(name, value)

    def set_header(self, name: str, value: Any) -> None:
        """Insert or overwrite a header; a differently-cased existing name is replaced in place."""
        self._headers[name.lower()] = (name, str(value))

    def get_header(self, name: str, default: str | None = None) -> str | None:
        entry = self._headers.get(name.lower())
        return entry[1] if entry is not None else default

    def remove_header(self, name: str) -> None:
        self._headers.pop(name.lower(), None)

    def get_headers(self) -> list[str]:
        """Header lines ready for the wire, in insertion order."""
        return [f"{name}: {value}" for name, value in self._headers.values()]

    def set_parameter(self, name: str, value: Any) -> None:
        self.parameters[name] = value

    def has_body(self) -> bool:
        return bool(self.body)

    def get_body(self) -> bytes | None:
        return self.body

    def get_method(self) -> str:
        return self.method.value

    def to_url(self) -> str:
        """Base URL plus the encoded query built from `parameters`."""
        return append_query(self.url, build_query(self.parameters))


@dataclass(frozen=True)
class Response:
    """
    Interpreted HTTP response.

    `headers` is the raw header block as received; use `header()` or
    `restclient.http.headers.parse_header_block` for individual values. A response whose
    status line could not be recognised has `status_code` set to None.
    """

    headers: str = ""
    body: str = ""
    status_code: int | None = None
    status_message: str | None = None
    raw: str = ""

    @property
    def has_status(self) -> bool:
        return self.status_code is not None

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)


@dataclass
class TransportResult:
    """What a transport hands back: the verbatim response text or an error description."""

    raw: str = ""
    error: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory = ErrorCategory.NONE

    @property
    def empty(self) -> bool:
        return not self.raw


@dataclass
class Exchange:
    """Call-scoped record of one dispatched request."""

    request: Request
    transport: TransportResult
    response: Response

    @property
    def raw_response(self) -> str:
        return self.transport.raw

    @property
    def ok(self) -> bool:
        return self.response.ok
