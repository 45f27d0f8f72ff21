# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication hooks run on every request right before it is sent."""

from __future__ import annotations

import base64
from typing import Protocol, runtime_checkable

from .http.models import Request


@runtime_checkable
class Authentication(Protocol):
    """Adds credentials to a request in place (headers, query parameters, signatures)."""

    def authenticate(self, request: Request) -> None: ...


class BasicAuthentication:
    """HTTP Basic credentials."""

    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

    def authenticate(self, request: Request) -> None:
        token = base64.b64encode(f"{self.username}:{self.password}".encode("utf-8")).decode("ascii")
        request.set_header("Authorization", f"Basic {token}")


class TokenAuthentication:
    """Static token sent in a header, `Authorization: Bearer <token>` by default."""

    def __init__(self, token: str, scheme: str | None = "Bearer", header: str = "Authorization"):
        self.token = token
        self.scheme = scheme
        self.header = header

    def authenticate(self, request: Request) -> None:
        value = f"{self.scheme} {self.token}" if self.scheme else self.token
        request.set_header(self.header, value)


class QueryKeyAuthentication:
    """API key passed as a query parameter (e.g. `?api_key=...`)."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value

    def authenticate(self, request: Request) -> None:
        request.set_parameter(self.name, self.value)


__all__ = ["Authentication", "BasicAuthentication", "QueryKeyAuthentication", "TokenAuthentication"]
