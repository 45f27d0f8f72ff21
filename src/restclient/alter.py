# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request alteration hooks, run before authentication."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from .http.models import Request


@runtime_checkable
class RequestAlter(Protocol):
    """General-purpose last-chance customization of an outgoing request."""

    def alter_request(self, request: Request) -> None: ...


class CallableRequestAlter:
    """Adapts a plain `fn(request)` callable to the RequestAlter protocol."""

    def __init__(self, func: Callable[[Request], Any]):
        self.func = func

    def alter_request(self, request: Request) -> None:
        self.func(request)


class HeaderRequestAlter:
    """Sets a fixed set of headers on every request (user agent, tracing ids, ...)."""

    def __init__(self, headers: Mapping[str, Any]):
        self.headers = dict(headers)

    def alter_request(self, request: Request) -> None:
        for name, value in self.headers.items():
            request.set_header(name, value)


__all__ = ["CallableRequestAlter", "HeaderRequestAlter", "RequestAlter"]
