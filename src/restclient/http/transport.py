# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory."""

from collections.abc import Callable
from typing import Protocol

from ..config import ClientSettings, load_settings
from .models import TransportResult


class Transport(Protocol):
    """
    Sends one request and returns the verbatim response text.

    Implementations never raise for network failures; they return an empty `raw`
    with `error` describing what went wrong.
    """

    def send(self, method: str, url: str, headers: list[str], body: bytes | None) -> TransportResult: ...

    def close(self) -> None: ...


TransportFactory = Callable[[], Transport]


def create_default_transport(settings: ClientSettings | None = None) -> Transport:
    """Factory for the default httpx-backed transport."""
    from .httpx_transport import HttpxTransport

    return HttpxTransport(settings or load_settings())


def default_transport_factory(settings: ClientSettings | None = None) -> TransportFactory:
    """Return a factory producing a fresh default transport for every call."""

    def factory() -> Transport:
        return create_default_transport(settings)

    return factory


__all__ = ["Transport", "TransportFactory", "create_default_transport", "default_transport_factory"]
