# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory transports for tests and dry runs."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from .models import TransportResult
from .transport import TransportFactory


@dataclass
class SentRequest:
    method: str
    url: str
    headers: list[str]
    body: bytes | None


class StubTransport:
    """
    Deterministic, programmable transport.

    Responses are looked up by exact URL first, then taken from a FIFO queue. Raw strings
    are wrapped in a TransportResult; an empty string simulates a transport failure.
    """

    def __init__(
        self,
        responses: dict[str, str | TransportResult] | None = None,
        queue: list[str | TransportResult] | None = None,
    ):
        self._responses = dict(responses or {})
        self._queue: deque[str | TransportResult] = deque(queue or [])
        self.sent: list[SentRequest] = []
        self.close_count = 0

    def add(self, url: str, response: str | TransportResult) -> None:
        self._responses[url] = response

    def enqueue(self, response: str | TransportResult) -> None:
        self._queue.append(response)

    def send(self, method: str, url: str, headers: list[str], body: bytes | None) -> TransportResult:
        self.sent.append(SentRequest(method=method, url=url, headers=list(headers), body=body))
        if url in self._responses:
            return _as_result(self._responses[url])
        if self._queue:
            return _as_result(self._queue.popleft())
        return TransportResult(raw="", error="No stubbed response configured", error_type="StubTransport")

    def close(self) -> None:
        self.close_count += 1

    def factory(self) -> TransportFactory:
        """Factory handing out this instance for every call so tests can inspect it afterwards."""
        return lambda: self


def _as_result(value: str | TransportResult) -> TransportResult:
    if isinstance(value, TransportResult):
        return value
    if not value:
        return TransportResult(raw="", error="Empty response", error_type="StubTransport")
    return TransportResult(raw=value)
