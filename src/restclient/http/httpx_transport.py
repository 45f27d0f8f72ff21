# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import ClientSettings, load_settings
from ..errors import categorize_exception
from .models import TransportResult
from .response import HEADER_BODY_DELIMITER

logger = logging.getLogger(__name__)


def split_header_lines(lines: list[str]) -> list[tuple[str, str]]:
    """Turn "Name: Value" lines back into pairs; lines without a colon are skipped."""
    pairs: list[tuple[str, str]] = []
    for line in lines:
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            continue
        pairs.append((name.strip(), value.strip()))
    return pairs


def decode_body(content: bytes) -> str:
    """
    Decode body bytes so that formatters get the exact bytes back.

    The declared charset is ignored: PHP string lengths count bytes, and undecodable
    bytes survive as surrogates that `encode("utf-8", "surrogateescape")` restores.
    """
    return content.decode("utf-8", "surrogateescape")


def format_raw_response(resp: httpx.Response) -> str:
    """Rebuild the verbatim wire text (status line, headers, blank line, body)."""
    status_line = f"{resp.http_version} {resp.status_code} {resp.reason_phrase}".rstrip()
    header_lines = [
        f"{name.decode('latin-1')}: {value.decode('latin-1')}" for name, value in resp.headers.raw
    ]
    head = "\r\n".join([status_line, *header_lines])
    return f"{head}{HEADER_BODY_DELIMITER}{decode_body(resp.content)}"


class HttpxTransport:
    """Synchronous httpx transport; one instance per request."""

    def __init__(self, settings: ClientSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def send(self, method: str, url: str, headers: list[str], body: bytes | None) -> TransportResult:
        pairs = split_header_lines(headers)
        if not any(name.lower() == "user-agent" for name, _ in pairs):
            pairs.append(("User-Agent", self.settings.user_agent))

        try:
            resp = self._client.request(method, url, headers=pairs, content=body or None)
            return TransportResult(raw=format_raw_response(resp))
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            logger.warning("%s %s failed (%s): %s", method, url, category.value, exc)
            return TransportResult(
                raw="",
                error=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                error_category=category,
            )

    def close(self) -> None:
        self._client.close()
