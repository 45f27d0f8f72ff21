# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Raw HTTP response interpretation."""

from __future__ import annotations

import re

from .models import Response

HEADER_BODY_DELIMITER = "\r\n\r\n"
DEFAULT_MAX_CONTINUE_DEPTH = 5

# Unanchored: some transports prepend text before the status line.
_STATUS_LINE_RE = re.compile(r"HTTP/1.\d (\d{3}) (.*)")


def split_response(raw: str) -> tuple[str, str]:
    """Split raw response text into (header block, body) on the first blank line."""
    headers, _, body = (raw or "").partition(HEADER_BODY_DELIMITER)
    return headers, body


def interpret_response(raw: str | None, max_depth: int = DEFAULT_MAX_CONTINUE_DEPTH) -> Response:
    """
    Parse verbatim response text (status line, headers, blank line, body).

    "100 Continue" preambles are skipped by interpreting the remainder as the real
    response, at most `max_depth` times; past that the last 100 response is returned.
    Text without a recognisable status line yields a Response with no status code.
    """
    text = raw or ""
    skipped = 0
    while True:
        headers, body = split_response(text)
        match = _STATUS_LINE_RE.search(headers)
        if not match:
            return Response(headers=headers, body=body, raw=text)

        response = Response(
            headers=headers,
            body=body,
            status_code=int(match.group(1).strip()),
            status_message=match.group(2).strip(),
            raw=text,
        )
        if response.status_code != 100 or skipped >= max_depth:
            return response
        skipped += 1
        text = body


__all__ = ["DEFAULT_MAX_CONTINUE_DEPTH", "HEADER_BODY_DELIMITER", "interpret_response", "split_response"]
