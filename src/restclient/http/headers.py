# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header utilities.

HTTP header field names are case-insensitive (RFC 9110). Interpreted responses keep the
raw header block as text, so callers that need individual values parse it here.
"""

from __future__ import annotations

import re

_STATUS_LINE_RE = re.compile(r"^HTTP/\d(?:\.\d)? ")


def parse_header_block(block: str | None) -> dict[str, str]:
    """
    Parse a raw header block into a lowercase-keyed mapping.

    The status line is skipped, continuation lines are folded into the previous value
    and repeated headers are joined with ", ".
    """
    out: dict[str, str] = {}
    last: str | None = None
    for line in (block or "").splitlines():
        if not line.strip():
            continue
        if _STATUS_LINE_RE.match(line):
            last = None
            continue
        if line[0] in " \t" and last is not None:
            out[last] = f"{out[last]} {line.strip()}".strip()
            continue
        name, sep, value = line.partition(":")
        if not sep:
            continue
        key = name.strip().lower()
        if not key:
            continue
        value = value.strip()
        out[key] = f"{out[key]}, {value}" if key in out else value
        last = key
    return out


def header_value(block: str | None, name: str, default: str = "") -> str:
    """Return a header value from a raw header block using case-insensitive matching."""
    if not block or not name:
        return default
    parsed = parse_header_block(block)
    return parsed.get(name.strip().lower(), default)


__all__ = ["header_value", "parse_header_block"]
