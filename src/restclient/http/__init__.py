# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP layer exports."""

from .adapters import SentRequest, StubTransport
from .headers import header_value, parse_header_block
from .httpx_transport import HttpxTransport
from .models import Exchange, Method, Request, Response, TransportResult
from .response import interpret_response, split_response
from .transport import Transport, TransportFactory, create_default_transport, default_transport_factory
from .url import build_query, urlencode_rfc3986

__all__ = [
    "Exchange",
    "HttpxTransport",
    "Method",
    "Request",
    "Response",
    "SentRequest",
    "StubTransport",
    "Transport",
    "TransportFactory",
    "TransportResult",
    "build_query",
    "create_default_transport",
    "default_transport_factory",
    "header_value",
    "interpret_response",
    "parse_header_block",
    "split_response",
    "urlencode_rfc3986",
]
