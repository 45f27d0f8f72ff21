# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
restclient package entrypoint.

A small synchronous REST client: requests are built from a method, URL, query
parameters and an optional payload, run through pluggable formatter, request-alter
and authentication collaborators, sent through an injectable transport, and the raw
response is interpreted back into data or a typed error.
"""

from .alter import CallableRequestAlter, HeaderRequestAlter, RequestAlter
from .auth import Authentication, BasicAuthentication, QueryKeyAuthentication, TokenAuthentication
from .client import RestClient
from .config import ClientSettings, load_settings
from .errors import (
    DeserializationFailed,
    ErrorCategory,
    HttpError,
    InvalidConfiguration,
    RestClientError,
    TransportError,
)
from .formatters import BaseFormatter, Format, Formatter
from .http import (
    Exchange,
    HttpxTransport,
    Method,
    Request,
    Response,
    StubTransport,
    Transport,
    TransportResult,
    interpret_response,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "Authentication",
    "BaseFormatter",
    "BasicAuthentication",
    "CallableRequestAlter",
    "ClientSettings",
    "DeserializationFailed",
    "ErrorCategory",
    "Exchange",
    "Format",
    "Formatter",
    "HeaderRequestAlter",
    "HttpError",
    "HttpxTransport",
    "InvalidConfiguration",
    "Method",
    "QueryKeyAuthentication",
    "Request",
    "RequestAlter",
    "Response",
    "RestClient",
    "RestClientError",
    "StubTransport",
    "TokenAuthentication",
    "Transport",
    "TransportError",
    "TransportResult",
    "interpret_response",
    "load_settings",
    "setup_logging",
    "__version__",
]
