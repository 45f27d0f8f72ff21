# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from .http.models import Response


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class RestClientError(Exception):
    """Base class for every error raised by restclient."""


class InvalidConfiguration(RestClientError, ValueError):
    """A collaborator or formatter name was rejected when it was attached."""


class DeserializationFailed(RestClientError):
    """A response body could not be decoded by the configured formatter."""

    def __init__(self, message: str, data: Any = None):
        super().__init__(message)
        self.data = data


class TransportError(RestClientError):
    """The transport produced no response at all."""

    def __init__(self, detail: str | None, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(f"Transport error: {detail or 'no response received'}")
        self.detail = detail
        self.category = category


class HttpError(RestClientError):
    """The server answered with anything other than 200."""

    def __init__(self, status_code: int | None, status_message: str | None, response: Response | None = None):
        super().__init__(status_message or "Unrecognized HTTP response")
        self.status_code = status_code
        self.status_message = status_message
        self.response = response


def _exception_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current = exc.__cause__ or exc.__context__
    while current is not None and current is not exc and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions raised inside a transport to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.ConnectError):
        # httpx wraps resolver and TLS failures in ConnectError; inspect the chain.
        for cause in _exception_chain(exc):
            if isinstance(cause, (ssl.SSLError, ssl.CertificateError)):
                return ErrorCategory.SSL_ERROR
            if isinstance(cause, (socket.gaierror, socket.herror)):
                return ErrorCategory.DNS_ERROR
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "DeserializationFailed",
    "ErrorCategory",
    "HttpError",
    "InvalidConfiguration",
    "RestClientError",
    "TransportError",
    "categorize_exception",
]
