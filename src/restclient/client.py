# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""REST client orchestrating formatting, request hooks, transport and response handling."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .alter import CallableRequestAlter, RequestAlter
from .auth import Authentication
from .config import ClientSettings, load_settings
from .errors import HttpError, InvalidConfiguration, TransportError
from .formatters import Formatter
from .http.models import Exchange, Method, Request, Response
from .http.response import interpret_response
from .http.transport import TransportFactory, default_transport_factory

logger = logging.getLogger(__name__)


class RestClient:
    """
    Synchronous REST client.

    Each verb call builds a fresh Request, serializes the payload with the configured
    formatter, lets the request alter hook and then the authentication hook modify it,
    sends it through a transport created for that call alone and interprets the raw
    response. Only status 200 counts as success.

    `raw_response` and `last_response` keep the most recent call for diagnostics; use
    `dispatch()` when a call-scoped result is needed instead.
    """

    def __init__(
        self,
        authentication: Authentication | None = None,
        formatter: Formatter | None = None,
        request_alter: RequestAlter | Callable[[Request], Any] | None = None,
        *,
        settings: ClientSettings | None = None,
        transport_factory: TransportFactory | None = None,
    ):
        self.settings = settings or load_settings()
        self.transport_factory = transport_factory or default_transport_factory(self.settings)
        self.authentication: Authentication | None = None
        self.formatter: Formatter | None = None
        self.request_alter: RequestAlter | None = None
        self.raw_response: str | None = None
        self.last_response: Response | None = None
        self._last_error: str | None = None

        self.set_authentication(authentication)
        self.set_formatter(formatter)
        self.set_request_alter(request_alter)

    def set_authentication(self, authentication: Authentication | None) -> None:
        if not authentication:
            self.authentication = None
        elif isinstance(authentication, Authentication) and callable(authentication.authenticate):
            self.authentication = authentication
        else:
            raise InvalidConfiguration(
                "The authentication parameter must either provide an authenticate(request) method or be empty."
            )

    def set_formatter(self, formatter: Formatter | None) -> None:
        if not formatter:
            self.formatter = None
        elif isinstance(formatter, Formatter) and callable(formatter.serialize) and callable(formatter.deserialize):
            self.formatter = formatter
        else:
            raise InvalidConfiguration(
                "The formatter parameter must either provide serialize() and deserialize() methods or be empty."
            )

    def set_request_alter(self, request_alter: RequestAlter | Callable[[Request], Any] | None) -> None:
        if not request_alter:
            self.request_alter = None
        elif isinstance(request_alter, RequestAlter) and callable(request_alter.alter_request):
            self.request_alter = request_alter
        elif callable(request_alter):
            self.request_alter = CallableRequestAlter(request_alter)
        else:
            raise InvalidConfiguration(
                "The request_alter parameter must either provide an alter_request(request) method, "
                "be a callable taking the request, or be empty."
            )

    def get(self, url: str, parameters: Mapping[str, Any] | None = None) -> Any:
        return self.request(Method.GET, url, parameters=parameters)

    def post(self, url: str, data: Any, parameters: Mapping[str, Any] | None = None) -> Any:
        return self.request(Method.POST, url, data, parameters=parameters)

    def put(self, url: str, data: Any, parameters: Mapping[str, Any] | None = None) -> Any:
        return self.request(Method.PUT, url, data, parameters=parameters)

    def delete(self, url: str, parameters: Mapping[str, Any] | None = None) -> Any:
        return self.request(Method.DELETE, url, parameters=parameters)

    def request(
        self,
        method: Method | str,
        url: str,
        data: Any = None,
        *,
        parameters: Mapping[str, Any] | None = None,
        content_type: str | None = None,
        extra_headers: Mapping[str, Any] | None = None,
        unserialize: bool = True,
    ) -> Any:
        """Build, send and interpret one request; returns the decoded body on HTTP 200."""
        request = self.build_request(
            url,
            parameters,
            method,
            data,
            content_type=content_type,
            extra_headers=extra_headers,
        )
        return self.execute(request, unserialize=unserialize)

    def build_request(
        self,
        url: str,
        parameters: Mapping[str, Any] | None,
        method: Method | str,
        data: Any = None,
        content_type: str | None = None,
        extra_headers: Mapping[str, Any] | None = None,
    ) -> Request:
        """
        Create a request ready for dispatch.

        Extra headers are set before the hooks run so that authentication sees them.
        """
        body = self._encode_body(data)
        request = Request(method=method, url=url, parameters=dict(parameters or {}), body=body)
        if request.has_body():
            request.set_header("Content-type", content_type or self.settings.default_content_type)
            request.set_header("Content-length", len(request.body or b""))
        for name, value in (extra_headers or {}).items():
            request.set_header(name, value)

        if self.request_alter is not None:
            self.request_alter.alter_request(request)

        if self.authentication is not None:
            self.authentication.authenticate(request)

        return request

    def dispatch(self, request: Request) -> Exchange:
        """Send a prepared request and interpret the reply without touching client state."""
        logger.debug("Dispatching %s %s", request.get_method(), request.url)
        transport = self.transport_factory()
        try:
            result = transport.send(
                request.get_method(),
                request.to_url(),
                request.get_headers(),
                request.get_body() if request.has_body() else None,
            )
        finally:
            transport.close()

        response = interpret_response(result.raw, max_depth=self.settings.max_continue_depth)
        logger.debug(
            "%s %s -> %s %s",
            request.get_method(),
            request.url,
            response.status_code,
            response.status_message or result.error or "",
        )
        return Exchange(request=request, transport=result, response=response)

    def execute(self, request: Request, unserialize: bool = True) -> Any:
        """Dispatch a prepared request; return the (decoded) body on 200 or raise."""
        exchange = self.dispatch(request)
        self.raw_response = exchange.transport.raw
        self.last_response = exchange.response
        self._last_error = exchange.transport.error
        return self.handle_exchange(exchange, unserialize=unserialize)

    def handle_exchange(self, exchange: Exchange, unserialize: bool = True) -> Any:
        response = exchange.response
        if response.status_code == 200:
            if unserialize and self.formatter is not None:
                return self.formatter.deserialize(response.body)
            return response.body

        if exchange.transport.empty:
            raise TransportError(exchange.transport.error, exchange.transport.error_category)
        raise HttpError(response.status_code, response.status_message, response)

    def get_transport_error(self) -> str | None:
        """Error reported by the transport on the last call, or None."""
        return self._last_error or None

    def _encode_body(self, data: Any) -> bytes | None:
        if not data:
            return None
        if self.formatter is not None:
            return self.formatter.serialize(data)
        if isinstance(data, str):
            return data.encode("utf-8")
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data)
        raise TypeError(f"Cannot send {type(data).__name__} without a formatter; pass str/bytes or configure one.")


__all__ = ["RestClient"]
