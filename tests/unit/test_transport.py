# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import ssl

import httpx
import pytest

from restclient.client import RestClient
from restclient.config import ClientSettings
from restclient.errors import ErrorCategory, TransportError, categorize_exception
from restclient.formatters import BaseFormatter
from restclient.http.adapters import StubTransport
from restclient.http.httpx_transport import HttpxTransport, split_header_lines
from restclient.http.response import interpret_response
from restclient.http.transport import create_default_transport


def mock_transport(handler, settings=None):
    return HttpxTransport(settings or ClientSettings(user_agent="UA/1.0"), client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_httpx_transport_rebuilds_wire_text():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(200, headers={"Content-Type": "text/plain"}, text="hello")

    transport = mock_transport(handler)
    result = transport.send("GET", "http://example/x?a=1", ["X-Test: 1"], None)
    transport.close()

    assert result.error is None
    assert result.raw.startswith("HTTP/1.1 200 OK\r\n")
    assert "Content-Type: text/plain" in result.raw
    response = interpret_response(result.raw)
    assert response.status_code == 200
    assert response.body == "hello"

    sent = captured["request"]
    assert sent.method == "GET"
    assert str(sent.url) == "http://example/x?a=1"
    assert sent.headers["x-test"] == "1"
    assert sent.headers["user-agent"] == "UA/1.0"


def test_httpx_transport_keeps_explicit_user_agent_and_body():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(404, text="nope")

    result = mock_transport(handler).send("POST", "http://example/", ["User-Agent: mine", "Content-type: text/plain"], b"abc")
    assert captured["request"].headers["user-agent"] == "mine"
    assert captured["request"].content == b"abc"
    assert interpret_response(result.raw).status_message == "Not Found"


@pytest.mark.parametrize(
    ("exc", "category"),
    [
        (httpx.ConnectError("refused"), ErrorCategory.CONNECTION_ERROR),
        (httpx.ReadTimeout("slow"), ErrorCategory.TIMEOUT),
    ],
)
def test_httpx_transport_converts_exceptions(exc, category):
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        raise exc

    result = mock_transport(handler).send("GET", "http://example/", [], None)
    assert result.raw == ""
    assert result.empty is True
    assert result.error == str(exc)
    assert result.error_type == type(exc).__name__
    assert result.error_category is category


def test_client_over_httpx_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/down":
            raise httpx.ConnectError("refused")
        return httpx.Response(200, json={"path": request.url.path, "q": request.url.params.get("q")})

    settings = ClientSettings()
    client = RestClient(
        formatter=BaseFormatter("json"),
        settings=settings,
        transport_factory=lambda: mock_transport(handler, settings),
    )
    assert client.get("http://example/items", {"q": "a b"}) == {"path": "/items", "q": "a b"}
    with pytest.raises(TransportError) as excinfo:
        client.get("http://example/down")
    assert excinfo.value.detail == "refused"
    assert excinfo.value.category is ErrorCategory.CONNECTION_ERROR


def test_split_header_lines():
    assert split_header_lines(["A: 1", "bad", ": x", "B:two:parts"]) == [("A", "1"), ("B", "two:parts")]


def test_create_default_transport_uses_settings():
    transport = create_default_transport(ClientSettings(user_agent="UA/2"))
    try:
        assert isinstance(transport, HttpxTransport)
        assert transport.settings.user_agent == "UA/2"
    finally:
        transport.close()


def test_stub_transport_lookup_order():
    stub = StubTransport({"http://a": "HTTP/1.1 200 OK\r\n\r\na"}, queue=["HTTP/1.1 200 OK\r\n\r\nq"])
    assert stub.send("GET", "http://a", [], None).raw.endswith("a")
    assert stub.send("GET", "http://b", [], None).raw.endswith("q")
    missing = stub.send("GET", "http://b", [], None)
    assert missing.empty is True
    assert missing.error == "No stubbed response configured"
    assert [s.url for s in stub.sent] == ["http://a", "http://b", "http://b"]


def test_categorize_exception():
    assert categorize_exception(socket.gaierror("no host")) is ErrorCategory.DNS_ERROR
    assert categorize_exception(ssl.SSLError("bad cert")) is ErrorCategory.SSL_ERROR
    assert categorize_exception(ConnectionResetError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ValueError("x")) is ErrorCategory.UNKNOWN_ERROR

    wrapped = httpx.ConnectError("dns")
    wrapped.__cause__ = socket.gaierror("no host")
    assert categorize_exception(wrapped) is ErrorCategory.DNS_ERROR

    tls = httpx.ConnectError("tls")
    tls.__cause__ = ssl.SSLError("handshake")
    assert categorize_exception(tls) is ErrorCategory.SSL_ERROR


def test_declared_charset_does_not_alter_body_bytes():
    formatter = BaseFormatter("php")
    payload = formatter.serialize({"name": "café"})

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, headers={"Content-Type": "text/plain; charset=iso-8859-1"}, content=payload)

    settings = ClientSettings()
    client = RestClient(formatter=formatter, settings=settings, transport_factory=lambda: mock_transport(handler, settings))
    assert client.get("http://example/legacy") == {"name": "café"}


def test_undecodable_body_bytes_survive_for_formatters():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, content=b"\xff\xfe")

    result = mock_transport(handler).send("GET", "http://example/", [], None)
    body = interpret_response(result.raw).body
    assert body.encode("utf-8", "surrogateescape") == b"\xff\xfe"
