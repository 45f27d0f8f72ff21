# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""restclient CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..alter import HeaderRequestAlter
from ..auth import Authentication, BasicAuthentication, TokenAuthentication
from ..client import RestClient
from ..config import ClientSettings, load_settings
from ..errors import HttpError, RestClientError
from ..formatters import BaseFormatter
from ..http.models import Method
from ..http.transport import TransportFactory, default_transport_factory
from ..log import setup_logging

RAW_FORMAT = "raw"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="restclient", description="Issue a single REST request")
    parser.add_argument("method", type=str.upper, choices=[m.value for m in Method], help="HTTP method")
    parser.add_argument("url", help="Target URL (query parameters go in --param)")
    parser.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter; repeat a key to send a list",
    )
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="'Name: Value'",
        help="Extra request header",
    )
    parser.add_argument("-d", "--data", help="Request payload; parsed as JSON when a formatter is used")
    parser.add_argument(
        "--format",
        default="json",
        help="Body format: php, json or raw (no formatter)",
    )
    parser.add_argument("--content-type", help="Override the request Content-type")
    auth = parser.add_mutually_exclusive_group()
    auth.add_argument("--basic-auth", metavar="USER:PASSWORD", help="HTTP Basic credentials")
    auth.add_argument("--token", help="Bearer token")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--log-level", help="Logging level (default from RESTCLIENT_LOG_LEVEL)")
    return parser


def parse_params(items: list[str]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid parameter {item!r}; expected KEY=VALUE")
        if key in params:
            existing = params[key]
            params[key] = existing + [value] if isinstance(existing, list) else [existing, value]
        else:
            params[key] = value
    return params


def parse_headers(items: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for item in items:
        name, sep, value = item.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"Invalid header {item!r}; expected 'Name: Value'")
        headers[name.strip()] = value.strip()
    return headers


def build_authentication(args: argparse.Namespace) -> Authentication | None:
    if args.basic_auth:
        username, _, password = args.basic_auth.partition(":")
        return BasicAuthentication(username, password)
    if args.token:
        return TokenAuthentication(args.token)
    return None


def _payload(data: str | None, use_formatter: bool) -> Any:
    if data is None or not use_formatter:
        return data
    try:
        return json.loads(data)
    except ValueError:
        return data


def _json_safe(value: Any) -> Any:
    """PHP arrays may mix int and str keys; JSON output needs str keys to sort."""
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


def _print_result(result: Any, fmt: str) -> None:
    if fmt == RAW_FORMAT or isinstance(result, str):
        sys.stdout.write(result if isinstance(result, str) else str(result))
        sys.stdout.write("\n")
        return
    json.dump(_json_safe(result), sys.stdout, indent=2, sort_keys=True, default=str)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None, transport_factory: TransportFactory | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: ClientSettings = load_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    if args.timeout is not None:
        settings.timeout = args.timeout

    fmt = str(args.format).strip().lower()
    try:
        params = parse_params(args.param)
        headers = parse_headers(args.header)
        formatter = None if fmt == RAW_FORMAT else BaseFormatter(fmt)
        client = RestClient(
            authentication=build_authentication(args),
            formatter=formatter,
            request_alter=HeaderRequestAlter(headers) if headers else None,
            settings=settings,
            transport_factory=transport_factory or default_transport_factory(settings),
        )
        content_type = args.content_type or (formatter.content_type if formatter else None)
        result = client.request(
            args.method,
            args.url,
            _payload(args.data, formatter is not None),
            parameters=params,
            content_type=content_type,
        )
    except HttpError as exc:
        status = f"HTTP {exc.status_code} {exc.status_message}" if exc.status_message else f"HTTP {exc.status_code}"
        sys.stderr.write(status + "\n")
        if exc.response is not None and exc.response.body:
            sys.stderr.write(exc.response.body + "\n")
        return 1
    except (RestClientError, ValueError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    _print_result(result, fmt)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
