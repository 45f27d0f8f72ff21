# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for restclient."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"restclient/{__version__}"
DEFAULT_CONTENT_TYPE = "application/vnd.php.serialized"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ClientSettings:
    """Client and transport defaults."""

    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = False
    verify_ssl: bool = True
    default_content_type: str = DEFAULT_CONTENT_TYPE
    max_continue_depth: int = 5

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_continue_depth = _int_env("RESTCLIENT_MAX_CONTINUE_DEPTH", cls.max_continue_depth)
        if max_continue_depth <= 0:
            max_continue_depth = cls.max_continue_depth
        content_type = os.getenv("RESTCLIENT_CONTENT_TYPE", "").strip() or cls.default_content_type
        return cls(
            timeout=_float_env("RESTCLIENT_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("RESTCLIENT_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("RESTCLIENT_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("RESTCLIENT_HTTP_VERIFY_SSL", cls.verify_ssl),
            default_content_type=content_type,
            max_continue_depth=max_continue_depth,
        )


def load_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
