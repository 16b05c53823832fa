"""Timeout configuration for the chat driver.

All HTTP timeouts used by the package come from :func:`get_timeout_config`;
no other module hard-codes a numeric timeout.

Environment variables (all optional, positive floats, seconds):
    OPENAI_INTERFACE_TIMEOUT_CONNECT
    OPENAI_INTERFACE_TIMEOUT_READ
    OPENAI_INTERFACE_TIMEOUT_WRITE
    OPENAI_INTERFACE_TIMEOUT_POOL
    OPENAI_INTERFACE_TIMEOUT_STREAM_READ

The parsed configuration is cached and only recomputed when one of these
variables changes, so tests can adjust them with ``monkeypatch``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx

from .constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_POOL_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_STREAM_READ_TIMEOUT,
    DEFAULT_WRITE_TIMEOUT,
)

_ENV_PREFIX = "OPENAI_INTERFACE_TIMEOUT_"
_FIELDS = ("connect", "read", "write", "pool", "stream_read")


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        connect: Establishing the TCP/TLS connection.
        read: Waiting for the (complete) non-streaming response.
        write: Sending the request body.
        pool: Waiting for a free connection from the client pool.
        stream_read: Idle gap allowed between two streamed fragments.
    """

    connect: float = DEFAULT_CONNECT_TIMEOUT
    read: float = DEFAULT_READ_TIMEOUT
    write: float = DEFAULT_WRITE_TIMEOUT
    pool: float = DEFAULT_POOL_TIMEOUT
    stream_read: float = DEFAULT_STREAM_READ_TIMEOUT

    def to_httpx(self, *, streaming: bool = False) -> httpx.Timeout:
        """Return the ``httpx.Timeout`` for a plain or a streaming call."""
        return httpx.Timeout(
            connect=self.connect,
            read=self.stream_read if streaming else self.read,
            write=self.write,
            pool=self.pool,
        )


_CACHED: Optional[TimeoutConfig] = None
_ENV_GUARD: Optional[str] = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float; unset, invalid or non-positive gives ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the cached :class:`TimeoutConfig`, refreshed when the env changes."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(_ENV_PREFIX + f.upper(), "") for f in _FIELDS)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        **{f: _parse_env_float(_ENV_PREFIX + f.upper(), getattr(defaults, f)) for f in _FIELDS}
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
