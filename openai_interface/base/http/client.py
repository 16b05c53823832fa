"""Construction of ``httpx.Client`` instances for the chat driver.

There is no shared pool: each driver owns the client it builds
and closes it in ``close()``. Timeouts derive from :func:`get_timeout_config`
unless the caller passes an explicit ``httpx.Timeout``.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..timeouts import get_timeout_config


def user_agent() -> str:
    """Return the ``User-Agent`` value sent with every request."""
    from ... import __version__

    return f"openai-interface/{__version__} httpx/{httpx.__version__}"


def build_httpx_client(
    *,
    timeout: Optional[httpx.Timeout] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Return a new ``httpx.Client`` for chat completion calls.

    Parameters:
        timeout: Explicit timeout; defaults to the non-streaming values from
            :func:`get_timeout_config`. Streaming calls override the read
            timeout per request.
        transport: Optional transport (``httpx.MockTransport`` in tests).
    """
    if timeout is None:
        timeout = get_timeout_config().to_httpx()
    kwargs = {"timeout": timeout, "headers": {"User-Agent": user_agent()}}
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.Client(**kwargs)


__all__ = ["build_httpx_client", "user_agent"]
