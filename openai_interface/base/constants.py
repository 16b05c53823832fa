"""Wire-level constants shared by the driver and the streaming pipeline.

Central location to avoid scattering magic strings across modules.

Security
--------
This module contains only protocol sentinels and media types. There are no
credentials embedded; ``MISSING_API_KEY_ERROR`` is a generic sentinel string.

# pragma: allowlist secret
"""
from __future__ import annotations

# Terminal SSE payload emitted by OpenAI-compatible servers
DONE_SENTINEL = "[DONE]"

# SSE field prefix carrying the payload; other fields (event:, id:, retry:) are ignored
SSE_DATA_PREFIX = b"data:"

JSON_MEDIA_TYPE = "application/json"
EVENT_STREAM_MEDIA_TYPE = "text/event-stream"

CHAT_COMPLETIONS_PATH = "/chat/completions"

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

# Default HTTP timeouts (seconds)
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_READ_TIMEOUT = 60.0
DEFAULT_WRITE_TIMEOUT = 30.0
DEFAULT_POOL_TIMEOUT = 10.0
# Idle gap allowed between two SSE fragments; reasoning models can pause for minutes
DEFAULT_STREAM_READ_TIMEOUT = 300.0

__all__ = [
    "DONE_SENTINEL",
    "SSE_DATA_PREFIX",
    "JSON_MEDIA_TYPE",
    "EVENT_STREAM_MEDIA_TYPE",
    "CHAT_COMPLETIONS_PATH",
    "MISSING_API_KEY_ERROR",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_READ_TIMEOUT",
    "DEFAULT_WRITE_TIMEOUT",
    "DEFAULT_POOL_TIMEOUT",
    "DEFAULT_STREAM_READ_TIMEOUT",
]
