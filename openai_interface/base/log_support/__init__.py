"""JSON line formatting and per-call logging context for ``base.logging``."""

from .json_formatter import ISO, JsonFormatter
from .logging_context import LogContext

__all__ = ["ISO", "JsonFormatter", "LogContext"]
