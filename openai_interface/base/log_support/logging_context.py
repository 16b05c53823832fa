"""Structured logging context carried through a single chat call.

:class:`LogContext` groups the fields every driver event repeats (provider,
model, endpoint, request/response ids). ``to_dict`` flattens ``extra`` into
the top level and prunes ``None`` so emitted lines stay compact.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for chat logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    endpoint: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}

    def with_response_id(self, response_id: Optional[str]) -> "LogContext":
        """Return a copy carrying the server-assigned completion id."""
        if not response_id or response_id == self.response_id:
            return self
        return replace(self, response_id=response_id, extra=dict(self.extra))


__all__ = ["LogContext"]
