"""Per-item result type for streamed sequences.

A stream keeps going after a bad frame, so each element is either a value or
the typed error raised for that position; the caller decides whether to stop.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from ..errors import OpenAIInterfaceError

T = TypeVar("T")


@dataclass(frozen=True)
class StreamItem(Generic[T]):
    """One element of a frame or chunk stream.

    Fields:
      value: the frame text or parsed chunk (``None`` on error)
      error: the failure for this position (``None`` on success)
    """

    value: Optional[T] = None
    error: Optional[OpenAIInterfaceError] = None

    @classmethod
    def ok(cls, value: T) -> "StreamItem[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: OpenAIInterfaceError) -> "StreamItem[T]":
        return cls(error=error)

    def is_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


__all__ = ["StreamItem"]
