"""
Structured exception types for the request and response sides.

`RequestError` covers everything up to and including reading the HTTP body;
`ResponseError` covers interpreting a body (or a stream frame) that did arrive.
Both carry the raw text and the underlying cause so a failure can be
reconstructed from logs without re-running the call.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import ErrorCode, RequestErrorKind, ResponseErrorKind

# Longest slice of raw text rendered by ``__str__``; ``context`` keeps it all.
_PREVIEW_CHARS = 200


class OpenAIInterfaceError(Exception):
    """Common base for every error raised by this package."""

    @property
    def code(self) -> ErrorCode:  # pragma: no cover - overridden
        return ErrorCode.UNKNOWN

    @property
    def retryable(self) -> bool:
        """Hint for callers that implement their own retry policy."""
        return self.code in (
            ErrorCode.RATE_LIMIT,
            ErrorCode.TIMEOUT,
            ErrorCode.TRANSIENT,
            ErrorCode.UNAVAILABLE,
        )


def _preview(text: Optional[str]) -> str:
    if not text:
        return ""
    if len(text) <= _PREVIEW_CHARS:
        return text
    return text[:_PREVIEW_CHARS] + "..."


@dataclass(eq=False)
class RequestError(OpenAIInterfaceError):
    """Failure before or during transmission (serialization, transport, status).

    Attributes:
        kind: Which request stage failed.
        message: Human-readable description suitable for logging.
        status_code: HTTP status for ``RequestErrorKind.STATUS``.
        body: Raw response body text when one was read.
        provider_error: Parsed ``{"error": {...}}`` object from the body, if any.
        cause: Original exception for diagnostics.
        provider: Provider key the request was addressed to.
        model: Model name from the request body.
    """

    kind: RequestErrorKind
    message: str
    status_code: Optional[int] = None
    body: Optional[str] = None
    provider_error: Optional[Dict[str, Any]] = None
    cause: Optional[BaseException] = None
    provider: Optional[str] = None
    model: Optional[str] = None

    @property
    def code(self) -> ErrorCode:
        from .classification import code_for_request_error

        return code_for_request_error(self)

    def __str__(self) -> str:
        head = f"{self.kind.value}: {self.message}"
        if self.status_code is not None:
            head = f"{head} (status {self.status_code})"
        if self.body:
            head = f"{head}: {_preview(self.body)}"
        return head


@dataclass(eq=False)
class ResponseError(OpenAIInterfaceError):
    """Failure interpreting a response body or a stream frame.

    Attributes:
        kind: Which interpretation step failed.
        message: Human-readable description suitable for logging.
        context: Raw text that failed to parse (full body or single frame).
        provider_error: Parsed provider error object for ``PROVIDER_ERROR``.
        cause: Original exception (``json.JSONDecodeError``, pydantic
            ``ValidationError``, ``UnicodeDecodeError``) when available.
    """

    kind: ResponseErrorKind
    message: str
    context: Optional[str] = None
    provider_error: Optional[Dict[str, Any]] = None
    cause: Optional[BaseException] = None

    @property
    def code(self) -> ErrorCode:
        from .classification import code_for_response_error

        return code_for_response_error(self)

    def __str__(self) -> str:
        if self.context:
            return f"{self.kind.value}: {self.message}: {_preview(self.context)}"
        return f"{self.kind.value}: {self.message}"


__all__ = ["OpenAIInterfaceError", "RequestError", "ResponseError"]
