"""
Error classification helpers mapping failures to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, kind-to-code mapping
for our own error types, provider error-body extraction, and message-based
heuristics as a fallback for foreign exceptions.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional, TYPE_CHECKING

from .error_code import ErrorCode, RequestErrorKind, ResponseErrorKind

if TYPE_CHECKING:
    from .interface_error import RequestError, ResponseError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    402: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def status_to_code(status: int) -> ErrorCode:
    """Map an HTTP status to an ``ErrorCode``; unmapped 5xx count as server errors."""
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    if 400 <= status < 500:
        return ErrorCode.VALIDATION
    return ErrorCode.UNKNOWN


_RESPONSE_KIND_MAP: Dict[ResponseErrorKind, ErrorCode] = {
    ResponseErrorKind.MALFORMED_JSON: ErrorCode.DECODE,
    ResponseErrorKind.MALFORMED_FRAME: ErrorCode.DECODE,
    ResponseErrorKind.SCHEMA_MISMATCH: ErrorCode.PROTOCOL,
    ResponseErrorKind.EMPTY_CHOICES: ErrorCode.PROTOCOL,
    ResponseErrorKind.TRUNCATED_STREAM: ErrorCode.TRANSIENT,
    ResponseErrorKind.PROVIDER_ERROR: ErrorCode.SERVER_ERROR,
}


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for exceptions without a status."""
    PATTERN_GROUPS = (
        (ErrorCode.RATE_LIMIT, ("rate", "limit")),
        (ErrorCode.TIMEOUT, ("timeout",)),
        (ErrorCode.TIMEOUT, ("timed out",)),
        (ErrorCode.AUTH, ("api key",)),
        (ErrorCode.AUTH, ("unauthorized",)),
        (ErrorCode.AUTH, ("authentication",)),
        (ErrorCode.AUTH, ("forbidden",)),
        (ErrorCode.NOT_FOUND, ("not found",)),
        (ErrorCode.NOT_FOUND, ("does not exist",)),
        (ErrorCode.UNAVAILABLE, ("unavailable",)),
        (ErrorCode.UNAVAILABLE, ("overloaded",)),
        (ErrorCode.UNAVAILABLE, ("connection refused",)),
        (ErrorCode.VALIDATION, ("invalid",)),
        (ErrorCode.SERVER_ERROR, ("server error",)),
        (ErrorCode.SERVER_ERROR, ("internal error",)),
    )
    # every pattern in a group must match
    for code, patterns in PATTERN_GROUPS:
        if all(p in msg for p in patterns):
            return code
    return None


def _provider_error_code(provider_error: Optional[Dict[str, Any]]) -> Optional[ErrorCode]:
    """Best-effort mapping of an OpenAI-style ``error.type``/``error.code`` pair."""
    if not provider_error:
        return None
    hints = " ".join(
        str(provider_error.get(k) or "") for k in ("type", "code", "message")
    ).lower()
    return _heuristic_from_message(hints)


def code_for_request_error(err: "RequestError") -> ErrorCode:
    """Return the normalized code for a ``RequestError``."""
    if err.kind is RequestErrorKind.SERIALIZATION:
        return ErrorCode.VALIDATION
    if err.kind is RequestErrorKind.STATUS and err.status_code is not None:
        return status_to_code(err.status_code)
    if err.cause is not None:
        if isinstance(err.cause, TimeoutError):
            return ErrorCode.TIMEOUT
        code = _heuristic_from_message(f"{type(err.cause).__name__} {err.cause}".lower())
        if code is not None:
            return code
    return ErrorCode.TRANSIENT


def code_for_response_error(err: "ResponseError") -> ErrorCode:
    """Return the normalized code for a ``ResponseError``."""
    if err.kind is ResponseErrorKind.PROVIDER_ERROR:
        return _provider_error_code(err.provider_error) or ErrorCode.SERVER_ERROR
    return _RESPONSE_KIND_MAP.get(err.kind, ErrorCode.UNKNOWN)


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. Package error passthrough (``RequestError``/``ResponseError``).
        2. Timeout exceptions.
        3. HTTP status mapping.
        4. Substring heuristics over the type name and message.
        5. ``UNKNOWN`` fallback.
    """
    from .interface_error import OpenAIInterfaceError

    if isinstance(exc, OpenAIInterfaceError):
        return exc.code
    if isinstance(exc, TimeoutError):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None:
        return status_to_code(status)
    code = _heuristic_from_message(f"{type(exc).__name__} {exc}".lower())
    return code if code is not None else ErrorCode.UNKNOWN


def extract_provider_error(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Return the ``error`` object of an OpenAI-style error body, if present.

    Accepts ``{"error": {...}}`` and ``{"error": "message"}`` shapes. Anything
    else (non-JSON, no ``error`` key) returns ``None``; this never raises.
    """
    if not text:
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return provider_error_from_obj(data)


def provider_error_from_obj(data: Any) -> Optional[Dict[str, Any]]:
    """Return the provider error object from an already-decoded JSON value."""
    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if isinstance(err, dict):
        return err
    if isinstance(err, str) and err:
        return {"message": err}
    return None


__all__ = [
    "classify_exception",
    "code_for_request_error",
    "code_for_response_error",
    "extract_provider_error",
    "provider_error_from_obj",
    "status_to_code",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
