"""
Normalized error codes and failure kinds (taxonomy).

Defines the `ErrorCode` enumeration shared by every failure in the package and
the two kind enumerations that split failures into the request side
(`RequestErrorKind`) and the response side (`ResponseErrorKind`). Values are
lowercase snake_case and are considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    DECODE = "decode"
    PROTOCOL = "protocol"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


class RequestErrorKind(str, Enum):
    """Failure before or during transmission of a request."""

    SERIALIZATION = "serialization"
    TRANSPORT = "transport"
    STATUS = "status"
    BODY_READ = "body_read"


class ResponseErrorKind(str, Enum):
    """Failure interpreting what came back from the provider."""

    MALFORMED_JSON = "malformed_json"
    SCHEMA_MISMATCH = "schema_mismatch"
    EMPTY_CHOICES = "empty_choices"
    PROVIDER_ERROR = "provider_error"
    MALFORMED_FRAME = "malformed_frame"
    TRUNCATED_STREAM = "truncated_stream"


__all__ = ["ErrorCode", "RequestErrorKind", "ResponseErrorKind"]
