"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``openai_interface.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode, RequestErrorKind, ResponseErrorKind
from .errors_parts.interface_error import OpenAIInterfaceError, RequestError, ResponseError
from .errors_parts.classification import (
    classify_exception,
    extract_provider_error,
    provider_error_from_obj,
    status_to_code,
)

__all__ = [
    "ErrorCode",
    "RequestErrorKind",
    "ResponseErrorKind",
    "OpenAIInterfaceError",
    "RequestError",
    "ResponseError",
    "classify_exception",
    "extract_provider_error",
    "provider_error_from_obj",
    "status_to_code",
]
