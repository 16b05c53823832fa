"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `openai_interface.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RequestErrorKind, ResponseErrorKind
from .interface_error import OpenAIInterfaceError, RequestError, ResponseError
from .classification import classify_exception, extract_provider_error

__all__ = [
    "ErrorCode",
    "RequestErrorKind",
    "ResponseErrorKind",
    "OpenAIInterfaceError",
    "RequestError",
    "ResponseError",
    "classify_exception",
    "extract_provider_error",
]
