"""HTTP plumbing for the chat driver.

Builds headers, encodes the request body, and converts ``httpx`` failures and
non-2xx responses into :class:`RequestError` values. ``httpx`` is only
imported here and in the driver; the core never sees it.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional

import httpx

from ..base.constants import EVENT_STREAM_MEDIA_TYPE, JSON_MEDIA_TYPE
from ..base.errors import RequestError, RequestErrorKind, extract_provider_error
from ..base.models import RequestBody


def build_headers(api_key: Optional[str], *, streaming: bool) -> Dict[str, str]:
    """Return request headers; ``Authorization`` only when a key is given."""
    headers = {
        "Content-Type": JSON_MEDIA_TYPE,
        "Accept": EVENT_STREAM_MEDIA_TYPE if streaming else JSON_MEDIA_TYPE,
    }
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return headers


def encode_body(body: RequestBody, *, provider: Optional[str] = None) -> bytes:
    """Serialize ``body`` to UTF-8 JSON bytes.

    Raises:
        RequestError: ``SERIALIZATION`` when a value cannot become JSON.
    """
    try:
        return body.to_json().encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise RequestError(
            RequestErrorKind.SERIALIZATION,
            f"request body could not be serialized: {exc}",
            cause=exc,
            provider=provider,
            model=body.model,
        ) from exc


def transport_error(exc: Exception, *, provider: Optional[str], model: Optional[str]) -> RequestError:
    """Wrap a connect/DNS/TLS/timeout failure raised before a response arrived."""
    return RequestError(
        RequestErrorKind.TRANSPORT,
        f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__,
        cause=exc,
        provider=provider,
        model=model,
    )


def body_read_error(exc: Exception, *, provider: Optional[str], model: Optional[str]) -> RequestError:
    """Wrap a failure while reading a response body that had already started."""
    return RequestError(
        RequestErrorKind.BODY_READ,
        f"reading response body failed: {type(exc).__name__}: {exc}",
        cause=exc,
        provider=provider,
        model=model,
    )


def status_error(response: httpx.Response, text: Optional[str], *, provider: Optional[str], model: Optional[str]) -> RequestError:
    """Build the ``STATUS`` error for a non-2xx response whose body was read."""
    provider_error = extract_provider_error(text)
    message = None
    if provider_error is not None:
        message = provider_error.get("message")
    if not message:
        message = f"HTTP {response.status_code} {response.reason_phrase}".strip()
    return RequestError(
        RequestErrorKind.STATUS,
        str(message),
        status_code=response.status_code,
        body=text,
        provider_error=provider_error,
        provider=provider,
        model=model,
    )


def read_error_body(response: httpx.Response) -> Optional[str]:
    """Read and return the body of a failed streamed response, then close it.

    A body that cannot be read yields ``None``; the status is what matters.
    """
    try:
        response.read()
        return response.text
    except httpx.HTTPError:
        return None
    finally:
        response.close()


def iter_response_bytes(
    response: httpx.Response, *, provider: Optional[str], model: Optional[str]
) -> Iterator[bytes]:
    """Yield body fragments, turning mid-stream transport failures into ``BODY_READ``."""
    try:
        yield from response.iter_bytes()
    except httpx.HTTPError as exc:
        raise body_read_error(exc, provider=provider, model=model) from exc


__all__ = [
    "build_headers",
    "encode_body",
    "transport_error",
    "body_read_error",
    "status_error",
    "read_error_body",
    "iter_response_bytes",
]
