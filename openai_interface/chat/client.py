"""Request driver for OpenAI-compatible ``/chat/completions`` endpoints.

Summary:
- ``send`` / ``create``: one POST, whole JSON body (raw text or parsed ``Completion``)
- ``send_streaming`` / ``stream``: one POST, SSE body as raw frames or decoded chunks
- Exactly one outbound request per call; no retries (callers own retry policy)

Stream flag:
- The body's ``stream`` flag is aligned with the method called. A mismatched
  body is copied with the corrected flag (the caller's object is untouched)
  and a ``chat.stream_flag_corrected`` warning is logged.

Errors & Observability:
- Serialization, transport, non-2xx and body-read failures raise ``RequestError``
- Parsing failures raise (or, when streaming, yield) ``ResponseError``
- Structured events: ``chat.start``, ``chat.end``, ``chat.error``,
  ``stream.start``, ``stream.finalize``; credentials are never logged

Resources:
- The driver closes the ``httpx.Client`` it created; an injected client is
  left to its owner. Each streamed response is owned by the returned stream.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx

from ..base.errors import OpenAIInterfaceError, RequestError
from ..base.http import build_httpx_client
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import Completion, RequestBody
from ..base.streaming import ChunkStream, FrameStream
from ..base.timeouts import TimeoutConfig, get_timeout_config
from ..config import chat_completions_url, get_provider_config
from .helpers import (
    build_headers,
    encode_body,
    iter_response_bytes,
    read_error_body,
    status_error,
    transport_error,
    body_read_error,
)


class ChatCompletionsClient:
    """Driver for one OpenAI-compatible endpoint.

    Parameters:
        base_url: API base URL; ``/chat/completions`` is appended.
        api_key: Default bearer credential; each call may pass its own.
        url: Full endpoint URL, used instead of ``base_url`` when given.
        provider: Provider label used in logs and errors only.
        http_client: Injected ``httpx.Client``; not closed by the driver.
        timeout: Timeout values; defaults to ``get_timeout_config()``.
        transport: ``httpx`` transport for the client the driver builds
            (``httpx.MockTransport`` in tests).

    Thread-safety:
        Calls share no mutable state besides the ``httpx.Client``, which is
        itself safe for concurrent use.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        *,
        url: Optional[str] = None,
        provider: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: Optional[TimeoutConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if url is None and base_url is None:
            raise ValueError("either base_url or url is required")
        self._url = url or chat_completions_url(base_url)  # type: ignore[arg-type]
        self._api_key = api_key
        self._provider = provider
        self._timeouts = timeout or get_timeout_config()
        self._owns_client = http_client is None
        self._client = http_client or build_httpx_client(
            timeout=self._timeouts.to_httpx(), transport=transport
        )
        self.default_model: Optional[str] = None
        self._logger = get_logger("openai_interface.chat")

    @classmethod
    def from_provider(
        cls,
        provider: str,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: Optional[TimeoutConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "ChatCompletionsClient":
        """Build a driver from ``get_provider_config(provider)``.

        The resolved default model is exposed as ``default_model``.
        """
        cfg = get_provider_config(provider, overrides={"api_key": api_key, "base_url": base_url})
        if not cfg.get("base_url"):
            raise ValueError(f"no base_url configured for provider {provider!r}")
        client = cls(
            cfg["base_url"],
            cfg.get("api_key"),
            provider=provider,
            http_client=http_client,
            timeout=timeout,
            transport=transport,
        )
        client.default_model = cfg.get("model")
        return client

    @property
    def url(self) -> str:
        return self._url

    @property
    def provider(self) -> Optional[str]:
        return self._provider

    # ---- Non-streaming ----
    def send(self, body: RequestBody, url: Optional[str] = None, api_key: Optional[str] = None) -> str:
        """POST ``body`` and return the raw response text of a 2xx answer.

        Raises:
            RequestError: serialization, transport, non-2xx status or body read.
        """
        endpoint = url or self._url
        ctx = LogContext(provider=self._provider, model=body.model, endpoint=endpoint)
        body = self._align_stream(body, False, ctx)
        self._log_start("chat.start", ctx, streaming=False)
        t0 = time.perf_counter()
        try:
            request = self._build_request(endpoint, body, api_key, streaming=False)
            response = self._open(request, body.model)
            try:
                try:
                    response.read()
                except httpx.HTTPError as exc:
                    raise body_read_error(exc, provider=self._provider, model=body.model) from exc
                text = response.text
                if not response.is_success:
                    raise status_error(response, text, provider=self._provider, model=body.model)
            finally:
                response.close()
        except OpenAIInterfaceError as err:
            self._log_error(ctx, err, "chat")
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            status=response.status_code,
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
            bytes=len(response.content),
        )
        return text

    def create(self, body: RequestBody, url: Optional[str] = None, api_key: Optional[str] = None) -> Completion:
        """``send`` then parse the body into a :class:`Completion`.

        Raises:
            RequestError: as for ``send``.
            ResponseError: malformed JSON, provider error object, schema mismatch.
        """
        text = self.send(body, url=url, api_key=api_key)
        try:
            return Completion.parse(text)
        except OpenAIInterfaceError as err:
            ctx = LogContext(provider=self._provider, model=body.model, endpoint=url or self._url)
            self._log_error(ctx, err, "chat")
            raise

    # ---- Streaming ----
    def send_streaming(
        self, body: RequestBody, url: Optional[str] = None, api_key: Optional[str] = None
    ) -> FrameStream:
        """POST ``body`` with ``stream=true`` and return a raw frame stream.

        The returned :class:`FrameStream` owns the response; close it (or use
        it as a context manager) if you stop before the end.

        Raises:
            RequestError: serialization, transport or non-2xx status. Failures
                while reading the body later surface as ``BODY_READ`` from
                the iterator.
        """
        endpoint = url or self._url
        ctx = LogContext(provider=self._provider, model=body.model, endpoint=endpoint)
        body = self._align_stream(body, True, ctx)
        self._log_start("stream.start", ctx, streaming=True)
        try:
            request = self._build_request(endpoint, body, api_key, streaming=True)
            response = self._open(request, body.model)
            if not response.is_success:
                text = read_error_body(response)
                raise status_error(response, text, provider=self._provider, model=body.model)
        except OpenAIInterfaceError as err:
            self._log_error(ctx, err, "stream")
            raise
        stream = FrameStream(iter_response_bytes(response, provider=self._provider, model=body.model))
        stream.callback(response.close)
        stream.callback(self._log_stream_finalize, stream, ctx, response.status_code)
        return stream

    def stream(self, body: RequestBody, url: Optional[str] = None, api_key: Optional[str] = None) -> ChunkStream:
        """``send_streaming`` then decode frames into ``ChatCompletionChunk`` items."""
        return self.send_streaming(body, url=url, api_key=api_key).chunks()

    # ---- Lifecycle ----
    def close(self) -> None:
        """Close the owned ``httpx.Client`` (no-op for an injected client)."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ChatCompletionsClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---- Internals ----
    def _align_stream(self, body: RequestBody, streaming: bool, ctx: LogContext) -> RequestBody:
        if body.stream == streaming:
            return body
        log_event(
            self._logger,
            "chat.stream_flag_corrected",
            ctx,
            level=logging.WARNING,
            requested=body.stream,
            sent=streaming,
        )
        return body.with_stream(streaming)

    def _build_request(
        self, endpoint: str, body: RequestBody, api_key: Optional[str], *, streaming: bool
    ) -> httpx.Request:
        content = encode_body(body, provider=self._provider)
        headers = build_headers(api_key or self._api_key, streaming=streaming)
        try:
            return self._client.build_request(
                "POST",
                endpoint,
                content=content,
                headers=headers,
                timeout=self._timeouts.to_httpx(streaming=streaming),
            )
        except httpx.InvalidURL as exc:
            raise transport_error(exc, provider=self._provider, model=body.model) from exc

    def _open(self, request: httpx.Request, model: str) -> httpx.Response:
        try:
            return self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise transport_error(exc, provider=self._provider, model=model) from exc

    def _log_start(self, event: str, ctx: LogContext, *, streaming: bool) -> None:
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="start",
            attempt=1,
            emitted=None,
            tokens=None,
            streaming=streaming,
        )

    def _log_error(self, ctx: LogContext, err: OpenAIInterfaceError, phase: str) -> None:
        fields: dict[str, Any] = {"kind": err.kind.value, "message": err.message}  # type: ignore[attr-defined]
        if isinstance(err, RequestError) and err.status_code is not None:
            fields["status"] = err.status_code
        normalized_log_event(
            self._logger,
            "chat.error",
            ctx,
            phase=phase,
            error_code=err.code.value,
            emitted=False,
            level=logging.ERROR,
            retryable=err.retryable,
            **fields,
        )

    def _log_stream_finalize(self, stream: FrameStream, ctx: LogContext, status: int) -> None:
        normalized_log_event(
            self._logger,
            "stream.finalize",
            ctx,
            phase="finalize",
            emitted=stream.emitted,
            status=status,
            done=stream.saw_done,
            truncated=not stream.saw_done,
            total_duration_ms=round(stream.elapsed_ms, 2),
        )


__all__ = ["ChatCompletionsClient"]
