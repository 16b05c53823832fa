"""
Chat completion request body and its JSON payload mapping.

Purpose
-------
``RequestBody`` is the validated, immutable description of one
``POST /chat/completions`` call. It is built by the caller, serialized once by
the driver and never shared between calls; ``with_stream`` returns a copy
instead of mutating.

Extension slots
---------------
- ``extra_body``: vendor fields with a known meaning (:class:`ExtraBody`).
- ``extra_body_map``: any other JSON-valued keys the caller needs to send.

Both are merged at the top level of the payload. On a key collision the
standard field wins, then ``extra_body``, then ``extra_body_map``; a key is
never emitted twice and never dropped silently.
:meth:`RequestBody.from_payload` performs the inverse split, so a payload
survives serialize -> parse -> serialize unchanged.

Failure Modes
-------------
Construction raises ``pydantic.ValidationError`` for out-of-range parameters.
``to_json`` raises ``TypeError``/``ValueError`` when ``extra_body_map`` holds
values that are not JSON serializable.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import Field, model_validator

from .extra_body import ExtraBody
from .message import Message
from .response_format import ResponseFormat
from .tools import Tool, ToolChoice
from .wire import RequestModel

_EXTENSION_FIELDS = ("extra_body", "extra_body_map")


class StreamOptions(RequestModel):
    """``include_usage`` asks for a final usage-only chunk with empty ``choices``."""

    include_usage: Optional[bool] = None


class RequestBody(RequestModel):
    """Request payload for OpenAI-compatible chat completion endpoints.

    Parameters:
        messages: Ordered conversation (non-empty).
        model: Target model identifier (non-empty).
        stream: Whether the server should answer with SSE chunks. The driver
            aligns it with the method used.
        temperature: Within [0.0, 2.0].
        top_p: Within [0.0, 1.0].
        max_tokens / max_completion_tokens: Positive token limits.
        frequency_penalty / presence_penalty: Within [-2.0, 2.0].
        n: Number of choices (positive).
        top_logprobs: Within [0, 20]; requires ``logprobs``.
        extra_body / extra_body_map: Top-level vendor extensions.
    """

    messages: List[Message] = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    stream: bool = False
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    max_completion_tokens: Optional[int] = Field(default=None, gt=0)
    frequency_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    presence_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    n: Optional[int] = Field(default=None, gt=0)
    seed: Optional[int] = None
    stop: Optional[Union[str, List[str]]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = Field(default=None, ge=0, le=20)
    user: Optional[str] = None
    safety_identifier: Optional[str] = None
    stream_options: Optional[StreamOptions] = None
    response_format: Optional[ResponseFormat] = None
    tools: Optional[List[Tool]] = None
    tool_choice: Optional[ToolChoice] = None
    parallel_tool_calls: Optional[bool] = None
    extra_body: Optional[ExtraBody] = None
    extra_body_map: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _validate_logprobs(self) -> "RequestBody":
        if self.top_logprobs is not None and not self.logprobs:
            raise ValueError("top_logprobs requires logprobs=True")
        return self

    # -- serialization --------------------------------------------------
    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping with extensions merged at the top level."""
        payload = self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude=set(_EXTENSION_FIELDS),
        )
        if self.extra_body is not None:
            for key, value in self.extra_body.to_dict().items():
                payload.setdefault(key, value)
        if self.extra_body_map:
            for key, value in self.extra_body_map.items():
                payload.setdefault(key, value)
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=False, allow_nan=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RequestBody":
        """Rebuild a body from its wire mapping.

        Keys matching a standard field are validated as such, known vendor keys
        populate ``extra_body`` and every remaining key lands in
        ``extra_body_map``.
        """
        standard = set(cls.model_fields) - set(_EXTENSION_FIELDS)
        vendor = set(ExtraBody.model_fields)
        data: Dict[str, Any] = {}
        extra_body: Dict[str, Any] = {}
        extra_map: Dict[str, Any] = {}
        for key, value in payload.items():
            if key in standard:
                data[key] = value
            elif key in vendor:
                extra_body[key] = value
            else:
                extra_map[key] = value
        if extra_body:
            data["extra_body"] = extra_body
        if extra_map:
            data["extra_body_map"] = extra_map
        return cls.model_validate(data)

    # -- copies ----------------------------------------------------------
    def with_stream(self, stream: bool) -> "RequestBody":
        """Return a body whose ``stream`` flag equals ``stream`` (``self`` if it already does)."""
        stream = bool(stream)
        if self.stream == stream:
            return self
        return self.model_copy(update={"stream": stream})


__all__ = ["StreamOptions", "RequestBody"]
