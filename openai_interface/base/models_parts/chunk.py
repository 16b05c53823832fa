"""
Streaming chat completion chunk and its delta content channels.

Summary
-------
Each ``chat.completion.chunk`` carries, per choice, a ``Delta`` holding at most
one :data:`CompletionContent` value: :class:`Content` (answer text) or
:class:`ReasoningContent` (reasoning trace). On the wire the channel is
selected by the key, ``content`` or ``reasoning_content``.

Channel selection
-----------------
- only ``content`` present and non-null -> ``Content``
- only ``reasoning_content`` present and non-null -> ``ReasoningContent``
- both present (DeepSeek sends both, one of them null) -> the non-null one;
  an empty ``content`` string next to a non-empty ``reasoning_content``
  yields ``ReasoningContent``
- both non-empty -> ``Content``; the reasoning text is dropped
- neither present (or both null) -> no content

A delta serializes back to the wire key of its channel. Channel keys the
provider sent that did not carry the selected text (DeepSeek's explicit
``"content": null`` next to ``reasoning_content``) are written back as null.
"""
from __future__ import annotations

from typing import Any, List, Literal, Optional, Tuple, Union

from pydantic import ConfigDict, PrivateAttr, model_serializer, model_validator

from .completion import FinishReasonValue
from .logprobs import Logprobs
from .usage import CompletionUsage
from .wire import WireModel, parse_document


class Content(WireModel):
    """Answer text fragment."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    channel: Literal["content"] = "content"
    text: str


class ReasoningContent(WireModel):
    """Reasoning (chain-of-thought) text fragment."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    channel: Literal["reasoning_content"] = "reasoning_content"
    text: str


CompletionContent = Union[Content, ReasoningContent]

_CHANNEL_KEYS = ("content", "reasoning_content")


def _text_or_none(value: Any, key: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"delta {key} must be a string or null")


def select_channel(content: Any, reasoning_content: Any) -> Optional[CompletionContent]:
    """Map the raw ``content``/``reasoning_content`` pair to one channel."""
    text = _text_or_none(content, "content")
    reasoning = _text_or_none(reasoning_content, "reasoning_content")
    if reasoning and not text:
        return ReasoningContent(text=reasoning)
    if text is not None:
        return Content(text=text)
    if reasoning is not None:
        return ReasoningContent(text=reasoning)
    return None


class FunctionCallDelta(WireModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCallDelta(WireModel):
    """Fragment of a tool call; fragments sharing ``index`` concatenate."""

    index: int = 0
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[FunctionCallDelta] = None


class Delta(WireModel):
    role: Optional[str] = None
    content: Optional[CompletionContent] = None
    tool_calls: Optional[List[ToolCallDelta]] = None

    # Channel keys present in the parsed wire object
    _wire_keys: Tuple[str, ...] = PrivateAttr(default=())

    @model_validator(mode="wrap")
    @classmethod
    def _select_channel(cls, data: Any, handler) -> Any:
        if not isinstance(data, dict) or isinstance(data.get("content"), (Content, ReasoningContent)):
            return handler(data)
        present = tuple(key for key in _CHANNEL_KEYS if key in data)
        if present:
            data = dict(data)
            raw_content = data.pop("content", None)
            raw_reasoning = data.pop("reasoning_content", None)
            data["content"] = select_channel(raw_content, raw_reasoning)
        delta = handler(data)
        delta._wire_keys = present
        return delta

    @model_serializer(mode="wrap")
    def _channel_keys(self, handler) -> Any:
        data = handler(self)
        if not isinstance(data, dict):
            return data
        data.pop("content", None)
        for key in self._wire_keys:
            data[key] = None
        if isinstance(self.content, ReasoningContent):
            data["reasoning_content"] = self.content.text
        elif isinstance(self.content, Content):
            data["content"] = self.content.text
        return data

    @property
    def text(self) -> Optional[str]:
        """Answer text carried by this delta, if any."""
        return self.content.text if isinstance(self.content, Content) else None

    @property
    def reasoning(self) -> Optional[str]:
        """Reasoning text carried by this delta, if any."""
        return self.content.text if isinstance(self.content, ReasoningContent) else None


class ChunkChoice(WireModel):
    index: int = 0
    delta: Delta
    finish_reason: Optional[FinishReasonValue] = None
    logprobs: Optional[Logprobs] = None


class ChatCompletionChunk(WireModel):
    """``chat.completion.chunk`` object.

    ``choices`` may be empty: with ``stream_options.include_usage`` the final
    chunk carries only ``usage``.
    """

    id: str
    object: str = "chat.completion.chunk"
    created: int
    model: str
    choices: List[ChunkChoice]
    usage: Optional[CompletionUsage] = None
    system_fingerprint: Optional[str] = None
    service_tier: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "ChatCompletionChunk":
        """Parse one SSE payload.

        Raises:
            ResponseError: malformed JSON, a provider error object, or a
                schema mismatch.
        """
        return parse_document(text, cls, what="chunk")


__all__ = [
    "Content",
    "ReasoningContent",
    "CompletionContent",
    "select_channel",
    "FunctionCallDelta",
    "ToolCallDelta",
    "Delta",
    "ChunkChoice",
    "ChatCompletionChunk",
]
