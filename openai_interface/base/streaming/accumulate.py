"""Accumulation of streamed chunks into a final message.

Answer text and reasoning text are built independently, each by
concatenating its own deltas in arrival order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from ..errors import OpenAIInterfaceError
from ..models import ChatCompletionChunk, CompletionUsage, Content, ReasoningContent, ToolCallDelta
from .stream_item import StreamItem


@dataclass
class StreamAccumulation:
    """Result of folding one choice of a chunk stream.

    Fields:
      content / reasoning_content: concatenated channel text
      finish_reason: last finish reason reported for the choice
      usage: usage from the trailing usage chunk, when requested
      tool_calls: merged tool calls in OpenAI wire shape
      chunks: number of chunks folded
      errors: error items seen when ``strict`` is off
    """

    id: Optional[str] = None
    model: Optional[str] = None
    role: Optional[str] = None
    content: str = ""
    reasoning_content: str = ""
    finish_reason: Optional[str] = None
    usage: Optional[CompletionUsage] = None
    tool_calls: List[Dict[str, Any]] = field(default_factory=list)
    chunks: int = 0
    errors: List[OpenAIInterfaceError] = field(default_factory=list)


def _merge_tool_call(slots: Dict[int, Dict[str, Any]], delta: ToolCallDelta) -> None:
    slot = slots.setdefault(
        delta.index,
        {"id": None, "type": "function", "function": {"name": "", "arguments": ""}},
    )
    if delta.id:
        slot["id"] = delta.id
    if delta.type:
        slot["type"] = delta.type
    if delta.function is not None:
        if delta.function.name:
            slot["function"]["name"] += delta.function.name
        if delta.function.arguments:
            slot["function"]["arguments"] += delta.function.arguments


def accumulate_chunks(
    chunks: Iterable[Union[ChatCompletionChunk, StreamItem[ChatCompletionChunk]]],
    *,
    choice_index: int = 0,
    strict: bool = True,
) -> StreamAccumulation:
    """Fold a chunk sequence into a :class:`StreamAccumulation`.

    Accepts plain chunks or stream items. An error item is raised when
    ``strict`` (the default); otherwise it is recorded in ``errors`` and
    folding continues.
    """
    acc = StreamAccumulation()
    content_parts: List[str] = []
    reasoning_parts: List[str] = []
    tool_slots: Dict[int, Dict[str, Any]] = {}
    for entry in chunks:
        if isinstance(entry, StreamItem):
            if entry.is_error():
                if strict:
                    raise entry.error  # type: ignore[misc]
                acc.errors.append(entry.error)  # type: ignore[arg-type]
                continue
            chunk = entry.value
        else:
            chunk = entry
        acc.chunks += 1
        acc.id = acc.id or chunk.id
        acc.model = acc.model or chunk.model
        if chunk.usage is not None:
            acc.usage = chunk.usage
        for choice in chunk.choices:
            if choice.index != choice_index:
                continue
            delta = choice.delta
            if delta.role:
                acc.role = delta.role
            if isinstance(delta.content, ReasoningContent):
                reasoning_parts.append(delta.content.text)
            elif isinstance(delta.content, Content):
                content_parts.append(delta.content.text)
            for call in delta.tool_calls or ():
                _merge_tool_call(tool_slots, call)
            if choice.finish_reason is not None:
                acc.finish_reason = str(getattr(choice.finish_reason, "value", choice.finish_reason))
    acc.content = "".join(content_parts)
    acc.reasoning_content = "".join(reasoning_parts)
    acc.tool_calls = [tool_slots[i] for i in sorted(tool_slots)]
    return acc


__all__ = ["StreamAccumulation", "accumulate_chunks"]
