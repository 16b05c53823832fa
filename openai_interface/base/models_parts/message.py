"""
Request-side chat messages as a closed union tagged by ``role``.

Summary
-------
Each role is its own frozen pydantic model whose ``role`` field is a
``Literal`` and doubles as the union discriminator, so deserialization picks
the variant from the tag alone. Optional fields left as ``None`` are omitted
from the wire JSON.

Rules
-----
- ``content`` is required for every role except an assistant message that
  carries only ``tool_calls``; an assistant message with neither is rejected.
- ``prefix`` is only written to the wire when true.
- ``reasoning_content`` on an assistant message is only meaningful for
  chat-prefix completion and therefore requires ``prefix=True``.

Failure Modes
-------------
Construction raises ``pydantic.ValidationError`` (a ``ValueError``) when a
rule is violated.
"""
from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, model_serializer, model_validator

from .tool_call import AssistantToolCall
from .wire import RequestModel


class SystemMessage(RequestModel):
    role: Literal["system"] = "system"
    content: str
    name: Optional[str] = None


class DeveloperMessage(RequestModel):
    """Instruction message for reasoning models that replace ``system``."""

    role: Literal["developer"] = "developer"
    content: str
    name: Optional[str] = None


class UserMessage(RequestModel):
    role: Literal["user"] = "user"
    content: str
    name: Optional[str] = None


class AssistantMessage(RequestModel):
    """Prior assistant turn, or a prefix the model must continue.

    Attributes:
        content: Visible text; may be ``None`` when only ``tool_calls`` are set.
        tool_calls: Calls the assistant requested in that turn.
        refusal: Refusal text returned by the model, echoed back verbatim.
        prefix: Ask the server to continue from ``content`` (DeepSeek beta).
        reasoning_content: Reasoning to continue from; requires ``prefix``.
    """

    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    name: Optional[str] = None
    tool_calls: Optional[List[AssistantToolCall]] = None
    refusal: Optional[str] = None
    prefix: bool = False
    reasoning_content: Optional[str] = None

    @model_validator(mode="after")
    def _validate_content(self) -> "AssistantMessage":
        if self.content is None and not self.tool_calls:
            raise ValueError("assistant message requires content or tool_calls")
        if self.reasoning_content is not None and not self.prefix:
            raise ValueError("reasoning_content on an assistant message requires prefix=True")
        return self

    @model_serializer(mode="wrap")
    def _omit_false_prefix(self, handler) -> Any:
        data = handler(self)
        if isinstance(data, dict) and not self.prefix:
            data.pop("prefix", None)
        return data


class ToolMessage(RequestModel):
    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str = Field(..., min_length=1)


class FunctionMessage(RequestModel):
    """Result of a legacy ``function_call`` (deprecated by OpenAI, still accepted)."""

    role: Literal["function"] = "function"
    content: str
    name: str


Message = Annotated[
    Union[
        SystemMessage,
        DeveloperMessage,
        UserMessage,
        AssistantMessage,
        ToolMessage,
        FunctionMessage,
    ],
    Field(discriminator="role"),
]

_MESSAGE_ADAPTER: TypeAdapter = TypeAdapter(Message)


def parse_message(data: dict) -> Message:
    """Build the role variant matching ``data["role"]``."""
    return _MESSAGE_ADAPTER.validate_python(data)


__all__ = [
    "SystemMessage",
    "DeveloperMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "FunctionMessage",
    "Message",
    "parse_message",
]
