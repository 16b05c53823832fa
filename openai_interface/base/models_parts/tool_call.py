"""
Tool calls attached to assistant messages.

A closed union tagged by ``type``: ``function`` calls carry JSON-encoded
``arguments``; ``custom`` calls carry free-form ``input``. Unknown keys are
kept so provider responses round-trip.
"""
from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import ConfigDict, Field

from .wire import RequestModel


class _ToolCallModel(RequestModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")


class FunctionCall(_ToolCallModel):
    name: str
    arguments: str = ""


class FunctionToolCall(_ToolCallModel):
    id: str
    type: Literal["function"] = "function"
    function: FunctionCall


class CustomCall(_ToolCallModel):
    name: str
    input: str = ""


class CustomToolCall(_ToolCallModel):
    id: str
    type: Literal["custom"] = "custom"
    custom: CustomCall


AssistantToolCall = Annotated[Union[FunctionToolCall, CustomToolCall], Field(discriminator="type")]


__all__ = [
    "FunctionCall",
    "FunctionToolCall",
    "CustomCall",
    "CustomToolCall",
    "AssistantToolCall",
]
