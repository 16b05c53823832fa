"""
Tool definitions and tool-choice values for a request body.

Only the wire shape is modeled; executing tools is the caller's concern.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import Field

from .wire import RequestModel


class FunctionDefinition(RequestModel):
    """Callable function exposed to the model.

    ``parameters`` is a JSON Schema object; ``strict`` asks the server to
    enforce it exactly (OpenAI structured outputs, DeepSeek beta).
    """

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    strict: Optional[bool] = None


class FunctionTool(RequestModel):
    type: Literal["function"] = "function"
    function: FunctionDefinition


class CustomToolDefinition(RequestModel):
    """Free-form tool whose input is plain text, optionally constrained by a grammar."""

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    format: Optional[Dict[str, Any]] = None


class CustomTool(RequestModel):
    type: Literal["custom"] = "custom"
    custom: CustomToolDefinition


Tool = Annotated[Union[FunctionTool, CustomTool], Field(discriminator="type")]


class ToolChoiceFunction(RequestModel):
    name: str = Field(..., min_length=1)


class NamedToolChoice(RequestModel):
    """Force the model to call one specific function."""

    type: Literal["function"] = "function"
    function: ToolChoiceFunction


ToolChoiceMode = Literal["none", "auto", "required"]
ToolChoice = Union[ToolChoiceMode, NamedToolChoice]


__all__ = [
    "FunctionDefinition",
    "FunctionTool",
    "CustomToolDefinition",
    "CustomTool",
    "Tool",
    "ToolChoiceFunction",
    "NamedToolChoice",
    "ToolChoiceMode",
    "ToolChoice",
]
