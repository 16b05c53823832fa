"""
Response format selector (``text``, ``json_object`` or ``json_schema``).
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import Field

from .wire import RequestModel


class ResponseFormatText(RequestModel):
    type: Literal["text"] = "text"


class ResponseFormatJsonObject(RequestModel):
    type: Literal["json_object"] = "json_object"


class JsonSchemaFormat(RequestModel):
    """Named JSON Schema the output must satisfy.

    ``schema_`` is serialized under its wire name ``schema``.
    """

    name: str = Field(..., min_length=1, max_length=64)
    description: Optional[str] = None
    schema_: Optional[Dict[str, Any]] = Field(default=None, alias="schema")
    strict: Optional[bool] = None


class ResponseFormatJsonSchema(RequestModel):
    type: Literal["json_schema"] = "json_schema"
    json_schema: JsonSchemaFormat


ResponseFormat = Annotated[
    Union[ResponseFormatText, ResponseFormatJsonObject, ResponseFormatJsonSchema],
    Field(discriminator="type"),
]


__all__ = [
    "ResponseFormatText",
    "ResponseFormatJsonObject",
    "JsonSchemaFormat",
    "ResponseFormatJsonSchema",
    "ResponseFormat",
]
