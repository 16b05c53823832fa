"""
Chat data model public surface.

This module re-exports the implementations under
``openai_interface.base.models_parts`` to keep a single stable import path.
"""

from .models_parts.tool_call import (
    AssistantToolCall,
    CustomCall,
    CustomToolCall,
    FunctionCall,
    FunctionToolCall,
)
from .models_parts.message import (
    AssistantMessage,
    DeveloperMessage,
    FunctionMessage,
    Message,
    SystemMessage,
    ToolMessage,
    UserMessage,
    parse_message,
)
from .models_parts.tools import (
    CustomTool,
    CustomToolDefinition,
    FunctionDefinition,
    FunctionTool,
    NamedToolChoice,
    Tool,
    ToolChoice,
    ToolChoiceFunction,
)
from .models_parts.response_format import (
    JsonSchemaFormat,
    ResponseFormat,
    ResponseFormatJsonObject,
    ResponseFormatJsonSchema,
    ResponseFormatText,
)
from .models_parts.extra_body import ExtraBody
from .models_parts.request_body import RequestBody, StreamOptions
from .models_parts.usage import CompletionTokensDetails, CompletionUsage, PromptTokensDetails
from .models_parts.logprobs import LogProb, Logprobs, TopLogprob
from .models_parts.completion import Choice, Completion, FinishReason, ResponseMessage
from .models_parts.chunk import (
    ChatCompletionChunk,
    ChunkChoice,
    CompletionContent,
    Content,
    Delta,
    FunctionCallDelta,
    ReasoningContent,
    ToolCallDelta,
    select_channel,
)

__all__ = [
    "AssistantToolCall",
    "CustomCall",
    "CustomToolCall",
    "FunctionCall",
    "FunctionToolCall",
    "AssistantMessage",
    "DeveloperMessage",
    "FunctionMessage",
    "Message",
    "SystemMessage",
    "ToolMessage",
    "UserMessage",
    "parse_message",
    "CustomTool",
    "CustomToolDefinition",
    "FunctionDefinition",
    "FunctionTool",
    "NamedToolChoice",
    "Tool",
    "ToolChoice",
    "ToolChoiceFunction",
    "JsonSchemaFormat",
    "ResponseFormat",
    "ResponseFormatJsonObject",
    "ResponseFormatJsonSchema",
    "ResponseFormatText",
    "ExtraBody",
    "RequestBody",
    "StreamOptions",
    "CompletionTokensDetails",
    "CompletionUsage",
    "PromptTokensDetails",
    "LogProb",
    "Logprobs",
    "TopLogprob",
    "Choice",
    "Completion",
    "FinishReason",
    "ResponseMessage",
    "ChatCompletionChunk",
    "ChunkChoice",
    "CompletionContent",
    "Content",
    "Delta",
    "FunctionCallDelta",
    "ReasoningContent",
    "ToolCallDelta",
    "select_channel",
]
