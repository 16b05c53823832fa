"""Client library for OpenAI-compatible chat completion endpoints.

Typical use::

    from openai_interface import ChatCompletionsClient, RequestBody, UserMessage

    with ChatCompletionsClient.from_provider("deepseek") as client:
        body = RequestBody(model="deepseek-chat", messages=[UserMessage(content="hi")])
        print(client.create(body).text)
        for item in client.stream(body):
            chunk = item.unwrap()
            ...
"""

__version__ = "0.4.0"

from .base.errors import (
    ErrorCode,
    OpenAIInterfaceError,
    RequestError,
    RequestErrorKind,
    ResponseError,
    ResponseErrorKind,
)
from .base.models import (
    AssistantMessage,
    ChatCompletionChunk,
    Completion,
    CompletionContent,
    Content,
    DeveloperMessage,
    ExtraBody,
    Message,
    ReasoningContent,
    RequestBody,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from .base.streaming import (
    ChunkStream,
    FrameStream,
    SseFrameReassembler,
    StreamItem,
    accumulate_chunks,
    decode_frames,
    iter_sse_frames,
)
from .chat import ChatCompletionsClient

__all__ = [
    "__version__",
    "ErrorCode",
    "OpenAIInterfaceError",
    "RequestError",
    "RequestErrorKind",
    "ResponseError",
    "ResponseErrorKind",
    "AssistantMessage",
    "ChatCompletionChunk",
    "Completion",
    "CompletionContent",
    "Content",
    "DeveloperMessage",
    "ExtraBody",
    "Message",
    "ReasoningContent",
    "RequestBody",
    "SystemMessage",
    "ToolMessage",
    "UserMessage",
    "ChunkStream",
    "FrameStream",
    "SseFrameReassembler",
    "StreamItem",
    "accumulate_chunks",
    "decode_frames",
    "iter_sse_frames",
    "ChatCompletionsClient",
]
