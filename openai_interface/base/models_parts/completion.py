"""
Non-streaming chat completion response.

Every model here keeps unknown keys (``extra="allow"``) and ``to_json``
re-emits exactly the keys that were present, so a provider response survives
parse -> serialize with its vendor extensions intact.

An empty ``choices`` list is accepted when parsing; it only becomes an error
(``ResponseErrorKind.EMPTY_CHOICES``) when the caller asks for a choice.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Optional, Union

from pydantic import Field, model_validator

from ..errors import ResponseError, ResponseErrorKind
from .logprobs import Logprobs
from .tool_call import AssistantToolCall
from .usage import CompletionUsage
from .wire import WireModel, parse_document


class FinishReason(str, Enum):
    """Why generation stopped. Values outside this set are kept as plain strings."""

    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"
    FUNCTION_CALL = "function_call"
    INSUFFICIENT_SYSTEM_RESOURCE = "insufficient_system_resource"


FinishReasonValue = Annotated[Union[FinishReason, str], Field(union_mode="left_to_right")]


class ResponseMessage(WireModel):
    """Assistant message as returned by the server."""

    role: str = "assistant"
    content: Optional[str] = None
    reasoning_content: Optional[str] = None
    tool_calls: Optional[List[AssistantToolCall]] = None
    refusal: Optional[str] = None


class Choice(WireModel):
    index: int
    message: ResponseMessage
    finish_reason: Optional[FinishReasonValue] = None
    logprobs: Optional[Logprobs] = None


class Completion(WireModel):
    """``chat.completion`` object.

    Attributes:
        id: Server-assigned completion id.
        object: Object tag, ``chat.completion`` for conforming servers.
        created: Unix timestamp (seconds).
        model: Model that produced the answer.
        choices: Ordered choices; ``index`` values are unique.
        usage: Token accounting, when reported.
    """

    id: str
    object: str = "chat.completion"
    created: int
    model: str
    choices: List[Choice]
    usage: Optional[CompletionUsage] = None
    system_fingerprint: Optional[str] = None
    service_tier: Optional[str] = None

    @model_validator(mode="after")
    def _validate_indices(self) -> "Completion":
        indices = [c.index for c in self.choices]
        if len(indices) != len(set(indices)):
            raise ValueError("choice index values must be unique")
        return self

    @classmethod
    def parse(cls, text: str) -> "Completion":
        """Parse a response body.

        Raises:
            ResponseError: malformed JSON, a provider error object, or a
                schema mismatch.
        """
        return parse_document(text, cls, what="completion")

    def first_choice(self) -> Choice:
        """Return the choice with the lowest index.

        Raises:
            ResponseError: ``EMPTY_CHOICES`` when the server returned none.
        """
        if not self.choices:
            raise ResponseError(
                ResponseErrorKind.EMPTY_CHOICES,
                "completion has no choices",
                context=self.to_json(),
            )
        return min(self.choices, key=lambda c: c.index)

    @property
    def text(self) -> Optional[str]:
        """Answer text of the first choice."""
        return self.first_choice().message.content

    @property
    def reasoning_text(self) -> Optional[str]:
        """Reasoning text of the first choice (DeepSeek-R1, Qwen thinking)."""
        return self.first_choice().message.reasoning_content


__all__ = [
    "FinishReason",
    "FinishReasonValue",
    "ResponseMessage",
    "Choice",
    "Completion",
]
