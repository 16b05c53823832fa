"""
Token usage statistics reported with a completion (or a final stream chunk).
"""
from __future__ import annotations

from typing import Optional

from .wire import WireModel


class CompletionTokensDetails(WireModel):
    reasoning_tokens: Optional[int] = None


class PromptTokensDetails(WireModel):
    cached_tokens: Optional[int] = None


class CompletionUsage(WireModel):
    """Token counts.

    ``prompt_cache_hit_tokens``/``prompt_cache_miss_tokens`` are DeepSeek's
    context-cache breakdown; OpenAI reports ``prompt_tokens_details`` instead.
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    prompt_cache_hit_tokens: Optional[int] = None
    prompt_cache_miss_tokens: Optional[int] = None
    completion_tokens_details: Optional[CompletionTokensDetails] = None
    prompt_tokens_details: Optional[PromptTokensDetails] = None

    @property
    def reasoning_tokens(self) -> Optional[int]:
        details = self.completion_tokens_details
        return details.reasoning_tokens if details is not None else None


__all__ = ["CompletionTokensDetails", "PromptTokensDetails", "CompletionUsage"]
