"""
Per-token log probabilities for the answer and reasoning channels.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .wire import WireModel


class TopLogprob(WireModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None


class LogProb(WireModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None
    top_logprobs: List[TopLogprob] = Field(default_factory=list)


class Logprobs(WireModel):
    content: Optional[List[LogProb]] = None
    reasoning_content: Optional[List[LogProb]] = None
    refusal: Optional[List[LogProb]] = None


__all__ = ["TopLogprob", "LogProb", "Logprobs"]
