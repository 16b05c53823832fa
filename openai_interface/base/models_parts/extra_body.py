"""
Known vendor extension fields sent alongside the standard request keys.

These fields are merged at the top level of the request JSON, not nested
under an ``extra_body`` key.
"""
from __future__ import annotations

from typing import Optional

from pydantic import ConfigDict, Field

from .wire import RequestModel


class ExtraBody(RequestModel):
    """Vendor fields with a known meaning.

    Attributes:
        enable_thinking: Qwen3 hybrid-thinking switch.
        thinking_budget: Maximum reasoning tokens for Qwen3 when thinking.
        top_k: Candidate pool size for sampling (Qwen, DashScope).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enable_thinking: Optional[bool] = None
    thinking_budget: Optional[int] = Field(default=None, gt=0)
    top_k: Optional[int] = Field(default=None, gt=0)


__all__ = ["ExtraBody"]
