"""Chat completions request driver."""

from .client import ChatCompletionsClient

__all__ = ["ChatCompletionsClient"]
