"""Chat-completion client used to summarize scan reports."""

from .client import ChatClient, ChatRequest, LLMError

__all__ = ["ChatClient", "ChatRequest", "LLMError"]
