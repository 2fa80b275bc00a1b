"""Chat-completion client for the review model backend."""

from prreview.llm.client import ChatOptions, ChatResponse, LLMClient, LLMError

__all__ = ["ChatOptions", "ChatResponse", "LLMClient", "LLMError"]
