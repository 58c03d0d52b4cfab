"""AI Provider implementations."""

from taskboard.ai.providers.base import AIMessage, AIProvider, AIResponse
from taskboard.ai.providers.xai import XAIProvider

__all__ = [
    "AIMessage",
    "AIProvider",
    "AIResponse",
    "XAIProvider",
]
