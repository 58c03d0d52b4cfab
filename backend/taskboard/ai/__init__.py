"""AI module for Taskboard.

Extracts structured tasks from free-form meeting notes through a
chat-completion provider.
"""

from taskboard.ai.providers.base import AIMessage, AIProvider, AIResponse
from taskboard.ai.providers.xai import XAIProvider
from taskboard.ai.service import TaskExtractionService

__all__ = [
    "AIMessage",
    "AIProvider",
    "AIResponse",
    "XAIProvider",
    "TaskExtractionService",
]
