"""Provider interface for chat completions.

The extraction service talks to this interface only; vendor SDKs stay in
the concrete provider modules.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Literal, Optional

Role = Literal["system", "user", "assistant"]
ROLES = ("system", "user", "assistant")


@dataclass
class AIMessage:
    """One chat turn sent to the model."""

    role: Role
    content: str


@dataclass
class AIResponse:
    """Text reply of a single completion plus the usage figures we log.

    Attributes:
        content: Assistant message text
        model: Model that produced the reply, as reported by the provider
        input_tokens: Prompt tokens billed
        output_tokens: Completion tokens billed
        finish_reason: Provider stop reason ('stop', 'length', ...)
        latency_ms: Wall time of the upstream call
    """

    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    finish_reason: str = "stop"
    latency_ms: Optional[int] = None


class AIProvider(ABC):
    """A chat-completion backend.

    Implementations send exactly one upstream request per ``complete`` call
    and translate vendor failures into the errors in
    :mod:`taskboard.ai.exceptions`.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Display name used in error messages and logs."""

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when ``complete`` is called without one."""

    @abstractmethod
    async def complete(
        self,
        messages: List[AIMessage],
        model: Optional[str] = None,
    ) -> AIResponse:
        """Run one chat completion.

        Raises:
            AITransportError: If the request could not be completed
            AIProviderError: If the provider answered with an error status
            AIResponseError: If the reply carried no content
        """

    def _validate_messages(self, messages: List[AIMessage]) -> None:
        if not messages:
            raise ValueError("at least one message is required")
        for msg in messages:
            if msg.role not in ROLES:
                raise ValueError(f"unsupported message role: {msg.role}")
            if not msg.content:
                raise ValueError(f"empty {msg.role} message")
