"""xAI chat-completion provider.

xAI exposes an OpenAI-compatible API, so this goes through the openai SDK
pointed at the xAI base URL.
"""

import time
from typing import List, Optional

import httpx
import openai
from openai import AsyncOpenAI

from taskboard.ai.exceptions import AIProviderError, AIResponseError, AITransportError
from taskboard.ai.providers.base import AIMessage, AIProvider, AIResponse

XAI_BASE_URL = "https://api.x.ai/v1"
XAI_MODEL = "grok-3-mini"


class XAIProvider(AIProvider):
    """xAI (Grok) implementation.

    Sends exactly one request per completion: SDK retries are disabled so a
    failing upstream is reported to the caller right away.

    Example:
        ```python
        provider = XAIProvider(api_key="xai-...")
        response = await provider.complete(
            [AIMessage(role="user", content="Extract tasks from ...")]
        )
        ```
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = XAI_BASE_URL,
        default_model: str = XAI_MODEL,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the xAI provider.

        Args:
            api_key: xAI API key, sent as a bearer token
            base_url: API root; the SDK appends /chat/completions
            default_model: Model used when complete() gets none
            timeout: Request timeout in seconds (SDK default if not given)
            http_client: Optional preconfigured httpx client
        """
        client_kwargs = {
            "api_key": api_key,
            "base_url": base_url,
            "max_retries": 0,
        }
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        if http_client is not None:
            client_kwargs["http_client"] = http_client

        self.client = AsyncOpenAI(**client_kwargs)
        self._default_model = default_model

    @property
    def provider_name(self) -> str:
        return "xAI"

    @property
    def default_model(self) -> str:
        return self._default_model

    async def complete(
        self,
        messages: List[AIMessage],
        model: Optional[str] = None,
    ) -> AIResponse:
        """Generate a completion using the xAI chat-completions endpoint.

        Args:
            messages: List of messages forming the conversation
            model: Model identifier (uses default if not specified)

        Returns:
            AIResponse containing the generated content and metadata

        Raises:
            AITransportError: If the request could not be sent or timed out
            AIProviderError: If xAI answered with a non-success status
            AIResponseError: If the reply has no message content
        """
        self._validate_messages(messages)

        model = model or self.default_model
        start_time = time.perf_counter()

        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": msg.role, "content": msg.content}
                    for msg in messages
                ],
            )
        except openai.APIConnectionError as e:
            raise AITransportError(provider=self.provider_name, message=str(e))
        except openai.APIStatusError as e:
            raise AIProviderError(
                message=self._error_message(e),
                upstream_status=e.status_code,
            )
        except openai.APIError as e:
            raise AIResponseError(f"Invalid {self.provider_name} response: {e}")

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        # The SDK does not validate bodies, so any of these may be missing
        choices = getattr(response, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = getattr(message, "content", None)
        if content is None:
            raise AIResponseError(f"No content in {self.provider_name} response")

        usage = getattr(response, "usage", None)
        return AIResponse(
            content=content,
            model=getattr(response, "model", None) or model,
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
            finish_reason=getattr(choices[0], "finish_reason", None) or "stop",
            latency_ms=latency_ms,
        )

    def _error_message(self, error: openai.APIStatusError) -> str:
        """Pick the message reported for a non-success reply.

        Only the ``{"error": {"message": ...}}`` shape counts as structured.
        A JSON object without an ``error`` key is reported with the status
        line; any other body (not JSON, or an ``error`` of another shape) is
        relayed verbatim.
        """
        response = error.response
        raw = response.text
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict):
            detail = data.get("error")
            if detail is None:
                status_line = f"{response.status_code} {response.reason_phrase}".strip()
                return f"{self.provider_name} API error: {status_line} - {raw}"
            if isinstance(detail, dict) and isinstance(detail.get("message"), str):
                return detail["message"]

        return raw or f"{self.provider_name} API error: {response.status_code}"
