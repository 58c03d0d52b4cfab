"""AI module exceptions.

Custom exceptions for the task-extraction integration, one per failure
mode the caller can see.
"""

from typing import Optional

from taskboard.exceptions import TaskboardError


class AIError(TaskboardError):
    """Base exception for AI-related errors."""

    status_code = 500

    def __init__(self, message: str, code: str = "AI_ERROR"):
        super().__init__(message, code=code)


class AINotConfiguredError(AIError):
    """No API credential is configured for the provider."""

    status_code = 503

    def __init__(self, setting_name: str):
        super().__init__(
            message=f"{setting_name} is not configured. Please set the environment variable.",
            code="AI_NOT_CONFIGURED",
        )


class AITransportError(AIError):
    """The request to the provider could not be completed.

    Raised on connection failures and timeouts, before any HTTP status is
    received.
    """

    def __init__(self, provider: str, message: str):
        super().__init__(
            message=f"{provider} API request failed: {message}",
            code="AI_TRANSPORT_ERROR",
        )


class AIProviderError(AIError):
    """The provider answered with a non-success status.

    The message is the provider's own error text when its body carries one.
    """

    status_code = 502

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        self.upstream_status = upstream_status
        super().__init__(message=message, code="AI_PROVIDER_ERROR")


class AIResponseError(AIError):
    """The provider answered but the reply was empty or unusable."""

    def __init__(self, message: str):
        super().__init__(message=message, code="AI_BAD_RESPONSE")
