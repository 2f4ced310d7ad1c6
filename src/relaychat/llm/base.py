from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, LLMResponse


class UpstreamResponseError(Exception):
    """Raised when the upstream API answers with a body that carries no usable completion."""


class LLMProvider(ABC):
    """Upstream chat-completion service.

    Hides which hosted API answers the chat and how its client is built,
    authenticated and torn down. A provider is meant to live for a single
    proxied request:

        async with create_llm_provider("openrouter", api_key=key) as llm:
            response = await llm.chat_completion(history)
    """

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Ask the upstream for one complete (non-streaming) reply.

        Args:
            messages: Conversation so far, oldest first
            model: Upstream model id (None: the provider's default)
            temperature: Sampling temperature
            max_tokens: Completion length cap (None: upstream default)
            **kwargs: Extra request fields for the upstream API

        Raises:
            UpstreamResponseError: If the reply holds no completion choice
            Exception: Whatever the underlying client raises for transport or status failures
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP client."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        # httpx may report "Event loop is closed" while closing after the loop
        # has shut down: https://github.com/encode/httpx/issues/914
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
