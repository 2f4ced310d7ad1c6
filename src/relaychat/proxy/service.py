"""Completion proxy request handling.

Hides the availability policy of the chat endpoint: every upstream failure is
absorbed into a renderable 200 response, and only input validation and a
missing credential produce non-2xx statuses.
"""

import json
import logging
from collections.abc import Callable

from ..llm import ChatMessage, LLMProvider, create_llm_provider
from ..protocol import ChatResponse
from .config import (
    DEGRADED_CONTENT,
    INTERNAL_ERROR,
    INTERNAL_ERROR_CONTENT,
    INVALID_MODEL_ERROR,
    INVALID_REQUEST_ERROR,
    MAX_TOKENS,
    MISSING_KEY_ERROR,
    TEMPERATURE,
    ProxySettings,
)
from .routing import UnknownModelError, resolve_model

logger = logging.getLogger(__name__)

ProviderFactory = Callable[..., LLMProvider]


class ChatProxy:
    """Turns a raw ``/api/chat`` request body into a status and response envelope.

    Holds no per-request state, so one instance serves concurrent requests.

    Example:
        proxy = ChatProxy(ProxySettings.from_env())
        status, response = await proxy.handle(b'{"messages": [], "model": "mistral"}')
    """

    def __init__(
        self,
        settings: ProxySettings,
        provider_factory: ProviderFactory = create_llm_provider,
    ) -> None:
        self._settings = settings
        self._provider_factory = provider_factory

    @property
    def settings(self) -> ProxySettings:
        return self._settings

    async def handle(self, body: bytes) -> tuple[int, ChatResponse]:
        """Handle one chat request.

        Args:
            body: Raw JSON request body

        Returns:
            Tuple of HTTP status code and response envelope
        """
        try:
            return await self._handle(body)
        except Exception:
            logger.exception("Unexpected error in chat route")
            return 200, ChatResponse(error=INTERNAL_ERROR, content=INTERNAL_ERROR_CONTENT)

    async def _handle(self, body: bytes) -> tuple[int, ChatResponse]:
        if not self._settings.has_api_key:
            logger.error("API key is missing or blank")
            return 500, ChatResponse(error=MISSING_KEY_ERROR)

        payload = json.loads(body)
        if not isinstance(payload, dict):
            payload = {}
        messages = payload.get("messages")
        alias = payload.get("model")
        # Entries are not inspected here; a bad history fails upstream and degrades.
        if not isinstance(messages, list) or not alias:
            logger.warning("Rejected chat request without a message list and model")
            return 400, ChatResponse(error=INVALID_REQUEST_ERROR)

        try:
            model_id = resolve_model(alias)
        except UnknownModelError as e:
            logger.warning("%s", e)
            return 400, ChatResponse(error=INVALID_MODEL_ERROR)

        content = await self._complete(model_id, [_upstream_message(item) for item in messages])
        if content is None:
            logger.info("Returning degraded response")
            return 200, ChatResponse(content=DEGRADED_CONTENT)
        return 200, ChatResponse(content=content)

    async def _complete(self, model_id: str, history: list[ChatMessage]) -> str | None:
        """Make the single non-streaming upstream call.

        Returns:
            Completion text, or None if the upstream call failed in any way
        """
        settings = self._settings
        try:
            async with self._provider_factory(
                "openrouter",
                api_key=settings.api_key,
                model=model_id,
                base_url=settings.base_url,
                referer=settings.public_url,
                title=settings.app_title,
                timeout=settings.upstream_timeout,
            ) as llm:
                response = await llm.chat_completion(
                    history,
                    model=model_id,
                    temperature=TEMPERATURE,
                    max_tokens=MAX_TOKENS,
                )
        except Exception:
            logger.exception("Upstream completion with %s failed", model_id)
            return None

        logger.info("Upstream completion from %s succeeded (%d chars)", response.model, len(response.content))
        return response.content


def _upstream_message(item: object) -> ChatMessage:
    """Keep only role and content of a history entry; anything else is sent empty."""
    if not isinstance(item, dict):
        return ChatMessage()
    return ChatMessage(role=item.get("role"), content=item.get("content"))
