import logging
from typing import Any

from openai import AsyncOpenAI

from ..base import LLMProvider, UpstreamResponseError
from ..models import ChatMessage, LLMResponse, TokenUsage

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "mistralai/mistral-7b-instruct"


def mask_secret(secret: str, head: int = 10, tail: int = 5) -> str:
    """Return a loggable form of a secret that keeps only its ends."""
    if len(secret) <= head + tail:
        return "*" * len(secret)
    return f"{secret[:head]}...{secret[-tail:]}"


class OpenRouterProvider(LLMProvider):
    """OpenRouter through its OpenAI-compatible chat completions endpoint.

    Hidden design decisions:
    - The OpenAI SDK is the HTTP client, pointed at the OpenRouter base URL
    - HTTP-Referer and X-Title attribution headers go on every request
    - Exactly one attempt per call: SDK retries are switched off
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = OPENROUTER_BASE_URL,
        referer: str | None = None,
        title: str | None = None,
        timeout: float | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenRouter provider.

        Args:
            api_key: OpenRouter key, sent as a bearer token
            model: Upstream model id used when a call names none
            base_url: API root, overridable for self-hosted gateways and tests
            referer: Public URL of the calling site (HTTP-Referer)
            title: Application name shown on OpenRouter (X-Title)
            timeout: Per-request timeout in seconds (None keeps the SDK default)
            **client_kwargs: Passed to AsyncOpenAI, e.g. http_client
        """
        self._model = model
        attribution = {
            name: value
            for name, value in (("HTTP-Referer", referer), ("X-Title", title))
            if value
        }
        if timeout is not None:
            client_kwargs.setdefault("timeout", timeout)
        client_kwargs.setdefault("max_retries", 0)

        logger.debug("OpenRouter client for %s with key %s", base_url, mask_secret(api_key))
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            default_headers=attribution or None,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Default upstream model id."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Request one complete reply; see ``LLMProvider.chat_completion``."""
        target = model or self._model
        params: dict[str, Any] = {
            "model": target,
            "messages": [message.model_dump(exclude_none=True) for message in messages],
            "temperature": temperature,
            "stream": False,
            **kwargs
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        logger.info("Requesting completion from %s (%d message(s))", target, len(messages))
        completion = await self._client.chat.completions.create(**params)

        choices = getattr(completion, "choices", None) or []
        choice = choices[0] if choices else None
        if choice is None or getattr(choice, "message", None) is None:
            raise UpstreamResponseError(f"No completion choice in response from {target}")

        usage = getattr(completion, "usage", None)
        return LLMResponse(
            content=choice.message.content or "",
            model=getattr(completion, "model", None) or target,
            finish_reason=getattr(choice, "finish_reason", None),
            usage=TokenUsage(
                prompt_tokens=usage.prompt_tokens or 0,
                completion_tokens=usage.completion_tokens or 0,
                total_tokens=usage.total_tokens or 0,
            ) if usage else None,
        )

    async def close(self) -> None:
        await self._client.close()
