from typing import Any

from .base import LLMProvider
from .providers import OpenRouterProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides the instantiation logic for upstream providers.

    Args:
        provider: Provider type ('openrouter')
        **config: Provider-specific configuration
            For OpenRouter:
                - api_key: str (required)
                - model: str (default: 'mistralai/mistral-7b-instruct')
                - base_url: str (default: 'https://openrouter.ai/api/v1')
                - referer: str | None
                - title: str | None
                - timeout: float | None

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> provider = create_llm_provider(
        ...     "openrouter",
        ...     api_key="sk-or-...",
        ...     title="AI Assistant"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "openrouter":
        if "api_key" not in config:
            raise TypeError("OpenRouter provider requires 'api_key' in config")
        return OpenRouterProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'openrouter'"
    )
