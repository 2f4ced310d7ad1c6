"""Upstream chat-completion providers.

Module structure:
- models.py: messages and completion results
- base.py: the provider interface
- providers/: concrete providers (OpenRouter)
- factory.py: provider construction by name
"""

from .base import LLMProvider, UpstreamResponseError
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse, TokenUsage
from .providers import OpenRouterProvider

__all__ = [
    "ChatMessage",
    "LLMProvider",
    "LLMResponse",
    "OpenRouterProvider",
    "TokenUsage",
    "UpstreamResponseError",
    "create_llm_provider",
]
