"""Pytest configuration and shared fixtures."""
import os
import random
from typing import Any

import httpx
import pytest

from relaychat.client import ConversationController, ConversationState
from relaychat.llm import ChatMessage, LLMProvider, LLMResponse
from relaychat.proxy import ChatProxy, ProxySettings


class FakeProvider(LLMProvider):
    """Upstream stand-in that answers from memory or raises a preset error."""

    def __init__(self, content: str = "Hello from upstream", error: Exception | None = None, **config: Any):
        self.content = content
        self.error = error
        self.config = config
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model=model or "fake")

    async def close(self) -> None:
        self.closed = True


class ProviderRecorder:
    """Provider factory that records every provider it builds."""

    def __init__(self, content: str = "Hello from upstream", error: Exception | None = None):
        self.content = content
        self.error = error
        self.providers: list[FakeProvider] = []
        self.names: list[str] = []

    def __call__(self, provider: str, **config: Any) -> FakeProvider:
        self.names.append(provider)
        fake = FakeProvider(self.content, self.error, **config)
        self.providers.append(fake)
        return fake


class UpdateRecorder:
    """Update callback that snapshots the conversation on every notification."""

    def __init__(self) -> None:
        self.snapshots: list[dict[str, Any]] = []

    def __call__(self, state: ConversationState) -> None:
        self.snapshots.append({
            "roles": [message.role for message in state.messages],
            "contents": [message.content for message in state.messages],
            "phase": state.phase,
            "is_loading": state.is_loading,
            "last_error": state.last_error,
        })

    def reply_contents(self) -> list[str]:
        """Distinct consecutive contents of the newest assistant message."""
        seen: list[str] = []
        for snap in self.snapshots:
            if len(snap["contents"]) < 2:
                continue
            content = snap["contents"][-1]
            if not seen or seen[-1] != content:
                seen.append(content)
        return seen

    def loading_cleared_count(self) -> int:
        """Number of times the loading flag went from set to clear."""
        count = 0
        previous = False
        for snap in self.snapshots:
            if previous and not snap["is_loading"]:
                count += 1
            previous = snap["is_loading"]
        return count


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openrouter": os.getenv("API_KEY"),
    }


@pytest.fixture
def proxy_settings():
    """Proxy settings with a configured key."""
    return ProxySettings(api_key="sk-or-test-key-0123456789", public_url="http://testserver")


@pytest.fixture
def provider_recorder():
    return ProviderRecorder()


@pytest.fixture
def proxy(proxy_settings, provider_recorder):
    return ChatProxy(proxy_settings, provider_factory=provider_recorder)


@pytest.fixture
def recorder():
    return UpdateRecorder()


def make_controller(handler, recorder: UpdateRecorder | None = None, **kwargs: Any) -> ConversationController:
    """Build a controller whose requests are answered by ``handler``."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")
    kwargs.setdefault("rng", random.Random(0))
    controller = ConversationController(client, **kwargs)
    if recorder is not None:
        controller.set_update_callback(recorder)
    return controller


@pytest.fixture
def controller_factory():
    """Factory building controllers backed by a mock transport."""
    return make_controller

