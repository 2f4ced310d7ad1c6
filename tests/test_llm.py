"""Unit tests for the upstream LLM provider layer."""
import json

import httpx
import pytest

from relaychat.llm import (
    ChatMessage,
    LLMProvider,
    LLMResponse,
    OpenRouterProvider,
    TokenUsage,
    UpstreamResponseError,
    create_llm_provider,
)
from relaychat.llm.providers.openrouter import mask_secret

API_KEY = "sk-or-v1-0123456789abcdef"


def completion_body(content: str | None = "Hi there", choices: bool = True) -> dict:
    body = {
        "id": "gen-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "mistralai/mistral-7b-instruct",
        "choices": [],
        "usage": {"prompt_tokens": 5, "completion_tokens": 3, "total_tokens": 8},
    }
    if choices:
        body["choices"] = [{
            "index": 0,
            "message": {"role": "assistant", "content": content},
            "finish_reason": "stop",
        }]
    return body


def make_provider(handler, **kwargs) -> OpenRouterProvider:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenRouterProvider(api_key=API_KEY, http_client=http_client, **kwargs)


class TestFactory:
    """Tests for create_llm_provider."""

    def test_creates_openrouter(self):
        provider = create_llm_provider("OpenRouter", api_key=API_KEY, model="01-ai/yi-34b-chat")

        assert isinstance(provider, OpenRouterProvider)
        assert provider.model == "01-ai/yi-34b-chat"

    def test_requires_api_key(self):
        with pytest.raises(TypeError):
            create_llm_provider("openrouter")

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("carrier-pigeon", api_key=API_KEY)

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            LLMProvider()


class TestOpenRouterProvider:
    """Tests for OpenRouterProvider over a mocked transport."""

    @pytest.mark.asyncio
    async def test_chat_completion(self):
        """Test request shape and response mapping."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=completion_body())

        async with make_provider(handler, referer="https://chat.example.com", title="AI Assistant") as provider:
            response = await provider.chat_completion(
                [ChatMessage(role="user", content="Hello")],
                temperature=0.7,
                max_tokens=1000,
            )

        assert response == LLMResponse(
            content="Hi there",
            model="mistralai/mistral-7b-instruct",
            finish_reason="stop",
            usage=TokenUsage(prompt_tokens=5, completion_tokens=3, total_tokens=8),
        )
        (request,) = seen
        assert request.headers["authorization"] == f"Bearer {API_KEY}"
        assert request.headers["http-referer"] == "https://chat.example.com"
        assert request.headers["x-title"] == "AI Assistant"
        body = json.loads(request.content)
        assert body["model"] == "mistralai/mistral-7b-instruct"
        assert body["messages"] == [{"role": "user", "content": "Hello"}]
        assert body["temperature"] == 0.7
        assert body["max_tokens"] == 1000
        assert body["stream"] is False

    @pytest.mark.asyncio
    async def test_model_override_and_no_attribution(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=completion_body())

        async with make_provider(handler) as provider:
            await provider.chat_completion([ChatMessage(role="user", content="Hi")], model="01-ai/yi-34b-chat")

        body = json.loads(seen[0].content)
        assert body["model"] == "01-ai/yi-34b-chat"
        assert "max_tokens" not in body
        assert "x-title" not in seen[0].headers
        assert "http-referer" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_empty_choices_raise(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=completion_body(choices=False))

        async with make_provider(handler) as provider:
            with pytest.raises(UpstreamResponseError):
                await provider.chat_completion([ChatMessage(role="user", content="Hi")])

    @pytest.mark.asyncio
    async def test_null_content_becomes_empty(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=completion_body(content=None))

        async with make_provider(handler) as provider:
            response = await provider.chat_completion([ChatMessage(role="user", content="Hi")])

        assert response.content == ""


class TestMaskSecret:
    """Tests for mask_secret."""

    def test_keeps_ends(self):
        assert mask_secret(API_KEY) == "sk-or-v1-0...bcdef"

    def test_short_secret_fully_masked(self):
        assert mask_secret("short") == "*****"


@pytest.mark.integration
class TestOpenRouterIntegration:
    """Live calls against OpenRouter. Skipped without API_KEY."""

    @pytest.mark.asyncio
    async def test_live_completion(self, api_keys):
        if not api_keys["openrouter"]:
            pytest.skip("API_KEY not set")

        async with create_llm_provider("openrouter", api_key=api_keys["openrouter"], timeout=60) as provider:
            response = await provider.chat_completion(
                [ChatMessage(role="user", content="Reply with the single word: pong")],
                max_tokens=10,
            )

        assert response.content
