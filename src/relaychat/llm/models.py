from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One turn of the conversation as forwarded upstream."""

    model_config = ConfigDict(frozen=True)

    role: Any = Field(default=None, description="Author of the turn ('user', 'assistant', ...)")
    content: Any = Field(default=None, description="Usually text; passed upstream unchanged")


class TokenUsage(BaseModel):
    """Token accounting reported by the upstream API."""

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class LLMResponse(BaseModel):
    """A finished, non-streaming completion."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Completion text (empty if the upstream sent none)")
    model: str = Field(description="Upstream model that produced the text")
    finish_reason: str | None = Field(default=None, description="Why generation stopped, if reported")
    usage: TokenUsage | None = Field(default=None, description="Token usage, if reported")
