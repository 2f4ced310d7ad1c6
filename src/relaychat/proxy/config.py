"""Proxy configuration.

Centralizes the environment-driven settings and the fixed texts of the
completion proxy.
"""

import os

from pydantic import BaseModel, ConfigDict, Field

from ..llm.providers.openrouter import OPENROUTER_BASE_URL

# Fixed sampling parameters for every upstream request
TEMPERATURE = 0.7
MAX_TOKENS = 1000

# Response texts
MISSING_KEY_ERROR = "OpenRouter API key is not configured"
INVALID_REQUEST_ERROR = "Invalid request format"
INVALID_MODEL_ERROR = "Invalid model specified"
DEGRADED_CONTENT = (
    "Sorry, I can't reach the AI service right now. "
    "Please check your API key and try again later."
)
INTERNAL_ERROR = "An unexpected error occurred"
INTERNAL_ERROR_CONTENT = "An error occurred while processing the request."


class ProxySettings(BaseModel):
    """Process-wide proxy configuration."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(default="", description="OpenRouter bearer token")
    base_url: str = Field(default=OPENROUTER_BASE_URL, description="Upstream API base URL")
    public_url: str = Field(
        default="http://localhost:8000",
        description="Sent upstream as the HTTP-Referer attribution header",
    )
    app_title: str = Field(default="AI Assistant", description="Sent upstream as X-Title")
    upstream_timeout: float = Field(default=60.0, gt=0, description="Upstream timeout in seconds")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    @classmethod
    def from_env(cls) -> "ProxySettings":
        """Build settings from environment variables.

        Environment variables:
            API_KEY: OpenRouter API key (required to answer requests)
            OPENROUTER_BASE_URL: Upstream base URL (default: https://openrouter.ai/api/v1)
            PUBLIC_URL: Public URL of this service (default: http://localhost:8000)
            APP_TITLE: Application title reported upstream (default: AI Assistant)
            UPSTREAM_TIMEOUT: Upstream timeout in seconds (default: 60)
        """
        return cls(
            api_key=os.getenv("API_KEY", ""),
            base_url=os.getenv("OPENROUTER_BASE_URL", OPENROUTER_BASE_URL),
            public_url=os.getenv("PUBLIC_URL", "http://localhost:8000"),
            app_title=os.getenv("APP_TITLE", "AI Assistant"),
            upstream_timeout=float(os.getenv("UPSTREAM_TIMEOUT", "60")),
        )
