"""Logical model names and the upstream identifiers they map to."""

# Logical alias -> OpenRouter model identifier
MODEL_MAP: dict[str, str] = {
    "mistral": "mistralai/mistral-7b-instruct",
    "base-free": "01-ai/yi-34b-chat",
}

# Ordered secondary identifiers per alias. Not consulted when answering
# requests: the proxy makes exactly one upstream attempt.
FALLBACK_MODELS: dict[str, tuple[str, ...]] = {
    "mistral": ("openai/gpt-3.5-turbo", "anthropic/claude-instant-v1"),
    "base-free": ("google/gemma-7b-it", "anthropic/claude-instant-v1"),
}


class UnknownModelError(KeyError):
    """Raised when a logical model name has no upstream mapping."""

    def __init__(self, alias: object) -> None:
        super().__init__(alias)
        self.alias = alias

    def __str__(self) -> str:
        return f"Unknown model alias: {self.alias!r}"


def resolve_model(alias: object) -> str:
    """Map a logical model name to its upstream identifier.

    Raises:
        UnknownModelError: If the alias is not a key of MODEL_MAP (non-strings never are)
    """
    if not isinstance(alias, str) or alias not in MODEL_MAP:
        raise UnknownModelError(alias)
    return MODEL_MAP[alias]


def fallback_models(alias: str) -> tuple[str, ...]:
    """Return the secondary upstream identifiers recorded for an alias."""
    if alias not in MODEL_MAP:
        raise UnknownModelError(alias)
    return FALLBACK_MODELS.get(alias, ())
