from typing import Any

from ..config import AssistantConfig
from .base import LLMProvider
from .providers import GeminiProvider


def create_llm_provider(provider: str, config: AssistantConfig, **kwargs: Any) -> LLMProvider:
    """Create the response stream client.

    This factory function hides the instantiation logic for providers.
    A config without an API key is accepted; the returned provider then
    reports AssistantUnconfiguredError on use instead of calling out.

    Args:
        provider: Provider type (only 'gemini' is supported)
        config: Immutable assistant configuration
        **kwargs: Provider-specific options (e.g. a prebuilt client)

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> provider = create_llm_provider(
        ...     "gemini",
        ...     AssistantConfig(api_key="...", model="gemini-2.5-flash")
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "gemini":
        return GeminiProvider(config, **kwargs)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'gemini'"
    )
