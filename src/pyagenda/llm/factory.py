from typing import Any

from .base import CompletionProvider
from .providers import AzureCompletionProvider, OpenAICompatibleProvider


def create_completion_provider(provider: str, **config: Any) -> CompletionProvider:
    """Create a completion provider instance.

    This factory function hides the instantiation logic for different providers.
    A missing API key is accepted here: it is a configuration error reported
    on the first completion request, before anything is sent.

    Args:
        provider: Provider type ('azure', 'openai')
        **config: Provider-specific configuration
            For Azure:
                - api_key: str | None
                - endpoint: str (default: 'https://taskmgrpoc.openai.azure.com')
                - deployment: str (default: 'gpt-4')
                - api_version: str (default: '2025-01-01-preview')
                - temperature: float (default: 0.7)
            For OpenAI:
                - api_key: str | None
                - model: str (default: 'gpt-4o-mini')
                - base_url: str | None
                - temperature: float (default: 0.7)

    Returns:
        Initialized completion provider instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> provider = create_completion_provider(
        ...     "azure",
        ...     api_key="...",
        ...     deployment="gpt-4"
        ... )

        >>> provider = create_completion_provider(
        ...     "openai",
        ...     api_key="sk-...",
        ...     model="gpt-4o-mini"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower in ("azure", "azure-openai"):
        return AzureCompletionProvider(**config)

    if provider_lower == "openai":
        return OpenAICompatibleProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'azure', 'openai'"
    )
