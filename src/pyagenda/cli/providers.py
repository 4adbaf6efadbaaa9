"""Provider factory functions for CLI.

Centralizes reading client settings from environment variables and
creating the completion provider. Hides configuration details from
command implementations.
"""

import os

import typer
from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console

from ..llm import create_completion_provider
from ..llm.base import CompletionProvider
from ..llm.providers.azure import (
    DEFAULT_AZURE_API_VERSION,
    DEFAULT_AZURE_DEPLOYMENT,
    DEFAULT_AZURE_ENDPOINT,
)
from ..llm.providers.chat_completions import DEFAULT_TEMPERATURE
from ..llm.providers.openai import DEFAULT_OPENAI_MODEL

# Default console for output
_console = Console()


class ClientSettings(BaseModel):
    """Completion client configuration, read once at startup."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(default="azure", description="Provider type: azure or openai")
    azure_api_key: str | None = None
    azure_endpoint: str = DEFAULT_AZURE_ENDPOINT
    azure_deployment: str = DEFAULT_AZURE_DEPLOYMENT
    azure_api_version: str = DEFAULT_AZURE_API_VERSION
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)


def load_settings() -> ClientSettings:
    """Read client settings from environment variables.

    Environment variables:
        LLM_PROVIDER: Provider type (azure, openai; default: azure)
        AZURE_OPENAI_API_KEY: Azure OpenAI API key
        AZURE_OPENAI_ENDPOINT: Resource endpoint
        AZURE_OPENAI_DEPLOYMENT: Deployment name (default: gpt-4)
        AZURE_OPENAI_API_VERSION: API version (default: 2025-01-01-preview)
        OPENAI_API_KEY: OpenAI API key (for openai provider)
        OPENAI_BASE_URL: OpenAI-compatible base URL (optional)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o-mini)
        PYAGENDA_TEMPERATURE: Sampling temperature (default: 0.7)
    """
    return ClientSettings(
        provider=os.getenv("LLM_PROVIDER", "azure").lower(),
        azure_api_key=os.getenv("AZURE_OPENAI_API_KEY") or None,
        azure_endpoint=os.getenv("AZURE_OPENAI_ENDPOINT", DEFAULT_AZURE_ENDPOINT),
        azure_deployment=os.getenv("AZURE_OPENAI_DEPLOYMENT", DEFAULT_AZURE_DEPLOYMENT),
        azure_api_version=os.getenv("AZURE_OPENAI_API_VERSION", DEFAULT_AZURE_API_VERSION),
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
        openai_model=os.getenv("OPENAI_CHAT_MODEL", DEFAULT_OPENAI_MODEL),
        temperature=float(os.getenv("PYAGENDA_TEMPERATURE", str(DEFAULT_TEMPERATURE))),
    )


def get_provider(
    settings: ClientSettings | None = None,
    console: Console | None = None,
) -> CompletionProvider:
    """Create the completion provider from settings.

    A missing API key is not an error here: the provider reports it on
    the first request without sending anything.

    Args:
        settings: Client settings, read from the environment if None
        console: Optional Rich console for output

    Returns:
        Completion provider instance

    Raises:
        typer.Exit: If the provider name is unknown
    """
    con = console or _console
    settings = settings or load_settings()

    if settings.provider in ("azure", "azure-openai"):
        if not settings.azure_api_key:
            con.print("[yellow]Warning: AZURE_OPENAI_API_KEY not set, requests will not be sent[/yellow]")
        return create_completion_provider(
            "azure",
            api_key=settings.azure_api_key,
            endpoint=settings.azure_endpoint,
            deployment=settings.azure_deployment,
            api_version=settings.azure_api_version,
            temperature=settings.temperature,
        )

    elif settings.provider == "openai":
        if not settings.openai_api_key:
            con.print("[yellow]Warning: OPENAI_API_KEY not set, requests will not be sent[/yellow]")
        return create_completion_provider(
            "openai",
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            temperature=settings.temperature,
        )

    con.print(f"[red]Error: Unknown LLM provider: {settings.provider}[/red]")
    raise typer.Exit(code=1)
