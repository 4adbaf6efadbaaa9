"""Azure OpenAI completion provider.

Uses the OpenAI SDK's Azure client, which authenticates with the
``api-key`` header and appends the ``api-version`` query parameter.
Reference: https://learn.microsoft.com/azure/ai-services/openai/reference
"""

from typing import Any

from openai import AsyncAzureOpenAI

from .chat_completions import DEFAULT_TEMPERATURE, ChatCompletionsProvider

DEFAULT_AZURE_ENDPOINT = "https://taskmgrpoc.openai.azure.com"
DEFAULT_AZURE_DEPLOYMENT = "gpt-4"
DEFAULT_AZURE_API_VERSION = "2025-01-01-preview"


class AzureCompletionProvider(ChatCompletionsProvider):
    """Azure OpenAI deployment provider.

    Hidden design decisions:
    - Deployment-scoped URL (model is not sent in the body)
    - api-key header authentication
    """

    def __init__(
        self,
        api_key: str | None,
        endpoint: str = DEFAULT_AZURE_ENDPOINT,
        deployment: str = DEFAULT_AZURE_DEPLOYMENT,
        api_version: str = DEFAULT_AZURE_API_VERSION,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float | None = None,
        **client_kwargs: Any
    ):
        """Initialize Azure provider.

        Args:
            api_key: Azure OpenAI key, None if not configured
            endpoint: Resource endpoint, e.g. https://<resource>.openai.azure.com
            deployment: Model deployment name
            api_version: Azure OpenAI API version
            temperature: Sampling temperature
            timeout: Request timeout in seconds (None waits indefinitely)
            **client_kwargs: Additional kwargs for AsyncAzureOpenAI client
        """
        super().__init__(api_key, temperature=temperature, timeout=timeout, **client_kwargs)
        self._endpoint = endpoint.rstrip("/")
        self._deployment = deployment
        self._api_version = api_version

    @property
    def deployment(self) -> str:
        """Get the deployment name."""
        return self._deployment

    def describe_endpoint(self) -> str:
        return f"Azure deployment '{self.deployment}' at {self._endpoint}"

    def _create_client(self, api_key: str) -> AsyncAzureOpenAI:
        return AsyncAzureOpenAI(
            api_key=api_key,
            azure_endpoint=self._endpoint,
            azure_deployment=self.deployment,
            api_version=self._api_version,
            max_retries=0,
            timeout=self._timeout,
            **self._client_kwargs
        )
