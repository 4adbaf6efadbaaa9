from collections.abc import Sequence
from typing import Any

from openai import AsyncOpenAI

from ..models import ChatMessage
from .chat_completions import DEFAULT_TEMPERATURE, ChatCompletionsProvider

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class OpenAICompatibleProvider(ChatCompletionsProvider):
    """Provider for OpenAI and OpenAI-compatible chat completion endpoints.

    Hidden design decisions:
    - Bearer token authentication
    - Model name sent in the request body
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_OPENAI_MODEL,
        base_url: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI-compatible provider.

        Args:
            api_key: API key, None if not configured
            model: Model to request
            base_url: Optional custom API base URL
            temperature: Sampling temperature
            timeout: Request timeout in seconds (None waits indefinitely)
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        super().__init__(api_key, temperature=temperature, timeout=timeout, **client_kwargs)
        self._model = model
        self._base_url = base_url

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    def describe_endpoint(self) -> str:
        return f"model '{self.model}' at {self._base_url or 'api.openai.com'}"

    def build_request_body(self, history: Sequence[ChatMessage]) -> dict[str, Any]:
        body = super().build_request_body(history)
        body["model"] = self.model
        return body

    def _create_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self._base_url,
            max_retries=0,
            timeout=self._timeout,
            **self._client_kwargs
        )
