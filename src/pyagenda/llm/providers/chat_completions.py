"""Shared request flow for OpenAI-style chat completion endpoints.

Requests go through the OpenAI SDK's raw ``post`` so that the JSON body
stays exactly ``{messages, temperature}`` and the reply can be decoded
without the SDK's own response models.
Reference: https://github.com/openai/openai-python#undocumented-endpoints
"""

from abc import abstractmethod
from collections.abc import Sequence
from typing import Any

import httpx
import openai
from openai import AsyncOpenAI

from ..base import CompletionProvider, validate_history
from ..models import (
    ChatMessage,
    CompletionResult,
    MissingCredential,
    TransportError,
    decode_completion,
)

CHAT_COMPLETIONS_PATH = "/chat/completions"
DEFAULT_TEMPERATURE = 0.7


class ChatCompletionsProvider(CompletionProvider):
    """Base provider for endpoints speaking the chat completions protocol.

    Hidden design decisions:
    - Lazy SDK client creation (no client without a credential)
    - Retries disabled, no timeout unless configured
    - Transport errors vs. malformed replies
    """

    def __init__(
        self,
        api_key: str | None,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float | None = None,
        **client_kwargs: Any
    ):
        """Initialize the provider.

        Args:
            api_key: Static credential, None or empty if not configured
            temperature: Sampling temperature sent with every request
            timeout: Request timeout in seconds (None waits indefinitely)
            **client_kwargs: Additional kwargs for the SDK client
        """
        self._api_key = api_key or None
        self._temperature = temperature
        self._timeout = timeout
        self._client_kwargs = client_kwargs
        self._client: AsyncOpenAI | None = None

    @property
    def has_credential(self) -> bool:
        return self._api_key is not None

    @property
    def temperature(self) -> float:
        """Sampling temperature sent with every request."""
        return self._temperature

    @abstractmethod
    def _create_client(self, api_key: str) -> AsyncOpenAI:
        """Create the SDK client for this endpoint."""

    @abstractmethod
    def describe_endpoint(self) -> str:
        """Human-readable endpoint description for diagnostics."""

    def build_request_body(self, history: Sequence[ChatMessage]) -> dict[str, Any]:
        """Build the JSON request body for a history snapshot."""
        return {
            "messages": [msg.to_wire() for msg in history],
            "temperature": self.temperature,
        }

    async def complete(self, history: Sequence[ChatMessage]) -> CompletionResult:
        validate_history(history)

        if self._api_key is None:
            return MissingCredential(
                reason=f"No API key configured for {self.describe_endpoint()}"
            )

        if self._client is None:
            self._client = self._create_client(self._api_key)

        try:
            response = await self._client.post(
                CHAT_COMPLETIONS_PATH,
                cast_to=httpx.Response,
                body=self.build_request_body(history),
            )
        except openai.APIStatusError as e:
            return TransportError(reason=f"HTTP {e.status_code}: {e.message}")
        except openai.APIError as e:
            return TransportError(reason=f"{type(e).__name__}: {e.message}")

        try:
            payload = response.json()
        except ValueError as e:
            return TransportError(reason=f"Response body is not JSON: {e}")

        return decode_completion(payload)

    async def close(self) -> None:
        """Close the SDK client if one was created."""
        if self._client is not None:
            await self._client.close()
            self._client = None
