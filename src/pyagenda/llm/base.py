from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from .models import ChatMessage, CompletionResult, Role


class CompletionProvider(ABC):
    """Abstract base class for completion providers.

    This module hides the design decision of which completion service to use.
    Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request body construction
    - Mapping transport failures and reply shapes onto CompletionResult

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            result = await provider.complete(log.snapshot())
        # Automatically cleaned up
    """

    @abstractmethod
    async def complete(self, history: Sequence[ChatMessage]) -> CompletionResult:
        """Request one completion for the full conversation history.

        The service expects the whole context on every call, so history
        always starts with the system directive.

        Args:
            history: Ordered messages, system message first

        Returns:
            A tagged CompletionResult. Transport and configuration problems
            are reported as results, never raised.

        Raises:
            ValueError: If history is empty or does not start with a system message
        """
        pass

    @property
    @abstractmethod
    def has_credential(self) -> bool:
        """Whether an API key is configured."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "CompletionProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise


def validate_history(history: Sequence[ChatMessage]) -> None:
    """Check that history is a complete conversation context."""
    if not history:
        raise ValueError("History must not be empty")
    if history[0].role is not Role.SYSTEM:
        raise ValueError(
            f"History must start with a system message, got '{history[0].role.value}'"
        )
