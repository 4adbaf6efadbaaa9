from .base import CompletionProvider
from .factory import create_completion_provider
from .models import (
    FALLBACK_REPLY,
    ChatMessage,
    CompletionOk,
    CompletionResult,
    MalformedResponse,
    MissingCredential,
    Role,
    TransportError,
)
from .providers import AzureCompletionProvider, OpenAICompatibleProvider

__all__ = [
    "FALLBACK_REPLY",
    "AzureCompletionProvider",
    "ChatMessage",
    "CompletionOk",
    "CompletionProvider",
    "CompletionResult",
    "MalformedResponse",
    "MissingCredential",
    "OpenAICompatibleProvider",
    "Role",
    "TransportError",
    "create_completion_provider",
]
