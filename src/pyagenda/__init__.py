"""
Pyagenda: a terminal chat client for a task and goal management assistant.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .conversation import ConversationLog
from .llm import ChatMessage, CompletionProvider, Role, create_completion_provider
from .session import RequestController, RequestState

__all__ = [
    "ChatMessage",
    "CompletionProvider",
    "ConversationLog",
    "RequestController",
    "RequestState",
    "Role",
    "create_completion_provider",
]
