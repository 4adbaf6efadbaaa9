"""Conversation module for pyagenda.

Holds the session's message history.
"""

from .log import ConversationLog

__all__ = ["ConversationLog"]
