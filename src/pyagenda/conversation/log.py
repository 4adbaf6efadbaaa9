"""Append-only conversation log.

Hides how the session's messages are stored. The log is memory-resident
and lives for one session; nothing is persisted.
"""

from collections.abc import Iterator

from ..llm.models import ChatMessage, Role
from ..prompts import get_system_directive


class ConversationLog:
    """Ordered, append-only sequence of role-tagged messages.

    Index 0 always holds the system directive. It is sent with every
    request but never displayed, removed or duplicated.
    """

    def __init__(self, directive: str | None = None):
        """Create a log seeded with the system directive.

        Args:
            directive: Directive text (None loads the packaged system prompt)
        """
        if directive is None:
            directive = get_system_directive()
        self._messages: list[ChatMessage] = [
            ChatMessage(role=Role.SYSTEM, content=directive)
        ]

    @property
    def directive(self) -> ChatMessage:
        """The seeded system message."""
        return self._messages[0]

    def append(self, message: ChatMessage) -> None:
        """Add a message to the end of the log.

        Raises:
            ValueError: If the message has the system role
        """
        if message.role is Role.SYSTEM:
            raise ValueError("The system directive is seeded once and cannot be appended")
        self._messages.append(message)

    def snapshot(self) -> tuple[ChatMessage, ...]:
        """Full ordered sequence, directive first."""
        return tuple(self._messages)

    def visible(self) -> tuple[ChatMessage, ...]:
        """Messages shown to the user (everything but the directive)."""
        return tuple(self._messages[1:])

    def last_reply(self) -> ChatMessage | None:
        """Get the most recent assistant message."""
        for msg in reversed(self._messages):
            if msg.role is Role.ASSISTANT:
                return msg
        return None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self.snapshot())
