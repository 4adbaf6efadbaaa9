"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Chat message rendering
- Typing indicator placement
- Log rendering and level filtering
"""

from collections import deque
from collections.abc import Sequence
from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click, Key
from textual.message import Message
from textual.widgets import Button, Input, Markdown, RichLog, Static

from ..llm.models import ChatMessage, Role
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_LEVEL_STYLES,
    LOG_TIMESTAMP_FORMAT,
    TYPING_INDICATOR_TEXT,
    LogLevel,
)
from .formatting import create_markdown_parser


class MessageBubble(Vertical):
    """One rendered chat message. Clicking copies the raw content."""

    def __init__(self, message: ChatMessage, *args, **kwargs) -> None:
        role_class = "user-message" if message.role is Role.USER else "assistant-message"
        super().__init__(*args, classes=f"chat-message {role_class}", **kwargs)
        self.message = message

    def compose(self):
        header = "You" if self.message.role is Role.USER else "Assistant"
        yield Static(header, classes="message-header")
        yield Markdown(
            self.message.content,
            classes="message-content",
            parser_factory=create_markdown_parser,
        )

    def on_click(self, event: Click) -> None:
        """Copy message content to clipboard when clicked."""
        event.stop()
        self.app.copy_to_clipboard(self.message.content)
        self.app.notify("Copied to clipboard", timeout=2)


class TypingIndicator(Static):
    """Shown at the end of the message list while a reply is pending."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(TYPING_INDICATOR_TEXT, *args, **kwargs)
        self.display = False


class HistoryInput(Input):
    """Single-line input that recalls earlier submissions with Up/Down.

    Walking past the newest entry restores the draft that was being typed.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: deque[str] = deque(maxlen=INPUT_HISTORY_MAX_SIZE)
        self._cursor: int | None = None
        self._draft = ""

    def _on_key(self, event: Key) -> None:
        if event.key not in ("up", "down"):
            return
        event.prevent_default()
        event.stop()
        if not self._history:
            return

        if event.key == "up":
            if self._cursor is None:
                self._draft = self.value
                self._cursor = len(self._history)
            self._cursor = max(self._cursor - 1, 0)
            self._show(self._history[self._cursor])
        elif self._cursor is not None:
            self._cursor += 1
            if self._cursor >= len(self._history):
                self._cursor = None
                self._show(self._draft)
            else:
                self._show(self._history[self._cursor])

    def _show(self, text: str) -> None:
        self.value = text
        self.cursor_position = len(text)

    def remember(self, text: str) -> None:
        """Record a submission; consecutive duplicates are stored once."""
        if text and (not self._history or self._history[-1] != text):
            self._history.append(text)
        self._cursor = None
        self._draft = ""


class ChatInputBar(Horizontal):
    """Chat input bar with a single-line input and Send button.

    Posts Submitted with the raw input value. Clearing the input is left
    to the app, which only does it when the submission is accepted.
    """

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield HistoryInput(id="chat-input", placeholder=INPUT_PLACEHOLDER)
        yield Button("Send", id="send-btn").with_tooltip("Send message (Enter)")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self.post_message(self.Submitted(self.query_one("#chat-input", HistoryInput).value))

    def accept_submission(self, value: str) -> None:
        """Clear the input after an accepted submission and remember it."""
        text_input = self.query_one("#chat-input", HistoryInput)
        text_input.remember(value)
        text_input.value = ""

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


class ChatHistoryWidget(VerticalScroll):
    """Scrollable message list with a trailing typing indicator."""

    BORDER_SUBTITLE = "Conversation"

    def __init__(self, messages: Sequence[ChatMessage] = (), *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._initial = tuple(messages)
        self._message_count = len(self._initial)

    def compose(self):
        for message in self._initial:
            yield MessageBubble(message)
        yield TypingIndicator(id="typing-indicator")

    def on_mount(self) -> None:
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        self.border_subtitle = f"{self._message_count} messages"

    @property
    def message_count(self) -> int:
        return self._message_count

    def add_message(self, message: ChatMessage) -> MessageBubble:
        """Render a message above the typing indicator."""
        bubble = MessageBubble(message)
        self.mount(bubble, before=self.query_one("#typing-indicator", TypingIndicator))
        self._message_count += 1
        self._update_subtitle()
        return bubble

    def set_typing(self, typing: bool) -> None:
        """Show or hide the typing indicator."""
        self.query_one("#typing-indicator", TypingIndicator).display = typing


class DebugPanel(RichLog):
    """Diagnostics panel fed by the controller's debug callback.

    Entries below the panel's level are discarded, not just hidden.
    Starts hidden; --log-level shows it on start, Ctrl+D toggles it.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Hidden"

    def __init__(self, *args, log_level: LogLevel = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=False, highlight=False, wrap=True, **kwargs)
        self._log_level = log_level
        self.display = False

    @property
    def log_level(self) -> LogLevel:
        """Minimum level of entries kept."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._log_level = LogLevel(level)
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        self.border_subtitle = f"Level: {self._log_level.name}" if self.display else "Hidden"

    def write_entry(
        self,
        component: str,
        message: str,
        level: LogLevel = LogLevel.DEBUG
    ) -> None:
        """Append one timestamped entry if it meets the level threshold."""
        if level < self._log_level:
            return
        level = LogLevel(level)
        self.write(Text.assemble(
            (datetime.now().strftime(LOG_TIMESTAMP_FORMAT), "dim"),
            " ",
            (f"{level.name:<7}", LOG_LEVEL_STYLES[level]),
            " ",
            (f"[{component}]", "bold"),
            " ",
            message,
        ))

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return whether the panel is now shown."""
        if self.display:
            self.hide()
        else:
            self.show()
        return self.display
