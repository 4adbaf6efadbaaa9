"""Terminal UI module for pyagenda.

Provides a Textual-based TUI for the task and goal assistant.

Module structure (each module hides a design decision):
- config.py: Constants and log levels
- formatting.py: Markdown parsing and raw-HTML sanitization
- scroll.py: When the message list follows new content
- widgets.py: Custom widgets (message bubbles, input history, log rendering)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- app.py: Application orchestration (user interaction flow)
"""

from .app import AgendaApp, run_textual_tui
from .config import LogLevel
from .formatting import create_markdown_parser, render_message
from .scroll import ViewSynchronizer
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, MessageBubble

__all__ = [
    "AgendaApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "MessageBubble",
    "ViewSynchronizer",
    "create_markdown_parser",
    "render_message",
    "run_textual_tui",
]
