"""Main Textual TUI application.

Orchestrates the UI components around one conversation session: the
controller owns the log and the request slot, the view synchronizer
decides when the message list scrolls.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Footer, Header

from ..conversation import ConversationLog
from ..llm.base import CompletionProvider
from ..llm.models import ChatMessage
from ..session import RequestController, RequestState
from .config import APP_TITLE, JUMP_TO_BOTTOM_LABEL, LogLevel
from .scroll import ViewSynchronizer
from .styles import APP_CSS
from .themes import AGENDA_LIGHT
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel


class AgendaApp(App):
    """Textual TUI for the task and goal management assistant."""

    CSS = APP_CSS
    TITLE = APP_TITLE

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+end", "jump_to_bottom", "Bottom"),
    ]

    def __init__(
        self,
        provider: CompletionProvider,
        log: ConversationLog | None = None,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._provider = provider
        self._log_level = log_level
        self.controller = RequestController(
            log if log is not None else ConversationLog(), provider
        )
        self.view_sync = ViewSynchronizer(self._scroll_chat_to_bottom)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(self.controller.log.visible(), id="chat-history")
        with Horizontal(id="jump-bar"):
            yield Button(JUMP_TO_BOTTOM_LABEL, id="jump-btn")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(AGENDA_LIGHT)
        self.theme = "agenda-light"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.write_entry("TUI", f"Log panel enabled at {log_panel.log_level.name}", LogLevel.INFO)

        self.controller.set_message_callback(self._on_message_appended)
        self.controller.set_state_callback(self._on_state_changed)
        self.controller.set_debug_callback(self._route_debug)

        if not self._provider.has_credential:
            log_panel.write_entry(
                "TUI", "No API key configured; requests will not be sent", LogLevel.WARNING
            )

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        self.watch(chat, "scroll_y", self._on_chat_scrolled, init=False)
        self.watch(chat, "virtual_size", self._on_chat_scrolled, init=False)
        self._sync_viewport()
        self._observe_conversation()

        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_resize(self) -> None:
        self.call_after_refresh(self._sync_viewport)

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route controller diagnostics to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.write_entry(component, message, LogLevel.from_string(level))
        if level == "error":
            self.notify(message, severity="error", timeout=5)

    def _on_message_appended(self, message: ChatMessage) -> None:
        self.query_one("#chat-history", ChatHistoryWidget).add_message(message)
        self._observe_conversation()

    def _on_state_changed(self, state: RequestState) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.set_typing(state is RequestState.AWAITING)
        self._observe_conversation()

    def _observe_conversation(self) -> None:
        self.view_sync.observe(len(self.controller.log.visible()), self.controller.busy)

    def _on_chat_scrolled(self, _value: object) -> None:
        self._sync_viewport()

    def _sync_viewport(self) -> None:
        """Recompute near-bottom and show or hide the scroll control."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        self.view_sync.update_viewport(
            scroll_offset=chat.scroll_y,
            viewport_height=chat.container_size.height,
            content_height=chat.virtual_size.height,
        )
        self.query_one("#jump-bar").display = self.view_sync.show_jump_control

    def _scroll_chat_to_bottom(self) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        self.call_after_refresh(chat.scroll_end, animate=True)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if not self.controller.accept(event.value):
            return
        self.query_one("#chat-input-bar", ChatInputBar).accept_submission(event.value)
        self._run_completion()

    @work(group="completion")
    async def _run_completion(self) -> None:
        """Run the pending completion as a background async worker."""
        await self.controller.dispatch()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "jump-btn":
            self.view_sync.jump_to_bottom()

    def action_jump_to_bottom(self) -> None:
        """Scroll the message list to the newest message."""
        self.view_sync.jump_to_bottom()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        reply = self.controller.log.last_reply()
        if reply:
            self.copy_to_clipboard(reply.content)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    provider: CompletionProvider,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        provider: Completion provider instance
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = AgendaApp(provider=provider, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
