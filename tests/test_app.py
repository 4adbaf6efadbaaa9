"""Integration tests for the Textual app wiring."""
import asyncio

import pytest

from conftest import FakeProvider, ok
from pyagenda.conversation import ConversationLog
from pyagenda.llm.models import ChatMessage, Role, TransportError
from pyagenda.session import RequestState
from pyagenda.ui import AgendaApp, ChatHistoryWidget, DebugPanel, MessageBubble
from pyagenda.ui.widgets import HistoryInput, TypingIndicator

pytestmark = pytest.mark.integration


async def _submit(app, pilot, text: str) -> None:
    app.query_one("#chat-input", HistoryInput).value = text
    await pilot.press("enter")
    await pilot.pause()
    await pilot.pause()


async def _settle(app, pilot) -> None:
    await app.workers.wait_for_complete()
    await pilot.pause()


class TestAgendaApp:
    """Tests for AgendaApp."""

    @pytest.mark.asyncio
    async def test_initial_layout(self):
        """Test that transient widgets start hidden."""
        app = AgendaApp(FakeProvider(), log=ConversationLog("directive"))
        async with app.run_test() as pilot:
            await pilot.pause()

            assert app.query_one("#typing-indicator", TypingIndicator).display is False
            assert app.query_one("#debug-panel", DebugPanel).display is False
            assert app.query_one("#jump-bar").display is False
            assert len(app.query(MessageBubble)) == 0
            assert app.title == "Assistant - Task & Goal Management"

    @pytest.mark.asyncio
    async def test_exchange_renders_both_turns(self):
        """Test that a submission renders the user turn and the reply."""
        provider = FakeProvider([ok("Sure, let's start with **yearly goals**.")])
        app = AgendaApp(provider, log=ConversationLog("directive"))
        async with app.run_test() as pilot:
            await _submit(app, pilot, "Plan my week")
            await _settle(app, pilot)

            bubbles = list(app.query(MessageBubble))
            assert [b.message.role for b in bubbles] == [Role.USER, Role.ASSISTANT]
            assert app.query_one("#chat-history", ChatHistoryWidget).message_count == 2
            assert app.query_one("#chat-input", HistoryInput).value == ""
            assert app.controller.state is RequestState.IDLE
            assert app.query_one("#typing-indicator", TypingIndicator).display is False

    @pytest.mark.asyncio
    async def test_typing_indicator_and_drop_while_awaiting(self):
        """Test that a second submission is dropped while a reply is pending."""
        gate = asyncio.Event()
        provider = FakeProvider([ok("done")], gate=gate)
        app = AgendaApp(provider, log=ConversationLog("directive"))
        async with app.run_test() as pilot:
            await _submit(app, pilot, "A")

            assert app.controller.busy
            assert app.query_one("#typing-indicator", TypingIndicator).display is True

            await _submit(app, pilot, "B")

            assert len(app.controller.log) == 2
            assert app.query_one("#chat-input", HistoryInput).value == "B"

            gate.set()
            await _settle(app, pilot)

            assert [m.content for m in app.controller.log.visible()] == ["A", "done"]
            assert app.query_one("#typing-indicator", TypingIndicator).display is False
            assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_failure_leaves_user_turn(self):
        """Test that a failed request shows only the user's message."""
        provider = FakeProvider([TransportError(reason="HTTP 500: boom")])
        app = AgendaApp(provider, log=ConversationLog("directive"))
        async with app.run_test() as pilot:
            await _submit(app, pilot, "A")
            await _settle(app, pilot)

            bubbles = list(app.query(MessageBubble))
            assert [b.message.role for b in bubbles] == [Role.USER]
            assert app.controller.state is RequestState.IDLE

    @pytest.mark.asyncio
    async def test_blank_submission_ignored(self):
        """Test that blank input sends nothing."""
        provider = FakeProvider()
        app = AgendaApp(provider, log=ConversationLog("directive"))
        async with app.run_test() as pilot:
            await _submit(app, pilot, "   ")
            await _settle(app, pilot)

            assert len(app.query(MessageBubble)) == 0
            assert provider.calls == []

    @pytest.mark.asyncio
    async def test_existing_messages_rendered(self):
        """Test that visible messages of a given log are shown on start."""
        log = ConversationLog("directive")
        log.append(ChatMessage(role=Role.USER, content="hello"))
        log.append(ChatMessage(role=Role.ASSISTANT, content="hi"))
        app = AgendaApp(FakeProvider(), log=log)
        async with app.run_test() as pilot:
            await pilot.pause()

            assert len(app.query(MessageBubble)) == 2

    @pytest.mark.asyncio
    async def test_toggle_log_panel(self):
        """Test that Ctrl+D toggles the log panel."""
        app = AgendaApp(FakeProvider(), log=ConversationLog("directive"))
        async with app.run_test() as pilot:
            panel = app.query_one("#debug-panel", DebugPanel)

            await pilot.press("ctrl+d")
            assert panel.display is True

            await pilot.press("ctrl+d")
            assert panel.display is False

    @pytest.mark.asyncio
    async def test_log_level_shows_panel(self):
        """Test that a log level shows the panel on start."""
        app = AgendaApp(FakeProvider(), log=ConversationLog("directive"), log_level="info")
        async with app.run_test() as pilot:
            await pilot.pause()

            panel = app.query_one("#debug-panel", DebugPanel)
            assert panel.display is True
            assert panel.border_subtitle == "Level: INFO"
