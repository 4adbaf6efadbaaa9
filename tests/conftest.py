"""Pytest configuration and shared fixtures."""
import asyncio
from collections.abc import Sequence

import pytest

from pyagenda.conversation import ConversationLog
from pyagenda.llm.base import CompletionProvider, validate_history
from pyagenda.llm.models import (
    ChatMessage,
    CompletionOk,
    CompletionResult,
    Role,
)

TEST_DIRECTIVE = "You are a test assistant."


class FakeProvider(CompletionProvider):
    """Provider returning scripted results.

    If `gate` is set, each call waits on it before returning, which keeps
    the controller in AWAITING for as long as the test needs.
    """

    def __init__(
        self,
        results: Sequence[CompletionResult] = (),
        gate: asyncio.Event | None = None,
        has_credential: bool = True,
    ):
        self._results = list(results)
        self._has_credential = has_credential
        self.gate = gate
        self.calls: list[tuple[ChatMessage, ...]] = []
        self.closed = False

    @property
    def has_credential(self) -> bool:
        return self._has_credential

    async def complete(self, history: Sequence[ChatMessage]) -> CompletionResult:
        validate_history(history)
        self.calls.append(tuple(history))
        if self.gate is not None:
            await self.gate.wait()
        if self._results:
            return self._results.pop(0)
        return ok("Done.")

    async def close(self) -> None:
        self.closed = True


def ok(content: str) -> CompletionOk:
    """Build a successful result carrying an assistant reply."""
    return CompletionOk(message=ChatMessage(role=Role.ASSISTANT, content=content))


@pytest.fixture
def directive():
    """Return the system directive used by test logs."""
    return TEST_DIRECTIVE


@pytest.fixture
def log(directive):
    """Return a fresh conversation log."""
    return ConversationLog(directive)


@pytest.fixture
def completion_payload():
    """Return a well-formed chat completion response body."""
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Here is your plan."},
                "finish_reason": "stop",
            }
        ],
    }
