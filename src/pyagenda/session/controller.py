"""Request lifecycle controller.

Hides the busy/idle state machine that serializes completion requests.
Everything runs on one event loop; the only suspension point is the
provider call, and the AWAITING state is the only concurrency guard.
"""

from collections.abc import Callable
from enum import Enum

from ..conversation import ConversationLog
from ..llm.base import CompletionProvider
from ..llm.models import (
    ChatMessage,
    CompletionResult,
    MalformedResponse,
    MissingCredential,
    Role,
)

DebugCallback = Callable[[str, str, str], None]


class RequestState(str, Enum):
    """Lifecycle state of the session's single request slot."""

    IDLE = "idle"
    AWAITING = "awaiting"


class RequestController:
    """Drives log -> provider -> log round trips, one at a time.

    Submissions made while a reply is pending are dropped, not queued.
    A failed request leaves the user's turn in the log without a reply.
    There is no timeout or cancellation: a hung request keeps the
    controller in AWAITING.

    Example:
        controller = RequestController(log, provider)
        controller.set_debug_callback(lambda level, comp, msg: print(level, msg))
        await controller.submit("Plan my week")
    """

    def __init__(self, log: ConversationLog, provider: CompletionProvider):
        self._log = log
        self._provider = provider
        self._state = RequestState.IDLE
        self._message_callback: Callable[[ChatMessage], None] | None = None
        self._state_callback: Callable[[RequestState], None] | None = None
        self._debug_callback: DebugCallback | None = None

    @property
    def log(self) -> ConversationLog:
        return self._log

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state is RequestState.AWAITING

    def set_message_callback(self, callback: Callable[[ChatMessage], None]) -> None:
        """Set callback invoked after each message is appended to the log."""
        self._message_callback = callback

    def set_state_callback(self, callback: Callable[[RequestState], None]) -> None:
        """Set callback invoked when the state changes."""
        self._state_callback = callback

    def set_debug_callback(self, callback: DebugCallback) -> None:
        """Set callback for diagnostics.

        Args:
            callback: Function(level, component, message) where level is
                'debug', 'info', 'warning' or 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Session", message)

    def _append(self, message: ChatMessage) -> None:
        self._log.append(message)
        if self._message_callback:
            self._message_callback(message)

    def _set_state(self, state: RequestState) -> None:
        if state is self._state:
            return
        self._state = state
        if self._state_callback:
            self._state_callback(state)

    def accept(self, text: str) -> bool:
        """Accept a user submission if the controller is idle.

        The raw text is appended as a user message and the controller
        enters AWAITING. Call dispatch() to run the request.

        Returns:
            True if accepted; False for blank text or while AWAITING
        """
        if not text.strip():
            return False
        if self._state is RequestState.AWAITING:
            self._debug("debug", "Submission dropped: a reply is still pending")
            return False

        self._append(ChatMessage(role=Role.USER, content=text))
        self._set_state(RequestState.AWAITING)
        return True

    async def dispatch(self) -> CompletionResult | None:
        """Run the pending request and settle the log.

        Returns:
            The provider's result, or None if nothing was pending
        """
        if self._state is not RequestState.AWAITING:
            return None

        history = self._log.snapshot()
        self._debug("info", f"Requesting completion ({len(history)} messages)")
        try:
            result = await self._provider.complete(history)
            self._settle(result)
        finally:
            self._set_state(RequestState.IDLE)
        return result

    async def submit(self, text: str) -> bool:
        """Accept a submission and wait for its round trip to finish.

        Returns:
            True if the submission was accepted
        """
        if not self.accept(text):
            return False
        await self.dispatch()
        return True

    def _settle(self, result: CompletionResult) -> None:
        reply = result.reply
        if reply is not None:
            if isinstance(result, MalformedResponse):
                self._debug("warning", f"Malformed completion response: {result.reason}")
            else:
                self._debug("info", f"Reply received ({len(reply.content)} chars)")
            self._append(reply)
        elif isinstance(result, MissingCredential):
            self._debug("error", f"Missing API key: {result.reason}")
        else:
            self._debug("error", f"Completion request failed: {result.reason}")
