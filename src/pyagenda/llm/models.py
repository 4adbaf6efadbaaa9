"""Data models for the completion client.

Hides the wire representation of chat messages and the shape of the
service's reply. Replies are decoded into a tagged result instead of being
probed field by field.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

FALLBACK_REPLY = "Hmm, something went wrong."


class Role(str, Enum):
    """Role of a message sender."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Represents a chat message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Role of the message sender: 'user', 'assistant', or 'system'")
    content: str = Field(description="Content of the message")

    def to_wire(self) -> dict[str, str]:
        """Convert to the JSON object sent to the service."""
        return {"role": self.role.value, "content": self.content}


def fallback_reply() -> ChatMessage:
    """Synthetic assistant message used when a reply cannot be decoded."""
    return ChatMessage(role=Role.ASSISTANT, content=FALLBACK_REPLY)


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    def reply(self) -> ChatMessage | None:
        """Message to append to the conversation, if any."""
        return None


class CompletionOk(_Result):
    """The service returned a well-formed reply."""

    kind: Literal["ok"] = "ok"
    message: ChatMessage

    @property
    def reply(self) -> ChatMessage:
        return self.message


class MalformedResponse(_Result):
    """A response was received but did not carry a usable reply.

    Degrades to the fallback assistant message so that the exchange still
    produces exactly one appended reply.
    """

    kind: Literal["malformed"] = "malformed"
    reason: str
    message: ChatMessage = Field(default_factory=fallback_reply)

    @property
    def reply(self) -> ChatMessage:
        return self.message


class TransportError(_Result):
    """Network failure, non-2xx status, or an envelope that is not JSON."""

    kind: Literal["transport"] = "transport"
    reason: str


class MissingCredential(_Result):
    """No API key was configured; nothing was sent."""

    kind: Literal["missing_credential"] = "missing_credential"
    reason: str


CompletionResult = CompletionOk | MalformedResponse | TransportError | MissingCredential


class CompletionEnvelope(BaseModel):
    """Top-level chat completion response. Only the choices are read."""

    choices: list[Any] = Field(min_length=1)


class CompletionChoice(BaseModel):
    """One completion choice."""

    message: ChatMessage


def decode_completion(payload: Any) -> CompletionOk | MalformedResponse:
    """Decode a parsed JSON response body into a completion result.

    Only the first choice is inspected. Its message must be an assistant
    message with string content.

    Args:
        payload: Parsed JSON body of a 2xx response

    Returns:
        CompletionOk with the reply, or MalformedResponse carrying the
        fallback message
    """
    try:
        envelope = CompletionEnvelope.model_validate(payload)
        choice = CompletionChoice.model_validate(envelope.choices[0])
    except ValidationError as e:
        return MalformedResponse(reason=_summarize(e))

    if choice.message.role is not Role.ASSISTANT:
        return MalformedResponse(
            reason=f"Reply has role '{choice.message.role.value}', expected 'assistant'"
        )
    return CompletionOk(message=choice.message)


def _summarize(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{location}: {first['msg']}"
