"""Conversation state owned by the controller.

Hides the internal representation of messages and of the send lifecycle.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4

from ..protocol import WireMessage


class Role(str, Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class SendPhase(str, Enum):
    """Lifecycle of the single send allowed in flight."""

    IDLE = "idle"
    SENDING = "sending"  # Request dispatched, no body read yet
    STREAMING = "streaming"  # Incremental event-stream body being read


_TRANSITIONS: dict[SendPhase, frozenset[SendPhase]] = {
    SendPhase.IDLE: frozenset({SendPhase.SENDING}),
    SendPhase.SENDING: frozenset({SendPhase.STREAMING, SendPhase.IDLE}),
    SendPhase.STREAMING: frozenset({SendPhase.IDLE}),
}


class InvalidTransitionError(RuntimeError):
    """Raised on a send lifecycle transition that is not allowed."""

    def __init__(self, current: SendPhase, target: SendPhase) -> None:
        super().__init__(f"Cannot move from {current.value} to {target.value}")
        self.current = current
        self.target = target


def generate_id() -> str:
    """Return a fresh opaque message id."""
    return uuid4().hex


@dataclass
class Message:
    """A message in the conversation.

    ``content`` of the in-progress assistant message grows while a response
    streams in; ``id`` is the key used to find it again.
    """

    role: Role
    content: str
    id: str = field(default_factory=generate_id)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_wire(self) -> WireMessage:
        return WireMessage(role=self.role.value, content=self.content)


@dataclass
class ConversationState:
    """Messages in turn order plus the flags shown alongside them."""

    messages: list[Message] = field(default_factory=list)
    phase: SendPhase = SendPhase.IDLE
    last_error: str | None = None
    draft: str = ""  # Entry field text

    @property
    def is_loading(self) -> bool:
        return self.phase is not SendPhase.IDLE

    def transition(self, target: SendPhase) -> None:
        """Move the send lifecycle to ``target``.

        Raises:
            InvalidTransitionError: If the move is not allowed from the current phase
        """
        if target not in _TRANSITIONS[self.phase]:
            raise InvalidTransitionError(self.phase, target)
        self.phase = target

    def find(self, message_id: str) -> Message | None:
        """Locate a message by id."""
        for message in self.messages:
            if message.id == message_id:
                return message
        return None

    def set_content(self, message_id: str, content: str) -> bool:
        """Replace a message's content. Returns False if the message is gone."""
        message = self.find(message_id)
        if message is None:
            return False
        message.content = content
        return True

    def last_assistant_content(self) -> str | None:
        for message in reversed(self.messages):
            if message.role is Role.ASSISTANT:
                return message.content
        return None
