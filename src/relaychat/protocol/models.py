"""Wire models exchanged between the controller and the proxy.

Hides the JSON shape of requests, buffered responses and stream frames.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"


class WireMessage(BaseModel):
    """One turn of conversation history as sent over the wire."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user' or 'assistant'")
    content: str = Field(description="Text of the message")


class ChatRequest(BaseModel):
    """Request envelope for ``POST /api/chat``."""

    model_config = ConfigDict(frozen=True)

    messages: list[WireMessage] = Field(description="Full conversation history, oldest first")
    model: str = Field(min_length=1, description="Logical model name, e.g. 'mistral'")


class ChatResponse(BaseModel):
    """Buffered JSON response envelope.

    Either field may be absent on the wire; serialise with ``exclude_none``.
    """

    content: str | None = None
    error: str | None = None

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


class Frame(BaseModel):
    """One unit of an event-stream response."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text", "error"]
    value: str
