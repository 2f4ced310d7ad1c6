"""Wire protocol shared by the conversation controller and the completion proxy."""

from .frames import FrameDecoder, FrameParseError, format_frame, iter_frames, parse_frame
from .models import (
    EVENT_STREAM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    ChatRequest,
    ChatResponse,
    Frame,
    WireMessage,
)

__all__ = [
    "EVENT_STREAM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "ChatRequest",
    "ChatResponse",
    "Frame",
    "FrameDecoder",
    "FrameParseError",
    "WireMessage",
    "format_frame",
    "iter_frames",
    "parse_frame",
]
