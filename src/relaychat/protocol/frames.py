"""Event-stream frame codec.

Hides how a streamed response body is cut into frames:
- incremental byte-to-text decoding across chunk boundaries
- the blank-line frame delimiter and the optional ``data:`` marker
- JSON decoding and validation of each frame
"""

import codecs
import json
import logging
from collections.abc import AsyncIterable, AsyncIterator

from pydantic import ValidationError

from .models import Frame

logger = logging.getLogger(__name__)

FRAME_DELIMITER = "\n\n"
DATA_PREFIX = "data:"
FRAME_TYPES = ("text", "error")


class FrameParseError(ValueError):
    """Raised when a single frame cannot be decoded into a ``Frame``."""


class FrameDecoder:
    """Incrementally turns response body chunks into raw frame strings.

    Bytes are decoded with an incremental decoder so a multi-byte character
    split across two chunks is completed on the next ``feed`` call. Text after
    the last delimiter is held back until more data arrives or ``flush`` is
    called at end of stream.

    Usage:
        decoder = FrameDecoder()
        async for chunk in response.aiter_bytes():
            for raw in decoder.feed(chunk):
                ...
        for raw in decoder.flush():
            ...
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received but not yet terminated by a delimiter."""
        return self._buffer

    def feed(self, chunk: bytes) -> list[str]:
        """Decode a chunk and return every frame it completes."""
        text = self._decoder.decode(chunk)
        if not text:
            return []
        self._buffer = (self._buffer + text).replace("\r\n", "\n")
        *complete, self._buffer = self._buffer.split(FRAME_DELIMITER)
        return [frame for frame in complete if frame.strip()]

    def flush(self) -> list[str]:
        """Return the trailing unterminated frame, if any, at end of stream."""
        self._buffer += self._decoder.decode(b"", final=True)
        remainder, self._buffer = self._buffer, ""
        return [frame for frame in remainder.split(FRAME_DELIMITER) if frame.strip()]


def parse_frame(raw: str) -> Frame | None:
    """Parse one raw frame.

    Returns:
        The decoded frame, or None when the frame is empty or carries a type
        this client does not know.

    Raises:
        FrameParseError: If the payload is not a JSON object or a text frame is malformed
    """
    text = raw.strip()
    if text.startswith(DATA_PREFIX):
        text = text[len(DATA_PREFIX):].strip()
    if not text:
        return None

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise FrameParseError(f"Invalid JSON in frame: {text[:80]!r}") from e

    if not isinstance(payload, dict):
        raise FrameParseError(f"Frame is not a JSON object: {text[:80]!r}")

    if payload.get("type") not in FRAME_TYPES:
        logger.debug("Ignoring frame of unknown type %r", payload.get("type"))
        return None

    if payload["type"] == "error":
        # Any value is reported; an empty one is left for the caller to fill in.
        value = payload.get("value")
        if value is None:
            value = ""
        elif not isinstance(value, str):
            value = json.dumps(value)
        return Frame(type="error", value=value)

    try:
        return Frame.model_validate(payload)
    except ValidationError as e:
        raise FrameParseError(f"Malformed {payload['type']} frame: {e}") from e


def format_frame(frame: Frame) -> str:
    """Serialise a frame for a ``text/event-stream`` body."""
    return f"{DATA_PREFIX} {frame.model_dump_json()}{FRAME_DELIMITER}"


async def iter_frames(chunks: AsyncIterable[bytes]) -> AsyncIterator[Frame]:
    """Yield the frames of a streamed body, skipping ones that fail to parse.

    Args:
        chunks: Response body as raw byte chunks, in arrival order

    Yields:
        Each decoded frame, in order
    """
    decoder = FrameDecoder()
    async for chunk in chunks:
        for raw in decoder.feed(chunk):
            frame = _parse_or_skip(raw)
            if frame is not None:
                yield frame
    for raw in decoder.flush():
        frame = _parse_or_skip(raw)
        if frame is not None:
            yield frame


def _parse_or_skip(raw: str) -> Frame | None:
    try:
        return parse_frame(raw)
    except FrameParseError as e:
        logger.warning("Skipping unparseable frame: %s", e)
        return None
