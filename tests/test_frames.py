"""Unit tests for the event-stream frame codec."""
import asyncio
import json

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from relaychat.protocol import (
    ChatRequest,
    ChatResponse,
    Frame,
    FrameDecoder,
    FrameParseError,
    format_frame,
    iter_frames,
    parse_frame,
)


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


async def _collect(*parts: bytes) -> list[Frame]:
    return [frame async for frame in iter_frames(_chunks(*parts))]


class TestFrameDecoder:
    """Tests for FrameDecoder."""

    def test_splits_on_blank_line(self):
        """Test that complete frames are returned and the rest is held back."""
        decoder = FrameDecoder()

        frames = decoder.feed(b"data: one\n\ndata: two\n\ndata: thr")

        assert frames == ["data: one", "data: two"]
        assert decoder.pending == "data: thr"

    def test_partial_frame_completes_on_next_chunk(self):
        """Test that a frame cut between chunks comes out whole."""
        decoder = FrameDecoder()

        assert decoder.feed(b'data: {"type":"te') == []
        assert decoder.feed(b'xt","value":"x"}\n\n') == ['data: {"type":"text","value":"x"}']
        assert decoder.pending == ""

    def test_multibyte_character_split_across_chunks(self):
        """Test that a UTF-8 sequence cut in half is decoded once complete."""
        encoded = "é✓".encode("utf-8")
        decoder = FrameDecoder()

        decoder.feed(encoded[:1])
        decoder.feed(encoded[1:3])
        frames = decoder.feed(encoded[3:] + b"\n\n")

        assert frames == ["é✓"]

    def test_crlf_delimiters(self):
        """Test that CRLF line endings delimit frames like LF."""
        decoder = FrameDecoder()

        frames = decoder.feed(b"data: a\r\n\r\ndata: b\r")
        frames += decoder.feed(b"\n\r\n")

        assert frames == ["data: a", "data: b"]

    def test_empty_frames_are_dropped(self):
        decoder = FrameDecoder()

        assert decoder.feed(b"\n\n\n\n  \n\ndata: x\n\n") == ["data: x"]

    def test_flush_returns_trailing_frame(self):
        """Test that end of stream releases an unterminated frame."""
        decoder = FrameDecoder()
        decoder.feed(b"data: done\n\ndata: tail")

        assert decoder.flush() == ["data: tail"]
        assert decoder.pending == ""
        assert decoder.flush() == []

    def test_flush_replaces_truncated_character(self):
        """Test that a dangling partial character does not raise."""
        decoder = FrameDecoder()
        decoder.feed("data: ✓".encode("utf-8")[:-1])

        (frame,) = decoder.flush()

        assert frame.startswith("data: ")
        assert frame.endswith("�")

    @given(
        values=st.lists(st.text(min_size=1, max_size=20), min_size=1, max_size=6),
        cuts=st.lists(st.integers(min_value=0, max_value=400), max_size=10),
    )
    @settings(max_examples=100, deadline=None)
    def test_chunking_does_not_change_frames(self, values: list[str], cuts: list[int]):
        """Property test: any split of the body yields the same frames."""
        body = "".join(format_frame(Frame(type="text", value=v)) for v in values).encode("utf-8")
        points = sorted({min(c, len(body)) for c in cuts})
        parts = [body[a:b] for a, b in zip([0, *points], [*points, len(body)])]

        frames = asyncio.run(_collect(*parts))

        assert [frame.value for frame in frames] == values


class TestParseFrame:
    """Tests for parse_frame."""

    def test_text_frame(self):
        assert parse_frame('data: {"type":"text","value":"Hi"}') == Frame(type="text", value="Hi")

    def test_error_frame(self):
        assert parse_frame('data: {"type":"error","value":"boom"}') == Frame(type="error", value="boom")

    def test_data_marker_is_optional(self):
        assert parse_frame('{"type":"text","value":"Hi"}') == Frame(type="text", value="Hi")

    def test_empty_frame(self):
        assert parse_frame("data:   ") is None
        assert parse_frame("") is None

    def test_unknown_type_is_ignored(self):
        assert parse_frame('data: {"type":"ping"}') is None

    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"type": "error", "value": 500}, "500"),
            ({"type": "error", "value": None}, ""),
            ({"type": "error"}, ""),
            ({"type": "error", "value": {"message": "boom"}}, '{"message": "boom"}'),
        ],
    )
    def test_error_frame_with_any_value_is_kept(self, payload, expected):
        """Test that an error frame is never dropped because of its value type."""
        assert parse_frame("data: " + json.dumps(payload)) == Frame(type="error", value=expected)

    @pytest.mark.parametrize(
        "raw",
        [
            "data: {not json}",
            'data: ["text", "x"]',
            'data: {"type":"text"}',
            'data: {"type":"text","value":3}',
        ],
    )
    def test_malformed_frames_raise(self, raw):
        with pytest.raises(FrameParseError):
            parse_frame(raw)

    def test_format_frame_round_trips(self):
        frame = Frame(type="text", value='quote " and\nnewline')

        wire = format_frame(frame)

        assert wire.startswith("data: ")
        assert wire.endswith("\n\n")
        assert parse_frame(wire) == frame


class TestIterFrames:
    """Tests for iter_frames."""

    @pytest.mark.asyncio
    async def test_skips_unparseable_frames(self):
        """Test that bad frames are skipped and later frames still arrive."""
        frames = await _collect(
            b'data: {"type":"text","value":"A"}\n\n',
            b"data: {oops}\n\n",
            b'data: {"type":"error","value":"E"}\n\n',
        )

        assert frames == [Frame(type="text", value="A"), Frame(type="error", value="E")]

    @pytest.mark.asyncio
    async def test_trailing_frame_is_yielded(self):
        frames = await _collect(b'data: {"type":"text","value":"A"}\n\ndata: {"type":"text","value":"B"}')

        assert [frame.value for frame in frames] == ["A", "B"]

    @pytest.mark.asyncio
    async def test_empty_body(self):
        assert await _collect() == []


class TestEnvelopes:
    """Tests for the request and response envelopes."""

    def test_request_requires_model(self):
        with pytest.raises(ValueError):
            ChatRequest.model_validate({"messages": []})

    def test_request_rejects_empty_model(self):
        with pytest.raises(ValueError):
            ChatRequest.model_validate({"messages": [], "model": ""})

    def test_response_omits_missing_fields(self):
        assert ChatResponse(content="Hi").to_wire() == {"content": "Hi"}
        assert ChatResponse(error="bad").to_wire() == {"error": "bad"}
