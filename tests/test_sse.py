"""SSE reframing and typed event stream tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest

from anthropic_rest.client import (
    EventStream,
    ServerSentEvent,
    SSEDecoder,
    StreamDecodeError,
    StreamState,
    TransportError,
)
from anthropic_rest.client.exceptions import RequestTimeoutError
from anthropic_rest.core.messages import MessageStopEvent, PingEvent, StreamEvent


async def _chunks(*chunks: bytes, error: Exception | None = None) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk
    if error is not None:
        raise error


class _CloseTracker:
    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self) -> None:
        self.calls += 1


def _stream(*chunks: bytes, error: Exception | None = None) -> tuple[EventStream, _CloseTracker]:
    tracker = _CloseTracker()
    stream = EventStream(
        _chunks(*chunks, error=error),
        StreamEvent,
        action="stream message",
        on_close=tracker,
    )
    return stream, tracker


def test_decoder_reassembles_frame_split_across_chunks() -> None:
    decoder = SSEDecoder()

    assert decoder.feed(b'event: ping\ndata: {"ty') == []
    assert decoder.feed(b'pe": "ping"}\n') == []
    frames = decoder.feed(b"\n")

    assert frames == [ServerSentEvent(data='{"type": "ping"}', event="ping")]


def test_decoder_emits_frames_in_wire_order() -> None:
    decoder = SSEDecoder()

    frames = decoder.feed(b"data: one\n\ndata: two\n\ndata: thr")
    frames += decoder.feed(b"ee\n\n")

    assert [frame.data for frame in frames] == ["one", "two", "three"]


def test_decoder_handles_crlf_split_between_chunks() -> None:
    decoder = SSEDecoder()

    assert decoder.feed(b"data: a\r") == []
    frames = decoder.feed(b"\ndata: b\r\n\r\n")

    assert [frame.data for frame in frames] == ["a\nb"]


def test_decoder_accepts_bare_carriage_returns() -> None:
    decoder = SSEDecoder()

    frames = decoder.feed(b"event: x\rdata: 1\r\r")

    assert frames == [ServerSentEvent(data="1", event="x")]


def test_decoder_reassembles_multibyte_utf8_split_across_chunks() -> None:
    decoder = SSEDecoder()
    encoded = "data: café\n\n".encode()
    split = encoded.index(b"\xa9")

    assert decoder.feed(encoded[:split]) == []
    frames = decoder.feed(encoded[split:])

    assert [frame.data for frame in frames] == ["café"]


def test_decoder_ignores_comments_and_frames_without_data() -> None:
    decoder = SSEDecoder()

    frames = decoder.feed(b": keep-alive\n\nevent: ping\n\nretry: 3000\ndata: x\n\n")

    assert frames == [ServerSentEvent(data="x", retry=3000)]


def test_decoder_joins_multiple_data_lines_and_keeps_last_id() -> None:
    decoder = SSEDecoder()

    frames = decoder.feed(b"id: 7\ndata: first\ndata:second\n\ndata: third\n\n")

    assert frames[0] == ServerSentEvent(data="first\nsecond", id="7")
    assert frames[1].id == "7"


def test_decoder_flush_discards_unterminated_frame() -> None:
    decoder = SSEDecoder()

    assert decoder.feed(b"data: complete\n\ndata: partial\n") != []
    assert decoder.flush() == []

    decoder = SSEDecoder()
    decoder.feed(b"data: no newline at all")
    assert decoder.flush() == []


@pytest.mark.asyncio
async def test_event_stream_yields_typed_events_and_closes() -> None:
    stream, tracker = _stream(
        b'event: ping\ndata: {"type":"ping"}\n\n',
        b'data: {"type":"ping"}\n\ndata: {"type":"message_stop"}\n\n',
    )

    events = [event async for event in stream]

    assert [type(event) for event in events] == [PingEvent, PingEvent, MessageStopEvent]
    assert stream.state is StreamState.CLOSED
    assert tracker.calls == 1


@pytest.mark.asyncio
async def test_event_stream_surfaces_transport_failure_once() -> None:
    stream, tracker = _stream(
        b'data: {"type":"ping"}\n\n',
        b'data: {"type":"ping"}\n\n',
        error=httpx.ReadError("connection reset"),
    )
    received = []

    with pytest.raises(TransportError):
        async for event in stream:
            received.append(event)

    assert len(received) == 2
    assert stream.state is StreamState.FAILED
    assert [event async for event in stream] == []
    assert tracker.calls == 1


@pytest.mark.asyncio
async def test_event_stream_maps_read_timeout() -> None:
    stream, _ = _stream(error=httpx.ReadTimeout("idle"))

    with pytest.raises(RequestTimeoutError):
        await stream.__anext__()


@pytest.mark.asyncio
async def test_event_stream_stops_at_first_malformed_frame() -> None:
    stream, tracker = _stream(
        b'data: {"type":"ping"}\n\n',
        b"data: {not json\n\n",
        b'data: {"type":"message_stop"}\n\n',
    )

    first = await stream.__anext__()
    with pytest.raises(StreamDecodeError) as exc_info:
        await stream.__anext__()

    assert isinstance(first, PingEvent)
    assert exc_info.value.payload == "{not json"
    assert "Event data: {not json" in str(exc_info.value)
    assert [event async for event in stream] == []
    assert stream.state is StreamState.FAILED
    assert tracker.calls == 1


@pytest.mark.asyncio
async def test_event_stream_rejects_unknown_event_type() -> None:
    stream, _ = _stream(b'data: {"type":"surprise"}\n\n')

    with pytest.raises(StreamDecodeError):
        await stream.__anext__()


@pytest.mark.asyncio
async def test_event_stream_discards_trailing_partial_frame() -> None:
    stream, _ = _stream(b'data: {"type":"ping"}\n\ndata: {"type":"ping"}')

    events = [event async for event in stream]

    assert len(events) == 1
    assert stream.state is StreamState.CLOSED


@pytest.mark.asyncio
async def test_early_close_releases_response_once() -> None:
    stream, tracker = _stream(b'data: {"type":"ping"}\n\n', b'data: {"type":"ping"}\n\n')

    async with stream:
        await stream.__anext__()

    await stream.aclose()
    assert stream.state is StreamState.CLOSED
    assert tracker.calls == 1
    assert [event async for event in stream] == []
