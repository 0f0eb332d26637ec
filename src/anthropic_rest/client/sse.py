"""Server-sent event reframing and typed decoding for streaming responses."""

from __future__ import annotations

import codecs
import logging
import re
from collections import deque
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from .exceptions import RequestTimeoutError, StreamDecodeError, TransportError

logger = logging.getLogger(__name__)

E = TypeVar("E")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True)
class ServerSentEvent:
    """One complete frame reassembled from the wire."""

    data: str
    event: str | None = None
    id: str | None = None
    retry: int | None = None


class SSEDecoder:
    """Incremental reframer turning raw byte chunks into complete SSE frames.

    Chunk boundaries may fall anywhere: inside a UTF-8 sequence, inside a
    ``\\r\\n`` pair or in the middle of a field. A frame is only emitted once
    the blank line that terminates it has been seen.
    """

    def __init__(self) -> None:
        self._text = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._partial_line = ""
        self._skip_lf = False
        self._event: str | None = None
        self._data_lines: list[str] = []
        self._last_id: str | None = None
        self._retry: int | None = None

    def feed(self, chunk: bytes) -> list[ServerSentEvent]:
        """Consume one chunk and return every frame it completed, in wire order."""
        return self._consume(self._text.decode(chunk))

    def flush(self) -> list[ServerSentEvent]:
        """Signal end of input. An unterminated trailing frame is discarded."""
        frames = self._consume(self._text.decode(b"", final=True))
        if self._partial_line or self._data_lines:
            logger.debug("discarding unterminated SSE frame at end of stream")
        self._partial_line = ""
        self._skip_lf = False
        self._reset_frame()
        return frames

    def _consume(self, text: str) -> list[ServerSentEvent]:
        if not text:
            return []
        if self._skip_lf:
            # previous chunk ended on "\r"; a leading "\n" belongs to that break
            self._skip_lf = False
            if text.startswith("\n"):
                text = text[1:]

        buffer = self._partial_line + text
        frames: list[ServerSentEvent] = []
        position = 0
        for match in _LINE_BREAK.finditer(buffer):
            frame = self._process_line(buffer[position : match.start()])
            if frame is not None:
                frames.append(frame)
            position = match.end()

        if position == len(buffer) and buffer.endswith("\r"):
            self._skip_lf = True
        self._partial_line = buffer[position:]
        return frames

    def _process_line(self, line: str) -> ServerSentEvent | None:
        if not line:
            return self._dispatch()
        if line.startswith(":"):
            return None

        name, separator, value = line.partition(":")
        if separator and value.startswith(" "):
            value = value[1:]

        if name == "event":
            self._event = value
        elif name == "data":
            self._data_lines.append(value)
        elif name == "id":
            if "\0" not in value:
                self._last_id = value
        elif name == "retry":
            if value.isdigit():
                self._retry = int(value)
        return None

    def _dispatch(self) -> ServerSentEvent | None:
        if not self._data_lines:
            self._event = None
            return None
        frame = ServerSentEvent(
            data="\n".join(self._data_lines),
            event=self._event or None,
            id=self._last_id,
            retry=self._retry,
        )
        self._reset_frame()
        return frame

    def _reset_frame(self) -> None:
        self._event = None
        self._data_lines = []
        self._retry = None


class StreamState(Enum):
    """Lifecycle of one event stream."""

    ACCUMULATING = "accumulating"
    FRAME_READY = "frame_ready"
    FAILED = "failed"
    CLOSED = "closed"


class EventStream(Generic[E]):
    """Lazy, single-pass sequence of typed events decoded from an SSE body.

    Iteration yields decoded events in wire order. A transport failure or a
    frame that does not match ``event_type`` is raised once, after which the
    stream is ``FAILED`` and iteration simply ends. The underlying response
    is released as soon as the stream reaches a terminal state, or on
    ``aclose()`` / ``async with`` exit when the consumer stops early.

    Usage::

        async with await client.messages.stream(params) as events:
            async for event in events:
                ...
    """

    def __init__(
        self,
        chunks: AsyncIterator[bytes],
        event_type: Any,
        *,
        action: str,
        on_close: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self._chunks = chunks
        self._adapter: TypeAdapter[E] = TypeAdapter(event_type)
        self._action = action
        self._on_close = on_close
        self._decoder = SSEDecoder()
        self._frames: deque[ServerSentEvent] = deque()
        self._state = StreamState.ACCUMULATING
        self._released = False

    @property
    def state(self) -> StreamState:
        return self._state

    def __aiter__(self) -> EventStream[E]:
        return self

    async def __anext__(self) -> E:
        while True:
            if self._state in {StreamState.FAILED, StreamState.CLOSED}:
                raise StopAsyncIteration

            if self._frames:
                self._state = StreamState.FRAME_READY
                return await self._decode(self._frames.popleft())

            self._state = StreamState.ACCUMULATING
            try:
                chunk = await self._chunks.__anext__()
            except StopAsyncIteration:
                self._frames.extend(self._decoder.flush())
                if self._frames:
                    continue
                await self._finish(StreamState.CLOSED)
                raise StopAsyncIteration from None
            except httpx.TimeoutException as exc:
                await self._finish(StreamState.FAILED)
                raise RequestTimeoutError(action=self._action, detail=str(exc)) from exc
            except httpx.HTTPError as exc:
                await self._finish(StreamState.FAILED)
                raise TransportError(action=self._action, detail=str(exc)) from exc

            self._frames.extend(self._decoder.feed(chunk))

    async def aclose(self) -> None:
        """Stop consuming and release the underlying response."""
        if self._state not in {StreamState.FAILED, StreamState.CLOSED}:
            self._state = StreamState.CLOSED
        self._frames.clear()
        await self._release()

    async def __aenter__(self) -> EventStream[E]:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def _decode(self, frame: ServerSentEvent) -> E:
        try:
            event = self._adapter.validate_json(frame.data)
        except ValidationError as exc:
            await self._finish(StreamState.FAILED)
            raise StreamDecodeError(
                action=self._action,
                reason=str(exc),
                payload=frame.data,
            ) from exc
        self._state = StreamState.ACCUMULATING
        return event

    async def _finish(self, state: StreamState) -> None:
        self._state = state
        self._frames.clear()
        await self._release()

    async def _release(self) -> None:
        if self._released:
            return
        self._released = True
        logger.debug("releasing event stream for %s (state=%s)", self._action, self._state.value)
        if self._on_close is not None:
            await self._on_close()
