"""Messages API facade: create, count tokens and stream."""

from __future__ import annotations

from anthropic_rest.client.exceptions import StreamPreconditionError
from anthropic_rest.client.http import Dispatcher, RequestDescriptor
from anthropic_rest.client.sse import EventStream
from anthropic_rest.core.messages import (
    ContentBlockDeltaEvent,
    CountMessageTokensParams,
    CountMessageTokensResponse,
    CreateMessageParams,
    CreateMessageResponse,
    StreamEvent,
    TextDelta,
)


class Messages:
    """``/messages`` endpoints."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def create(self, params: CreateMessageParams) -> CreateMessageResponse:
        """Create a message and wait for the complete reply."""
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                "/messages",
                body=params,
                action=f"create message with model {params.model!r}",
            ),
            CreateMessageResponse,
        )

    async def count_tokens(self, params: CountMessageTokensParams) -> CountMessageTokensResponse:
        """Count the input tokens a message request would use."""
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                "/messages/count_tokens",
                body=params,
                action=f"count tokens with model {params.model!r}",
            ),
            CountMessageTokensResponse,
        )

    async def stream(self, params: CreateMessageParams) -> EventStream[StreamEvent]:
        """Create a message and return its server-sent events as they arrive.

        ``params.stream`` must be ``True``; otherwise this raises
        ``StreamPreconditionError`` without touching the network.
        """
        action = f"stream message with model {params.model!r}"
        if params.stream is not True:
            raise StreamPreconditionError(
                action=action,
                detail="stream parameter must be set to true for streaming",
            )
        return await self._dispatcher.stream(
            RequestDescriptor("POST", "/messages", body=params, action=action),
            StreamEvent,
        )


async def collect_text(events: EventStream[StreamEvent]) -> str:
    """Drain a message stream and return the concatenated text deltas."""
    parts: list[str] = []
    async with events:
        async for event in events:
            if isinstance(event, ContentBlockDeltaEvent) and isinstance(event.delta, TextDelta):
                parts.append(event.delta.text)
    return "".join(parts)
