"""Message Batches API facade."""

from __future__ import annotations

import builtins
from collections.abc import AsyncIterator
from urllib.parse import quote

from pydantic import TypeAdapter, ValidationError

from anthropic_rest.client.exceptions import DecodeError
from anthropic_rest.client.http import Dispatcher, RequestDescriptor
from anthropic_rest.core.batches import (
    CreateMessageBatchParams,
    DeletedMessageBatch,
    ListMessageBatchesParams,
    ListMessageBatchesResponse,
    MessageBatch,
    MessageBatchResult,
)
from anthropic_rest.core.schemas import paginate

_RESULT_ADAPTER = TypeAdapter(MessageBatchResult)


class MessageBatches:
    """``/messages/batches`` endpoints."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def create(self, params: CreateMessageBatchParams) -> MessageBatch:
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                "/messages/batches",
                body=params,
                action=f"create message batch of {len(params.requests)} requests",
            ),
            MessageBatch,
        )

    async def list(
        self,
        params: ListMessageBatchesParams | None = None,
    ) -> ListMessageBatchesResponse:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                "/messages/batches",
                query=params,
                action="list message batches",
            ),
            ListMessageBatchesResponse,
        )

    def iter_all(
        self,
        params: ListMessageBatchesParams | None = None,
    ) -> AsyncIterator[MessageBatch]:
        """Iterate over every batch, fetching further pages on demand."""
        return paginate(self.list, params or ListMessageBatchesParams())

    async def retrieve(self, batch_id: str) -> MessageBatch:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                f"/messages/batches/{quote(batch_id, safe='')}",
                action=f"retrieve message batch {batch_id!r}",
            ),
            MessageBatch,
        )

    async def results(self, batch_id: str) -> builtins.list[MessageBatchResult]:
        """Fetch the JSONL results file of an ended batch, one entry per request."""
        action = f"retrieve results of message batch {batch_id!r}"
        raw = await self._dispatcher.send_bytes(
            RequestDescriptor(
                "GET",
                f"/messages/batches/{quote(batch_id, safe='')}/results",
                action=action,
            ),
        )
        return _parse_results(raw, action=action)

    async def cancel(self, batch_id: str) -> MessageBatch:
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                f"/messages/batches/{quote(batch_id, safe='')}/cancel",
                action=f"cancel message batch {batch_id!r}",
            ),
            MessageBatch,
        )

    async def delete(self, batch_id: str) -> DeletedMessageBatch:
        return await self._dispatcher.send(
            RequestDescriptor(
                "DELETE",
                f"/messages/batches/{quote(batch_id, safe='')}",
                action=f"delete message batch {batch_id!r}",
            ),
            DeletedMessageBatch,
        )


def _parse_results(raw: bytes, *, action: str) -> list[MessageBatchResult]:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(
            action=action,
            reason=str(exc),
            body=raw.decode("utf-8", errors="replace"),
        ) from exc

    entries: list[MessageBatchResult] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        try:
            entries.append(_RESULT_ADAPTER.validate_json(line))
        except ValidationError as exc:
            raise DecodeError(action=action, reason=str(exc), body=line) from exc
    return entries
