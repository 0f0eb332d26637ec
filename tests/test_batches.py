"""Message Batches facade tests."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
from conftest import make_dispatcher
from pydantic import ValidationError

from anthropic_rest.client import DecodeError
from anthropic_rest.core.batches import (
    CreateMessageBatchParams,
    ErroredResult,
    ListMessageBatchesParams,
    MessageRequest,
    SucceededResult,
)
from anthropic_rest.core.messages import CreateMessageParams, Message
from anthropic_rest.resources import MessageBatches


def _batch(batch_id: str = "msgbatch_01", status: str = "in_progress") -> dict[str, Any]:
    return {
        "id": batch_id,
        "type": "message_batch",
        "processing_status": status,
        "request_counts": {"processing": 1, "succeeded": 0},
        "created_at": "2025-01-01T00:00:00Z",
        "expires_at": "2025-01-02T00:00:00Z",
    }


def _request(custom_id: str) -> MessageRequest:
    return MessageRequest(
        custom_id=custom_id,
        params=CreateMessageParams(
            model="claude-sonnet-4-5",
            max_tokens=64,
            messages=[Message.user("Hi")],
        ),
    )


def test_custom_id_length_is_validated() -> None:
    with pytest.raises(ValidationError):
        _request("")
    with pytest.raises(ValidationError):
        _request("x" * 65)
    assert _request("x" * 64).custom_id == "x" * 64


@pytest.mark.asyncio
async def test_create_batch() -> None:
    seen: dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_batch())

    params = CreateMessageBatchParams(requests=[_request("a"), _request("b")])
    async with make_dispatcher(handler) as dispatcher:
        batch = await MessageBatches(dispatcher).create(params)

    assert seen["path"] == "/v1/messages/batches"
    assert [entry["custom_id"] for entry in seen["body"]["requests"]] == ["a", "b"]
    assert seen["body"]["requests"][0]["params"]["max_tokens"] == 64
    assert batch.processing_status == "in_progress"


@pytest.mark.asyncio
async def test_list_sends_cursor_and_clamped_limit() -> None:
    seen: dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(
            200,
            json={
                "data": [_batch("msgbatch_02")],
                "first_id": "msgbatch_02",
                "last_id": "msgbatch_02",
                "has_more": True,
            },
        )

    params = ListMessageBatchesParams(before_id="msgbatch_09").with_limit(0)
    async with make_dispatcher(handler) as dispatcher:
        page = await MessageBatches(dispatcher).list(params)

    assert seen["params"] == {"before_id": "msgbatch_09", "limit": "1"}
    assert page.has_more is True
    assert page.data[0].id == "msgbatch_02"


@pytest.mark.asyncio
async def test_iter_all_follows_last_id() -> None:
    cursors: list[str | None] = []
    pages = {
        None: {"data": [_batch("b1"), _batch("b2")], "last_id": "b2", "has_more": True},
        "b2": {"data": [_batch("b3")], "last_id": "b3", "has_more": False},
    }

    def handler(request: httpx.Request) -> httpx.Response:
        after_id = request.url.params.get("after_id")
        cursors.append(after_id)
        return httpx.Response(200, json=pages[after_id])

    async with make_dispatcher(handler) as dispatcher:
        ids = [batch.id async for batch in MessageBatches(dispatcher).iter_all()]

    assert ids == ["b1", "b2", "b3"]
    assert cursors == [None, "b2"]


@pytest.mark.asyncio
async def test_retrieve_cancel_and_delete_paths() -> None:
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.raw_path.decode()))
        if request.method == "DELETE":
            return httpx.Response(200, json={"id": "msgbatch_01", "type": "message_batch_deleted"})
        return httpx.Response(200, json=_batch(status="canceling"))

    async with make_dispatcher(handler) as dispatcher:
        batches = MessageBatches(dispatcher)
        retrieved = await batches.retrieve("msgbatch_01")
        canceled = await batches.cancel("msgbatch_01")
        deleted = await batches.delete("msgbatch/01")

    assert retrieved.id == "msgbatch_01"
    assert canceled.processing_status == "canceling"
    assert deleted.type == "message_batch_deleted"
    assert seen == [
        ("GET", "/v1/messages/batches/msgbatch_01"),
        ("POST", "/v1/messages/batches/msgbatch_01/cancel"),
        ("DELETE", "/v1/messages/batches/msgbatch%2F01"),
    ]


@pytest.mark.asyncio
async def test_results_parses_jsonl_lines() -> None:
    succeeded = {
        "custom_id": "a",
        "result": {
            "type": "succeeded",
            "message": {
                "id": "msg_01",
                "model": "claude-sonnet-4-5",
                "content": [{"type": "text", "text": "ok"}],
            },
        },
    }
    errored = {
        "custom_id": "b",
        "result": {
            "type": "errored",
            "error": {"type": "error", "error": {"type": "invalid_request_error", "message": "x"}},
        },
    }
    body = f"{json.dumps(succeeded)}\n\n{json.dumps(errored)}\n".encode()

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/messages/batches/msgbatch_01/results"
        return httpx.Response(200, content=body)

    async with make_dispatcher(handler) as dispatcher:
        results = await MessageBatches(dispatcher).results("msgbatch_01")

    assert [entry.custom_id for entry in results] == ["a", "b"]
    assert isinstance(results[0].result, SucceededResult)
    assert results[0].result.message.text == "ok"
    assert isinstance(results[1].result, ErroredResult)
    assert results[1].result.error.error.type == "invalid_request_error"


@pytest.mark.asyncio
async def test_results_with_malformed_line_raises_decode_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b'{"custom_id": "a", "result": {"type": "odd"}}\n')

    async with make_dispatcher(handler) as dispatcher:
        with pytest.raises(DecodeError) as exc_info:
            await MessageBatches(dispatcher).results("msgbatch_01")

    assert '"type": "odd"' in exc_info.value.body


def _cursor_server(ids: list[str]):
    """List endpoint over ``ids`` in ascending order honouring both cursors."""
    seen: list[dict[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        query = dict(request.url.params)
        seen.append(query)
        limit = int(query.get("limit", "20"))
        if "before_id" in query:
            end = ids.index(query["before_id"])
            start = max(0, end - limit)
            has_more = start > 0
        else:
            start = ids.index(query["after_id"]) + 1 if "after_id" in query else 0
            end = min(len(ids), start + limit)
            has_more = end < len(ids)
        window = ids[start:end]
        return httpx.Response(
            200,
            json={
                "data": [_batch(batch_id) for batch_id in window],
                "first_id": window[0] if window else None,
                "last_id": window[-1] if window else None,
                "has_more": has_more,
            },
        )

    return handler, seen


@pytest.mark.asyncio
async def test_iter_all_from_before_id_only_yields_older_batches() -> None:
    handler, seen = _cursor_server([f"b{index}" for index in range(10)])

    params = ListMessageBatchesParams(before_id="b6", limit=2)
    async with make_dispatcher(handler) as dispatcher:
        ids = [batch.id async for batch in MessageBatches(dispatcher).iter_all(params)]

    assert ids == ["b4", "b5", "b2", "b3", "b0", "b1"]
    assert seen == [
        {"before_id": "b6", "limit": "2"},
        {"before_id": "b4", "limit": "2"},
        {"before_id": "b2", "limit": "2"},
    ]


@pytest.mark.asyncio
async def test_iter_all_from_after_id_only_yields_newer_batches() -> None:
    handler, seen = _cursor_server([f"b{index}" for index in range(10)])

    params = ListMessageBatchesParams(after_id="b5", limit=3)
    async with make_dispatcher(handler) as dispatcher:
        ids = [batch.id async for batch in MessageBatches(dispatcher).iter_all(params)]

    assert ids == ["b6", "b7", "b8", "b9"]
    assert [query.get("after_id") for query in seen] == ["b5", "b8"]
    assert all("before_id" not in query for query in seen)
