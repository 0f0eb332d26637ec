"""Pytest configuration for anthropic-rest tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable

import httpx
import pytest

from anthropic_rest.client.http import ClientIdentity, HttpDispatcher

TEST_BASE_URL = "http://api.test/v1"
TEST_API_KEY = "sk-test"


class ChunkedStream(httpx.AsyncByteStream):
    """Response body that yields fixed chunks and optionally fails afterwards."""

    def __init__(self, chunks: Iterable[bytes], *, error: Exception | None = None) -> None:
        self._chunks = list(chunks)
        self._error = error

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self._chunks:
            yield chunk
        if self._error is not None:
            raise self._error


def make_dispatcher(handler, *, api_key: str = TEST_API_KEY) -> HttpDispatcher:
    identity = ClientIdentity(
        api_key=api_key,
        base_url=TEST_BASE_URL,
        transport=httpx.MockTransport(handler),
    )
    return HttpDispatcher(identity)


@pytest.fixture(autouse=True)
def _clear_anthropic_env(monkeypatch) -> None:
    """Keep developer credentials out of settings resolution."""
    for name in (
        "ANTHROPIC_API_KEY",
        "ANTHROPIC_ADMIN_KEY",
        "ANTHROPIC_API_VERSION",
        "ANTHROPIC_BASE_URL",
        "ANTHROPIC_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
