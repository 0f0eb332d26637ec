"""Models API facade."""

from __future__ import annotations

from collections.abc import AsyncIterator
from urllib.parse import quote

from anthropic_rest.client.http import Dispatcher, RequestDescriptor
from anthropic_rest.core.models import ListModelsParams, ListModelsResponse, ModelInfo
from anthropic_rest.core.schemas import paginate


class Models:
    """``/models`` endpoints."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(self, params: ListModelsParams | None = None) -> ListModelsResponse:
        return await self._dispatcher.send(
            RequestDescriptor("GET", "/models", query=params, action="list models"),
            ListModelsResponse,
        )

    def iter_all(self, params: ListModelsParams | None = None) -> AsyncIterator[ModelInfo]:
        return paginate(self.list, params or ListModelsParams())

    async def retrieve(self, model_id: str) -> ModelInfo:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                f"/models/{quote(model_id, safe='')}",
                action=f"retrieve model {model_id!r}",
            ),
            ModelInfo,
        )
