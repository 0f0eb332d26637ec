"""Shared schema bases, cursor pagination and the API error envelope."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

MIN_PAGE_LIMIT = 1
MAX_PAGE_LIMIT = 1000

ItemT = TypeVar("ItemT")
ParamsT = TypeVar("ParamsT", bound="PageParams")


def clamp_limit(value: int) -> int:
    """Clamp a page size into [1, 1000]. Out-of-range values are not an error."""
    return max(MIN_PAGE_LIMIT, min(MAX_PAGE_LIMIT, value))


def dump_payload(model: BaseModel) -> dict[str, Any]:
    """Return the wire form of a model: JSON-compatible, aliases applied, unset fields dropped."""
    return model.model_dump(mode="json", exclude_none=True, by_alias=True)


class ApiModel(BaseModel):
    """Base for response payloads; unknown fields are kept rather than rejected."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ParamsModel(BaseModel):
    """Base for request parameters sent as JSON bodies or query strings."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return dump_payload(self)


class PageParams(ParamsModel):
    """Cursor pagination shared by every list endpoint."""

    before_id: StrictStr | None = None
    after_id: StrictStr | None = None
    limit: int | None = None

    @field_validator("limit")
    @classmethod
    def clamp_page_limit(cls, value: int | None) -> int | None:
        if value is None:
            return None
        return clamp_limit(value)

    def with_limit(self, limit: int) -> Self:
        return self.model_copy(update={"limit": clamp_limit(limit)})

    def with_before_id(self, before_id: str) -> Self:
        return self.model_copy(update={"before_id": before_id})

    def with_after_id(self, after_id: str) -> Self:
        return self.model_copy(update={"after_id": after_id})


class Page(ApiModel, Generic[ItemT]):
    """List response envelope: ``last_id`` is the cursor for the next page."""

    data: list[ItemT] = Field(default_factory=list)
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False




async def paginate(
    fetch: Callable[[ParamsT], Awaitable[Page[ItemT]]],
    params: ParamsT,
) -> AsyncIterator[ItemT]:
    """Yield every item across pages in the direction the starting cursor points.

    Starting from ``before_id`` walks backward through ``first_id``; otherwise
    each page's ``last_id`` becomes the next ``after_id``. Items keep the order
    the server returns them in within a page.
    """
    backward = params.before_id is not None
    current = params
    while True:
        page = await fetch(current)
        for item in page.data:
            yield item
        cursor = page.first_id if backward else page.last_id
        if not page.has_more or cursor is None:
            return
        if backward:
            current = current.model_copy(update={"before_id": cursor, "after_id": None})
        else:
            current = current.model_copy(update={"after_id": cursor, "before_id": None})


class ErrorDetail(ApiModel):
    """Error payload nested in API error bodies and stream error events."""

    type: str
    message: str


class ErrorResponse(ApiModel):
    """Documented shape of non-2xx bodies, for callers parsing ``ApiError.body``."""

    type: str = "error"
    error: ErrorDetail
