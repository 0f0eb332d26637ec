"""Message Batches API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import Field, StrictStr

from .messages import CreateMessageParams, CreateMessageResponse
from .schemas import ApiModel, ErrorResponse, Page, PageParams, ParamsModel

ProcessingStatus = Literal["in_progress", "canceling", "ended"]


class MessageRequest(ParamsModel):
    """One entry of a batch: a caller-chosen id plus ordinary message params."""

    custom_id: Annotated[StrictStr, Field(min_length=1, max_length=64)]
    params: CreateMessageParams


class CreateMessageBatchParams(ParamsModel):
    requests: list[MessageRequest] = Field(min_length=1)


class RequestCounts(ApiModel):
    processing: int = 0
    succeeded: int = 0
    errored: int = 0
    canceled: int = 0
    expired: int = 0


class MessageBatch(ApiModel):
    id: str
    type: Literal["message_batch"] = "message_batch"
    processing_status: ProcessingStatus
    request_counts: RequestCounts = Field(default_factory=RequestCounts)
    created_at: datetime
    expires_at: datetime | None = None
    ended_at: datetime | None = None
    archived_at: datetime | None = None
    cancel_initiated_at: datetime | None = None
    results_url: str | None = None


class ListMessageBatchesParams(PageParams):
    """Query for ``GET /messages/batches``."""


ListMessageBatchesResponse = Page[MessageBatch]


class DeletedMessageBatch(ApiModel):
    id: str
    type: Literal["message_batch_deleted"] = "message_batch_deleted"


class SucceededResult(ApiModel):
    type: Literal["succeeded"] = "succeeded"
    message: CreateMessageResponse


class ErroredResult(ApiModel):
    type: Literal["errored"] = "errored"
    error: ErrorResponse


class CanceledResult(ApiModel):
    type: Literal["canceled"] = "canceled"


class ExpiredResult(ApiModel):
    type: Literal["expired"] = "expired"


BatchResult = Annotated[
    SucceededResult | ErroredResult | CanceledResult | ExpiredResult,
    Field(discriminator="type"),
]


class MessageBatchResult(ApiModel):
    """One line of the JSONL results file."""

    custom_id: str
    result: BatchResult
