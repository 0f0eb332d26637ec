"""Models API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from .schemas import ApiModel, Page, PageParams


class ModelInfo(ApiModel):
    id: str
    type: Literal["model"] = "model"
    display_name: str
    created_at: datetime


class ListModelsParams(PageParams):
    """Query for ``GET /models``."""


ListModelsResponse = Page[ModelInfo]
