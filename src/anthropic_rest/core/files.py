"""Files API schemas (beta)."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from .schemas import ApiModel, Page, PageParams

FILES_BETA = "files-api-2025-04-14"


class FileMetadata(ApiModel):
    id: str
    type: Literal["file"] = "file"
    filename: str
    mime_type: str
    size_bytes: int
    created_at: datetime
    downloadable: bool = False


class ListFilesParams(PageParams):
    """Query for ``GET /files``. Only one of the two cursors may be set per call."""

    @property
    def has_conflicting_cursors(self) -> bool:
        return self.before_id is not None and self.after_id is not None


ListFilesResponse = Page[FileMetadata]


class DeletedFile(ApiModel):
    id: str
    type: Literal["file_deleted"] = "file_deleted"
