"""Files API facade. Every call carries the files beta header."""

from __future__ import annotations

from collections.abc import AsyncIterator
from urllib.parse import quote

from anthropic_rest.client.exceptions import InvalidRequestError
from anthropic_rest.client.http import Dispatcher, RequestDescriptor
from anthropic_rest.core.files import (
    FILES_BETA,
    DeletedFile,
    FileMetadata,
    ListFilesParams,
    ListFilesResponse,
)
from anthropic_rest.core.schemas import paginate

DEFAULT_MIME_TYPE = "application/octet-stream"


class Files:
    """``/files`` endpoints."""

    def __init__(self, dispatcher: Dispatcher, *, beta: str = FILES_BETA) -> None:
        self._dispatcher = dispatcher
        self._beta = beta

    async def list(self, params: ListFilesParams | None = None) -> ListFilesResponse:
        if params is not None and params.has_conflicting_cursors:
            raise InvalidRequestError(
                action="list files",
                detail="before_id and after_id cannot be used together",
            )
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                "/files",
                query=params,
                beta=self._beta,
                action="list files",
            ),
            ListFilesResponse,
        )

    def iter_all(self, params: ListFilesParams | None = None) -> AsyncIterator[FileMetadata]:
        """Iterate over every uploaded file, fetching further pages on demand."""
        return paginate(self.list, params or ListFilesParams())

    async def retrieve(self, file_id: str) -> FileMetadata:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                f"/files/{quote(file_id, safe='')}",
                beta=self._beta,
                action=f"get metadata of file {file_id!r}",
            ),
            FileMetadata,
        )

    async def upload(
        self,
        filename: str,
        content: bytes,
        *,
        mime_type: str = DEFAULT_MIME_TYPE,
    ) -> FileMetadata:
        """Upload raw bytes as a new file."""
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                "/files",
                files={"file": (filename, content, mime_type)},
                beta=self._beta,
                action=f"upload file {filename!r}",
            ),
            FileMetadata,
        )

    async def download(self, file_id: str) -> bytes:
        """Download the content of a downloadable file."""
        return await self._dispatcher.send_bytes(
            RequestDescriptor(
                "GET",
                f"/files/{quote(file_id, safe='')}/content",
                beta=self._beta,
                action=f"download file {file_id!r}",
            ),
        )

    async def delete(self, file_id: str) -> DeletedFile:
        return await self._dispatcher.send(
            RequestDescriptor(
                "DELETE",
                f"/files/{quote(file_id, safe='')}",
                beta=self._beta,
                action=f"delete file {file_id!r}",
            ),
            DeletedFile,
        )
