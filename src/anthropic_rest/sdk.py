"""Top-level clients wiring one dispatcher to the resource facades."""

from __future__ import annotations

import httpx

from anthropic_rest.client.http import ClientIdentity, Dispatcher, HttpDispatcher
from anthropic_rest.core.config import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    ClientSettings,
    require_api_key,
)
from anthropic_rest.resources import (
    ApiKeys,
    Files,
    Invites,
    MessageBatches,
    Messages,
    Models,
    Users,
    WorkspaceMembers,
    Workspaces,
)


class _BaseClient:
    def __init__(
        self,
        api_key: str,
        *,
        api_version: str = DEFAULT_API_VERSION,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        if dispatcher is None:
            self._owned: HttpDispatcher | None = HttpDispatcher(
                ClientIdentity(
                    api_key=api_key,
                    api_version=api_version,
                    base_url=base_url,
                    transport=transport,
                    timeout=timeout,
                ),
            )
            dispatcher = self._owned
        else:
            self._owned = None
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owned is not None:
            await self._owned.aclose()


class AsyncAnthropicClient(_BaseClient):
    """Client for the standard API: messages, batches, files and models.

    Example:
        >>> async with AsyncAnthropicClient("sk-ant-...") as client:
        ...     reply = await client.messages.create(params)
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_version: str = DEFAULT_API_VERSION,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        super().__init__(
            api_key,
            api_version=api_version,
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            dispatcher=dispatcher,
        )
        self.messages = Messages(self._dispatcher)
        self.batches = MessageBatches(self._dispatcher)
        self.files = Files(self._dispatcher)
        self.models = Models(self._dispatcher)

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AsyncAnthropicClient:
        return cls(
            require_api_key(settings),
            api_version=settings.api_version,
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> AsyncAnthropicClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()


class AsyncAdminClient(_BaseClient):
    """Client for the organization Admin API. Needs an admin credential."""

    def __init__(
        self,
        admin_api_key: str,
        *,
        api_version: str = DEFAULT_API_VERSION,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        super().__init__(
            admin_api_key,
            api_version=api_version,
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            dispatcher=dispatcher,
        )
        self.users = Users(self._dispatcher)
        self.workspaces = Workspaces(self._dispatcher)
        self.workspace_members = WorkspaceMembers(self._dispatcher)
        self.invites = Invites(self._dispatcher)
        self.api_keys = ApiKeys(self._dispatcher)

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AsyncAdminClient:
        return cls(
            require_api_key(settings, admin=True),
            api_version=settings.api_version,
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> AsyncAdminClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
