"""Admin API facades for organization resources. Require an admin credential."""

from __future__ import annotations

from collections.abc import AsyncIterator
from urllib.parse import quote

from anthropic_rest.client.http import Dispatcher, RequestDescriptor
from anthropic_rest.core.admin import (
    AddWorkspaceMemberParams,
    ApiKey,
    CreateInviteParams,
    CreateWorkspaceParams,
    DeletedInvite,
    DeletedUser,
    DeletedWorkspaceMember,
    Invite,
    ListApiKeysParams,
    ListApiKeysResponse,
    ListInvitesParams,
    ListInvitesResponse,
    ListUsersParams,
    ListUsersResponse,
    ListWorkspaceMembersParams,
    ListWorkspaceMembersResponse,
    ListWorkspacesParams,
    ListWorkspacesResponse,
    OrganizationUser,
    UpdateApiKeyParams,
    UpdateUserParams,
    UpdateWorkspaceMemberParams,
    UpdateWorkspaceParams,
    Workspace,
    WorkspaceMember,
)
from anthropic_rest.core.schemas import paginate


def _segment(value: str) -> str:
    return quote(value, safe="")


class Users:
    """``/organizations/users`` endpoints."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(self, params: ListUsersParams | None = None) -> ListUsersResponse:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                "/organizations/users",
                query=params,
                action="list organization users",
            ),
            ListUsersResponse,
        )

    def iter_all(self, params: ListUsersParams | None = None) -> AsyncIterator[OrganizationUser]:
        return paginate(self.list, params or ListUsersParams())

    async def retrieve(self, user_id: str) -> OrganizationUser:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                f"/organizations/users/{_segment(user_id)}",
                action=f"get user {user_id!r}",
            ),
            OrganizationUser,
        )

    async def update(self, user_id: str, params: UpdateUserParams) -> OrganizationUser:
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                f"/organizations/users/{_segment(user_id)}",
                body=params,
                action=f"update user {user_id!r}",
            ),
            OrganizationUser,
        )

    async def delete(self, user_id: str) -> DeletedUser:
        return await self._dispatcher.send(
            RequestDescriptor(
                "DELETE",
                f"/organizations/users/{_segment(user_id)}",
                action=f"delete user {user_id!r}",
            ),
            DeletedUser,
        )


class Workspaces:
    """``/organizations/workspaces`` endpoints."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(self, params: ListWorkspacesParams | None = None) -> ListWorkspacesResponse:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                "/organizations/workspaces",
                query=params,
                action="list workspaces",
            ),
            ListWorkspacesResponse,
        )

    def iter_all(self, params: ListWorkspacesParams | None = None) -> AsyncIterator[Workspace]:
        return paginate(self.list, params or ListWorkspacesParams())

    async def retrieve(self, workspace_id: str) -> Workspace:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                f"/organizations/workspaces/{_segment(workspace_id)}",
                action=f"get workspace {workspace_id!r}",
            ),
            Workspace,
        )

    async def create(self, params: CreateWorkspaceParams) -> Workspace:
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                "/organizations/workspaces",
                body=params,
                action=f"create workspace {params.name!r}",
            ),
            Workspace,
        )

    async def update(self, workspace_id: str, params: UpdateWorkspaceParams) -> Workspace:
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                f"/organizations/workspaces/{_segment(workspace_id)}",
                body=params,
                action=f"update workspace {workspace_id!r}",
            ),
            Workspace,
        )

    async def archive(self, workspace_id: str) -> Workspace:
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                f"/organizations/workspaces/{_segment(workspace_id)}/archive",
                action=f"archive workspace {workspace_id!r}",
            ),
            Workspace,
        )


class WorkspaceMembers:
    """``/organizations/workspaces/{workspace_id}/members`` endpoints."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(
        self,
        workspace_id: str,
        params: ListWorkspaceMembersParams | None = None,
    ) -> ListWorkspaceMembersResponse:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                f"/organizations/workspaces/{_segment(workspace_id)}/members",
                query=params,
                action=f"list members of workspace {workspace_id!r}",
            ),
            ListWorkspaceMembersResponse,
        )

    async def retrieve(self, workspace_id: str, user_id: str) -> WorkspaceMember:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                f"/organizations/workspaces/{_segment(workspace_id)}/members/{_segment(user_id)}",
                action=f"get member {user_id!r} of workspace {workspace_id!r}",
            ),
            WorkspaceMember,
        )

    async def add(self, workspace_id: str, params: AddWorkspaceMemberParams) -> WorkspaceMember:
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                f"/organizations/workspaces/{_segment(workspace_id)}/members",
                body=params,
                action=f"add member {params.user_id!r} to workspace {workspace_id!r}",
            ),
            WorkspaceMember,
        )

    async def update(
        self,
        workspace_id: str,
        user_id: str,
        params: UpdateWorkspaceMemberParams,
    ) -> WorkspaceMember:
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                f"/organizations/workspaces/{_segment(workspace_id)}/members/{_segment(user_id)}",
                body=params,
                action=f"update member {user_id!r} of workspace {workspace_id!r}",
            ),
            WorkspaceMember,
        )

    async def delete(self, workspace_id: str, user_id: str) -> DeletedWorkspaceMember:
        return await self._dispatcher.send(
            RequestDescriptor(
                "DELETE",
                f"/organizations/workspaces/{_segment(workspace_id)}/members/{_segment(user_id)}",
                action=f"remove member {user_id!r} from workspace {workspace_id!r}",
            ),
            DeletedWorkspaceMember,
        )


class Invites:
    """``/organizations/invites`` endpoints."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(self, params: ListInvitesParams | None = None) -> ListInvitesResponse:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                "/organizations/invites",
                query=params,
                action="list invites",
            ),
            ListInvitesResponse,
        )

    async def create(self, params: CreateInviteParams) -> Invite:
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                "/organizations/invites",
                body=params,
                action=f"invite {params.email!r}",
            ),
            Invite,
        )

    async def retrieve(self, invite_id: str) -> Invite:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                f"/organizations/invites/{_segment(invite_id)}",
                action=f"get invite {invite_id!r}",
            ),
            Invite,
        )

    async def delete(self, invite_id: str) -> DeletedInvite:
        return await self._dispatcher.send(
            RequestDescriptor(
                "DELETE",
                f"/organizations/invites/{_segment(invite_id)}",
                action=f"delete invite {invite_id!r}",
            ),
            DeletedInvite,
        )


class ApiKeys:
    """``/organizations/api_keys`` endpoints."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(self, params: ListApiKeysParams | None = None) -> ListApiKeysResponse:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                "/organizations/api_keys",
                query=params,
                action="list API keys",
            ),
            ListApiKeysResponse,
        )

    async def retrieve(self, api_key_id: str) -> ApiKey:
        return await self._dispatcher.send(
            RequestDescriptor(
                "GET",
                f"/organizations/api_keys/{_segment(api_key_id)}",
                action=f"get API key {api_key_id!r}",
            ),
            ApiKey,
        )

    async def update(self, api_key_id: str, params: UpdateApiKeyParams) -> ApiKey:
        return await self._dispatcher.send(
            RequestDescriptor(
                "POST",
                f"/organizations/api_keys/{_segment(api_key_id)}",
                body=params,
                action=f"update API key {api_key_id!r}",
            ),
            ApiKey,
        )
