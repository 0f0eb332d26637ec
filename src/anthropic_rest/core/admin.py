"""Admin API schemas: organization users, workspaces, members, invites and API keys."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import StrictBool, StrictStr

from .schemas import ApiModel, Page, PageParams, ParamsModel

UserRole = Literal["user", "developer", "billing", "admin"]
WorkspaceRole = Literal[
    "workspace_user",
    "workspace_developer",
    "workspace_admin",
    "workspace_billing",
]
InviteStatus = Literal["accepted", "expired", "deleted", "pending"]
ApiKeyStatus = Literal["active", "inactive", "archived"]


# Users


class OrganizationUser(ApiModel):
    id: str
    type: Literal["user"] = "user"
    email: str
    name: str
    role: UserRole
    added_at: datetime


class ListUsersParams(PageParams):
    email: StrictStr | None = None


ListUsersResponse = Page[OrganizationUser]


class UpdateUserParams(ParamsModel):
    role: UserRole


class DeletedUser(ApiModel):
    id: str
    type: Literal["user_deleted"] = "user_deleted"


# Workspaces


class Workspace(ApiModel):
    id: str
    type: Literal["workspace"] = "workspace"
    name: str
    display_color: str | None = None
    created_at: datetime
    archived_at: datetime | None = None


class ListWorkspacesParams(PageParams):
    include_archived: StrictBool | None = None


ListWorkspacesResponse = Page[Workspace]


class CreateWorkspaceParams(ParamsModel):
    name: StrictStr


class UpdateWorkspaceParams(ParamsModel):
    name: StrictStr


# Workspace members


class WorkspaceMember(ApiModel):
    type: Literal["workspace_member"] = "workspace_member"
    user_id: str
    workspace_id: str
    workspace_role: WorkspaceRole


class ListWorkspaceMembersParams(PageParams):
    """Query for ``GET /organizations/workspaces/{id}/members``."""


ListWorkspaceMembersResponse = Page[WorkspaceMember]


class AddWorkspaceMemberParams(ParamsModel):
    user_id: StrictStr
    workspace_role: WorkspaceRole


class UpdateWorkspaceMemberParams(ParamsModel):
    workspace_role: WorkspaceRole


class DeletedWorkspaceMember(ApiModel):
    type: Literal["workspace_member_deleted"] = "workspace_member_deleted"
    user_id: str
    workspace_id: str


# Invites


class Invite(ApiModel):
    id: str
    type: Literal["invite"] = "invite"
    email: str
    role: UserRole
    status: InviteStatus
    invited_at: datetime
    expires_at: datetime


class ListInvitesParams(PageParams):
    """Query for ``GET /organizations/invites``."""


ListInvitesResponse = Page[Invite]


class CreateInviteParams(ParamsModel):
    email: StrictStr
    role: UserRole


class DeletedInvite(ApiModel):
    id: str
    type: Literal["invite_deleted"] = "invite_deleted"


# API keys


class ApiKeyCreator(ApiModel):
    id: str
    type: str


class ApiKey(ApiModel):
    id: str
    type: Literal["api_key"] = "api_key"
    name: str
    status: ApiKeyStatus
    created_at: datetime
    created_by: ApiKeyCreator | None = None
    partial_key_hint: str | None = None
    workspace_id: str | None = None


class ListApiKeysParams(PageParams):
    workspace_id: StrictStr | None = None
    status: ApiKeyStatus | None = None
    created_by_user_id: StrictStr | None = None


ListApiKeysResponse = Page[ApiKey]


class UpdateApiKeyParams(ParamsModel):
    name: StrictStr | None = None
    status: ApiKeyStatus | None = None
