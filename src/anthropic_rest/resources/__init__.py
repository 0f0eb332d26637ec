"""Resource facades grouped by API area."""

from .admin import ApiKeys, Invites, Users, WorkspaceMembers, Workspaces
from .batches import MessageBatches
from .files import Files
from .messages import Messages, collect_text
from .models import Models

__all__ = [
    "ApiKeys",
    "Files",
    "Invites",
    "MessageBatches",
    "Messages",
    "Models",
    "Users",
    "WorkspaceMembers",
    "Workspaces",
    "collect_text",
]
