"""Stored entities: workspaces, tasks and meeting transcripts."""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field

TaskType = Literal["todo", "reminder", "milestone", "ticket"]
TaskStatus = Literal["active", "completed", "archived"]
TaskPriority = Literal["high", "medium", "low"]
WorkspaceRole = Literal["owner", "member", "viewer"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Workspace(BaseModel):
    """Authorization boundary grouping tasks and transcripts."""

    id: str
    name: str
    description: Optional[str] = None
    owner_id: str
    created_at: datetime = Field(default_factory=_utcnow)


class WorkspaceMember(BaseModel):
    """Membership of a user in a workspace."""

    workspace_id: str
    user_id: str
    role: WorkspaceRole = "member"
    joined_at: datetime = Field(default_factory=_utcnow)


class Task(BaseModel):
    """A unit of work inside a workspace."""

    id: str
    workspace_id: str
    title: str
    description: Optional[str] = None
    type: TaskType = "todo"
    status: TaskStatus = "active"
    priority: Optional[TaskPriority] = None
    created_by: str
    assignee: Optional[str] = None
    due_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=_utcnow)

    def graph_properties(self) -> dict[str, str]:
        """Properties snapshot stored on the task's graph node."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description or "",
            "status": self.status,
            "priority": self.priority or "medium",
        }


class Transcript(BaseModel):
    """A recorded meeting with its full text and optional summary."""

    id: str
    workspace_id: str
    meeting_title: Optional[str] = None
    content: str
    summary: Optional[str] = None
    duration: Optional[int] = None  # Seconds of recorded audio
    created_by: str
    created_at: datetime = Field(default_factory=_utcnow)
