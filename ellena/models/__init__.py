"""Domain models."""

from .context import (
    Candidate,
    CandidateKind,
    RELATIONSHIP_TYPES,
    RelatedTask,
    RelationshipType,
    ScoredResult,
    SearchQuery,
    TaskGraph,
    TaskGraphEdge,
    TaskGraphNode,
)
from .task import (
    Task,
    TaskPriority,
    TaskStatus,
    TaskType,
    Transcript,
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
)

__all__ = [
    "RELATIONSHIP_TYPES",
    "Candidate",
    "CandidateKind",
    "RelatedTask",
    "RelationshipType",
    "ScoredResult",
    "SearchQuery",
    "Task",
    "TaskGraph",
    "TaskGraphEdge",
    "TaskGraphNode",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
    "Transcript",
    "Workspace",
    "WorkspaceMember",
    "WorkspaceRole",
]
