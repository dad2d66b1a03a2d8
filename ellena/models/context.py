"""Transient types produced and consumed by context retrieval.

None of these are persisted: candidates are projected from current store
state for one request, scored results are returned to the caller, and graph
snapshots are rebuilt on every traversal.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

CandidateKind = Literal["task", "transcript"]
RelationshipType = Literal["DEPENDS_ON", "RELATED_TO", "BLOCKS", "PART_OF"]

RELATIONSHIP_TYPES: tuple[str, ...] = ("DEPENDS_ON", "RELATED_TO", "BLOCKS", "PART_OF")


class SearchQuery(BaseModel):
    """Free-text query issued by a principal, optionally scoped to a workspace."""

    text: str
    principal_id: str
    workspace_id: Optional[str] = None


class Candidate(BaseModel):
    """Minimal text projection of a task or transcript used for scoring."""

    kind: CandidateKind
    id: str
    primary_text: str = Field(description="Task title or meeting title")
    secondary_text: str = Field("", description="Task description or meeting summary")
    content: Optional[str] = Field(None, description="Full transcript body, if any")

    @property
    def embedding_text(self) -> str:
        """Text sent to the embedding capability."""
        return f"{self.primary_text} {self.secondary_text}".strip()


class ScoredResult(BaseModel):
    """One ranked hit returned to the caller."""

    kind: CandidateKind
    id: str
    title: str
    snippet: str
    relevance: float


class TaskGraphNode(BaseModel):
    """Task identity plus a properties snapshot taken at traversal time."""

    id: str
    properties: dict[str, Any] = Field(default_factory=dict)


class TaskGraphEdge(BaseModel):
    """Directed, typed relationship between two tasks."""

    source: str
    target: str
    type: RelationshipType

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.source, self.target, self.type)


class TaskGraph(BaseModel):
    """Flattened node/edge view of a task neighbourhood."""

    nodes: list[TaskGraphNode] = Field(default_factory=list)
    edges: list[TaskGraphEdge] = Field(default_factory=list)

    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}


class RelatedTask(BaseModel):
    """A direct neighbour of a task and the relationship connecting them."""

    id: str
    properties: dict[str, Any] = Field(default_factory=dict)
    relationship_type: RelationshipType
    direction: Literal["outgoing", "incoming"]
