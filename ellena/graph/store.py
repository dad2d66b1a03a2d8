"""Graph store interface for task relationships."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ellena.errors import InvalidInput
from ellena.models import RELATIONSHIP_TYPES, RelationshipType, TaskGraphEdge


def validate_relationship_type(value: str) -> RelationshipType:
    """Return value if it names a known relationship type.

    Relationship types are spliced into Cypher labels, so nothing outside
    the fixed vocabulary may reach a store.
    """
    if value not in RELATIONSHIP_TYPES:
        raise InvalidInput(
            f"Unknown relationship type {value!r}; expected one of {', '.join(RELATIONSHIP_TYPES)}"
        )
    return value  # type: ignore[return-value]


class GraphStore(Protocol):
    """Protocol for task-relationship stores.

    Relationships are unique on (source, target, type): relate() on an
    existing edge and unrelate() on a missing one are no-ops.
    """

    def upsert_node(self, task_id: str, properties: dict[str, Any]) -> None:
        ...

    def get_node(self, task_id: str) -> Optional[dict[str, Any]]:
        ...

    def delete_node(self, task_id: str) -> None:
        ...

    def relate(self, source_id: str, target_id: str, rel_type: RelationshipType) -> bool:
        ...

    def unrelate(self, source_id: str, target_id: str, rel_type: RelationshipType) -> bool:
        ...

    def incident_edges(
        self, task_id: str, rel_type: Optional[RelationshipType] = None
    ) -> list[TaskGraphEdge]:
        ...

    def close(self) -> None:
        ...
