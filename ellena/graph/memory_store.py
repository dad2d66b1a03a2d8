"""In-memory graph store for tests and ephemeral runs."""

from __future__ import annotations

from typing import Any, Optional

from ellena.models import RelationshipType, TaskGraphEdge

from .store import validate_relationship_type


class InMemoryGraphStore:
    """Dict-backed graph store. Edges keep insertion order."""

    def __init__(self) -> None:
        self._nodes: dict[str, dict[str, Any]] = {}
        self._edges: dict[tuple[str, str, str], TaskGraphEdge] = {}

    def upsert_node(self, task_id: str, properties: dict[str, Any]) -> None:
        node = self._nodes.setdefault(task_id, {"id": task_id})
        node.update(properties)

    def get_node(self, task_id: str) -> Optional[dict[str, Any]]:
        node = self._nodes.get(task_id)
        return dict(node) if node is not None else None

    def delete_node(self, task_id: str) -> None:
        self._nodes.pop(task_id, None)
        for key in [k for k in self._edges if task_id in (k[0], k[1])]:
            del self._edges[key]

    def relate(self, source_id: str, target_id: str, rel_type: RelationshipType) -> bool:
        edge = TaskGraphEdge(
            source=source_id, target=target_id, type=validate_relationship_type(rel_type)
        )
        if edge.key in self._edges:
            return False
        self._edges[edge.key] = edge
        return True

    def unrelate(self, source_id: str, target_id: str, rel_type: RelationshipType) -> bool:
        key = (source_id, target_id, validate_relationship_type(rel_type))
        return self._edges.pop(key, None) is not None

    def incident_edges(
        self, task_id: str, rel_type: Optional[RelationshipType] = None
    ) -> list[TaskGraphEdge]:
        return [
            edge
            for edge in self._edges.values()
            if task_id in (edge.source, edge.target)
            and (rel_type is None or edge.type == rel_type)
        ]

    def close(self) -> None:
        return None
