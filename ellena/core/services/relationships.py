"""Task relationship operations over the graph store."""

from __future__ import annotations

import logging
from typing import Optional

from ellena.database.sqlite import SqliteDB
from ellena.errors import InvalidInput, NotFound
from ellena.graph import GraphStore, traverse_task_graph, validate_relationship_type
from ellena.models import RelatedTask, RelationshipType, Task, TaskGraph

logger = logging.getLogger(__name__)

DEFAULT_GRAPH_DEPTH = 2


class TaskRelationshipService:
    """Creates, removes and queries typed relationships between tasks."""

    def __init__(self, db: SqliteDB, store: GraphStore, max_depth: int = 5) -> None:
        self._db = db
        self._store = store
        self._max_depth = max_depth

    def create_relationship(
        self, source_id: str, target_id: str, rel_type: str
    ) -> bool:
        """Relate two existing tasks. Returns False if the edge already existed.

        Raises:
            InvalidInput: Unknown type or source == target.
            NotFound: Either task does not exist.
        """
        rel = validate_relationship_type(rel_type)
        if source_id == target_id:
            raise InvalidInput("A task cannot be related to itself")
        source = self._require_task(source_id)
        target = self._require_task(target_id)
        self.sync_task_node(source)
        self.sync_task_node(target)
        created = self._store.relate(source_id, target_id, rel)
        logger.debug(
            "relate %s -[%s]-> %s: %s", source_id, rel, target_id,
            "created" if created else "exists",
        )
        return created

    def delete_relationship(self, source_id: str, target_id: str, rel_type: str) -> bool:
        """Remove one relationship. Returns False if it was not there."""
        return self._store.unrelate(source_id, target_id, validate_relationship_type(rel_type))

    def get_related_tasks(
        self, task_id: str, rel_type: Optional[RelationshipType] = None
    ) -> list[RelatedTask]:
        """Direct neighbours of a task, in either direction."""
        if rel_type is not None:
            rel_type = validate_relationship_type(rel_type)
        related: list[RelatedTask] = []
        for edge in self._store.incident_edges(task_id, rel_type):
            outgoing = edge.source == task_id
            other = edge.target if outgoing else edge.source
            related.append(
                RelatedTask(
                    id=other,
                    properties=self._store.get_node(other) or {"id": other},
                    relationship_type=edge.type,
                    direction="outgoing" if outgoing else "incoming",
                )
            )
        return related

    def get_task_graph(self, task_id: str, depth: int = DEFAULT_GRAPH_DEPTH) -> TaskGraph:
        """Neighbourhood of a task up to `depth` hops, capped at max_depth.

        Raises:
            NotFound: The task does not exist.
            InvalidInput: depth below 1.
        """
        self._require_task(task_id)
        if depth > self._max_depth:
            logger.warning(
                "Graph depth %d exceeds maximum %d; clamping", depth, self._max_depth
            )
            depth = self._max_depth
        return traverse_task_graph(self._store, task_id, depth)

    def sync_task_node(self, task: Task) -> None:
        """Refresh the graph node's property snapshot from the task."""
        self._store.upsert_node(task.id, task.graph_properties())

    def delete_task_node(self, task_id: str) -> None:
        self._store.delete_node(task_id)

    def _require_task(self, task_id: str) -> Task:
        task = self._db.get_task(task_id)
        if task is None:
            raise NotFound(f"Task {task_id} not found")
        return task
