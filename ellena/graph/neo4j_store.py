"""Neo4j-backed graph store for task relationships."""

from __future__ import annotations

import logging
from typing import Any, Optional

import neo4j

from ellena.models import RelationshipType, TaskGraphEdge

from .store import validate_relationship_type

logger = logging.getLogger(__name__)


class Neo4jGraphStore:
    """Task nodes as (:Task {id}) with typed relationships between them.

    Relationship types cannot be Cypher parameters, so they are spliced in
    only after validate_relationship_type().
    """

    def __init__(self, uri: str, username: str, password: str) -> None:
        self.driver = neo4j.GraphDatabase.driver(
            uri,
            auth=(username, password),
            connection_timeout=30,
            max_transaction_retry_time=30.0,
        )

    def init_schema(self) -> None:
        """Create the Task id uniqueness constraint if missing."""
        with self.driver.session() as session:
            try:
                session.run(
                    "CREATE CONSTRAINT task_id_unique IF NOT EXISTS "
                    "FOR (t:Task) REQUIRE t.id IS UNIQUE"
                )
            except (neo4j.exceptions.DatabaseError, neo4j.exceptions.ClientError) as e:
                logger.warning("Constraint check: %s", e)

    def upsert_node(self, task_id: str, properties: dict[str, Any]) -> None:
        props = {k: v for k, v in properties.items() if v is not None}
        props["id"] = task_id
        with self.driver.session() as session:
            session.run(
                "MERGE (t:Task {id: $id}) SET t += $props",
                id=task_id,
                props=props,
            ).consume()

    def get_node(self, task_id: str) -> Optional[dict[str, Any]]:
        with self.driver.session() as session:
            record = session.run(
                "MATCH (t:Task {id: $id}) RETURN properties(t) AS props", id=task_id
            ).single()
        return dict(record["props"]) if record else None

    def delete_node(self, task_id: str) -> None:
        with self.driver.session() as session:
            session.run("MATCH (t:Task {id: $id}) DETACH DELETE t", id=task_id).consume()

    def relate(self, source_id: str, target_id: str, rel_type: RelationshipType) -> bool:
        rel = validate_relationship_type(rel_type)
        with self.driver.session() as session:
            summary = session.run(
                f"""
                MERGE (a:Task {{id: $source}})
                MERGE (b:Task {{id: $target}})
                MERGE (a)-[r:{rel}]->(b)
                ON CREATE SET r.created_at = datetime()
                """,
                source=source_id,
                target=target_id,
            ).consume()
        return summary.counters.relationships_created > 0

    def unrelate(self, source_id: str, target_id: str, rel_type: RelationshipType) -> bool:
        rel = validate_relationship_type(rel_type)
        with self.driver.session() as session:
            summary = session.run(
                f"MATCH (a:Task {{id: $source}})-[r:{rel}]->(b:Task {{id: $target}}) DELETE r",
                source=source_id,
                target=target_id,
            ).consume()
        return summary.counters.relationships_deleted > 0

    def incident_edges(
        self, task_id: str, rel_type: Optional[RelationshipType] = None
    ) -> list[TaskGraphEdge]:
        rel = validate_relationship_type(rel_type) if rel_type is not None else None
        with self.driver.session() as session:
            result = session.run(
                """
                MATCH (t:Task {id: $id})-[r]-(:Task)
                WHERE $type IS NULL OR type(r) = $type
                RETURN DISTINCT startNode(r).id AS source, endNode(r).id AS target,
                       type(r) AS type
                """,
                id=task_id,
                type=rel,
            )
            return [
                TaskGraphEdge(source=rec["source"], target=rec["target"], type=rec["type"])
                for rec in result
            ]

    def close(self) -> None:
        """Closes database connection."""
        self.driver.close()
