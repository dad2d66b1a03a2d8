"""SQLite-backed graph store (default backend, same file as the relational store)."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ellena.models import RelationshipType, TaskGraphEdge

from .store import validate_relationship_type


class SqliteGraphStore:
    """Task nodes and typed, directed relationships in two SQLite tables."""

    def __init__(self, db_path: Path) -> None:
        self._path = Path(db_path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def init_db(self) -> None:
        """Create graph tables if they do not exist."""
        with sqlite3.connect(self._path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS task_nodes (
                    id TEXT PRIMARY KEY,
                    properties TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS task_relationships (
                    source_id TEXT NOT NULL,
                    target_id TEXT NOT NULL,
                    type TEXT NOT NULL,
                    created_at DATETIME NOT NULL,
                    PRIMARY KEY (source_id, target_id, type)
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_task_relationships_target "
                "ON task_relationships(target_id)"
            )
            conn.commit()

    def upsert_node(self, task_id: str, properties: dict[str, Any]) -> None:
        with sqlite3.connect(self._path) as conn:
            row = conn.execute(
                "SELECT properties FROM task_nodes WHERE id = ?", (task_id,)
            ).fetchone()
            merged = _load_props(row[0]) if row else {}
            merged.update(properties)
            merged["id"] = task_id
            conn.execute(
                """
                INSERT INTO task_nodes (id, properties) VALUES (?, ?)
                ON CONFLICT(id) DO UPDATE SET properties = excluded.properties
                """,
                (task_id, json.dumps(merged)),
            )
            conn.commit()

    def get_node(self, task_id: str) -> Optional[dict[str, Any]]:
        with sqlite3.connect(self._path) as conn:
            row = conn.execute(
                "SELECT properties FROM task_nodes WHERE id = ?", (task_id,)
            ).fetchone()
        return _load_props(row[0]) if row else None

    def delete_node(self, task_id: str) -> None:
        """Delete the node and every relationship touching it."""
        with sqlite3.connect(self._path) as conn:
            conn.execute("DELETE FROM task_nodes WHERE id = ?", (task_id,))
            conn.execute(
                "DELETE FROM task_relationships WHERE source_id = ? OR target_id = ?",
                (task_id, task_id),
            )
            conn.commit()

    def relate(self, source_id: str, target_id: str, rel_type: RelationshipType) -> bool:
        with sqlite3.connect(self._path) as conn:
            cursor = conn.execute(
                """
                INSERT OR IGNORE INTO task_relationships (source_id, target_id, type, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    source_id,
                    target_id,
                    validate_relationship_type(rel_type),
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
            conn.commit()
            return cursor.rowcount > 0

    def unrelate(self, source_id: str, target_id: str, rel_type: RelationshipType) -> bool:
        with sqlite3.connect(self._path) as conn:
            cursor = conn.execute(
                "DELETE FROM task_relationships "
                "WHERE source_id = ? AND target_id = ? AND type = ?",
                (source_id, target_id, validate_relationship_type(rel_type)),
            )
            conn.commit()
            return cursor.rowcount > 0

    def incident_edges(
        self, task_id: str, rel_type: Optional[RelationshipType] = None
    ) -> list[TaskGraphEdge]:
        query = (
            "SELECT source_id, target_id, type FROM task_relationships "
            "WHERE (source_id = ? OR target_id = ?)"
        )
        params: list[str] = [task_id, task_id]
        if rel_type is not None:
            query += " AND type = ?"
            params.append(validate_relationship_type(rel_type))
        query += " ORDER BY created_at ASC, rowid ASC"
        with sqlite3.connect(self._path) as conn:
            rows = conn.execute(query, params).fetchall()
        return [TaskGraphEdge(source=r[0], target=r[1], type=r[2]) for r in rows]

    def close(self) -> None:
        return None


def _load_props(raw: Optional[str]) -> dict[str, Any]:
    """Decode stored properties, tolerating malformed JSON."""
    try:
        value = json.loads(raw or "{}")
    except json.JSONDecodeError:
        return {}
    return value if isinstance(value, dict) else {}
