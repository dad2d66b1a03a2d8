"""Relational wrapper for SQLite (workspaces, tasks, transcripts)."""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from ellena.models import Candidate, Task, Transcript, Workspace, WorkspaceMember

from .filters import (
    CASEFOLD_SQL_FUNCTION,
    CandidateFilter,
    Predicates,
    sql_casefold,
    task_predicates,
    transcript_predicates,
)


def _iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


def _parse_dt(s: Optional[str]) -> Optional[datetime]:
    """Parse ISO datetime string, returning None for invalid input."""
    if not s:
        return None
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None


class SqliteDB:
    """SQLite wrapper for the relational store. All SQL stays in this module."""

    def __init__(self, db_path: Path) -> None:
        self._path = Path(db_path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def init_db(self) -> None:
        """Create tables and indexes if they do not exist."""
        with sqlite3.connect(self._path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS workspaces (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    description TEXT,
                    owner_id TEXT NOT NULL,
                    created_at DATETIME NOT NULL
                )
            """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS workspace_members (
                    workspace_id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    role TEXT NOT NULL,
                    joined_at DATETIME NOT NULL,
                    PRIMARY KEY (workspace_id, user_id)
                )
            """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    workspace_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT,
                    type TEXT NOT NULL,
                    status TEXT NOT NULL,
                    priority TEXT,
                    created_by TEXT NOT NULL,
                    assignee TEXT,
                    due_date DATETIME,
                    created_at DATETIME NOT NULL
                )
            """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS transcripts (
                    id TEXT PRIMARY KEY,
                    workspace_id TEXT NOT NULL,
                    meeting_title TEXT,
                    content TEXT NOT NULL,
                    summary TEXT,
                    duration INTEGER,
                    created_by TEXT NOT NULL,
                    created_at DATETIME NOT NULL
                )
            """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_tasks_workspace_created "
                "ON tasks(workspace_id, created_at)"
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_tasks_owner ON tasks(created_by, assignee)"
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_transcripts_workspace_created "
                "ON transcripts(workspace_id, created_at)"
            )
            conn.commit()

    # ---- Workspaces ----

    def insert_workspace(self, workspace: Workspace) -> None:
        """Insert a workspace and register its owner as a member."""
        with sqlite3.connect(self._path) as conn:
            conn.execute(
                """
                INSERT INTO workspaces (id, name, description, owner_id, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    workspace.id,
                    workspace.name,
                    workspace.description,
                    workspace.owner_id,
                    _iso(workspace.created_at),
                ),
            )
            conn.execute(
                """
                INSERT OR REPLACE INTO workspace_members (workspace_id, user_id, role, joined_at)
                VALUES (?, ?, 'owner', ?)
                """,
                (workspace.id, workspace.owner_id, _iso(workspace.created_at)),
            )
            conn.commit()

    def get_workspace(self, workspace_id: str) -> Optional[Workspace]:
        """Return one workspace by id or None."""
        with sqlite3.connect(self._path) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                "SELECT * FROM workspaces WHERE id = ?", (workspace_id,)
            ).fetchone()
        if not row:
            return None
        return Workspace(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            owner_id=row["owner_id"],
            created_at=_parse_dt(row["created_at"]),
        )

    def add_member(self, member: WorkspaceMember) -> None:
        """Add (or re-role) a workspace member."""
        with sqlite3.connect(self._path) as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO workspace_members (workspace_id, user_id, role, joined_at)
                VALUES (?, ?, ?, ?)
                """,
                (member.workspace_id, member.user_id, member.role, _iso(member.joined_at)),
            )
            conn.commit()

    def is_workspace_member(self, workspace_id: str, user_id: str) -> bool:
        with sqlite3.connect(self._path) as conn:
            row = conn.execute(
                "SELECT 1 FROM workspace_members WHERE workspace_id = ? AND user_id = ?",
                (workspace_id, user_id),
            ).fetchone()
        return row is not None

    # ---- Tasks ----

    def insert_task(self, task: Task) -> None:
        """Insert a single task."""
        with sqlite3.connect(self._path) as conn:
            conn.execute(
                """
                INSERT INTO tasks (id, workspace_id, title, description, type, status,
                                   priority, created_by, assignee, due_date, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    task.id,
                    task.workspace_id,
                    task.title,
                    task.description,
                    task.type,
                    task.status,
                    task.priority,
                    task.created_by,
                    task.assignee,
                    _iso(task.due_date),
                    _iso(task.created_at),
                ),
            )
            conn.commit()

    def get_task(self, task_id: str) -> Optional[Task]:
        """Return one task by id or None."""
        with sqlite3.connect(self._path) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        return _row_to_task(row) if row else None

    def get_task_for_principal(self, task_id: str, principal_id: str) -> Optional[Task]:
        """Return a task the principal created, is assigned to, or can see via membership."""
        with sqlite3.connect(self._path) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                """
                SELECT t.* FROM tasks t
                WHERE t.id = ?
                AND (
                    t.created_by = ?
                    OR t.assignee = ?
                    OR EXISTS (
                        SELECT 1 FROM workspace_members wm
                        WHERE wm.workspace_id = t.workspace_id AND wm.user_id = ?
                    )
                )
                """,
                (task_id, principal_id, principal_id, principal_id),
            ).fetchone()
        return _row_to_task(row) if row else None

    def delete_task(self, task_id: str) -> bool:
        """Delete a task. Returns False if it did not exist."""
        with sqlite3.connect(self._path) as conn:
            cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            conn.commit()
            return cursor.rowcount > 0

    def list_tasks(self, workspace_id: str) -> list[Task]:
        """Return tasks of a workspace, most recent first."""
        with sqlite3.connect(self._path) as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(
                "SELECT * FROM tasks WHERE workspace_id = ? ORDER BY created_at DESC",
                (workspace_id,),
            ).fetchall()
        return [_row_to_task(r) for r in rows]

    # ---- Transcripts ----

    def insert_transcript(self, transcript: Transcript) -> None:
        """Insert a single transcript."""
        with sqlite3.connect(self._path) as conn:
            conn.execute(
                """
                INSERT INTO transcripts (id, workspace_id, meeting_title, content, summary,
                                         duration, created_by, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    transcript.id,
                    transcript.workspace_id,
                    transcript.meeting_title,
                    transcript.content,
                    transcript.summary,
                    transcript.duration,
                    transcript.created_by,
                    _iso(transcript.created_at),
                ),
            )
            conn.commit()

    def get_transcript(self, transcript_id: str) -> Optional[Transcript]:
        """Return one transcript by id or None."""
        with sqlite3.connect(self._path) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                "SELECT * FROM transcripts WHERE id = ?", (transcript_id,)
            ).fetchone()
        return _row_to_transcript(row) if row else None

    # ---- Candidate fetching ----

    def fetch_task_candidates(self, candidate_filter: CandidateFilter) -> list[Candidate]:
        """Return visible tasks as candidates, most recent first, capped by limit."""
        rows = self._select(
            "SELECT id, title, description FROM tasks",
            task_predicates(candidate_filter),
            candidate_filter.limit,
        )
        return [
            Candidate(
                kind="task",
                id=r["id"],
                primary_text=r["title"],
                secondary_text=r["description"] or "",
            )
            for r in rows
        ]

    def fetch_transcript_candidates(
        self, candidate_filter: CandidateFilter
    ) -> list[Candidate]:
        """Return visible transcripts as candidates, most recent first, capped by limit."""
        rows = self._select(
            "SELECT id, meeting_title, summary, content FROM transcripts",
            transcript_predicates(candidate_filter),
            candidate_filter.limit,
        )
        return [
            Candidate(
                kind="transcript",
                id=r["id"],
                primary_text=r["meeting_title"] or "",
                secondary_text=r["summary"] or "",
                content=r["content"],
            )
            for r in rows
        ]

    def _select(self, base: str, preds: Predicates, limit: int) -> list[sqlite3.Row]:
        query = f"{base} WHERE {preds.where()} ORDER BY created_at DESC, rowid DESC LIMIT ?"
        with sqlite3.connect(self._path) as conn:
            conn.row_factory = sqlite3.Row
            conn.create_function(
                CASEFOLD_SQL_FUNCTION, 1, sql_casefold, deterministic=True
            )
            return conn.execute(query, [*preds.params, limit]).fetchall()


def _row_to_task(row: sqlite3.Row) -> Task:
    return Task(
        id=row["id"],
        workspace_id=row["workspace_id"],
        title=row["title"],
        description=row["description"],
        type=row["type"],
        status=row["status"],
        priority=row["priority"],
        created_by=row["created_by"],
        assignee=row["assignee"],
        due_date=_parse_dt(row["due_date"]),
        created_at=_parse_dt(row["created_at"]),
    )


def _row_to_transcript(row: sqlite3.Row) -> Transcript:
    return Transcript(
        id=row["id"],
        workspace_id=row["workspace_id"],
        meeting_title=row["meeting_title"],
        content=row["content"],
        summary=row["summary"],
        duration=row["duration"],
        created_by=row["created_by"],
        created_at=_parse_dt(row["created_at"]),
    )
