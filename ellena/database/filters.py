"""Typed candidate filters compiled to parameterized SQL predicates.

Filters never splice caller values into SQL text: every value travels as a
bound parameter and only fixed column expressions appear in the clause.
Substring filters call the `casefold` SQL function, which SqliteDB registers
on each connection; SQLite's own lower() and LIKE fold ASCII only.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

CASEFOLD_SQL_FUNCTION = "casefold"


def sql_casefold(value: Optional[str]) -> str:
    """Python str.casefold exposed to SQLite; NULL folds to ''."""
    return value.casefold() if value else ""


@dataclass(frozen=True)
class CandidateFilter:
    """What a principal may see, and how much of it to fetch."""

    principal_id: str
    workspace_id: Optional[str] = None
    exclude_task_id: Optional[str] = None
    contains: Optional[str] = None  # case-insensitive substring
    limit: int = 20


@dataclass
class Predicates:
    """AND-joined list of SQL clauses with their bound parameters."""

    clauses: list[str] = field(default_factory=list)
    params: list[Any] = field(default_factory=list)

    def add(self, clause: str, *params: Any) -> "Predicates":
        self.clauses.append(clause)
        self.params.extend(params)
        return self

    def where(self) -> str:
        return " AND ".join(f"({c})" for c in self.clauses) if self.clauses else "1 = 1"


def _contains_any(columns: list[str], text: str) -> tuple[str, list[str]]:
    needle = text.casefold()
    clause = " OR ".join(
        f"instr({CASEFOLD_SQL_FUNCTION}({col}), ?) > 0" for col in columns
    )
    return clause, [needle] * len(columns)


def task_predicates(f: CandidateFilter) -> Predicates:
    """Tasks the principal created or is assigned to."""
    preds = Predicates()
    preds.add("created_by = ? OR assignee = ?", f.principal_id, f.principal_id)
    if f.workspace_id is not None:
        preds.add("workspace_id = ?", f.workspace_id)
    if f.exclude_task_id is not None:
        preds.add("id != ?", f.exclude_task_id)
    if f.contains:
        clause, params = _contains_any(["title", "description"], f.contains)
        preds.add(clause, *params)
    return preds


def transcript_predicates(f: CandidateFilter) -> Predicates:
    """Transcripts the principal created."""
    preds = Predicates()
    preds.add("created_by = ?", f.principal_id)
    if f.workspace_id is not None:
        preds.add("workspace_id = ?", f.workspace_id)
    if f.contains:
        clause, params = _contains_any(
            ["meeting_title", "summary", "content"], f.contains
        )
        preds.add(clause, *params)
    return preds
