"""Database layer - SQLite wrappers for workspaces, tasks and transcripts."""

from .filters import CandidateFilter
from .sqlite import SqliteDB

__all__ = ["CandidateFilter", "SqliteDB"]
