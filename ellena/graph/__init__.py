"""Task relationship graph: stores and traversal."""

from .memory_store import InMemoryGraphStore
from .sqlite_store import SqliteGraphStore
from .store import GraphStore, validate_relationship_type
from .traversal import traverse_task_graph

__all__ = [
    "GraphStore",
    "InMemoryGraphStore",
    "SqliteGraphStore",
    "traverse_task_graph",
    "validate_relationship_type",
]
