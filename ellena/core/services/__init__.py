"""Core service layer modules."""

from .relationships import DEFAULT_GRAPH_DEPTH, TaskRelationshipService

__all__ = ["TaskRelationshipService", "DEFAULT_GRAPH_DEPTH"]
