"""Breadth-first expansion of the task relationship graph."""

from __future__ import annotations

from collections import deque

from ellena.errors import InvalidInput
from ellena.models import TaskGraph, TaskGraphEdge, TaskGraphNode

from .store import GraphStore


def traverse_task_graph(store: GraphStore, root_id: str, depth: int = 2) -> TaskGraph:
    """Collect every task within `depth` hops of root_id.

    Edges are followed in both directions; each node and each
    (source, target, type) edge appears once. Node properties are read from
    the store when the node is first reached. A root without a stored node
    still appears, with only its id.

    Raises:
        InvalidInput: depth below 1.
    """
    if depth < 1:
        raise InvalidInput("Depth must be at least 1")

    nodes: dict[str, TaskGraphNode] = {root_id: _snapshot(store, root_id)}
    edges: dict[tuple[str, str, str], TaskGraphEdge] = {}
    frontier: deque[tuple[str, int]] = deque([(root_id, 0)])

    while frontier:
        task_id, hops = frontier.popleft()
        if hops >= depth:
            continue
        for edge in store.incident_edges(task_id):
            edges.setdefault(edge.key, edge)
            neighbour = edge.target if edge.source == task_id else edge.source
            if neighbour not in nodes:
                nodes[neighbour] = _snapshot(store, neighbour)
                frontier.append((neighbour, hops + 1))

    return TaskGraph(nodes=list(nodes.values()), edges=list(edges.values()))


def _snapshot(store: GraphStore, task_id: str) -> TaskGraphNode:
    props = store.get_node(task_id) or {"id": task_id}
    return TaskGraphNode(id=task_id, properties=props)
