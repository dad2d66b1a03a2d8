"""Unit tests for task graph stores and breadth-first traversal."""

from pathlib import Path

import pytest

from ellena.errors import InvalidInput
from ellena.graph import InMemoryGraphStore, SqliteGraphStore, traverse_task_graph


@pytest.fixture(params=["memory", "sqlite"])
def store(request, temp_db_path: Path):
    """Each test runs against both local backends."""
    if request.param == "memory":
        return InMemoryGraphStore()
    s = SqliteGraphStore(temp_db_path)
    s.init_db()
    return s


@pytest.fixture
def chain(store):
    """A -> B -> C via DEPENDS_ON."""
    for task_id in "ABC":
        store.upsert_node(task_id, {"title": f"Task {task_id}"})
    store.relate("A", "B", "DEPENDS_ON")
    store.relate("B", "C", "DEPENDS_ON")
    return store


def test_depth_one(chain) -> None:
    graph = traverse_task_graph(chain, "A", depth=1)
    assert graph.node_ids() == {"A", "B"}
    assert [(e.source, e.target, e.type) for e in graph.edges] == [("A", "B", "DEPENDS_ON")]


def test_depth_two(chain) -> None:
    graph = traverse_task_graph(chain, "A", depth=2)
    assert graph.node_ids() == {"A", "B", "C"}
    assert len(graph.nodes) == 3
    assert len(graph.edges) == 2


def test_default_depth_is_two(chain) -> None:
    assert traverse_task_graph(chain, "A").node_ids() == {"A", "B", "C"}


def test_traversal_follows_incoming_edges(chain) -> None:
    graph = traverse_task_graph(chain, "C", depth=1)
    assert graph.node_ids() == {"B", "C"}
    assert graph.edges[0].source == "B"


def test_nodes_deduplicated_across_paths(store) -> None:
    """A diamond reaches D twice but lists it once."""
    store.relate("A", "B", "DEPENDS_ON")
    store.relate("A", "C", "RELATED_TO")
    store.relate("B", "D", "BLOCKS")
    store.relate("C", "D", "BLOCKS")
    graph = traverse_task_graph(store, "A", depth=3)
    ids = [n.id for n in graph.nodes]
    assert sorted(ids) == ["A", "B", "C", "D"]
    assert len(graph.edges) == 4


def test_parallel_edges_of_different_types_kept(store) -> None:
    store.relate("A", "B", "DEPENDS_ON")
    store.relate("A", "B", "BLOCKS")
    graph = traverse_task_graph(store, "A", depth=1)
    assert len(graph.nodes) == 2
    assert {e.type for e in graph.edges} == {"DEPENDS_ON", "BLOCKS"}


def test_node_properties_snapshot(chain) -> None:
    graph = traverse_task_graph(chain, "A", depth=1)
    by_id = {n.id: n for n in graph.nodes}
    assert by_id["B"].properties["title"] == "Task B"


def test_isolated_root_without_node(store) -> None:
    graph = traverse_task_graph(store, "ghost", depth=2)
    assert [n.id for n in graph.nodes] == ["ghost"]
    assert graph.nodes[0].properties == {"id": "ghost"}
    assert graph.edges == []


def test_depth_below_one_rejected(chain) -> None:
    with pytest.raises(InvalidInput):
        traverse_task_graph(chain, "A", depth=0)


def test_relate_is_idempotent(store) -> None:
    assert store.relate("A", "B", "RELATED_TO") is True
    assert store.relate("A", "B", "RELATED_TO") is False
    assert len(store.incident_edges("A")) == 1


def test_unrelate(store) -> None:
    store.relate("A", "B", "RELATED_TO")
    assert store.unrelate("A", "B", "RELATED_TO") is True
    assert store.unrelate("A", "B", "RELATED_TO") is False
    assert store.incident_edges("A") == []


def test_incident_edges_type_filter(store) -> None:
    store.relate("A", "B", "RELATED_TO")
    store.relate("C", "A", "BLOCKS")
    edges = store.incident_edges("A", "BLOCKS")
    assert [(e.source, e.target) for e in edges] == [("C", "A")]


def test_unknown_relationship_type_rejected(store) -> None:
    with pytest.raises(InvalidInput):
        store.relate("A", "B", "LIKES")


def test_upsert_node_merges_properties(store) -> None:
    store.upsert_node("A", {"title": "Old", "status": "active"})
    store.upsert_node("A", {"title": "New"})
    assert store.get_node("A") == {"id": "A", "title": "New", "status": "active"}


def test_delete_node_removes_edges(chain) -> None:
    chain.delete_node("B")
    assert chain.get_node("B") is None
    assert chain.incident_edges("A") == []
    assert chain.incident_edges("C") == []
