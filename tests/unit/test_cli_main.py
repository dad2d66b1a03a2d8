"""Unit tests for the Typer CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ellena.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point the CLI at a temp database and keep it offline."""
    monkeypatch.setenv("ELLENA_DB_PATH", str(tmp_path / "ellena.db"))
    monkeypatch.setenv("ELLENA_ENABLE_AI", "false")


def _last_line(output: str) -> str:
    return output.strip().splitlines()[-1]


def _workspace(owner: str = "alice") -> str:
    result = runner.invoke(app, ["workspace", "create", "Platform", "--user", owner])
    assert result.exit_code == 0, result.output
    return _last_line(result.output).split(": ")[-1]


def _task(ws_id: str, title: str, user: str = "alice") -> str:
    result = runner.invoke(app, ["task", "add", ws_id, title, "--user", user])
    assert result.exit_code == 0, result.output
    return _last_line(result.output)


def test_init_reports_lexical_mode() -> None:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    assert "semantic search: off" in result.output


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("ellena ")


def test_search_json() -> None:
    ws_id = _workspace()
    _task(ws_id, "Prepare meeting notes")
    _task(ws_id, "Buy milk")
    transcript = runner.invoke(
        app,
        ["transcript", "add", ws_id, "-", "--user", "alice", "--title", "Weekly meeting"],
        input="We discussed the roadmap.",
    )
    assert transcript.exit_code == 0, transcript.output

    result = runner.invoke(app, ["search", "meeting", "--user", "alice", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert [(r["kind"], r["title"]) for r in payload] == [
        ("task", "Prepare meeting notes"),
        ("transcript", "Weekly meeting"),
    ]


def test_search_empty_query_exits_with_error() -> None:
    result = runner.invoke(app, ["search", "  ", "--user", "alice"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_search_foreign_workspace_denied() -> None:
    ws_id = _workspace(owner="alice")
    result = runner.invoke(app, ["search", "anything", "--user", "bob", "--workspace", ws_id])
    assert result.exit_code == 1
    assert "do not have access" in result.output


def test_context_unknown_task() -> None:
    result = runner.invoke(app, ["context", "missing", "--user", "alice"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_relate_related_and_graph() -> None:
    ws_id = _workspace()
    a = _task(ws_id, "Design API")
    b = _task(ws_id, "Build API")

    first = runner.invoke(app, ["relate", b, a, "--type", "depends_on"])
    again = runner.invoke(app, ["relate", b, a, "--type", "DEPENDS_ON"])
    assert "Relationship created" in first.output
    assert "already exists" in again.output

    related = runner.invoke(app, ["related", b])
    assert "-> DEPENDS_ON Design API" in related.output

    graph = runner.invoke(app, ["graph", a, "--depth", "1"])
    assert graph.exit_code == 0, graph.output
    data = json.loads(graph.output)
    assert {n["id"] for n in data["nodes"]} == {a, b}
    assert data["edges"] == [{"source": b, "target": a, "type": "DEPENDS_ON"}]

    removed = runner.invoke(app, ["unrelate", b, a, "--type", "DEPENDS_ON"])
    assert "Relationship removed" in removed.output


def test_relate_invalid_type() -> None:
    ws_id = _workspace()
    a = _task(ws_id, "One")
    b = _task(ws_id, "Two")
    result = runner.invoke(app, ["relate", a, b, "--type", "LIKES"])
    assert result.exit_code == 1
    assert "Unknown relationship type" in result.output


def test_config_example() -> None:
    result = runner.invoke(app, ["config-example"])
    assert result.exit_code == 0
    assert "[llm]" in result.output


def test_task_list_and_delete() -> None:
    ws_id = _workspace()
    empty = runner.invoke(app, ["task", "list", ws_id])
    assert empty.exit_code == 0
    assert "No tasks yet." in empty.output

    task_id = _task(ws_id, "Write changelog")
    listed = runner.invoke(app, ["task", "list", ws_id])
    assert "Write changelog" in listed.output
    assert task_id in listed.output

    deleted = runner.invoke(app, ["task", "delete", task_id])
    assert deleted.exit_code == 0, deleted.output
    assert f"Deleted task {task_id}" in deleted.output
    assert "No tasks yet." in runner.invoke(app, ["task", "list", ws_id]).output

    again = runner.invoke(app, ["task", "delete", task_id])
    assert again.exit_code == 1
