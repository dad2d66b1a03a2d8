"""[Layer: Presentation] Typer CLI Commands."""

import json
from contextlib import contextmanager
from importlib.metadata import PackageNotFoundError, version as get_package_version
from typing import Iterator, Optional

import typer

from ellena.core.engine import Engine
from ellena.errors import EllenaError
from ellena.models import ScoredResult
from ellena.utils.llm import get_example_config


def _get_version() -> str:
    """Get version from package metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("ellena")
    except PackageNotFoundError:
        return "0.0.0-dev"


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"ellena {_get_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="ellena",
    help="Context search and task relationships over workspaces, tasks and meeting transcripts.",
    no_args_is_help=True,
)
workspace_app = typer.Typer(help="Manage workspaces and their members.")
task_app = typer.Typer(help="Add, list and delete tasks.")
transcript_app = typer.Typer(help="Add meeting transcripts.")
app.add_typer(workspace_app, name="workspace")
app.add_typer(task_app, name="task")
app.add_typer(transcript_app, name="transcript")


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Ellena command line."""


@contextmanager
def _engine() -> Iterator[Engine]:
    """Yield an Engine; domain and validation errors exit with code 1."""
    engine: Optional[Engine] = None
    try:
        engine = Engine()
        yield engine
    except (EllenaError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    finally:
        if engine is not None:
            engine.close()


def _print_results(results: list[ScoredResult], as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps([r.model_dump() for r in results], indent=2))
        return
    if not results:
        typer.echo("No matching context found.")
        return
    for r in results:
        typer.echo(f"[{r.kind}] {r.title} ({r.relevance:.2f})  {r.id}")
        if r.snippet:
            typer.echo(f"    {r.snippet[:200]}")


@app.command()
def init() -> None:
    """Create the local database."""
    with _engine() as engine:
        typer.echo(f"Database ready (semantic search: {'on' if engine.semantic_search else 'off'})")


@app.command(name="config-example")
def config_example() -> None:
    """Print an example ~/.ellena/config.toml."""
    typer.echo(get_example_config())


@app.command()
def version() -> None:
    """Show version."""
    typer.echo(f"ellena {_get_version()}")


# ---- Workspaces ----


@workspace_app.command("create")
def workspace_create(
    name: str = typer.Argument(..., help="Workspace name"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
) -> None:
    """Create a workspace owned by --user."""
    with _engine() as engine:
        ws = engine.create_workspace(name, user, description)
        typer.echo(f"Created workspace {ws.name}: {ws.id}")


@workspace_app.command("add-member")
def workspace_add_member(
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    member: str = typer.Argument(..., help="User id to add"),
    role: str = typer.Option("member", "--role", "-r", help="owner, member or viewer"),
) -> None:
    """Add a user to a workspace."""
    with _engine() as engine:
        engine.add_member(workspace_id, member, role)
        typer.echo(f"Added {member} to {workspace_id} as {role}")


# ---- Tasks and transcripts ----


@task_app.command("add")
def task_add(
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    title: str = typer.Argument(..., help="Task title"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    assignee: Optional[str] = typer.Option(None, "--assignee", "-a"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="high, medium or low"),
) -> None:
    """Add a task to a workspace."""
    with _engine() as engine:
        task = engine.add_task(
            workspace_id, title, user,
            description=description, assignee=assignee, priority=priority,
        )
        typer.echo(f"Added task: {task.title[:60]}{'...' if len(task.title) > 60 else ''}")
        typer.echo(task.id)


@task_app.command("list")
def task_list(
    workspace_id: str = typer.Argument(..., help="Workspace id"),
) -> None:
    """List tasks of a workspace, most recent first."""
    with _engine() as engine:
        tasks = engine.list_tasks(workspace_id)
        if not tasks:
            typer.echo("No tasks yet.")
            return
        for t in tasks:
            typer.echo(f"  [{t.status}] {t.title}  {t.id}")


@task_app.command("delete")
def task_delete(
    task_id: str = typer.Argument(..., help="Task id"),
) -> None:
    """Delete a task and its relationships."""
    with _engine() as engine:
        engine.delete_task(task_id)
        typer.echo(f"Deleted task {task_id}")


@transcript_app.command("add")
def transcript_add(
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    content_file: typer.FileText = typer.Argument(..., help="Transcript text file ('-' for stdin)"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Meeting title"),
    summary: Optional[str] = typer.Option(None, "--summary", "-s"),
) -> None:
    """Add a meeting transcript read from a file."""
    content = content_file.read()
    with _engine() as engine:
        transcript = engine.add_transcript(
            workspace_id, content, user, meeting_title=title, summary=summary
        )
        typer.echo(f"Added transcript: {transcript.meeting_title or 'Untitled meeting'}")
        typer.echo(transcript.id)


# ---- Context retrieval ----


@app.command()
def search(
    query: str = typer.Argument(..., help="Free-text query"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
    workspace: Optional[str] = typer.Option(None, "--workspace", "-w", help="Limit to a workspace"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Search tasks and transcripts visible to --user."""
    with _engine() as engine:
        _print_results(engine.search(query, user, workspace), as_json)


@app.command()
def context(
    task_id: str = typer.Argument(..., help="Task id"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Show tasks and transcripts related to a task."""
    with _engine() as engine:
        _print_results(engine.task_context(user, task_id), as_json)


# ---- Task graph ----


@app.command()
def relate(
    source_id: str = typer.Argument(..., help="Source task id"),
    target_id: str = typer.Argument(..., help="Target task id"),
    rel_type: str = typer.Option(
        "RELATED_TO", "--type", "-t", help="DEPENDS_ON, RELATED_TO, BLOCKS or PART_OF"
    ),
) -> None:
    """Create a relationship between two tasks."""
    with _engine() as engine:
        created = engine.relate(source_id, target_id, rel_type.upper())
        typer.echo("Relationship created" if created else "Relationship already exists")


@app.command()
def unrelate(
    source_id: str = typer.Argument(..., help="Source task id"),
    target_id: str = typer.Argument(..., help="Target task id"),
    rel_type: str = typer.Option("RELATED_TO", "--type", "-t"),
) -> None:
    """Remove a relationship between two tasks."""
    with _engine() as engine:
        removed = engine.unrelate(source_id, target_id, rel_type.upper())
        typer.echo("Relationship removed" if removed else "No such relationship")


@app.command()
def related(
    task_id: str = typer.Argument(..., help="Task id"),
    rel_type: Optional[str] = typer.Option(None, "--type", "-t", help="Filter by type"),
) -> None:
    """List tasks directly related to a task."""
    with _engine() as engine:
        items = engine.related(task_id, rel_type.upper() if rel_type else None)
        if not items:
            typer.echo("No related tasks.")
            return
        for r in items:
            arrow = "->" if r.direction == "outgoing" else "<-"
            title = r.properties.get("title", r.id)
            typer.echo(f"  {arrow} {r.relationship_type} {title}  {r.id}")


@app.command()
def graph(
    task_id: str = typer.Argument(..., help="Root task id"),
    depth: int = typer.Option(2, "--depth", "-d", help="Hops to expand"),
) -> None:
    """Print the task relationship graph around a task as JSON."""
    with _engine() as engine:
        typer.echo(engine.task_graph(task_id, depth).model_dump_json(indent=2))
