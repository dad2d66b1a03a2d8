"""Global fixtures: temp DB, seeded workspace, fake LLM provider."""

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import pytest

from ellena.database.sqlite import SqliteDB
from ellena.models import Task, Transcript, Workspace
from ellena.utils.llm import LLMProvider

BASE_TIME = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


class FakeProvider(LLMProvider):
    """Provider returning canned vectors keyed by exact input text.

    Unknown texts embed to `default`; texts in `failing` return None like a
    provider whose call errored.
    """

    def __init__(
        self,
        vectors: Optional[dict[str, list[float]]] = None,
        default: Optional[list[float]] = None,
        failing: Optional[set[str]] = None,
        completion: Optional[str] = None,
    ) -> None:
        self.vectors = vectors or {}
        self.default = default or [0.0, 1.0]
        self.failing = failing or set()
        self.completion = completion
        self.embed_calls: list[str] = []
        self.prompts: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def default_model(self) -> str:
        return "fake-chat"

    @property
    def embedding_model(self) -> str:
        return "fake-embed"

    def generate_text(self, prompt, model=None, sanitize=True, max_tokens=None, temperature=None):
        self.prompts.append(prompt)
        return self.completion

    def embed(self, text, model=None):
        self.embed_calls.append(text)
        if text in self.failing:
            return None
        return self.vectors.get(text, self.default)


@pytest.fixture
def temp_db_path() -> Path:
    """Temporary SQLite path (cleaned up after test)."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    if path.exists():
        path.unlink(missing_ok=True)


@pytest.fixture
def db(temp_db_path: Path) -> SqliteDB:
    """Initialized SqliteDB with temp path."""
    d = SqliteDB(temp_db_path)
    d.init_db()
    return d


@pytest.fixture
def workspace(db: SqliteDB) -> Workspace:
    """Workspace 'ws-1' owned by user 'alice'."""
    ws = Workspace(id="ws-1", name="Platform", owner_id="alice", created_at=BASE_TIME)
    db.insert_workspace(ws)
    return ws


def make_task(
    task_id: str,
    title: str,
    description: Optional[str] = None,
    minutes: int = 0,
    workspace_id: str = "ws-1",
    created_by: str = "alice",
    assignee: Optional[str] = None,
) -> Task:
    """Task created `minutes` after BASE_TIME (larger = more recent)."""
    return Task(
        id=task_id,
        workspace_id=workspace_id,
        title=title,
        description=description,
        created_by=created_by,
        assignee=assignee,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def make_transcript(
    transcript_id: str,
    content: str,
    meeting_title: Optional[str] = None,
    summary: Optional[str] = None,
    minutes: int = 0,
    workspace_id: str = "ws-1",
    created_by: str = "alice",
) -> Transcript:
    return Transcript(
        id=transcript_id,
        workspace_id=workspace_id,
        meeting_title=meeting_title,
        content=content,
        summary=summary,
        created_by=created_by,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


@pytest.fixture
def task_factory():
    """make_task, for building tasks at fixed offsets from BASE_TIME."""
    return make_task


@pytest.fixture
def transcript_factory():
    return make_transcript


@pytest.fixture
def provider_factory():
    """FakeProvider class, constructed per test with its own vectors."""
    return FakeProvider
