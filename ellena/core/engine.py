"""Application wiring: stores, LLM gateways, context retrieval and task graph."""

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ellena.config import Settings, get_settings
from ellena.database.sqlite import SqliteDB
from ellena.errors import InvalidInput, NotFound
from ellena.graph import GraphStore, SqliteGraphStore
from ellena.models import (
    RelatedTask,
    ScoredResult,
    SearchQuery,
    Task,
    TaskGraph,
    Transcript,
    Workspace,
    WorkspaceMember,
)
from ellena.utils.llm import LLMManager, LLMProvider

from .context import ContextService
from .gateway import CompletionGateway, EmbeddingGateway
from .ranking import RelevanceRanker
from .services import DEFAULT_GRAPH_DEPTH, TaskRelationshipService
from .snippets import SnippetExtractor

logger = logging.getLogger(__name__)


class Engine:
    """Builds every collaborator once from Settings and exposes the operations.

    Provider availability and the graph backend are resolved here at startup
    and injected; nothing downstream re-reads configuration.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        db_path: Optional[Path] = None,
        provider: Optional[LLMProvider] = None,
        graph_store: Optional[GraphStore] = None,
    ) -> None:
        self._settings = settings or get_settings()
        s = self._settings
        self._db_path = db_path or s.db_path
        self._db = SqliteDB(self._db_path)
        self._db.init_db()

        if provider is None and s.enable_ai:
            provider = LLMManager().get_provider()
        if provider is None:
            logger.info("No LLM provider available; context search uses lexical mode")
        self._embeddings = EmbeddingGateway(provider, enabled=s.enable_ai)
        self._completion = CompletionGateway(provider, enabled=s.enable_ai)

        self._context = ContextService(
            self._db,
            RelevanceRanker(self._embeddings, concurrency=s.embed_concurrency),
            SnippetExtractor(
                self._completion,
                content_chars=s.snippet_content_chars,
                max_chars=s.snippet_max_chars,
                anchor_padding=s.snippet_anchor_padding,
                max_tokens=s.snippet_max_tokens,
            ),
            embeddings_available=self._embeddings.available,
            settings=s,
        )

        self._graph = graph_store or self._build_graph_store()
        self._relationships = TaskRelationshipService(
            self._db, self._graph, max_depth=s.max_graph_depth
        )

    def _build_graph_store(self) -> GraphStore:
        s = self._settings
        if s.graph_backend == "neo4j":
            from ellena.graph.neo4j_store import Neo4jGraphStore

            store = Neo4jGraphStore(s.neo4j_uri, s.neo4j_username, s.neo4j_password or "")
            store.init_schema()
            return store
        store = SqliteGraphStore(self._db_path)
        store.init_db()
        return store

    @property
    def semantic_search(self) -> bool:
        """True when an embedding provider was configured at startup."""
        return self._context.semantic

    # ---- Workspaces ----

    def create_workspace(
        self, name: str, owner_id: str, description: Optional[str] = None
    ) -> Workspace:
        workspace = Workspace(
            id=str(uuid.uuid4()),
            name=name.strip(),
            description=description,
            owner_id=owner_id,
            created_at=datetime.now(timezone.utc),
        )
        self._db.insert_workspace(workspace)
        return workspace

    def add_member(self, workspace_id: str, user_id: str, role: str = "member") -> None:
        self._db.add_member(
            WorkspaceMember(
                workspace_id=workspace_id,
                user_id=user_id,
                role=role,
                joined_at=datetime.now(timezone.utc),
            )
        )

    # ---- Tasks and transcripts ----

    def add_task(
        self,
        workspace_id: str,
        title: str,
        created_by: str,
        description: Optional[str] = None,
        assignee: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> Task:
        """Create a task and mirror it into the graph store.

        Raises:
            InvalidInput: Blank title.
        """
        if not title.strip():
            raise InvalidInput("Task title is required")
        task = Task(
            id=str(uuid.uuid4()),
            workspace_id=workspace_id,
            title=title.strip(),
            description=description,
            priority=priority,
            created_by=created_by,
            assignee=assignee,
            created_at=datetime.now(timezone.utc),
        )
        self._db.insert_task(task)
        self._relationships.sync_task_node(task)
        return task

    def delete_task(self, task_id: str) -> None:
        """Delete a task and its graph node with every relationship touching it.

        Raises:
            NotFound: The task does not exist.
        """
        if not self._db.delete_task(task_id):
            raise NotFound(f"Task {task_id} not found")
        self._relationships.delete_task_node(task_id)

    def list_tasks(self, workspace_id: str) -> list[Task]:
        return self._db.list_tasks(workspace_id)

    def get_task(self, task_id: str) -> Optional[Task]:
        return self._db.get_task(task_id)

    def add_transcript(
        self,
        workspace_id: str,
        content: str,
        created_by: str,
        meeting_title: Optional[str] = None,
        summary: Optional[str] = None,
        duration: Optional[int] = None,
    ) -> Transcript:
        transcript = Transcript(
            id=str(uuid.uuid4()),
            workspace_id=workspace_id,
            meeting_title=meeting_title,
            content=content,
            summary=summary,
            duration=duration,
            created_by=created_by,
            created_at=datetime.now(timezone.utc),
        )
        self._db.insert_transcript(transcript)
        return transcript

    # ---- Context retrieval ----

    def search(
        self, text: str, principal_id: str, workspace_id: Optional[str] = None
    ) -> list[ScoredResult]:
        return self._context.search_context(
            SearchQuery(text=text, principal_id=principal_id, workspace_id=workspace_id)
        )

    def task_context(self, principal_id: str, task_id: str) -> list[ScoredResult]:
        return self._context.get_task_context(principal_id, task_id)

    # ---- Task graph ----

    def relate(self, source_id: str, target_id: str, rel_type: str) -> bool:
        return self._relationships.create_relationship(source_id, target_id, rel_type)

    def unrelate(self, source_id: str, target_id: str, rel_type: str) -> bool:
        return self._relationships.delete_relationship(source_id, target_id, rel_type)

    def related(self, task_id: str, rel_type: Optional[str] = None) -> list[RelatedTask]:
        return self._relationships.get_related_tasks(task_id, rel_type)

    def task_graph(self, task_id: str, depth: int = DEFAULT_GRAPH_DEPTH) -> TaskGraph:
        return self._relationships.get_task_graph(task_id, depth)

    def close(self) -> None:
        """Release the graph store connection."""
        self._graph.close()
