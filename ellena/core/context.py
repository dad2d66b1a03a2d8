"""Context retrieval: free-text search and related context for a task."""

from __future__ import annotations

import logging

from ellena.config import Settings
from ellena.database import CandidateFilter, SqliteDB
from ellena.errors import InvalidInput, NotFound, Unauthorized
from ellena.models import Candidate, ScoredResult, SearchQuery, Task

from .ranking import RankingPolicy, RelevanceRanker, ScoredCandidate, rank_lexical
from .snippets import SnippetExtractor

logger = logging.getLogger(__name__)

UNTITLED_MEETING = "Untitled meeting"


class ContextService:
    """Fetches candidates, ranks them and attaches snippets.

    Embedding vs. lexical mode is chosen once per request from the
    gateway availability fixed at startup.
    """

    def __init__(
        self,
        db: SqliteDB,
        ranker: RelevanceRanker,
        snippets: SnippetExtractor,
        embeddings_available: bool,
        settings: Settings,
    ) -> None:
        self._db = db
        self._ranker = ranker
        self._snippets = snippets
        self._embeddings_available = embeddings_available
        self._settings = settings
        self._search_policy = RankingPolicy(
            task_threshold=settings.search_threshold,
            transcript_threshold=settings.search_threshold,
            limit=settings.search_result_limit,
        )
        self._context_policy = RankingPolicy(
            task_threshold=settings.context_task_threshold,
            transcript_threshold=settings.context_transcript_threshold,
            limit=settings.context_result_limit,
        )

    @property
    def semantic(self) -> bool:
        """True when requests are ranked by embeddings rather than substrings."""
        return self._embeddings_available

    def search_context(self, query: SearchQuery) -> list[ScoredResult]:
        """Search tasks and transcripts visible to the principal.

        Raises:
            InvalidInput: Empty query text.
            Unauthorized: Workspace scope given and principal is not a member.
        """
        text = query.text.strip()
        if not text:
            raise InvalidInput("Query parameter is required")
        if query.workspace_id and not self._db.is_workspace_member(
            query.workspace_id, query.principal_id
        ):
            raise Unauthorized("You do not have access to this workspace")

        s = self._settings
        if not self._embeddings_available:
            logger.info("No embedding provider configured. Using simple text search.")
            scored = rank_lexical(
                text,
                self._db.fetch_task_candidates(
                    CandidateFilter(
                        query.principal_id,
                        workspace_id=query.workspace_id,
                        contains=text,
                        limit=s.lexical_task_limit,
                    )
                ),
                self._db.fetch_transcript_candidates(
                    CandidateFilter(
                        query.principal_id,
                        workspace_id=query.workspace_id,
                        contains=text,
                        limit=s.lexical_transcript_limit,
                    )
                ),
                task_limit=s.lexical_task_limit,
                transcript_limit=s.lexical_transcript_limit,
            )
            return [
                _to_result(sc, self._snippets.extract_lexical(sc.candidate, text))
                for sc in scored
            ]

        candidates = self._db.fetch_task_candidates(
            CandidateFilter(
                query.principal_id,
                workspace_id=query.workspace_id,
                limit=s.search_task_limit,
            )
        ) + self._db.fetch_transcript_candidates(
            CandidateFilter(
                query.principal_id,
                workspace_id=query.workspace_id,
                limit=s.search_transcript_limit,
            )
        )
        scored = self._ranker.rank(text, candidates, self._search_policy)
        logger.debug(
            "Search %r: %d of %d candidates kept", text, len(scored), len(candidates)
        )
        return [_to_result(sc, self._snippets.extract(sc.candidate, text)) for sc in scored]

    def get_task_context(self, principal_id: str, task_id: str) -> list[ScoredResult]:
        """Tasks and transcripts related to one task, from the same workspace.

        Raises:
            NotFound: Task absent or not visible to the principal.
        """
        task = self._db.get_task_for_principal(task_id, principal_id)
        if task is None:
            raise NotFound("Task not found or you do not have access to it")

        s = self._settings
        if not self._embeddings_available:
            logger.info("No embedding provider configured. Using simple related items.")
            term = _lead_word(task)
            if not term:
                logger.debug("Task %s has a blank title; no lexical context", task.id)
                return []
            scored = rank_lexical(
                term,
                self._db.fetch_task_candidates(
                    CandidateFilter(
                        principal_id,
                        workspace_id=task.workspace_id,
                        exclude_task_id=task.id,
                        contains=term,
                        limit=s.lexical_task_limit,
                    )
                ),
                self._db.fetch_transcript_candidates(
                    CandidateFilter(
                        principal_id,
                        workspace_id=task.workspace_id,
                        contains=term,
                        limit=s.context_lexical_transcript_limit,
                    )
                ),
                task_limit=s.lexical_task_limit,
                transcript_limit=s.context_lexical_transcript_limit,
            )
        else:
            candidates = self._db.fetch_task_candidates(
                CandidateFilter(
                    principal_id,
                    workspace_id=task.workspace_id,
                    exclude_task_id=task.id,
                    limit=s.context_task_limit,
                )
            ) + self._db.fetch_transcript_candidates(
                CandidateFilter(
                    principal_id,
                    workspace_id=task.workspace_id,
                    limit=s.context_transcript_limit,
                )
            )
            anchor_text = f"{task.title} {task.description or ''}".strip()
            if not anchor_text:
                logger.debug("Task %s has no title or description; no context", task.id)
                return []
            scored = self._ranker.rank(anchor_text, candidates, self._context_policy)

        return [
            _to_result(
                sc,
                self._snippets.extract(
                    sc.candidate, task.title, anchor_title=task.title, refine=False
                ),
            )
            for sc in scored
        ]


def _lead_word(task: Task) -> str:
    words = task.title.split()
    return words[0] if words else ""


def _to_result(scored: ScoredCandidate, snippet: str) -> ScoredResult:
    c: Candidate = scored.candidate
    title = c.primary_text or (UNTITLED_MEETING if c.kind == "transcript" else "")
    return ScoredResult(
        kind=c.kind,
        id=c.id,
        title=title,
        snippet=snippet,
        relevance=scored.relevance,
    )
