"""Relevance ranking of task and transcript candidates.

Two modes:

- Embedding mode scores every candidate by cosine similarity against the
  query vector, keeps those above a kind-dependent threshold, and returns
  the top results in descending order.
- Lexical mode (no embedding provider) keeps case-insensitive substring
  matches at a flat relevance of 1.0.

The caller picks the mode once per request from EmbeddingGateway.available.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence

from ellena.errors import InvalidInput, ProviderError
from ellena.models import Candidate, CandidateKind

from .gateway import EmbeddingGateway
from .similarity import cosine_similarity

logger = logging.getLogger(__name__)

LEXICAL_RELEVANCE = 1.0


@dataclass(frozen=True)
class RankingPolicy:
    """Thresholds and result cap for one kind of lookup."""

    task_threshold: float
    transcript_threshold: float
    limit: int

    def threshold(self, kind: CandidateKind) -> float:
        return self.task_threshold if kind == "task" else self.transcript_threshold


@dataclass(frozen=True)
class ScoredCandidate:
    """Candidate paired with its relevance score."""

    candidate: Candidate
    relevance: float


def _require_text(query_text: str) -> str:
    text = (query_text or "").strip()
    if not text:
        raise InvalidInput("Query text is required")
    return text


class RelevanceRanker:
    """Ranks candidates against a query using the embedding gateway.

    With concurrency > 1 candidate embeddings are requested through a
    bounded thread pool; results are still assembled in candidate order.
    """

    def __init__(self, gateway: EmbeddingGateway, concurrency: int = 1) -> None:
        self._gateway = gateway
        self._concurrency = max(1, concurrency)

    @property
    def concurrency(self) -> int:
        return self._concurrency

    def rank(
        self,
        query_text: str,
        candidates: Sequence[Candidate],
        policy: RankingPolicy,
    ) -> list[ScoredCandidate]:
        """Embedding-mode ranking.

        Args:
            query_text: Free text (or anchor task text) to rank against.
            candidates: Candidates in recency order; ties keep this order.
            policy: Thresholds and result cap.

        Returns:
            Candidates with relevance above their kind's threshold, sorted
            by relevance descending and truncated to policy.limit.

        Raises:
            InvalidInput: Empty query text.
            ProviderUnavailable: No embedding provider configured.
            ProviderError: The query itself could not be embedded.
        """
        text = _require_text(query_text)
        query_vector = self._gateway.embed(text)

        scores = self._score_all(query_vector, candidates)
        kept = [
            ScoredCandidate(candidate=c, relevance=score)
            for c, score in zip(candidates, scores)
            if score is not None and score > policy.threshold(c.kind)
        ]
        # list.sort is stable, so equal scores keep recency order
        kept.sort(key=lambda s: s.relevance, reverse=True)
        return kept[: policy.limit]

    def _score_all(
        self, query_vector: list[float], candidates: Sequence[Candidate]
    ) -> list[Optional[float]]:
        if self._concurrency == 1 or len(candidates) <= 1:
            return [self._score(query_vector, c) for c in candidates]
        with ThreadPoolExecutor(max_workers=self._concurrency) as pool:
            return list(pool.map(lambda c: self._score(query_vector, c), candidates))

    def _score(self, query_vector: list[float], candidate: Candidate) -> Optional[float]:
        try:
            vector = self._gateway.embed(candidate.embedding_text)
        except ProviderError as exc:
            logger.warning(
                "Skipping %s %s: embedding failed: %s", candidate.kind, candidate.id, exc
            )
            return None
        return cosine_similarity(query_vector, vector)


def rank_lexical(
    query_text: str,
    tasks: Sequence[Candidate],
    transcripts: Sequence[Candidate],
    task_limit: int = 5,
    transcript_limit: int = 5,
) -> list[ScoredCandidate]:
    """Lexical fallback: substring matches at relevance 1.0.

    Matches are capped per kind and concatenated tasks first. They are not
    re-sorted since every score is tied.
    """
    needle = _require_text(query_text).casefold()

    def _matches(c: Candidate) -> bool:
        haystacks = (c.primary_text, c.secondary_text, c.content or "")
        return any(needle in h.casefold() for h in haystacks)

    matched_tasks = [c for c in tasks if _matches(c)][:task_limit]
    matched_transcripts = [c for c in transcripts if _matches(c)][:transcript_limit]
    return [
        ScoredCandidate(candidate=c, relevance=LEXICAL_RELEVANCE)
        for c in (*matched_tasks, *matched_transcripts)
    ]
