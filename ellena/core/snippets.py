"""Snippet extraction for ranked results."""

import logging
from typing import Optional

from ellena.errors import ProviderError, ProviderUnavailable
from ellena.models import Candidate

from .gateway import CompletionGateway

logger = logging.getLogger(__name__)

SNIPPET_PROMPT = """Given this query: "{query}"

Find the most relevant section (maximum {max_chars} characters) from this transcript:
\"\"\"
{content}
\"\"\"

Return ONLY the relevant section, no additional text."""

# Lexical-mode window: this many chars before the match, this many in total
LEXICAL_LEAD = 50
LEXICAL_WINDOW = 200


def anchor_window(content: str, anchor: str, padding: int = 100) -> Optional[str]:
    """Return `padding` chars around the first case-insensitive hit of anchor.

    The window spans `padding` characters before the hit and
    `len(anchor) + padding` characters from its start. None when absent.
    """
    if not anchor:
        return None
    pos = content.lower().find(anchor.lower())
    if pos < 0:
        return None
    start = max(0, pos - padding)
    end = min(len(content), pos + len(anchor) + padding)
    return content[start:end]


def match_window(
    content: str, term: str, lead: int = LEXICAL_LEAD, length: int = LEXICAL_WINDOW
) -> Optional[str]:
    """Return a fixed-length window starting `lead` chars before the first hit."""
    if not term:
        return None
    pos = content.lower().find(term.lower())
    if pos < 0:
        return None
    return content[max(0, pos - lead) : pos - lead + length]


class SnippetExtractor:
    """Derives a short excerpt for a matched candidate.

    Preference order: anchor-title window (pure, no I/O), then one LLM call
    for transcripts with content when refinement is allowed, then the
    candidate's summary/description verbatim. Completion failures never
    propagate.
    """

    def __init__(
        self,
        completion: CompletionGateway,
        content_chars: int = 10_000,
        max_chars: int = 200,
        anchor_padding: int = 100,
        max_tokens: int = 100,
    ) -> None:
        self._completion = completion
        self._content_chars = content_chars
        self._max_chars = max_chars
        self._anchor_padding = anchor_padding
        self._max_tokens = max_tokens

    def extract(
        self,
        candidate: Candidate,
        query_text: str,
        anchor_title: Optional[str] = None,
        refine: bool = True,
    ) -> str:
        content = candidate.content
        if anchor_title and content:
            window = anchor_window(content, anchor_title, self._anchor_padding)
            if window is not None:
                return window

        if refine and candidate.kind == "transcript" and content and self._completion.available:
            refined = self._refine(candidate, query_text)
            if refined:
                return refined

        return candidate.secondary_text

    def extract_lexical(self, candidate: Candidate, query_text: str) -> str:
        """Snippet for a lexical match: window around the hit in the content."""
        if candidate.content:
            window = match_window(candidate.content, query_text.strip())
            if window is not None:
                return window
        return candidate.secondary_text

    def _refine(self, candidate: Candidate, query_text: str) -> Optional[str]:
        prompt = SNIPPET_PROMPT.format(
            query=query_text,
            max_chars=self._max_chars,
            content=(candidate.content or "")[: self._content_chars],
        )
        try:
            text = self._completion.complete(
                prompt, max_tokens=self._max_tokens, temperature=0.0
            )
        except (ProviderError, ProviderUnavailable) as exc:
            logger.warning("Snippet refinement failed for %s: %s", candidate.id, exc)
            return None
        return text.strip()[: self._max_chars] or None
