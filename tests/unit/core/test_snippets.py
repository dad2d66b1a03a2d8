"""Unit tests for snippet extraction."""

from ellena.core.gateway import CompletionGateway
from ellena.core.snippets import SnippetExtractor, anchor_window, match_window
from ellena.models import Candidate

CONTENT = "x" * 500 + "Deploy service" + "y" * 500


def _transcript(content=CONTENT, summary="Release planning") -> Candidate:
    return Candidate(
        kind="transcript", id="m1", primary_text="Release sync",
        secondary_text=summary, content=content,
    )


def test_anchor_window_pads_both_sides() -> None:
    window = anchor_window(CONTENT, "deploy SERVICE", padding=100)
    assert window == CONTENT[400:614]
    assert window.startswith("x" * 100 + "Deploy service")
    assert len(window) == 214


def test_anchor_window_clamps_at_edges() -> None:
    assert anchor_window("Deploy service now", "Deploy service") == "Deploy service now"


def test_anchor_window_absent() -> None:
    assert anchor_window(CONTENT, "rollback") is None
    assert anchor_window(CONTENT, "") is None


def test_match_window_starts_before_hit() -> None:
    window = match_window(CONTENT, "deploy")
    assert window == CONTENT[450:650]
    assert len(window) == 200


def test_match_window_near_start_is_short() -> None:
    """A hit within the lead keeps the original slice bounds."""
    content = "Deploy service " + "z" * 300
    assert match_window(content, "deploy") == content[0:150]


def test_extract_prefers_anchor_window(provider_factory) -> None:
    provider = provider_factory(completion="should not be used")
    extractor = SnippetExtractor(CompletionGateway(provider))
    snippet = extractor.extract(_transcript(), "deploy", anchor_title="Deploy service")
    assert snippet == CONTENT[400:614]
    assert provider.prompts == []


def test_extract_uses_completion_for_transcripts(provider_factory) -> None:
    provider = provider_factory(completion="  We agreed to deploy on Friday.  ")
    extractor = SnippetExtractor(CompletionGateway(provider), content_chars=50)
    snippet = extractor.extract(_transcript(), "when do we deploy")
    assert snippet == "We agreed to deploy on Friday."
    assert len(provider.prompts) == 1
    assert 'Given this query: "when do we deploy"' in provider.prompts[0]
    assert "x" * 50 in provider.prompts[0]
    assert "x" * 51 not in provider.prompts[0]


def test_extract_truncates_long_completion(provider_factory) -> None:
    provider = provider_factory(completion="a" * 500)
    extractor = SnippetExtractor(CompletionGateway(provider), max_chars=200)
    assert extractor.extract(_transcript(), "anything") == "a" * 200


def test_extract_falls_back_to_summary_on_failure(provider_factory) -> None:
    """A failed completion (provider returned nothing) degrades to the summary."""
    provider = provider_factory(completion=None)
    extractor = SnippetExtractor(CompletionGateway(provider))
    assert extractor.extract(_transcript(), "deploy") == "Release planning"


def test_extract_without_provider_uses_summary() -> None:
    extractor = SnippetExtractor(CompletionGateway(None))
    assert extractor.extract(_transcript(), "deploy") == "Release planning"


def test_extract_refine_disabled(provider_factory) -> None:
    provider = provider_factory(completion="unused")
    extractor = SnippetExtractor(CompletionGateway(provider))
    snippet = extractor.extract(_transcript(), "deploy", anchor_title="missing", refine=False)
    assert snippet == "Release planning"
    assert provider.prompts == []


def test_extract_task_returns_description(provider_factory) -> None:
    provider = provider_factory(completion="unused")
    task = Candidate(kind="task", id="t1", primary_text="Fix login", secondary_text="OAuth bug")
    extractor = SnippetExtractor(CompletionGateway(provider))
    assert extractor.extract(task, "login") == "OAuth bug"
    assert provider.prompts == []


def test_extract_lexical() -> None:
    extractor = SnippetExtractor(CompletionGateway(None))
    assert extractor.extract_lexical(_transcript(), "deploy") == CONTENT[450:650]
    assert extractor.extract_lexical(_transcript(content="no hit"), "deploy") == "Release planning"
