"""Environment and settings (Pydantic Settings)."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory: ~/.ellena/data/
_data_dir = Path.home() / ".ellena" / "data"


class Settings(BaseSettings):
    """Ellena settings loaded from environment and .env.

    Resolved once at process startup and handed to the Engine; query paths
    never re-read the environment. LLM provider credentials are loaded from
    ~/.ellena/config.toml by the LLM module, with env vars as override.
    """

    model_config = SettingsConfigDict(
        env_prefix="ELLENA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths (local-first data stored in ~/.ellena/data/)
    db_path: Path = _data_dir / "ellena.db"

    # Feature flags
    # When False the embedding/completion gateways report ProviderUnavailable
    # and search runs in lexical mode even if a credential is configured.
    enable_ai: bool = True

    # Candidate fetch bounds (most-recent-first)
    search_task_limit: int = 20
    search_transcript_limit: int = 10
    context_task_limit: int = 20
    context_transcript_limit: int = 10

    # Relevance thresholds (strictly greater-than)
    search_threshold: float = 0.5
    context_task_threshold: float = 0.6
    context_transcript_threshold: float = 0.5

    # Result caps
    search_result_limit: int = 10
    context_result_limit: int = 8
    lexical_task_limit: int = 5
    lexical_transcript_limit: int = 5
    context_lexical_transcript_limit: int = 3

    # Snippets
    snippet_content_chars: int = 10_000
    snippet_max_chars: int = 200
    snippet_anchor_padding: int = 100
    snippet_max_tokens: int = 100

    # Embedding calls in flight per request; 1 keeps the sequential loop
    embed_concurrency: int = 1

    # Task graph
    graph_backend: Literal["sqlite", "neo4j"] = "sqlite"
    max_graph_depth: int = 5
    neo4j_uri: str = "neo4j://localhost:7687"
    neo4j_username: str = "neo4j"
    neo4j_password: Optional[str] = None

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: Path = _data_dir / "ellena.log"


def get_settings() -> Settings:
    """Return application settings (singleton-like)."""
    return Settings()
