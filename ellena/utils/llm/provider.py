"""Abstract base class for LLM providers."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .constants import MAX_EMBEDDING_INPUT_LENGTH, MAX_PROMPT_LENGTH

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    All LLM providers must implement this interface to ensure consistent
    behavior across different backends (Gemini, OpenAI, Ollama, etc.).
    Methods log failures and return None; callers decide how to degrade.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name (e.g., 'gemini', 'openai', 'ollama')."""
        ...

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Return the default completion model for this provider."""
        ...

    @property
    @abstractmethod
    def embedding_model(self) -> str:
        """Return the embedding model for this provider."""
        ...

    @abstractmethod
    def generate_text(
        self,
        prompt: str,
        model: str | None = None,
        sanitize: bool = True,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> Optional[str]:
        """Generate text completion.

        Args:
            prompt: The input prompt.
            model: Model to use (defaults to provider's default_model).
            sanitize: If True, truncate prompt to max safe length.
            max_tokens: Optional cap on generated tokens.
            temperature: Optional sampling temperature.

        Returns:
            Generated text, or None on error.
        """
        ...

    @abstractmethod
    def embed(self, text: str, model: str | None = None) -> Optional[list[float]]:
        """Embed text into a fixed-dimension vector.

        Args:
            text: Text to embed (truncated to a safe length).
            model: Embedding model (defaults to provider's embedding_model).

        Returns:
            Embedding vector, or None on error.
        """
        ...

    def _sanitize_prompt(self, prompt: str, max_length: int = MAX_PROMPT_LENGTH) -> str:
        """Truncate prompt to max safe length for LLM processing.

        Args:
            prompt: The input prompt.
            max_length: Maximum character length (default: MAX_PROMPT_LENGTH).

        Returns:
            Truncated prompt if it exceeds max_length, otherwise original.
        """
        return prompt[:max_length] if len(prompt) > max_length else prompt

    def _sanitize_embedding_input(self, text: str) -> str:
        return self._sanitize_prompt(text, max_length=MAX_EMBEDDING_INPUT_LENGTH)
