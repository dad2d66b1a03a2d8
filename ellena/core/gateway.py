"""Embedding and completion gateways over the configured LLM provider.

The gateways translate the provider's "None on failure" convention into the
ProviderUnavailable / ProviderError taxonomy so callers can pick a fallback.
Availability is fixed at construction time.
"""

import logging
from typing import Optional

from ellena.errors import ProviderError, ProviderUnavailable
from ellena.utils.llm import LLMProvider

logger = logging.getLogger(__name__)


class _Gateway:
    def __init__(self, provider: Optional[LLMProvider], enabled: bool = True) -> None:
        self._provider = provider if enabled else None

    @property
    def available(self) -> bool:
        """True when a provider was configured at startup."""
        return self._provider is not None

    def _require_provider(self) -> LLMProvider:
        if self._provider is None:
            raise ProviderUnavailable("No LLM provider configured")
        return self._provider


class EmbeddingGateway(_Gateway):
    """Text to vector. Nothing is cached; every call reaches the provider."""

    def embed(self, text: str) -> list[float]:
        """Embed text.

        Raises:
            ProviderUnavailable: No provider configured.
            ProviderError: The provider call failed or returned nothing.
        """
        provider = self._require_provider()
        vector = provider.embed(text)
        if not vector:
            raise ProviderError(f"{provider.name} returned no embedding")
        return vector


class CompletionGateway(_Gateway):
    """Prompt to text completion."""

    def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        """Complete a prompt.

        Raises:
            ProviderUnavailable: No provider configured.
            ProviderError: The provider call failed or returned nothing.
        """
        provider = self._require_provider()
        text = provider.generate_text(
            prompt, max_tokens=max_tokens, temperature=temperature
        )
        if not text:
            raise ProviderError(f"{provider.name} returned no completion")
        return text
