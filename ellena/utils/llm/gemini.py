"""Gemini LLM provider using google-genai SDK."""

import logging
from typing import Any, Optional

from .constants import DEFAULT_API_TIMEOUT, DEFAULT_EMBEDDING_MODELS, DEFAULT_MODELS
from .provider import LLMProvider

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """LLM provider for Google Gemini models.

    Uses the google-genai SDK for API access.
    """

    def __init__(
        self,
        api_key: str,
        default_model: str = DEFAULT_MODELS["gemini"],
        embedding_model: str = DEFAULT_EMBEDDING_MODELS["gemini"],
        timeout: float = DEFAULT_API_TIMEOUT,
    ) -> None:
        """Initialize Gemini provider.

        Args:
            api_key: Google API key for Gemini.
            default_model: Default model to use.
            embedding_model: Embedding model to use.
            timeout: Request timeout in seconds.
        """
        self._api_key = api_key
        self._default_model = default_model
        self._embedding_model = embedding_model
        self._timeout = timeout
        self._client: Any = None

    @property
    def name(self) -> str:
        """Return provider name."""
        return "gemini"

    @property
    def default_model(self) -> str:
        """Return default model."""
        return self._default_model

    @property
    def embedding_model(self) -> str:
        """Return embedding model."""
        return self._embedding_model

    def _get_client(self) -> Any:
        """Get or create the Gemini client."""
        if self._client is None:
            try:
                from google import genai
                from google.genai import types

                self._client = genai.Client(
                    api_key=self._api_key,
                    http_options=types.HttpOptions(timeout=int(self._timeout * 1000)),
                )
            except ImportError as exc:
                raise ImportError(
                    "google-genai package is required for Gemini provider. "
                    "Install with: pip install google-genai"
                ) from exc
        return self._client

    def generate_text(
        self,
        prompt: str,
        model: str | None = None,
        sanitize: bool = True,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> Optional[str]:
        """Generate text completion using Gemini.

        Returns:
            Generated text, or None on error.
        """
        try:
            client = self._get_client()
            from google.genai import types
        except ImportError as e:
            logger.warning("Gemini SDK not available: %s", e)
            return None

        text = self._sanitize_prompt(prompt) if sanitize else prompt
        config = types.GenerateContentConfig(
            max_output_tokens=max_tokens,
            temperature=temperature,
        )

        try:
            response = client.models.generate_content(
                model=model or self._default_model,
                contents=text,
                config=config,
            )
            if response and response.text:
                return response.text
        except Exception as e:
            logger.debug("Gemini generation failed: %s: %s", type(e).__name__, e)

        return None

    def embed(self, text: str, model: str | None = None) -> Optional[list[float]]:
        """Embed text using Gemini embed_content.

        Returns:
            Embedding vector, or None on error.
        """
        try:
            client = self._get_client()
        except ImportError as e:
            logger.warning("Gemini SDK not available: %s", e)
            return None

        try:
            response = client.models.embed_content(
                model=model or self._embedding_model,
                contents=self._sanitize_embedding_input(text),
            )
            if response and response.embeddings:
                values = response.embeddings[0].values
                if values:
                    return list(values)
        except Exception as e:
            logger.debug("Gemini embedding failed: %s: %s", type(e).__name__, e)

        return None
