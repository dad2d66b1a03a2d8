"""OpenAI LLM provider using the openai SDK."""

import logging
from typing import Any, Optional

from .constants import DEFAULT_API_TIMEOUT, DEFAULT_EMBEDDING_MODELS, DEFAULT_MODELS
from .provider import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """LLM provider for OpenAI models (chat completions and embeddings).

    Uses the openai SDK for API access. Also supports Azure OpenAI
    and other OpenAI-compatible endpoints via base_url.
    """

    def __init__(
        self,
        api_key: str,
        default_model: str = DEFAULT_MODELS["openai"],
        embedding_model: str = DEFAULT_EMBEDDING_MODELS["openai"],
        base_url: str | None = None,
        timeout: float = DEFAULT_API_TIMEOUT,
    ) -> None:
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key.
            default_model: Default chat model to use.
            embedding_model: Embedding model to use.
            base_url: Optional custom base URL (for Azure, etc.).
            timeout: Request timeout in seconds.
        """
        self._api_key = api_key
        self._default_model = default_model
        self._embedding_model = embedding_model
        self._base_url = base_url
        self._timeout = timeout
        self._client: Any = None

    @property
    def name(self) -> str:
        """Return provider name."""
        return "openai"

    @property
    def default_model(self) -> str:
        """Return default model."""
        return self._default_model

    @property
    def embedding_model(self) -> str:
        """Return embedding model."""
        return self._embedding_model

    def _get_client(self) -> Any:
        """Get or create the OpenAI client."""
        if self._client is None:
            try:
                from openai import OpenAI

                kwargs: dict[str, Any] = {
                    "api_key": self._api_key,
                    "timeout": self._timeout,
                }
                if self._base_url:
                    kwargs["base_url"] = self._base_url
                self._client = OpenAI(**kwargs)
            except ImportError as exc:
                raise ImportError(
                    "openai package is required for OpenAI provider. "
                    "Install with: pip install openai"
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
        """Generate text completion using OpenAI chat completions.

        Returns:
            Generated text, or None on error.
        """
        try:
            client = self._get_client()
        except ImportError as e:
            logger.warning("OpenAI SDK not available: %s", e)
            return None

        text = self._sanitize_prompt(prompt) if sanitize else prompt
        kwargs: dict[str, Any] = {
            "model": model or self._default_model,
            "messages": [{"role": "user", "content": text}],
        }
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = client.chat.completions.create(**kwargs)
            if response.choices and response.choices[0].message.content:
                return response.choices[0].message.content
        except Exception as e:
            logger.debug("OpenAI generation failed: %s: %s", type(e).__name__, e)

        return None

    def embed(self, text: str, model: str | None = None) -> Optional[list[float]]:
        """Embed text using the OpenAI embeddings endpoint.

        Returns:
            Embedding vector, or None on error.
        """
        try:
            client = self._get_client()
        except ImportError as e:
            logger.warning("OpenAI SDK not available: %s", e)
            return None

        try:
            response = client.embeddings.create(
                model=model or self._embedding_model,
                input=self._sanitize_embedding_input(text),
                encoding_format="float",
            )
            if response.data:
                return list(response.data[0].embedding)
        except Exception as e:
            logger.debug("OpenAI embedding failed: %s: %s", type(e).__name__, e)

        return None
