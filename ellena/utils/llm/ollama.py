"""Ollama LLM provider using httpx for API calls."""

import logging
from typing import Any, Optional

from .constants import DEFAULT_EMBEDDING_MODELS, DEFAULT_MODELS, OLLAMA_TIMEOUT
from .provider import LLMProvider

logger = logging.getLogger(__name__)


class OllamaProvider(LLMProvider):
    """LLM provider for Ollama local models.

    Uses httpx for direct API calls to the Ollama server.
    No SDK dependency required.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        default_model: str = DEFAULT_MODELS["ollama"],
        embedding_model: str = DEFAULT_EMBEDDING_MODELS["ollama"],
        timeout: float = OLLAMA_TIMEOUT,
    ) -> None:
        """Initialize Ollama provider.

        Args:
            base_url: Ollama server URL (default: http://localhost:11434).
            default_model: Default model to use (llama3.2 recommended).
            embedding_model: Embedding model pulled on the server.
            timeout: Request timeout in seconds (higher for local inference).
        """
        self._base_url = base_url.rstrip("/")
        self._default_model = default_model
        self._embedding_model = embedding_model
        self._timeout = timeout

    @property
    def name(self) -> str:
        """Return provider name."""
        return "ollama"

    @property
    def default_model(self) -> str:
        """Return default model."""
        return self._default_model

    @property
    def embedding_model(self) -> str:
        """Return embedding model."""
        return self._embedding_model

    def _get_httpx(self) -> Any:
        """Import and return httpx module.

        Raises:
            ImportError: If httpx is not installed.
        """
        try:
            import httpx

            return httpx
        except ImportError:
            raise ImportError(
                "httpx package is required for Ollama provider. "
                "Install with: pip install httpx"
            )

    def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        httpx = self._get_httpx()
        response = httpx.post(
            f"{self._base_url}{path}",
            json=payload,
            timeout=self._timeout,
        )
        response.raise_for_status()
        return response.json()

    def generate_text(
        self,
        prompt: str,
        model: str | None = None,
        sanitize: bool = True,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> Optional[str]:
        """Generate text completion using Ollama.

        Returns:
            Generated text, or None on error.
        """
        text = self._sanitize_prompt(prompt) if sanitize else prompt
        options: dict[str, Any] = {}
        if max_tokens is not None:
            options["num_predict"] = max_tokens
        if temperature is not None:
            options["temperature"] = temperature
        payload: dict[str, Any] = {
            "model": model or self._default_model,
            "prompt": text,
            "stream": False,
        }
        if options:
            payload["options"] = options

        try:
            data = self._post("/api/generate", payload)
            if data.get("response"):
                return data["response"]
        except ImportError as e:
            logger.warning("httpx not available: %s", e)
        except Exception as e:
            logger.debug("Ollama generation failed: %s: %s", type(e).__name__, e)

        return None

    def embed(self, text: str, model: str | None = None) -> Optional[list[float]]:
        """Embed text using the Ollama /api/embed endpoint.

        Returns:
            Embedding vector, or None on error.
        """
        payload = {
            "model": model or self._embedding_model,
            "input": self._sanitize_embedding_input(text),
        }

        try:
            data = self._post("/api/embed", payload)
            embeddings = data.get("embeddings") or []
            if embeddings and embeddings[0]:
                return [float(v) for v in embeddings[0]]
        except ImportError as e:
            logger.warning("httpx not available: %s", e)
        except Exception as e:
            logger.debug("Ollama embedding failed: %s: %s", type(e).__name__, e)

        return None
