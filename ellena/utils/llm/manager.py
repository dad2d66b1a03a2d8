"""LLM Manager: provider factory.

Builds the configured provider once; the Engine hands the result to the
embedding and completion gateways.
"""

import logging
from typing import Optional

from .config import LLMConfig, load_config
from .provider import LLMProvider

logger = logging.getLogger(__name__)


class LLMManager:
    """Manages LLM provider instantiation.

    Uses lazy initialization - provider is only created when first needed.
    """

    def __init__(self, config: Optional[LLMConfig] = None) -> None:
        """Initialize LLM manager.

        Args:
            config: Optional LLM config. If None, loads from config file.
        """
        self._config = config
        self._provider: Optional[LLMProvider] = None

    @property
    def config(self) -> LLMConfig:
        """Get configuration, loading from file if needed."""
        if self._config is None:
            self._config = load_config()
        return self._config

    def get_provider(self) -> Optional[LLMProvider]:
        """Get the configured LLM provider.

        Returns:
            LLMProvider instance, or None if no credential is configured.
        """
        if self._provider is not None:
            return self._provider

        provider_type = self.config.provider

        if provider_type == "gemini":
            from .gemini import GeminiProvider

            if not self.config.gemini.api_key:
                logger.info("No Gemini API key configured")
                return None
            self._provider = GeminiProvider(
                api_key=self.config.gemini.api_key,
                default_model=self.config.gemini.default_model,
                embedding_model=self.config.gemini.embedding_model,
                timeout=self.config.gemini.timeout,
            )

        elif provider_type == "openai":
            from .openai import OpenAIProvider

            if not self.config.openai.api_key:
                logger.info("No OpenAI API key configured")
                return None
            self._provider = OpenAIProvider(
                api_key=self.config.openai.api_key,
                default_model=self.config.openai.default_model,
                embedding_model=self.config.openai.embedding_model,
                base_url=self.config.openai.base_url or None,
                timeout=self.config.openai.timeout,
            )

        elif provider_type == "ollama":
            from .ollama import OllamaProvider

            self._provider = OllamaProvider(
                base_url=self.config.ollama.base_url,
                default_model=self.config.ollama.default_model,
                embedding_model=self.config.ollama.embedding_model,
                timeout=self.config.ollama.timeout,
            )

        return self._provider
