"""Multi-provider LLM module for Ellena.

Supports multiple LLM providers (OpenAI, Gemini, Ollama) behind one
interface offering text completion and embeddings. Configuration is read
from ~/.ellena/config.toml with ELLENA_* environment overrides.

Example config.toml:
    [llm]
    provider = "openai"

    [llm.openai]
    api_key = "your-api-key"
    default_model = "gpt-4o-mini"
    embedding_model = "text-embedding-3-small"
"""

from .config import (
    GeminiConfig,
    LLMConfig,
    OllamaConfig,
    OpenAIConfig,
    get_example_config,
    load_config,
)
from .manager import LLMManager
from .provider import LLMProvider

__all__ = [
    "get_example_config",
    "load_config",
    "LLMManager",
    "LLMProvider",
    "LLMConfig",
    "GeminiConfig",
    "OpenAIConfig",
    "OllamaConfig",
]
