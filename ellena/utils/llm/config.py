"""Configuration manager for LLM providers.

Reads configuration from ~/.ellena/config.toml and environment variables.
Environment variables take precedence over config file values.
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, cast

from .constants import (
    DEFAULT_API_TIMEOUT,
    DEFAULT_EMBEDDING_MODELS,
    DEFAULT_MODELS,
    OLLAMA_TIMEOUT,
)

# Provider type alias
ProviderType = Literal["gemini", "openai", "ollama"]

# Default config file location
DEFAULT_CONFIG_PATH = Path.home() / ".ellena" / "config.toml"


@dataclass
class GeminiConfig:
    """Configuration for Gemini provider."""

    api_key: str = ""
    default_model: str = DEFAULT_MODELS["gemini"]
    embedding_model: str = DEFAULT_EMBEDDING_MODELS["gemini"]
    timeout: float = DEFAULT_API_TIMEOUT


@dataclass
class OpenAIConfig:
    """Configuration for OpenAI provider."""

    api_key: str = ""
    default_model: str = DEFAULT_MODELS["openai"]
    embedding_model: str = DEFAULT_EMBEDDING_MODELS["openai"]
    base_url: str = ""  # Optional, for Azure/custom endpoints
    timeout: float = DEFAULT_API_TIMEOUT


@dataclass
class OllamaConfig:
    """Configuration for Ollama provider."""

    base_url: str = "http://localhost:11434"
    default_model: str = DEFAULT_MODELS["ollama"]
    embedding_model: str = DEFAULT_EMBEDDING_MODELS["ollama"]
    timeout: float = OLLAMA_TIMEOUT  # Higher for local models


@dataclass
class LLMConfig:
    """Main LLM configuration."""

    provider: ProviderType = "openai"
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    openai: OpenAIConfig = field(default_factory=OpenAIConfig)
    ollama: OllamaConfig = field(default_factory=OllamaConfig)


def _load_toml(path: Path) -> dict:
    """Load and parse a TOML configuration file.

    Returns:
        Parsed TOML content as dict, or empty dict if file doesn't exist.
    """
    if not path.exists():
        return {}
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_config(config_path: Optional[Path] = None) -> LLMConfig:
    """Load LLM configuration from file and environment.

    Configuration sources (in order of precedence):
    1. Environment variables (ELLENA_*, then vendor defaults like OPENAI_API_KEY)
    2. Config file (~/.ellena/config.toml)
    3. Default values

    Args:
        config_path: Optional path to config file. Defaults to ~/.ellena/config.toml.

    Returns:
        LLMConfig with merged configuration.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    file_config = _load_toml(path)

    llm_config = file_config.get("llm", {})

    config = LLMConfig()

    config.provider = _get_provider_type(
        os.environ.get("ELLENA_LLM_PROVIDER") or llm_config.get("provider", "openai")
    )

    gemini_section = llm_config.get("gemini", {})
    config.gemini = GeminiConfig(
        api_key=(
            os.environ.get("ELLENA_GEMINI_API_KEY")
            or os.environ.get("GOOGLE_API_KEY")
            or gemini_section.get("api_key", "")
        ),
        default_model=(
            os.environ.get("ELLENA_GEMINI_MODEL")
            or gemini_section.get("default_model", DEFAULT_MODELS["gemini"])
        ),
        embedding_model=(
            os.environ.get("ELLENA_GEMINI_EMBEDDING_MODEL")
            or gemini_section.get("embedding_model", DEFAULT_EMBEDDING_MODELS["gemini"])
        ),
        timeout=float(
            os.environ.get("ELLENA_GEMINI_TIMEOUT")
            or gemini_section.get("timeout", DEFAULT_API_TIMEOUT)
        ),
    )

    openai_section = llm_config.get("openai", {})
    config.openai = OpenAIConfig(
        api_key=(
            os.environ.get("ELLENA_OPENAI_API_KEY")
            or os.environ.get("OPENAI_API_KEY")
            or openai_section.get("api_key", "")
        ),
        default_model=(
            os.environ.get("ELLENA_OPENAI_MODEL")
            or openai_section.get("default_model", DEFAULT_MODELS["openai"])
        ),
        embedding_model=(
            os.environ.get("ELLENA_OPENAI_EMBEDDING_MODEL")
            or openai_section.get("embedding_model", DEFAULT_EMBEDDING_MODELS["openai"])
        ),
        base_url=(
            os.environ.get("ELLENA_OPENAI_BASE_URL") or openai_section.get("base_url", "")
        ),
        timeout=float(
            os.environ.get("ELLENA_OPENAI_TIMEOUT")
            or openai_section.get("timeout", DEFAULT_API_TIMEOUT)
        ),
    )

    ollama_section = llm_config.get("ollama", {})
    config.ollama = OllamaConfig(
        base_url=(
            os.environ.get("ELLENA_OLLAMA_BASE_URL")
            or ollama_section.get("base_url", "http://localhost:11434")
        ),
        default_model=(
            os.environ.get("ELLENA_OLLAMA_MODEL")
            or ollama_section.get("default_model", DEFAULT_MODELS["ollama"])
        ),
        embedding_model=(
            os.environ.get("ELLENA_OLLAMA_EMBEDDING_MODEL")
            or ollama_section.get("embedding_model", DEFAULT_EMBEDDING_MODELS["ollama"])
        ),
        timeout=float(
            os.environ.get("ELLENA_OLLAMA_TIMEOUT")
            or ollama_section.get("timeout", OLLAMA_TIMEOUT)
        ),
    )

    return config


def _get_provider_type(value: str) -> ProviderType:
    """Validate and normalize a provider type string.

    Returns:
        Validated ProviderType literal. Defaults to "openai"
        if value is not a valid provider.
    """
    value = value.lower().strip()
    if value in ("gemini", "openai", "ollama"):
        return cast(ProviderType, value)
    return "openai"


def get_example_config() -> str:
    """Return example config.toml content with documented options."""
    return """# Ellena - LLM Configuration
# Place this file at ~/.ellena/config.toml

[llm]
# Available providers: "openai", "gemini", "ollama"
provider = "openai"

[llm.openai]
# API key (or set ELLENA_OPENAI_API_KEY / OPENAI_API_KEY env var)
api_key = ""
default_model = "gpt-4o-mini"
embedding_model = "text-embedding-3-small"
timeout = 30.0  # Request timeout in seconds
# Optional: custom base URL for Azure OpenAI or other compatible endpoints
# base_url = "https://your-resource.openai.azure.com/"

[llm.gemini]
# API key (or set ELLENA_GEMINI_API_KEY / GOOGLE_API_KEY env var)
api_key = ""
default_model = "gemini-2.0-flash"
embedding_model = "text-embedding-004"
timeout = 30.0

[llm.ollama]
# Local Ollama server URL
base_url = "http://localhost:11434"
default_model = "llama3.2"
embedding_model = "nomic-embed-text"
timeout = 120.0  # Higher timeout for local models
"""
