from __future__ import annotations

from pathlib import Path

import pytest

from ellena.utils.llm import LLMConfig, LLMManager, OpenAIConfig, get_example_config, load_config
from ellena.utils.llm.config import _get_provider_type

_ENV_VARS = (
    "ELLENA_LLM_PROVIDER",
    "ELLENA_OPENAI_API_KEY",
    "OPENAI_API_KEY",
    "ELLENA_GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "ELLENA_OPENAI_MODEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.toml")
    assert config.provider == "openai"
    assert config.openai.api_key == ""
    assert config.openai.embedding_model == "text-embedding-3-small"


def test_file_values_loaded(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join(
            [
                "[llm]",
                'provider = "gemini"',
                "",
                "[llm.gemini]",
                'api_key = "from-file"',
                'default_model = "gemini-custom"',
            ]
        )
    )
    config = load_config(path)
    assert config.provider == "gemini"
    assert config.gemini.api_key == "from-file"
    assert config.gemini.default_model == "gemini-custom"


def test_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.toml"
    path.write_text('[llm.openai]\napi_key = "from-file"\ndefault_model = "file-model"\n')
    monkeypatch.setenv("ELLENA_OPENAI_API_KEY", "from-env")
    monkeypatch.setenv("ELLENA_OPENAI_MODEL", "env-model")

    config = load_config(path)

    assert config.openai.api_key == "from-env"
    assert config.openai.default_model == "env-model"


def test_vendor_key_fallback(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "vendor")
    assert load_config(tmp_path / "absent.toml").openai.api_key == "vendor"


def test_invalid_provider_defaults_to_openai() -> None:
    assert _get_provider_type("  Ollama ") == "ollama"
    assert _get_provider_type("anthropic") == "openai"


def test_manager_without_key_returns_none() -> None:
    manager = LLMManager(LLMConfig(provider="openai"))
    assert manager.get_provider() is None


def test_manager_builds_openai_provider() -> None:
    manager = LLMManager(LLMConfig(provider="openai", openai=OpenAIConfig(api_key="k")))
    provider = manager.get_provider()
    assert provider is not None
    assert provider.name == "openai"
    assert provider.embedding_model == "text-embedding-3-small"
    assert manager.get_provider() is provider


def test_manager_builds_ollama_without_key() -> None:
    provider = LLMManager(LLMConfig(provider="ollama")).get_provider()
    assert provider is not None
    assert provider.name == "ollama"


def test_example_config_mentions_every_provider() -> None:
    text = get_example_config()
    for section in ("[llm.openai]", "[llm.gemini]", "[llm.ollama]"):
        assert section in text
