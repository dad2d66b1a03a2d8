"""Constants for LLM module.

Centralizes magic numbers, default values, and configuration constants
for better maintainability and documentation.
"""

# =============================================================================
# Prompt Processing
# =============================================================================

# Maximum prompt length (chars) for sanitization.
# Snippet prompts embed up to 10k chars of transcript, so this is larger
# than a plain chat prompt needs.
MAX_PROMPT_LENGTH = 12000

# Maximum input length (chars) sent to an embedding model.
MAX_EMBEDDING_INPUT_LENGTH = 8000

# =============================================================================
# Timeout Settings (seconds)
# =============================================================================

# Default timeout for cloud API providers (Gemini, OpenAI)
DEFAULT_API_TIMEOUT = 30.0

# Default timeout for Ollama (local inference)
# Higher timeout because local models can be slower, especially
# on first request when loading into memory.
OLLAMA_TIMEOUT = 120.0

# =============================================================================
# Default Models
# =============================================================================

DEFAULT_MODELS = {
    "gemini": "gemini-2.0-flash",
    "openai": "gpt-4o-mini",
    "ollama": "llama3.2",
}

DEFAULT_EMBEDDING_MODELS = {
    "gemini": "text-embedding-004",
    "openai": "text-embedding-3-small",
    "ollama": "nomic-embed-text",
}
