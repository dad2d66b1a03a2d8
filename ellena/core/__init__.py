"""Application logic layer."""

from .engine import Engine
from .similarity import cosine_similarity

__all__ = ["Engine", "cosine_similarity"]
