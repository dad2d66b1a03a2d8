"""Cosine similarity between embedding vectors."""

import math
from typing import Sequence

from ellena.errors import InvalidInput


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the cosine of the angle between two equal-length vectors.

    Raises:
        InvalidInput: If the vectors differ in length.

    Returns 0.0 when either vector has zero magnitude.
    """
    if len(a) != len(b):
        raise InvalidInput(f"Vector dimensions differ: {len(a)} != {len(b)}")

    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y

    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return dot / (math.sqrt(norm_a) * math.sqrt(norm_b))
