"""Unit tests for cosine similarity."""

import math

import pytest

from ellena.core.similarity import cosine_similarity
from ellena.errors import InvalidInput


def test_identical_vectors_score_one() -> None:
    assert cosine_similarity([0.3, 0.4, 0.5], [0.3, 0.4, 0.5]) == pytest.approx(1.0)


def test_scale_does_not_change_score() -> None:
    assert cosine_similarity([1.0, 2.0], [2.0, 4.0]) == pytest.approx(1.0)


def test_orthogonal_and_opposite() -> None:
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)
    assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)


def test_symmetric() -> None:
    a, b = [0.2, 0.9, -0.1], [0.5, 0.1, 0.7]
    assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))


def test_known_angle() -> None:
    assert cosine_similarity([1.0, 0.0], [1.0, 1.0]) == pytest.approx(1 / math.sqrt(2))


def test_zero_vector_scores_zero() -> None:
    """Zero magnitude yields 0.0 rather than NaN."""
    assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0
    assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0


def test_length_mismatch_rejected() -> None:
    with pytest.raises(InvalidInput):
        cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])
