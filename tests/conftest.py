"""Shared fixtures for the matrix multiplication tests."""

from __future__ import annotations

import pytest

from strassen import Matrix, StrassenConfig


@pytest.fixture
def square3() -> tuple[Matrix, Matrix, Matrix]:
    a = Matrix([12, 8, 4, 3, 17, 14, 9, 8, 10], 3, 3)
    b = Matrix([5, 19, 3, 6, 15, 9, 7, 8, 16], 3, 3)
    c = Matrix([136, 380, 172, 215, 424, 386, 163, 371, 259], 3, 3)
    return a, b, c


@pytest.fixture
def square4() -> tuple[Matrix, Matrix, Matrix]:
    a = Matrix([7, 14, 15, 6, 4, 8, 12, 3, 14, 21, 6, 9, 13, 7, 6, 4], 4, 4)
    b = Matrix([5, 7, 14, 2, 8, 16, 4, 9, 13, 6, 8, 4, 6, 3, 2, 4], 4, 4)
    c = Matrix(
        [378, 381, 286, 224, 258, 237, 190, 140, 370, 497, 346, 277, 223, 251, 266, 129],
        4,
        4,
    )
    return a, b, c


@pytest.fixture
def recursive_config() -> StrassenConfig:
    """Smallest threshold, so tiny matrices still recurse."""
    return StrassenConfig(base_case_threshold=2)
