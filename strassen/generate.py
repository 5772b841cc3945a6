from __future__ import annotations

from typing import Optional

import numpy as np

from strassen.matrix import Matrix


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def random_matrix(
    rows: int,
    cols: int,
    low: float = 0.0,
    high: float = 1_000_000.0,
    rng: Optional[np.random.Generator] = None,
    integer: bool = False,
) -> Matrix:
    """
    Matrix of values drawn uniformly from ``[low, high)``.

    With ``integer=True`` the values are Python ints, otherwise floats.
    """
    if rng is None:
        rng = make_rng()
    count = max(rows, 0) * max(cols, 0)
    if integer:
        values = rng.integers(int(low), int(high), size=count)
    else:
        values = rng.uniform(low, high, size=count)
    return Matrix(values.tolist(), rows, cols)
