"""Dense matrix multiplication: naive, transpose, Strassen and parallel Strassen."""

from strassen.algorithms import (
    ALGORITHMS,
    Multiplier,
    NaiveMultiplier,
    NumpyMultiplier,
    ParallelStrassenMultiplier,
    StrassenMultiplier,
    TransposeMultiplier,
    get_multiplier,
)
from strassen.config import DEFAULT_CONFIG, StrassenConfig
from strassen.errors import DimensionMismatch, InvalidDimension, MatrixError, SizeMismatch
from strassen.kernels import multiply_naive, multiply_numpy, multiply_transposed
from strassen.matrix import EPSILON, Matrix
from strassen.parallel import multiply_parallel_strassen
from strassen.strassen_multiply import multiply_strassen

__all__ = [
    "ALGORITHMS",
    "DEFAULT_CONFIG",
    "EPSILON",
    "DimensionMismatch",
    "InvalidDimension",
    "Matrix",
    "MatrixError",
    "Multiplier",
    "NaiveMultiplier",
    "NumpyMultiplier",
    "ParallelStrassenMultiplier",
    "SizeMismatch",
    "StrassenConfig",
    "StrassenMultiplier",
    "TransposeMultiplier",
    "get_multiplier",
    "multiply_naive",
    "multiply_numpy",
    "multiply_parallel_strassen",
    "multiply_strassen",
    "multiply_transposed",
]
