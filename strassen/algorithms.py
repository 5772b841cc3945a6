"""
Interchangeable multiplication strategies.

Every strategy is a callable ``(Matrix, Matrix) -> Matrix`` with a ``name``,
so ``Matrix.multiply`` and the benchmark driver can use them uniformly.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Optional, Protocol, Type

from strassen.config import DEFAULT_CONFIG, StrassenConfig
from strassen.kernels import multiply_naive, multiply_numpy, multiply_transposed
from strassen.matrix import Matrix
from strassen.parallel import multiply_parallel_strassen
from strassen.strassen_multiply import multiply_strassen


class Multiplier(Protocol):
    name: str

    def __call__(self, a: Matrix, b: Matrix) -> Matrix:
        ...


class NaiveMultiplier:
    name = "naive"

    def __call__(self, a: Matrix, b: Matrix) -> Matrix:
        return multiply_naive(a, b)


class TransposeMultiplier:
    name = "transpose"

    def __call__(self, a: Matrix, b: Matrix) -> Matrix:
        return multiply_transposed(a, b)


class NumpyMultiplier:
    name = "numpy"

    def __call__(self, a: Matrix, b: Matrix) -> Matrix:
        return multiply_numpy(a, b)


@dataclass(frozen=True)
class StrassenMultiplier:
    config: StrassenConfig = DEFAULT_CONFIG
    name: ClassVar[str] = "strassen"

    def __call__(self, a: Matrix, b: Matrix) -> Matrix:
        return multiply_strassen(a, b, self.config)


@dataclass(frozen=True)
class ParallelStrassenMultiplier:
    config: StrassenConfig = DEFAULT_CONFIG
    name: ClassVar[str] = "parallel-strassen"

    def __call__(self, a: Matrix, b: Matrix) -> Matrix:
        return multiply_parallel_strassen(a, b, self.config)


ALGORITHMS: Dict[str, Type] = {
    cls.name: cls
    for cls in (
        NaiveMultiplier,
        TransposeMultiplier,
        StrassenMultiplier,
        ParallelStrassenMultiplier,
        NumpyMultiplier,
    )
}
_CONFIGURABLE = (StrassenMultiplier, ParallelStrassenMultiplier)

DEFAULT_ALGORITHMS = ("naive", "transpose", "strassen", "parallel-strassen")


def get_multiplier(name: str, config: Optional[StrassenConfig] = None) -> Multiplier:
    try:
        cls = ALGORITHMS[name]
    except KeyError:
        raise KeyError(
            f"unknown algorithm {name!r}; choose from {', '.join(ALGORITHMS)}"
        ) from None
    if config is not None and cls in _CONFIGURABLE:
        return cls(config)
    return cls()
