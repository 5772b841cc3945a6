from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_THRESHOLD = 64
DEFAULT_PARALLEL_DEPTH = 1
# One worker per Strassen product
DEFAULT_WORKERS = 7
EXECUTORS = ("thread", "process", "mpi")


@dataclass(frozen=True)
class StrassenConfig:
    """
    Tunables for the Strassen engines.

    Attributes
    ----------
    base_case_threshold : int
        Square blocks of this side or smaller are multiplied directly with the
        transpose kernel instead of being split further. Must be at least 2,
        since a 1x1 block is padded back up to 2x2 before recursing.
    parallel_depth : int
        Number of recursion levels the parallel engine decomposes before
        submitting work, giving ``7 ** parallel_depth`` units.
    workers : int
        Size of the worker pool used by the parallel engine.
    executor : str
        ``"thread"``, ``"process"`` or ``"mpi"`` pool. Pure-Python block
        products hold the GIL, so only ``"process"`` and ``"mpi"`` run them
        concurrently; ``"mpi"`` needs the ``mpi4py`` extra.
    """

    base_case_threshold: int = DEFAULT_THRESHOLD
    parallel_depth: int = DEFAULT_PARALLEL_DEPTH
    workers: int = DEFAULT_WORKERS
    executor: str = "thread"

    def __post_init__(self):
        if self.base_case_threshold < 2:
            raise ValueError(
                f"base_case_threshold must be at least 2, got {self.base_case_threshold}"
            )
        if self.parallel_depth < 1:
            raise ValueError(f"parallel_depth must be positive, got {self.parallel_depth}")
        if self.workers < 1:
            raise ValueError(f"workers must be positive, got {self.workers}")
        if self.executor not in EXECUTORS:
            raise ValueError(
                f"unknown executor {self.executor!r}; choose from {', '.join(EXECUTORS)}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StrassenConfig":
        environ = os.environ if environ is None else environ
        return cls(
            base_case_threshold=int(environ.get("STRASSEN_THRESHOLD", DEFAULT_THRESHOLD)),
            parallel_depth=int(environ.get("STRASSEN_PARALLEL_DEPTH", DEFAULT_PARALLEL_DEPTH)),
            workers=int(environ.get("STRASSEN_WORKERS", DEFAULT_WORKERS)),
            executor=environ.get("STRASSEN_EXECUTOR", "thread").lower(),
        )

    def replace(self, **changes) -> "StrassenConfig":
        """Copy with the given fields changed; ``None`` values are ignored."""
        changes = {key: value for key, value in changes.items() if value is not None}
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = StrassenConfig()
