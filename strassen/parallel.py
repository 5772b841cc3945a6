"""
Fork-join Strassen multiplication.

The calling thread decomposes the top ``config.parallel_depth`` levels of the
recursion and submits every block product of the deepest decomposed level to
one bounded pool. Each unit runs the sequential engine on operands it owns
outright, so units share nothing and never submit work of their own. The
caller waits for every unit before recombining anything.
"""
from __future__ import annotations

import logging
from concurrent.futures import ALL_COMPLETED, Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor, wait
from typing import Iterator, List

from strassen.config import DEFAULT_CONFIG, StrassenConfig
from strassen.kernels import multiply_transposed
from strassen.matrix import Matrix
from strassen.strassen_multiply import combine, multiply_strassen, split_products, square_operands

logger = logging.getLogger(__name__)


class _Done:
    """Product computed directly by the caller (operands below the threshold)."""

    def __init__(self, product: Matrix):
        self.product = product

    def futures(self) -> Iterator[Future]:
        return iter(())

    def resolve(self) -> Matrix:
        return self.product


class _Unit:
    """One block product running on the pool; its future is the result slot."""

    def __init__(self, future: Future):
        self.future = future

    def futures(self) -> Iterator[Future]:
        yield self.future

    def resolve(self) -> Matrix:
        # re-raises whatever the unit raised
        return self.future.result()


class _Split:
    def __init__(self, children: List):
        self.children = children

    def futures(self) -> Iterator[Future]:
        for child in self.children:
            yield from child.futures()

    def resolve(self) -> Matrix:
        return combine([child.resolve() for child in self.children])


class _Padded:
    def __init__(self, node, rows: int):
        self.node = node
        self.rows = rows

    def futures(self) -> Iterator[Future]:
        return self.node.futures()

    def resolve(self) -> Matrix:
        return self.node.resolve().reduce(self.rows, self.rows)


def _make_pool(config: StrassenConfig) -> Executor:
    if config.executor == "mpi":
        # workers are spawned MPI processes, as with mpiexec -n
        from mpi4py.futures import MPIPoolExecutor

        return MPIPoolExecutor(max_workers=config.workers)
    if config.executor == "process":
        return ProcessPoolExecutor(max_workers=config.workers)
    return ThreadPoolExecutor(max_workers=config.workers, thread_name_prefix="strassen")


def _fan_out(a: Matrix, b: Matrix, config: StrassenConfig, depth: int, pool: Executor):
    rows = a.rows
    a, b, padded = square_operands(a, b)

    n = a.rows
    if n <= config.base_case_threshold:
        node = _Done(multiply_transposed(a, b))
    else:
        children = []
        for left, right in split_products(a, b):
            if depth > 1:
                children.append(_fan_out(left, right, config, depth - 1, pool))
            else:
                children.append(_Unit(pool.submit(multiply_strassen, left, right, config)))
        node = _Split(children)

    if padded:
        node = _Padded(node, rows)
    return node


def multiply_parallel_strassen(
    a: Matrix, b: Matrix, config: StrassenConfig = DEFAULT_CONFIG
) -> Matrix:
    """
    Multiply ``a`` by ``b`` with Strassen's algorithm, running block products on a pool.

    Produces exactly the same result as ``multiply_strassen`` with the same
    config. The pool (``config.workers`` threads or processes) lives for the
    duration of this call.

    Raises
    ------
    Exception
        Whatever a unit of work raised; the remaining units still run to
        completion first.
    """
    with _make_pool(config) as pool:
        plan = _fan_out(a, b, config, config.parallel_depth, pool)
        futures = list(plan.futures())
        logger.debug(
            "submitted %d units to a %s pool of %d workers",
            len(futures), config.executor, config.workers,
        )
        wait(futures, return_when=ALL_COMPLETED)
        logger.debug("joined %d units", len(futures))
        return plan.resolve()
