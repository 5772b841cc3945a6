"""
Timing driver comparing the multiplication algorithms.

For each group ``i`` in ``1..factor`` it multiplies a random
``(i * lower) x (i * upper)`` matrix by a random ``(i * upper) x (i * lower)``
matrix ``trials`` times with every selected algorithm and reports the average
wall-clock time per algorithm in milliseconds.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence

import numpy as np

from strassen.algorithms import ALGORITHMS, DEFAULT_ALGORITHMS, Multiplier, get_multiplier
from strassen.config import EXECUTORS, StrassenConfig
from strassen.errors import DimensionMismatch, MatrixError
from strassen.generate import make_rng, random_matrix
from strassen.matrix import Matrix
from strassen.timer import Timer

logger = logging.getLogger(__name__)

DEFAULT_LOWER = 35
DEFAULT_UPPER = 400
DEFAULT_FACTOR = 2
DEFAULT_TRIALS = 100


@dataclass
class GroupResult:
    x: int
    y: int
    averages: Dict[str, float]

    @property
    def elements(self) -> int:
        return self.x * self.y


def record_trial(a: Matrix, b: Matrix, timer: Timer, multiplier: Multiplier) -> float:
    timer.start()
    c = a.multiply(b, multiplier)
    duration = timer.stop()

    if c.rows != a.rows or c.cols != a.rows:
        raise DimensionMismatch(
            f"{multiplier.name} returned a {c.rows}x{c.cols} product, "
            f"expected {a.rows}x{a.rows}"
        )
    return duration


def time_multiplication(
    lower: int,
    upper: int,
    factor: int,
    trials: int,
    multipliers: Sequence[Multiplier],
    rng: Optional[np.random.Generator] = None,
) -> Iterator[GroupResult]:
    if rng is None:
        rng = make_rng()
    timer = Timer()

    for i in range(1, factor + 1):
        x = i * lower
        y = i * upper

        a = random_matrix(x, y, rng=rng)
        b = random_matrix(y, x, rng=rng)

        totals = {multiplier.name: 0.0 for multiplier in multipliers}
        for _ in range(trials):
            for multiplier in multipliers:
                totals[multiplier.name] += record_trial(a, b, timer, multiplier)

        averages = {name: total / trials for name, total in totals.items()}
        logger.info("group %d/%d (%dx%d): %s", i, factor, x, y, averages)
        yield GroupResult(x, y, averages)


def format_header(names: Sequence[str]) -> str:
    return " ".join(["x", "y", "nxn", *names])


def format_row(result: GroupResult, names: Sequence[str]) -> str:
    times = " ".join(f"{result.averages[name]:.2f}" for name in names)
    return f"{result.x} {result.y} {result.elements} {times}"


def format_table(results: Sequence[GroupResult], names: Sequence[str]) -> str:
    lines = [format_header(names)]
    lines.extend(format_row(result, names) for result in results)
    return "\n".join(lines)


def plot_timings(results: Sequence[GroupResult], names: Sequence[str], path: str) -> None:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    sizes = [result.elements for result in results]
    fig, ax = plt.subplots(figsize=(9, 5))
    for name in names:
        ax.plot(sizes, [result.averages[name] for result in results], 'o-',
                label=name, linewidth=2, markersize=6)

    ax.set_xlabel('Elements per operand (x * y)', fontsize=11)
    ax.set_ylabel('Average time (ms)', fontsize=11)
    ax.set_title('Matrix Multiplication Timings', fontsize=12, fontweight='bold')
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _parse_algorithms(value: str) -> List[str]:
    names = [name.strip() for name in value.split(",") if name.strip()]
    if not names:
        raise ValueError("no algorithms selected")
    for name in names:
        if name not in ALGORITHMS:
            raise ValueError(f"unknown algorithm {name!r}; choose from {', '.join(ALGORITHMS)}")
    return names


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="strassen-bench",
        description="Evaluating different matrix multiplication algorithms",
    )
    parser.add_argument("--lower", type=_positive_int, default=DEFAULT_LOWER,
                        help="rows of A (and columns of B) in the first group")
    parser.add_argument("--upper", type=_positive_int, default=DEFAULT_UPPER,
                        help="columns of A (and rows of B) in the first group")
    parser.add_argument("--factor", type=_positive_int, default=DEFAULT_FACTOR,
                        help="number of groups; group i scales both bounds by i")
    parser.add_argument("--trials", type=_positive_int, default=DEFAULT_TRIALS,
                        help="timed trials per algorithm and group")
    parser.add_argument("--algorithms", default=",".join(DEFAULT_ALGORITHMS),
                        help=f"comma-separated list from: {', '.join(ALGORITHMS)}")
    parser.add_argument("--threshold", type=int, default=None,
                        help="Strassen base-case side (env STRASSEN_THRESHOLD)")
    parser.add_argument("--parallel-depth", type=int, default=None,
                        help="recursion levels fanned out to the pool (env STRASSEN_PARALLEL_DEPTH)")
    parser.add_argument("--workers", type=int, default=None,
                        help="worker pool size (env STRASSEN_WORKERS)")
    parser.add_argument("--executor", choices=EXECUTORS, default=None,
                        help="worker pool kind (env STRASSEN_EXECUTOR); threads share the GIL, "
                             "so only process and mpi pools speed up parallel-strassen")
    parser.add_argument("--seed", type=int, default=None, help="random seed for the inputs")
    parser.add_argument("--plot", metavar="PATH", default=None,
                        help="save a chart of the average timings to PATH")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def configure_logging(verbosity: int) -> logging.Logger:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    lg = logging.getLogger("strassen")
    if not lg.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
        lg.addHandler(h)
    lg.setLevel(level)
    return lg


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = StrassenConfig.from_env().replace(
            base_case_threshold=args.threshold,
            parallel_depth=args.parallel_depth,
            workers=args.workers,
            executor=args.executor,
        )
        names = _parse_algorithms(args.algorithms)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    multipliers = [get_multiplier(name, config) for name in names]
    lower, upper, factor, trials = args.lower, args.upper, args.factor, args.trials

    print(f"running {factor} groups of {trials} trials with bounds between "
          f"[{lower}->{lower * factor}, {upper}->{upper * factor}]")
    print(format_header(names))

    results = []
    try:
        for result in time_multiplication(lower, upper, factor, trials, multipliers,
                                          rng=make_rng(args.seed)):
            print(format_row(result, names))
            results.append(result)
    except MatrixError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.plot:
        plot_timings(results, names, args.plot)
        print(f"  Saved: {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
