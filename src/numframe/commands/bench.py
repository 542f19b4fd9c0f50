"""Command line interface for timing Series operations.

The scenarios are the same operations used by the
Series engine benchmarks: the calc1 formula as a single
transform and as chained in place methods, addition and
multiplication by a scalar or a Series, square root and exponential.
The aggregations are timed as well.
They are executed on Series of random float64 values
for each one of the requested :class:`numframe.compute.ExecPolicy`.

The results are printed to the console in a tabular format
using the :mod:`numframe.utils.tabulate` module.
"""

import argparse
import logging
import random
import time
from typing import Any, Callable

import pyarrow as pa
import pyarrow.compute as pc

from numframe.compute import ExecPolicy
from numframe.series import Series
from numframe.utils import tabulate

logger = logging.getLogger(__name__)

CALC1_COEFFICIENTS = (0.98, 1.0, 0.9)


def calc1_loop(c1: Series, c2: Series) -> Any:
    """``0.9 + exp(0.98 + 1.0 * x)`` as a single transform on a copy."""
    a, b, c = CALC1_COEFFICIENTS
    return c1.copy().transform(
        lambda x: pc.add(pc.exp(pc.add(pc.multiply(x, b), a)), c)
    )


def calc1_series(c1: Series, c2: Series) -> Any:
    """``0.9 + exp(0.98 + 1.0 * x)`` chained in place on a copy."""
    a, b, c = CALC1_COEFFICIENTS
    return c1.copy().mul(b).add(a).exp().add(c)


SCENARIOS: dict[str, Callable[[Series, Series], Any]] = {
    "calc1_loop": calc1_loop,
    "calc1_series": calc1_series,
    "add_scalar": lambda c1, c2: c1.copy().add(c1[0]),
    "add_series": lambda c1, c2: c1.copy().add(c2),
    "mul_scalar": lambda c1, c2: c1.copy().mul(c1[0]),
    "mul_series": lambda c1, c2: c1.copy().mul(c2),
    "sqrt_series": lambda c1, c2: c1.copy().sqrt(),
    "exp_series": lambda c1, c2: c1.copy().exp(),
    "sum": lambda c1, c2: c1.sum(),
    "mean": lambda c1, c2: c1.mean(),
    "variance": lambda c1, c2: c1.variance(),
}
"""Timed operations, every in place one runs on a copy of the input."""


def random_series(size: int, rng: random.Random, **kwargs: Any) -> Series:
    """A float64 Series of ``size`` random values in ``[0, 1)``."""
    return Series.from_generator(size, lambda _: rng.random(), dtype="float64", **kwargs)


def run_benchmark(
    scenario: Callable[[Series, Series], Any], c1: Series, c2: Series, repeat: int
) -> list[float]:
    """Time ``repeat`` runs of ``scenario`` returning the seconds each took."""
    timings = []
    for _ in range(repeat):
        start = time.perf_counter()
        scenario(c1, c2)
        timings.append(time.perf_counter() - start)
    return timings


def main(argv: list[str] | None = None) -> None:
    """Parse the command line arguments and run the benchmarks."""
    parser = argparse.ArgumentParser(
        description="Time Series operations under each execution policy."
    )
    parser.add_argument(
        "-n", "--size", type=int, default=100_000, help="Number of values per Series."
    )
    parser.add_argument(
        "-p",
        "--policy",
        action="append",
        choices=[p.value for p in ExecPolicy],
        help="Execution policy to benchmark. Can be provided multiple times.",
    )
    parser.add_argument(
        "-s",
        "--scenario",
        action="append",
        choices=list(SCENARIOS),
        help="Scenario to run. Can be provided multiple times.",
    )
    parser.add_argument(
        "-r", "--repeat", type=int, default=3, help="Runs of each scenario."
    )
    parser.add_argument("--chunk-size", type=int, default=None)
    parser.add_argument("--max-workers", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    policies = [ExecPolicy(p) for p in args.policy or [p.value for p in ExecPolicy]]
    scenarios = args.scenario or list(SCENARIOS)
    rng = random.Random(args.seed)

    results: dict[str, list[Any]] = {
        "scenario": [],
        "policy": [],
        "best (ms)": [],
        "average (ms)": [],
    }
    for policy in policies:
        options = dict(
            policy=policy, chunk_size=args.chunk_size, max_workers=args.max_workers
        )
        c1 = random_series(args.size, rng, **options)
        c2 = random_series(args.size, rng, **options)
        for name in scenarios:
            logger.info(f"Running {name} with {policy.name} on {args.size} values")
            timings = run_benchmark(SCENARIOS[name], c1, c2, args.repeat)
            results["scenario"].append(name)
            results["policy"].append(policy.value)
            results["best (ms)"].append(min(timings) * 1000)
            results["average (ms)"].append(sum(timings) / len(timings) * 1000)

    print(tabulate.tabulate(pa.table(results), max_rows=len(results["scenario"])))


if __name__ == "__main__":
    main()
