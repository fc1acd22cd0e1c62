"""
lazypy Benchmark Runner
=======================

Runs every workload in ``benchmark_suite`` and prints a summary table.

Usage:
    python -m benchmarks.benchmark_runner
"""

import gc
import statistics
import sys
from pathlib import Path
from typing import Any, Callable, List

from tabulate import tabulate

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from benchmarks.benchmark_suite import get_all_benchmarks
from lazypy.utils.helpers import Timer, format_ns


ITERATIONS = 10
WARMUP = 2


def time_function(func: Callable, args: tuple, iterations: int, warmup: int) -> List[int]:
    """Time a function call over multiple iterations, returning list of ns times."""
    for _ in range(warmup):
        func(*args)

    times = []
    for _ in range(iterations):
        gc.disable()
        with Timer() as t:
            func(*args)
        gc.enable()
        times.append(t.elapsed_ns)
    return times


def run_all_benchmarks(iterations: int = ITERATIONS, warmup: int = WARMUP) -> List[List[Any]]:
    rows = []
    for category, benchmarks in get_all_benchmarks().items():
        for name, (baseline, lazy, args) in benchmarks.items():
            correct = baseline(*args) == lazy(*args)
            baseline_ns = statistics.median(time_function(baseline, args, iterations, warmup))
            lazy_ns = statistics.median(time_function(lazy, args, iterations, warmup))
            rows.append([
                category,
                name,
                format_ns(baseline_ns),
                format_ns(lazy_ns),
                f"{lazy_ns / baseline_ns:.1f}x" if baseline_ns else "-",
                "OK" if correct else "MISMATCH",
            ])
    return rows


def main():
    rows = run_all_benchmarks()
    print(tabulate(
        rows,
        headers=["category", "benchmark", "eager", "lazy", "overhead", "result"],
        tablefmt="github",
    ))


if __name__ == "__main__":
    main()
