"""Utility helpers for lazypy: call counting, chain builders and timing."""

import functools
import time
from typing import Any, Callable, Iterable

from lazypy.core.cell import LazyCell, now


class CallCounter:
    """
    Wrap a callable and count its invocations.

    Handy for checking that memoized transforms run exactly once:

        >>> inc = CallCounter(lambda x: x + 1)
        >>> c = now(1).map(inc)
        >>> c.force(), c.force(), inc.calls
        (2, 2, 1)
    """

    def __init__(self, func: Callable):
        functools.update_wrapper(self, func)
        self.func = func
        self.calls = 0

    def __call__(self, *args, **kwargs):
        self.calls += 1
        return self.func(*args, **kwargs)

    def reset(self):
        self.calls = 0


def map_chain(cell: LazyCell, func: Callable[[Any], Any], depth: int) -> LazyCell:
    """Apply ``func`` to ``cell`` ``depth`` times through nested ``map`` calls."""
    for _ in range(depth):
        cell = cell.map(func)
    return cell


def fold_cells(items: Iterable[Any], initial: Any, func: Callable[[Any, Any], Any]) -> LazyCell:
    """
    Left fold over ``items`` as a chain of ``flat_map`` steps.

    Nothing runs until the returned cell is forced.
    """
    acc = now(initial)
    for item in items:
        acc = acc.flat_map(lambda a, item=item: now(func(a, item)))
    return acc


class Timer:
    """High-resolution timer for benchmarking."""

    def __init__(self):
        self.start_ns = 0
        self.end_ns = 0

    def __enter__(self):
        self.start_ns = time.perf_counter_ns()
        return self

    def __exit__(self, *exc):
        self.end_ns = time.perf_counter_ns()

    @property
    def elapsed_ns(self) -> int:
        return self.end_ns - self.start_ns

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000.0


def format_ns(ns: float) -> str:
    """Format nanoseconds into a human-readable string."""
    if ns < 1_000:
        return f"{ns:.0f} ns"
    elif ns < 1_000_000:
        return f"{ns / 1_000:.1f} µs"
    elif ns < 1_000_000_000:
        return f"{ns / 1_000_000:.2f} ms"
    return f"{ns / 1_000_000_000:.3f} s"
