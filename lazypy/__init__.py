"""
lazypy: Memoized Lazy Cells with a Trampolined Evaluator
========================================================

A ``LazyCell`` holds one deferred computation. ``map`` and ``flat_map``
compose cells without running anything; ``force`` evaluates the chain
with an explicit-stack interpreter, so chains millions of steps long
evaluate without touching the recursion limit, and memoizes every cell it
resolves.

Core Components:
    - core: cell representation, ``LazyCell`` and the ``Trampoline``
    - recursive: self-referential cells, memo tables, ``Delay`` adapters

Usage:
    >>> import lazypy
    >>> lazypy.now(5).map(lambda x: x + 1).map(lambda x: x * 2).force()
    12

    >>> @lazypy.build
    ... def fib(fib, n):
    ...     if n < 2:
    ...         return lazypy.now(n)
    ...     return fib(n - 1).flat_map(lambda a: fib(n - 2).map(lambda b: a + b))
    >>> fib(10).force()
    55
"""

__version__ = "1.0.0"

from lazypy.core.cell import LazyCell, UNIT, now, apply, defer
from lazypy.core.evaluator import (
    Trampoline,
    EvaluationStats,
    EvaluationBudgetExceeded,
    evaluate,
)
from lazypy.recursive import recursive, build, Delay, StrictDelay, NeedDelay
