"""
lazypy Benchmark Suite
======================

Workloads comparing an eager Python baseline against the same computation
expressed as lazy cells. Each entry is ``name -> (baseline, lazy, args)``;
both callables must return the same value.

1. **Chains**: long map / flat_map chains (evaluator throughput)
2. **Sharing**: one expensive base reused by many derived cells
3. **Memo tables**: dynamic programming through ``build``
"""

from typing import Callable, Dict, Tuple

from lazypy import apply, build, now
from lazypy.utils.helpers import fold_cells, map_chain


def _inc(x):
    return x + 1


# ---- Chains ----

def eager_increment(n: int) -> int:
    total = 0
    for _ in range(n):
        total = _inc(total)
    return total


def lazy_increment(n: int) -> int:
    return map_chain(now(0), _inc, n).force()


def eager_sum(n: int) -> int:
    return sum(range(n))


def lazy_sum(n: int) -> int:
    return fold_cells(range(n), 0, lambda acc, x: acc + x).force()


# ---- Sharing ----

def _expensive() -> int:
    return sum(i * i for i in range(10_000))


def eager_shared(fanout: int) -> int:
    return sum(_expensive() + i for i in range(fanout))


def lazy_shared(fanout: int) -> int:
    base = apply(_expensive)
    derived = [base.map(lambda v, i=i: v + i) for i in range(fanout)]
    return sum(cell.force() for cell in derived)


# ---- Memo tables ----

def eager_fib(n: int) -> int:
    a, b = 0, 1
    for _ in range(n):
        a, b = b, a + b
    return a


def lazy_fib(n: int) -> int:
    @build
    def fib(fib, k):
        if k < 2:
            return now(k)
        return fib(k - 1).flat_map(lambda a: fib(k - 2).map(lambda b: a + b))

    return fib(n).force()


def get_all_benchmarks() -> Dict[str, Dict[str, Tuple[Callable, Callable, tuple]]]:
    return {
        'chains': {
            'map_chain_100k': (eager_increment, lazy_increment, (100_000,)),
            'flat_map_fold_100k': (eager_sum, lazy_sum, (100_000,)),
        },
        'sharing': {
            'shared_base_x50': (eager_shared, lazy_shared, (50,)),
        },
        'memo_tables': {
            'fib_300': (eager_fib, lazy_fib, (300,)),
        },
    }
