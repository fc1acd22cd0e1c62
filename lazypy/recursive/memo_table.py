"""
Memo Table Builder
==================

Memoized recursive resolvers over a key space.

``build(resolver)`` returns a function ``g: key -> LazyCell[Optional[V]]``
backed by a private table. The resolver receives ``g`` itself and asks it
for the keys it depends on, so overlapping subproblems resolve through the
same cache:

    >>> @build
    ... def fib(fib, n):
    ...     if n < 2:
    ...         return now(n)
    ...     return fib(n - 1).flat_map(lambda a: fib(n - 2).map(lambda b: a + b))
    >>> fib(30).force()
    832040

``None`` stands for "no value for this key" and is never cached: asking
for such a key again re-runs the resolver, so a key may become resolvable
once other keys are known.

Neither ``g`` nor the resolver computes anything eagerly beyond building
cells; the work happens when the returned cell is forced.
"""

import functools
import logging
from typing import Callable, Dict, Hashable, Optional, TypeVar

from lazypy.core.cell import LazyCell, now

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')

Resolver = Callable[[Callable[[K], LazyCell[Optional[V]]], K], LazyCell[Optional[V]]]

logger = logging.getLogger(__name__)


def build(resolver: Resolver) -> Callable[[K], LazyCell[Optional[V]]]:
    """
    Wrap ``resolver`` with a memo table of resolved values.

    The returned function exposes ``cache_info()`` with hit/miss counts and
    the table size. Hits are lookups answered from the table; misses are
    resolver invocations.
    """
    name = getattr(resolver, '__qualname__', repr(resolver))
    table: Dict[K, V] = {}
    hits = 0
    misses = 0

    @functools.wraps(resolver)
    def memoized(key: K) -> LazyCell[Optional[V]]:
        nonlocal hits, misses

        value = table.get(key)
        if value is not None:
            hits += 1
            return now(value)

        misses += 1

        def store(result: Optional[V]) -> Optional[V]:
            if result is not None:
                table[key] = result
                logger.debug(f"Memoized {name}({key!r})")
            return result

        return resolver(memoized, key).map(store)

    memoized.cache_info = lambda: {'hits': hits, 'misses': misses, 'size': len(table)}
    memoized.__lazypy_memo_table__ = True
    return memoized
