"""
Lazy Cell
=========

A container for one deferred, memoized value.

Building a computation never runs it:

    >>> c = now(5).map(lambda x: x + 1).map(lambda x: x * 2)
    >>> c
    LazyCell(<pending map>)
    >>> c.force()
    12
    >>> c
    LazyCell(12)

``map`` and ``flat_map`` allocate a new cell whose state points back at
the receiver. ``force`` hands the cell to the trampoline evaluator, which
memoizes every cell it resolves along the way. The second ``force`` of
any of those cells is a field read.

Cells are shared, never copied: ``copy.copy`` and ``copy.deepcopy`` return
the cell itself, since a duplicate would evaluate independently and lose
the memoization.
"""

from typing import Any, Callable, Generic, Optional, Tuple, TypeVar

from lazypy.core.evaluator import Trampoline, default_trampoline
from lazypy.core.thunk import Done, Final, FlatMapNode, MapNode, describe

A = TypeVar('A')
B = TypeVar('B')


class LazyCell(Generic[A]):
    """
    Deferred, memoized computation of a value of type ``A``.

    The single ``_state`` slot holds either ``Final(value)`` or a pending
    node. The transition to ``Final`` happens at most once.

    Equality forces both sides: two cells are equal when they are the
    same object or their values are equal. ``hash`` forces the cell too,
    so an unforced cell used as a dict key is evaluated on insertion.
    """

    __slots__ = ('_state',)

    def __init__(self, state: Any):
        self._state = state

    # ---- Construction ----

    @classmethod
    def now(cls, value: A) -> 'LazyCell[A]':
        """A cell that is already final."""
        return cls(Final(value))

    @classmethod
    def apply(cls, thunk: Callable[[], A]) -> 'LazyCell[A]':
        """A cell whose value is ``thunk()``, computed on first force."""
        return cls(MapNode(UNIT, lambda _: thunk()))

    @classmethod
    def defer(cls, thunk: Callable[[], 'LazyCell[A]']) -> 'LazyCell[A]':
        """A cell standing in for the cell ``thunk()`` returns on first force."""
        return cls(FlatMapNode(UNIT, lambda _: thunk()))

    # ---- Composition (never forces) ----

    def map(self, f: Callable[[A], B]) -> 'LazyCell[B]':
        return LazyCell(MapNode(self, f))

    def flat_map(self, f: Callable[[A], 'LazyCell[B]']) -> 'LazyCell[B]':
        return LazyCell(FlatMapNode(self, f))

    def zip_left(self, other: 'LazyCell[B]') -> 'LazyCell[B]':
        """Sequence ``self`` before ``other``, keeping ``other``'s value."""
        return self.flat_map(lambda _: other)

    def zip_right(self, other: 'LazyCell[B]') -> 'LazyCell[A]':
        """Sequence ``self`` before ``other``, keeping ``self``'s value."""
        return self.flat_map(lambda a: other.map(lambda _: a))

    def zip(self, other: 'LazyCell[B]') -> 'LazyCell[Tuple[A, B]]':
        return self.flat_map(lambda a: other.map(lambda b: (a, b)))

    # ---- Evaluation ----

    def force(self, evaluator: Optional[Trampoline] = None) -> A:
        """
        Evaluate the cell and memoize the result.

        O(1) when the cell is already final. Exceptions raised by a
        transform propagate unchanged; the cell stays pending and the
        next call retries from the first unresolved step.
        """
        state = self._state
        if isinstance(state, Final):
            return state.value

        if isinstance(state, Done):
            value = state.value
        else:
            if evaluator is None:
                evaluator = default_trampoline()
            value = evaluator.evaluate(self)
            if isinstance(self._state, Final):
                return value

        self._state = Final(value)
        return value

    @property
    def value(self) -> A:
        return self.force()

    @property
    def is_forced(self) -> bool:
        return isinstance(self._state, Final)

    # ---- Presentation ----

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        if not isinstance(other, LazyCell):
            return NotImplemented
        return self.force() == other.force()

    def __hash__(self) -> int:
        return hash(self.force())

    def __repr__(self) -> str:
        return f"LazyCell({describe(self._state)})"

    def __copy__(self) -> 'LazyCell[A]':
        return self

    def __deepcopy__(self, memo: dict) -> 'LazyCell[A]':
        return self


UNIT: LazyCell[None] = LazyCell(Final(None))


def now(value: A) -> LazyCell[A]:
    """Convenience alias for ``LazyCell.now``."""
    return LazyCell.now(value)


def apply(thunk: Callable[[], A]) -> LazyCell[A]:
    """
    Convenience alias for ``LazyCell.apply``.

    Usage:
        >>> expensive = apply(lambda: sum(range(10**6)))
        >>> expensive.is_forced
        False
    """
    return LazyCell.apply(thunk)


def defer(thunk: Callable[[], LazyCell[A]]) -> LazyCell[A]:
    """Convenience alias for ``LazyCell.defer``."""
    return LazyCell.defer(thunk)
