"""
Delay Adapters
==============

A ``Delay[A]`` converts between some value type ``A`` and lazy cells of
``A``. Code written against ``Delay`` can define recursive values and force
them without knowing whether ``A`` is evaluated eagerly or lazily:

  - ``Delay.strict()``: ``A`` is a plain value. Wrapping forces the cell,
    unwrapping puts the value in a final cell. Strict values have no
    ``recursive``: wrapping would force the unfinished cell.
  - ``Delay.need()``: ``A`` is itself a ``LazyCell``. Wrapping flattens a
    cell of cells, unwrapping nests a cell in a final cell.

Usage:
    >>> d = Delay.need()
    >>> ones = d.recursive(lambda self: now((1, self)))
    >>> ones.force()[0]
    1
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, TypeVar

from lazypy.core.cell import LazyCell, now
from lazypy.recursive.binder import recursive as _recursive

A = TypeVar('A')


class Delay(ABC, Generic[A]):

    @abstractmethod
    def wrap(self, cell: LazyCell[A]) -> A:
        pass

    @abstractmethod
    def unwrap(self, value: A) -> LazyCell[A]:
        pass

    def recursive(self, f: Callable[[A], A]) -> A:
        """Fixed point of ``f`` through a lazily bound self-reference."""
        return self.wrap(_recursive(lambda cell: self.unwrap(f(self.wrap(cell)))))

    def force(self, value: A) -> A:
        return self.unwrap(value).force()

    @staticmethod
    def strict() -> 'Delay[A]':
        return StrictDelay()

    @staticmethod
    def need() -> 'Delay[LazyCell[A]]':
        return NeedDelay()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class StrictDelay(Delay[A]):

    def recursive(self, f: Callable[[A], A]) -> A:
        # wrap() forces, so f would force its own unfinished cell
        raise TypeError("strict values cannot be defined recursively")

    def wrap(self, cell: LazyCell[A]) -> A:
        return cell.force()

    def unwrap(self, value: A) -> LazyCell[A]:
        return now(value)


class NeedDelay(Delay[LazyCell[A]]):

    def wrap(self, cell: LazyCell[LazyCell[A]]) -> LazyCell[A]:
        return cell.flat_map(lambda inner: inner)

    def unwrap(self, value: LazyCell[A]) -> LazyCell[LazyCell[A]]:
        return value.map(now)
