"""
Recursive Binder
================

Builds a cell whose definition refers to the cell itself.

    >>> ones = recursive(lambda self: now((1, self)))
    >>> head, tail = ones.force()
    >>> head, tail is ones
    (1, True)

The cell is created in two phases: first with a placeholder state, then
with a pending ``flat_map`` over ``UNIT`` whose transform calls the user
function with the cell. The user function therefore runs on first force,
not at construction, and receives a handle it can compose lazily.

The user function must not force its argument. Forcing a cell whose
resolution is the very call in progress never terminates; this is not
detected.

The self-reference is a reference cycle (cell -> node -> closure -> cell)
which CPython's cycle collector reclaims once the cell is unreachable.
"""

from typing import Callable, TypeVar

from lazypy.core.cell import UNIT, LazyCell
from lazypy.core.thunk import FlatMapNode

A = TypeVar('A')


class _Unresolved:
    """Placeholder state of a recursive cell during construction."""

    def __repr__(self) -> str:
        return "<unresolved>"


_UNRESOLVED = _Unresolved()


def recursive(f: Callable[[LazyCell[A]], LazyCell[A]]) -> LazyCell[A]:
    """
    Tie a lazy knot: return a cell equal to ``f(cell)``.

    ``f`` runs once, on the first force of the returned cell.
    """
    result: LazyCell[A] = LazyCell(_UNRESOLVED)
    result._state = FlatMapNode(UNIT, lambda _: f(result))
    return result
