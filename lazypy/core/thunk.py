"""
Pending Nodes
=============

The representation of a cell's state. A ``LazyCell`` holds exactly one
state object in a single slot:

  Final(value)             -- terminal, never replaced
  Done(value)              -- a resolved value not yet promoted to Final
  MapNode(source, f)       -- apply ``f`` to ``source``'s value
  FlatMapNode(source, f)   -- apply ``f`` to ``source``'s value, then
                              continue with the cell it returns

Nodes compare by identity; comparing by fields would force the source
cells. Every state object is immutable once built. The evaluator swaps whole
state objects in and out of a cell, so a reader always sees one complete
state and never a half-written one.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Generic, NamedTuple, TypeVar, Union

T = TypeVar('T')


@dataclass(frozen=True, slots=True)
class Final(Generic[T]):
    """Terminal state: the cell's memoized value."""
    value: T


@dataclass(frozen=True, slots=True)
class Done(Generic[T]):
    """A pending node that already knows its value."""
    value: T


@dataclass(frozen=True, slots=True, eq=False)
class MapNode:
    source: Any  # LazyCell
    transform: Callable[[Any], Any]


@dataclass(frozen=True, slots=True, eq=False)
class FlatMapNode:
    source: Any  # LazyCell
    transform: Callable[[Any], Any]


PendingNode = Union[Done, MapNode, FlatMapNode]


class ContinuationKind(Enum):
    MAP = auto()
    FLATMAP = auto()


class Continuation(NamedTuple):
    """A suspended map/flat_map waiting for its source value."""
    kind: ContinuationKind
    target: Any  # LazyCell whose state is replaced on resume
    transform: Callable[[Any], Any]


def describe(state: Any) -> str:
    """Short human-readable tag for a state, used by ``repr`` and logs."""
    if isinstance(state, Final):
        return repr(state.value)
    if isinstance(state, Done):
        return f"<done {state.value!r}>"
    if isinstance(state, MapNode):
        return "<pending map>"
    if isinstance(state, FlatMapNode):
        return "<pending flat_map>"
    return "<unresolved>"
