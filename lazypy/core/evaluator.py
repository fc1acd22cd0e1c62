"""
Trampoline Evaluator
====================

Reduces a chain of lazy cells to the root's value without growing the
Python call stack.

A naive recursive ``force`` would evaluate ``cell.map(f)`` by first forcing
``cell``, which forces its own source, and so on. A chain built by folding
over a large sequence (``c = c.map(f)`` a million times) would exceed the
interpreter's recursion limit long before producing a value.

Algorithm
---------
The evaluator keeps a ``current`` cell and an explicit stack of
continuations ``(kind, target, transform)``:

  1. ``current`` is Final or Done: that is the value at this position.
     With an empty stack, return it. Otherwise pop a continuation and
     install the transform's result into ``target``:
       MAP      target <- Final(f(value))
       FLATMAP  target <- state of the cell returned by f(value)
     then continue with ``current = target``; the spliced state may
     itself still be pending.
  2. ``current`` is MapNode / FlatMapNode: push a continuation for it
     and descend into its source.

Every cell popped off the stack gets its own state overwritten, so every
intermediate on the path is memoized, not only the root. Previously
allocated nodes on the path become unreachable and are reclaimed.

If a transform raises, the exception leaves the loop unchanged. Cells
resolved before the failure stay resolved; the failing cell keeps its
pending node and re-runs the same transform on the next attempt.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from lazypy.core.thunk import (
    Continuation,
    ContinuationKind,
    Done,
    Final,
    FlatMapNode,
    MapNode,
)

logger = logging.getLogger(__name__)

_MAP = ContinuationKind.MAP
_FLATMAP = ContinuationKind.FLATMAP


class EvaluationBudgetExceeded(RuntimeError):
    """Raised by a ``Trampoline`` configured with ``max_steps`` when an
    evaluation runs longer than allowed."""

    def __init__(self, max_steps: int, stack_depth: int):
        super().__init__(
            f"evaluation exceeded {max_steps} steps "
            f"(continuation stack depth {stack_depth})"
        )
        self.max_steps = max_steps
        self.stack_depth = stack_depth


@dataclass
class EvaluationStats:
    """Counters accumulated by one ``Trampoline`` across evaluations."""
    evaluations: int = 0
    failures: int = 0
    total_steps: int = 0
    cells_resolved: int = 0
    peak_stack_depth: int = 0


class Trampoline:
    """
    Iterative interpreter for lazy cells.

    ``max_steps`` caps the number of loop iterations per evaluation. It is
    off by default: the engine itself does not detect non-terminating
    definitions, a budget only turns them into an exception for tests and
    diagnostics.

    Usage:
        >>> from lazypy import now
        >>> cell = now(5).map(lambda x: x + 1).map(lambda x: x * 2)
        >>> Trampoline().evaluate(cell)
        12
        >>> Trampoline(max_steps=10_000).evaluate(cell)
        12
    """

    DEFAULT_MAX_STEPS: Optional[int] = None

    def __init__(
        self,
        max_steps: Optional[int] = DEFAULT_MAX_STEPS,
        enable_logging: bool = False,
    ):
        if max_steps is not None and max_steps < 1:
            raise ValueError(f"max_steps must be positive, got {max_steps}")
        self.max_steps = max_steps
        self.stats = EvaluationStats()

        if enable_logging:
            logging.basicConfig(level=logging.DEBUG)

    def evaluate(self, root: Any) -> Any:
        """
        Reduce ``root`` to its value.

        Every map/flat_map cell resolved on the way, the root included, is
        finalized here. A root that is already Final or Done is returned
        as is; ``LazyCell.force`` promotes a Done root itself.
        """
        from lazypy.core.cell import LazyCell

        current = root
        stack: List[Continuation] = []
        budget = self.max_steps
        steps = 0
        resolved = 0
        peak = 0

        self.stats.evaluations += 1
        try:
            while True:
                steps += 1
                if budget is not None and steps > budget:
                    raise EvaluationBudgetExceeded(budget, len(stack))

                state = current._state

                if isinstance(state, (Final, Done)):
                    value = state.value
                    if not stack:
                        return value

                    kind, target, transform = stack.pop()
                    if kind is _MAP:
                        target._state = Final(transform(value))
                    else:
                        spliced = transform(value)
                        if not isinstance(spliced, LazyCell):
                            raise TypeError(
                                f"flat_map transform must return a LazyCell, "
                                f"got {type(spliced).__name__}"
                            )
                        target._state = spliced._state
                    resolved += 1
                    current = target

                elif isinstance(state, MapNode):
                    stack.append(Continuation(_MAP, current, state.transform))
                    current = state.source
                    if len(stack) > peak:
                        peak = len(stack)

                elif isinstance(state, FlatMapNode):
                    stack.append(Continuation(_FLATMAP, current, state.transform))
                    current = state.source
                    if len(stack) > peak:
                        peak = len(stack)

                else:
                    raise TypeError(f"cell has no valid state: {state!r}")
        except Exception as e:
            self.stats.failures += 1
            logger.debug(f"Evaluation failed after {steps} steps: {e!r}")
            raise
        finally:
            self.stats.total_steps += steps
            self.stats.cells_resolved += resolved
            self.stats.peak_stack_depth = max(self.stats.peak_stack_depth, peak)
            logger.debug(
                f"Evaluation finished: {steps} steps, {resolved} cells resolved, "
                f"peak stack depth {peak}"
            )

    def get_stats(self) -> Dict[str, Any]:
        """Get evaluation statistics for this trampoline."""
        return {
            'evaluations': self.stats.evaluations,
            'failures': self.stats.failures,
            'total_steps': self.stats.total_steps,
            'cells_resolved': self.stats.cells_resolved,
            'peak_stack_depth': self.stats.peak_stack_depth,
            'max_steps': self.max_steps,
        }


# ---------------------------------------------------------------------------
# Module-level convenience API
# ---------------------------------------------------------------------------

_default_trampoline = Trampoline()


def default_trampoline() -> Trampoline:
    """The shared evaluator used by ``LazyCell.force`` when none is given."""
    return _default_trampoline


def evaluate(root: Any) -> Any:
    """Evaluate ``root`` with the shared default trampoline."""
    return _default_trampoline.evaluate(root)
