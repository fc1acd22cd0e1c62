"""
Core lazy-cell engine: state representation, cells and the trampoline.
"""

from lazypy.core.thunk import Final, Done, MapNode, FlatMapNode, PendingNode, ContinuationKind, Continuation
from lazypy.core.evaluator import (
    Trampoline,
    EvaluationStats,
    EvaluationBudgetExceeded,
    default_trampoline,
    evaluate,
)
from lazypy.core.cell import LazyCell, UNIT, now, apply, defer

__all__ = [
    'Final',
    'Done',
    'MapNode',
    'FlatMapNode',
    'PendingNode',
    'ContinuationKind',
    'Continuation',
    'Trampoline',
    'EvaluationStats',
    'EvaluationBudgetExceeded',
    'default_trampoline',
    'evaluate',
    'LazyCell',
    'UNIT',
    'now',
    'apply',
    'defer',
]
