"""Helpers for building, counting and timing cell chains."""

from lazypy.utils.helpers import CallCounter, Timer, fold_cells, format_ns, map_chain

__all__ = ['CallCounter', 'Timer', 'fold_cells', 'format_ns', 'map_chain']
