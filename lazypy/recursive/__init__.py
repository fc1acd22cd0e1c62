"""
Recursive definitions over lazy cells.

    - binder:      ``recursive``, cells defined in terms of themselves
    - memo_table:  ``build``, memoized resolvers over a key space
    - delay:       ``Delay`` adapters between plain values and cells
"""

from lazypy.recursive.binder import recursive
from lazypy.recursive.memo_table import build
from lazypy.recursive.delay import Delay, StrictDelay, NeedDelay

__all__ = [
    'recursive',
    'build',
    'Delay',
    'StrictDelay',
    'NeedDelay',
]
