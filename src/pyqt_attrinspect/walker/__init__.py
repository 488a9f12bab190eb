"""
Recursive unfolding of composite value types with write-back.
"""

from .recursive_struct_walker import CompositeValues, RecursiveStructWalker, WalkResult

__all__ = [
    "CompositeValues",
    "RecursiveStructWalker",
    "WalkResult",
]
