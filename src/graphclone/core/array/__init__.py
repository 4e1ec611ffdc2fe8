"""Index iteration over arrays of arbitrary rank."""

from graphclone.core.array.stepper import ArrayTraverse, iter_indices

__all__ = [
    "ArrayTraverse",
    "iter_indices",
]
