"""Graph walking: the deep copy algorithm and its entry points."""

from graphclone.walker.core import Copyable, copy, copy_with_report
from graphclone.walker.result import CopyReport
from graphclone.walker.walker import GraphWalker

__all__ = [
    "GraphWalker",
    "CopyReport",
    "Copyable",
    "copy",
    "copy_with_report",
]
