"""Public copy entry points.

Usage:
    from graphclone import copy, copy_with_report

    clone = copy(graph)
    clone, report = copy_with_report(graph)

    @dataclass
    class Node(Copyable):
        parent: Node | None = None

    twin = Node().deep_copy()
"""

from __future__ import annotations

from typing import Self, TypeVar

from graphclone.config import CopySettings, get_settings
from graphclone.core.types import Clone
from graphclone.host import Host, get_default_host
from graphclone.walker.result import CopyReport
from graphclone.walker.walker import GraphWalker

T = TypeVar("T")


def _walker(settings: CopySettings | None, host: Host | None) -> GraphWalker:
    return GraphWalker(host or get_default_host(), settings or get_settings())


def copy(value: T, *, settings: CopySettings | None = None, host: Host | None = None) -> Clone[T]:
    """Deep-copy any value.

    Args:
        value: Root of the graph to copy.
        settings: Copy settings, defaults to the process settings.
        host: Introspection host, defaults to the shared ReflectiveHost.

    Returns:
        An independent clone of the same type. Shared references and cycles in
        the original are reproduced among the clones.

    Raises:
        CopyError: If some reachable object cannot be duplicated or accessed.
    """
    return _walker(settings, host).run(value)


def copy_with_report(
    value: T, *, settings: CopySettings | None = None, host: Host | None = None
) -> tuple[Clone[T], CopyReport]:
    """Deep-copy a value and return the walk counters alongside the clone.

    Takes the same arguments as copy().
    """
    walker = _walker(settings, host)
    clone = walker.run(value)
    return clone, walker.report


class Copyable:
    """Mixin giving instances a typed deep_copy() method."""

    __slots__ = ()

    def deep_copy(self) -> Self:
        """Return an independent clone of this instance."""
        return copy(self)
