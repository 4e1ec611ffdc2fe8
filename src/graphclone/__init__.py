"""graphclone: deep copies of arbitrary object graphs.

Usage:
    from graphclone import copy

    @dataclass
    class Node:
        value: int
        parent: Node | None = None
        on_change: Callable[[], None] | None = None

    root = Node(1)
    root.parent = root
    clone = copy(root)
    assert clone.parent is clone
"""

__version__ = "0.1.0"

# Core primitives
from graphclone.core import (
    ArrayTraverse,
    CallbackHandling,
    Clone,
    FieldDescriptor,
    FieldKind,
    IdentityLedger,
    PrimitiveRegistry,
    is_callback,
    is_primitive,
    iter_indices,
    primitive,
)

# Configuration
from graphclone.config import CopySettings, configure_logging, get_settings

# Errors
from graphclone.errors import (
    CallbackCopyError,
    CopyError,
    FieldAccessError,
    LedgerConflictError,
    UnsupportedTargetError,
)

# Host capabilities
from graphclone.host import Host, ReflectiveHost, get_default_host, register_duplicator

# Walker and entry points
from graphclone.walker import Copyable, CopyReport, GraphWalker, copy, copy_with_report

__all__ = [
    # Version
    "__version__",
    # Entry points
    "copy",
    "copy_with_report",
    "Copyable",
    "CopyReport",
    "GraphWalker",
    # Core
    "Clone",
    "is_primitive",
    "primitive",
    "PrimitiveRegistry",
    "is_callback",
    "CallbackHandling",
    "FieldDescriptor",
    "FieldKind",
    "IdentityLedger",
    "ArrayTraverse",
    "iter_indices",
    # Host
    "Host",
    "ReflectiveHost",
    "get_default_host",
    "register_duplicator",
    # Config
    "CopySettings",
    "get_settings",
    "configure_logging",
    # Errors
    "CopyError",
    "UnsupportedTargetError",
    "FieldAccessError",
    "LedgerConflictError",
    "CallbackCopyError",
]
