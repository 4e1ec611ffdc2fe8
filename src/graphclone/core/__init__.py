"""Core functionalities: stateless protocols and primitives.

Architecture Note:
    core/ contains pure building blocks: classification, identity tracking,
    index iteration and field models. The only mutable object here is the
    IdentityLedger, and it lives for a single copy call.
    For the copy algorithm itself, see walker/; for introspection, see host/.
"""

from graphclone.core.array import ArrayTraverse, iter_indices
from graphclone.core.fields import (
    CALLBACK_TYPES,
    CallbackHandling,
    FieldDescriptor,
    FieldKind,
    declared_primitive,
    is_callback,
)
from graphclone.core.identity import IdentityLedger
from graphclone.core.primitive import (
    BUILTIN_PRIMITIVES,
    PrimitiveRegistry,
    get_registry,
    is_primitive,
    primitive,
)
from graphclone.core.types import Clone

__all__ = [
    # Types
    "Clone",
    # Primitive
    "BUILTIN_PRIMITIVES",
    "PrimitiveRegistry",
    "get_registry",
    "is_primitive",
    "primitive",
    # Identity
    "IdentityLedger",
    # Array
    "ArrayTraverse",
    "iter_indices",
    # Fields
    "CALLBACK_TYPES",
    "CallbackHandling",
    "FieldDescriptor",
    "FieldKind",
    "declared_primitive",
    "is_callback",
]
