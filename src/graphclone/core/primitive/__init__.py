"""Primitive classification: which values are shared instead of copied."""

from graphclone.core.primitive.core import (
    BUILTIN_PRIMITIVES,
    PrimitiveRegistry,
    get_registry,
    is_primitive,
    primitive,
)

__all__ = [
    "BUILTIN_PRIMITIVES",
    "PrimitiveRegistry",
    "get_registry",
    "is_primitive",
    "primitive",
]
