"""Primitive classification and registry.

A primitive type is one whose values are immutable by convention and can be
shared between an original graph and its clone. Primitives terminate the
recursion: they are returned as-is and never enter the identity ledger.

Usage:
    @primitive
    @dataclass(frozen=True)
    class Money:
        amount: int
        currency: str

    is_primitive(Money)  # True
    is_primitive(list)  # False
"""

from __future__ import annotations

import datetime
import decimal
import enum
import fractions
import pathlib
import re
import types
import uuid
import weakref
from collections.abc import Callable
from typing import TypeVar, overload

import numpy as np

T = TypeVar("T")

BUILTIN_PRIMITIVES: tuple[type, ...] = (
    str,
    bytes,
    int,
    float,
    complex,
    bool,
    type(None),
    type(Ellipsis),
    type(NotImplemented),
    range,
    type,
    enum.Enum,
    decimal.Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    pathlib.PurePath,
    re.Pattern,
    fractions.Fraction,
    np.generic,
    types.CodeType,
    weakref.ref,
)


class PrimitiveRegistry:
    """Process-local registry of types treated as atomic values.

    Starts from the builtin immutable value types. Lookups are cached per
    concrete type; registering a new type drops the cache.
    """

    def __init__(self, builtins: tuple[type, ...] = BUILTIN_PRIMITIVES) -> None:
        """Initialize registry seeded with the builtin primitives.

        Args:
            builtins: Types that are primitive before anything is registered.
        """
        self._types: tuple[type, ...] = builtins
        self._cache: dict[type, bool] = {}

    def register(self, cls: type) -> type:
        """Declare a type (and its subclasses) primitive.

        Registering the same type twice is a no-op.

        Args:
            cls: Class whose instances are immutable values.

        Returns:
            The class unchanged.

        Raises:
            TypeError: If cls is not a class.
        """
        if not isinstance(cls, type):
            raise TypeError(f"Only classes can be registered as primitive, got {cls!r}")
        if cls not in self._types:
            self._types = (*self._types, cls)
            self._cache.clear()
        return cls

    def is_primitive(self, tp: type) -> bool:
        """Check whether values of a type are shared instead of copied.

        Args:
            tp: Type to classify.

        Returns:
            True if tp is, or derives from, a registered primitive type.
        """
        cached = self._cache.get(tp)
        if cached is not None:
            return cached
        result = isinstance(tp, type) and issubclass(tp, self._types)
        self._cache[tp] = result
        return result

    @property
    def types(self) -> tuple[type, ...]:
        """Return all registered primitive base types."""
        return self._types


# Module-level registry instance
_registry = PrimitiveRegistry()


def get_registry() -> PrimitiveRegistry:
    """Access the global primitive registry.

    Returns:
        The process-local PrimitiveRegistry instance.
    """
    return _registry


def is_primitive(tp: type) -> bool:
    """Check a type against the global primitive registry."""
    return _registry.is_primitive(tp)


@overload
def primitive(cls: type[T]) -> type[T]: ...


@overload
def primitive(cls: None = None) -> Callable[[type[T]], type[T]]: ...


def primitive(cls: type[T] | None = None) -> type[T] | Callable[[type[T]], type[T]]:
    """Register a class as a primitive value type.

    Supports both forms:
        @primitive
        @primitive()

    Instances of a primitive class are shared between original and clone, so
    only apply this to classes whose instances are never mutated.
    """

    def decorator(c: type[T]) -> type[T]:
        _registry.register(c)
        return c

    if cls is None:
        return decorator
    return decorator(cls)
