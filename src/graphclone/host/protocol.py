"""Host protocol: the introspection capabilities the copier depends on.

The walker never inspects objects itself. It asks a host to allocate shallow
duplicates, to rebuild immutable containers, and to enumerate and access
fields. This keeps the copy algorithm independent of how a given object
model stores its state.

Usage:
    host = ReflectiveHost()
    clone = copy(value, host=host)
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum
from typing import Any, Final, Protocol, TypeVar

from graphclone.core.fields import FieldDescriptor

T = TypeVar("T")


class _Unset(Enum):
    TOKEN = "unset"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.TOKEN
"""Returned by get_field for a field that has no value on the instance."""


class Host(Protocol):
    """Abstract host interface. Implementations own all introspection."""

    def shallow_duplicate(self, original: T) -> T:
        """Return a new instance of the same concrete type with every field
        value copied by reference. Must not run user construction logic.

        Raises UnsupportedTargetError if the type cannot be duplicated.
        """
        ...

    def rebuild(self, original: T, items: Sequence[Any]) -> T:
        """Build an immutable container of the same type holding items."""
        ...

    def declared_fields(
        self, cls: type, *, include_inherited: bool = True
    ) -> tuple[FieldDescriptor, ...]:
        """Fields declared by cls, and by its ancestors if include_inherited."""
        ...

    def iter_fields(self, obj: Any) -> Iterator[FieldDescriptor]:
        """All fields of an instance: declared ones plus undeclared dict entries."""
        ...

    def get_field(self, obj: Any, field: FieldDescriptor) -> Any:
        """Read a field value, or UNSET. Raises FieldAccessError on failure."""
        ...

    def set_field(self, obj: Any, field: FieldDescriptor, value: Any) -> None:
        """Write a field value. Raises FieldAccessError on failure."""
        ...
