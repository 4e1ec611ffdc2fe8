"""Field models: descriptors and callback handling.

A field is one data member of an instance, either a `__slots__` entry or a key
of the instance `__dict__`, paired with the class in the MRO that declares it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class FieldKind(Enum):
    """Where a field value is stored on the instance."""

    SLOT = "slot"  # Member descriptor created by __slots__
    DICT = "dict"  # Entry in the instance __dict__
    DESCRIPTOR = "descriptor"  # State kept by a builtin base type (exception args)


class CallbackHandling(Enum):
    """Strategy for callbacks (functions, bound methods, partials) met during a copy."""

    NULL = "null"  # Clone holds None
    SHARE = "share"  # Clone holds the same callback object
    ERROR = "error"  # Abort the copy

    def get_strategy(self) -> Callable[[Any], Any]:
        """Get the function implementing this handling mode.

        Returns:
            Pure function mapping the original callback to its clone value.
        """
        # Late import to avoid circular dependency
        from graphclone.core.fields import operations

        strategies = {
            CallbackHandling.NULL: operations.callback_to_none,
            CallbackHandling.SHARE: operations.callback_shared,
            CallbackHandling.ERROR: operations.callback_error,
        }
        return strategies[self]


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Handle for one data member of a class.

    Attributes:
        name: Attribute name as stored, name-mangled for private members
            (`__secret` declared on `Base` is `_Base__secret`).
        owner: Class in the MRO that declares the field.
        kind: Slot, instance dict entry or builtin data descriptor.
        annotation: Declared type from the owner's annotations, None if unannotated.
    """

    name: str
    owner: type
    kind: FieldKind
    annotation: Any = None
