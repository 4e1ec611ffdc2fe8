"""Reflective host implementation.

Uses Python's own object model: instances are allocated through the
`__new__` of their nearest builtin base, so no user `__new__` or `__init__`
runs. State lives in `__slots__` member descriptors and the
instance `__dict__`, and fields are discovered by walking the MRO.

Usage:
    host = ReflectiveHost()
    host.register_duplicator(Connection, lambda conn: conn.detached())
    clone = copy(value, host=host)
"""

from __future__ import annotations

import array
import inspect
import io
import socket
import threading
import types
import typing
from collections import OrderedDict, defaultdict, deque
from collections.abc import Callable, Iterator, Sequence
from typing import Any, TypeVar, cast

import numpy as np

from graphclone.config.logging import get_logger
from graphclone.core.fields import FieldDescriptor, FieldKind
from graphclone.errors import FieldAccessError, UnsupportedTargetError
from graphclone.host.protocol import UNSET

T = TypeVar("T")

logger = get_logger(__name__)

OPAQUE_TYPES: tuple[type, ...] = (
    io.IOBase,
    socket.socket,
    threading.Thread,
    type(threading.Lock()),
    type(threading.RLock()),
    types.ModuleType,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    types.FrameType,
    types.TracebackType,
    memoryview,
)
"""Runtime resources with state outside the Python object graph."""

BUILTIN_STATE: dict[type, tuple[str, ...]] = {
    BaseException: ("args", "__cause__", "__context__"),
}
"""Data descriptors of builtin base types that hold references to copy."""


def _mangle(cls: type, name: str) -> str:
    """Apply private name mangling the way the compiler does for class bodies."""
    if name.startswith("__") and not name.endswith("__"):
        stripped = cls.__name__.lstrip("_")
        if stripped:
            return f"_{stripped}{name}"
    return name


def _builtin_base(cls: type) -> type:
    """Nearest class in the MRO whose __new__ is not written in Python.

    Its __new__ allocates instances of cls without running user code. This is
    the base CPython itself requires for `base.__new__(cls)` to be safe.
    """
    for base in cls.__mro__:
        new = base.__dict__.get("__new__")
        if new is None:
            continue
        if isinstance(new, staticmethod):
            new = new.__func__
        if not isinstance(new, types.FunctionType):
            return base
    return object


def _own_slots(cls: type) -> Iterator[str]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    for name in slots:
        if name in ("__dict__", "__weakref__"):
            continue
        yield _mangle(cls, name)


def _own_annotations(cls: type) -> dict[str, Any]:
    """Annotations declared directly on cls, resolved where possible.

    String annotations that cannot be evaluated (forward references to names
    that are not module globals) are returned unresolved.
    """
    try:
        return inspect.get_annotations(cls, eval_str=True)
    except (NameError, SyntaxError, TypeError, AttributeError):
        return inspect.get_annotations(cls)


def _instance_dict(obj: Any) -> dict[str, Any] | None:
    try:
        return cast(dict[str, Any], object.__getattribute__(obj, "__dict__"))
    except AttributeError:
        return None


class ReflectiveHost:
    """Host capabilities backed by runtime reflection.

    Field lists are computed once per class and cached. Per-type duplicators
    registered with register_duplicator() take precedence over the built-in
    allocation rules for that type and its subclasses.
    """

    def __init__(self) -> None:
        """Initialize host with empty caches and no custom duplicators."""
        self._duplicators: dict[type, Callable[[Any], Any]] = {}
        self._field_cache: dict[tuple[type, bool], tuple[FieldDescriptor, ...]] = {}
        self._dict_names: dict[type, frozenset[str]] = {}

    def register_duplicator(self, cls: type[T], duplicator: Callable[[T], T]) -> None:
        """Use a custom shallow duplicator for cls and its subclasses.

        Args:
            cls: Type the duplicator handles.
            duplicator: Function returning a new, shallow duplicate of its argument.
        """
        self._duplicators[cls] = duplicator
        logger.debug("host.duplicator_registered", target_type=cls.__qualname__)

    def _find_duplicator(self, cls: type) -> Callable[[Any], Any] | None:
        if not self._duplicators:
            return None
        for base in cls.__mro__:
            duplicator = self._duplicators.get(base)
            if duplicator is not None:
                return duplicator
        return None

    # Shallow duplication

    def shallow_duplicate(self, original: T) -> T:
        """Allocate a same-type instance holding the original's field values.

        Args:
            original: Composite object to duplicate.

        Returns:
            New instance. Containers hold the same elements, fields the same values.

        Raises:
            UnsupportedTargetError: For opaque resources and types whose
                builtin base cannot allocate them without arguments.
        """
        cls = type(original)
        duplicator = self._find_duplicator(cls)
        if duplicator is not None:
            return cast(T, duplicator(original))
        if isinstance(original, OPAQUE_TYPES):
            raise UnsupportedTargetError(cls, "opaque runtime resource")
        if isinstance(original, np.ndarray):
            return cast(T, original.copy(order="K"))

        clone = self._allocate(original)
        self._copy_state(original, clone)
        return cast(T, clone)

    def _allocate(self, original: Any) -> Any:
        cls = type(original)
        if isinstance(original, array.array):
            clone = array.array.__new__(cls, original.typecode)
            array.array.extend(clone, original)
            return clone
        try:
            clone = _builtin_base(cls).__new__(cls)
        except TypeError as exc:
            raise UnsupportedTargetError(cls, str(exc)) from exc

        if isinstance(original, list):
            list.extend(clone, original)
        elif isinstance(original, deque):
            deque.__init__(clone, original, original.maxlen)
        elif isinstance(original, OrderedDict):
            OrderedDict.update(clone, original)
        elif isinstance(original, dict):
            dict.update(clone, original)
            if isinstance(original, defaultdict):
                clone.default_factory = original.default_factory
        elif isinstance(original, set):
            set.update(clone, original)
        elif isinstance(original, bytearray):
            bytearray.extend(clone, original)
        elif isinstance(original, BaseException):
            clone.args = original.args
            clone.__cause__ = original.__cause__
            clone.__context__ = original.__context__
            clone.__suppress_context__ = original.__suppress_context__
            clone.__traceback__ = original.__traceback__
        return clone

    def _copy_state(self, original: Any, clone: Any) -> None:
        """Copy __dict__ entries and set slots from original onto clone."""
        instance_dict = _instance_dict(original)
        if instance_dict:
            clone_dict = _instance_dict(clone)
            if clone_dict is None:
                raise UnsupportedTargetError(type(original), "duplicate has no instance __dict__")
            clone_dict.update(instance_dict)
        for field in self.declared_fields(type(original)):
            if field.kind is not FieldKind.SLOT:
                continue
            value = self.get_field(original, field)
            if value is not UNSET:
                self.set_field(clone, field, value)

    def rebuild(self, original: T, items: Sequence[Any]) -> T:
        """Build a tuple or frozenset of the original's type holding items.

        Subclasses are created through the base type's __new__, so overrides
        such as namedtuple's are not invoked. Instance state is copied over.

        Raises:
            UnsupportedTargetError: If the type refuses base allocation.
        """
        cls = type(original)
        if cls is tuple:
            return cast(T, tuple(items))
        if cls is frozenset:
            return cast(T, frozenset(items))
        base: type = tuple if isinstance(original, tuple) else frozenset
        try:
            clone = base.__new__(cls, items)
        except TypeError as exc:
            raise UnsupportedTargetError(cls, str(exc)) from exc
        self._copy_state(original, clone)
        return cast(T, clone)

    # Field enumeration

    def declared_fields(
        self, cls: type, *, include_inherited: bool = True
    ) -> tuple[FieldDescriptor, ...]:
        """Fields declared by a class, base classes first.

        Every class contributes its own slots, name-mangled for private names,
        so a slot shadowed in a subclass still has its own descriptor. Annotated
        instance attributes are reported once, owned by the most derived
        class annotating them. ClassVar annotations are not fields. Builtin
        bases listed in BUILTIN_STATE contribute their data descriptors, so
        exception args and chained exceptions are copied like any field.

        Args:
            cls: Class to inspect.
            include_inherited: Include fields declared on every ancestor.

        Returns:
            Field descriptors in declaration order from the root class down.
        """
        key = (cls, include_inherited)
        cached = self._field_cache.get(key)
        if cached is not None:
            return cached

        owners = [c for c in cls.__mro__ if c is not object] if include_inherited else [cls]
        slots: list[FieldDescriptor] = []
        attributes: list[FieldDescriptor] = []
        claimed: set[str] = set()
        for owner in owners:
            annotations = _own_annotations(owner)
            own_slots = list(_own_slots(owner))
            for name in reversed(BUILTIN_STATE.get(owner, ())):
                slots.append(FieldDescriptor(name, owner, FieldKind.DESCRIPTOR))
            for name in reversed(own_slots):
                slots.append(FieldDescriptor(name, owner, FieldKind.SLOT, annotations.get(name)))
            for name, annotation in reversed(annotations.items()):
                if name in own_slots or name in claimed:
                    continue
                if typing.get_origin(annotation) is typing.ClassVar:
                    continue
                claimed.add(name)
                attributes.append(FieldDescriptor(name, owner, FieldKind.DICT, annotation))

        fields = tuple(reversed(slots)) + tuple(reversed(attributes))
        self._field_cache[key] = fields
        return fields

    def iter_fields(self, obj: Any) -> Iterator[FieldDescriptor]:
        """Yield every field of an instance.

        Declared fields come first, then instance dict entries no class
        declares, owned by the concrete class.
        """
        cls = type(obj)
        declared = self.declared_fields(cls)
        yield from declared

        instance_dict = _instance_dict(obj)
        if not instance_dict:
            return
        names = self._dict_names.get(cls)
        if names is None:
            names = frozenset(f.name for f in declared if f.kind is FieldKind.DICT)
            self._dict_names[cls] = names
        for name in list(instance_dict):
            if name not in names:
                yield FieldDescriptor(name, cls, FieldKind.DICT)

    def get_field(self, obj: Any, field: FieldDescriptor) -> Any:
        """Read a field, bypassing properties and __getattr__ hooks.

        Returns:
            The stored value, or UNSET for an unassigned slot or missing entry.

        Raises:
            FieldAccessError: If the declaring class has no such descriptor.
        """
        if field.kind is not FieldKind.DICT:
            descriptor = field.owner.__dict__.get(field.name)
            if descriptor is None:
                raise FieldAccessError(field.owner, field.name, "read")
            try:
                return descriptor.__get__(obj, type(obj))
            except AttributeError:
                return UNSET
        instance_dict = _instance_dict(obj)
        if instance_dict is None:
            return UNSET
        return instance_dict.get(field.name, UNSET)

    def set_field(self, obj: Any, field: FieldDescriptor, value: Any) -> None:
        """Write a field, bypassing __setattr__ so frozen classes accept it.

        Raises:
            FieldAccessError: If the slot or instance dict cannot be written.
        """
        try:
            if field.kind is not FieldKind.DICT:
                field.owner.__dict__[field.name].__set__(obj, value)
            else:
                object.__getattribute__(obj, "__dict__")[field.name] = value
        except (AttributeError, KeyError, TypeError) as exc:
            raise FieldAccessError(field.owner, field.name, "write") from exc


# Module-level host instance
_default_host = ReflectiveHost()


def get_default_host() -> ReflectiveHost:
    """Access the process-wide reflective host.

    Returns:
        The shared ReflectiveHost used when copy() is given no host.
    """
    return _default_host


def register_duplicator(cls: type[T], duplicator: Callable[[T], T]) -> None:
    """Register a custom duplicator on the default host."""
    _default_host.register_duplicator(cls, duplicator)
