"""Callback detection and declared-type helpers."""

from __future__ import annotations

import functools
import operator
import types
from typing import Any

import numpy as np

from graphclone.core.fields.models import FieldDescriptor
from graphclone.core.primitive import PrimitiveRegistry

CALLBACK_TYPES: tuple[type, ...] = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.MethodWrapperType,
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
    functools.partial,
    type(functools.lru_cache(maxsize=None)(lambda: None)),
    np.ufunc,
    operator.itemgetter,
    operator.attrgetter,
    operator.methodcaller,
)


def is_callback(value: Any) -> bool:
    """Check whether a value is a function-like reference.

    Callable instances of user classes are not callbacks; they are copied like
    any other object. Classes are primitive and never reach this check.

    Args:
        value: Value to inspect.

    Returns:
        True for functions, lambdas, bound and builtin methods, partials,
        cached function wrappers, numpy ufuncs and operator getters.
    """
    return isinstance(value, CALLBACK_TYPES)


def declared_primitive(field: FieldDescriptor, registry: PrimitiveRegistry) -> bool:
    """Check whether a field is annotated with a primitive type.

    Only plain class annotations count. Unions, generics and unresolved string
    annotations are treated as non-primitive so the runtime value decides.

    Args:
        field: Field to check.
        registry: Primitive registry to classify with.

    Returns:
        True if the field's declared type is primitive.
    """
    annotation = field.annotation
    if not isinstance(annotation, type) or isinstance(annotation, types.GenericAlias):
        return False
    return registry.is_primitive(annotation)
