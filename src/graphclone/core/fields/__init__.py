"""Field functionality: descriptors, callback detection and handling strategies."""

from graphclone.core.fields.core import CALLBACK_TYPES, declared_primitive, is_callback
from graphclone.core.fields.models import CallbackHandling, FieldDescriptor, FieldKind

__all__ = [
    # Models
    "CallbackHandling",
    "FieldDescriptor",
    "FieldKind",
    # Core
    "CALLBACK_TYPES",
    "declared_primitive",
    "is_callback",
]
