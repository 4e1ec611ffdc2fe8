"""Host capabilities: shallow duplication and field introspection."""

from graphclone.host.protocol import UNSET, Host
from graphclone.host.reflective import (
    OPAQUE_TYPES,
    ReflectiveHost,
    get_default_host,
    register_duplicator,
)

__all__ = [
    "Host",
    "UNSET",
    "ReflectiveHost",
    "OPAQUE_TYPES",
    "get_default_host",
    "register_duplicator",
]
