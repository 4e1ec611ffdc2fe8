"""Exceptions raised while copying an object graph.

Every error aborts the whole top-level copy call. The partially built clone
graph is discarded together with its ledger.
"""

from __future__ import annotations


class CopyError(Exception):
    """Base class for all graphclone failures."""

    pass


class UnsupportedTargetError(CopyError, TypeError):
    """Raised when the host cannot produce a shallow duplicate of a type."""

    def __init__(self, target_type: type, reason: str) -> None:
        self.target_type = target_type
        self.reason = reason
        super().__init__(f"Cannot duplicate {target_type.__qualname__}: {reason}")


class FieldAccessError(CopyError, AttributeError):
    """Raised when a field cannot be read from the original or written to the clone."""

    def __init__(self, owner: type, name: str, operation: str) -> None:
        self.owner = owner
        self.field_name = name
        self.operation = operation
        super().__init__(f"Cannot {operation} field {owner.__qualname__}.{name}")


class LedgerConflictError(CopyError, RuntimeError):
    """Raised when an original identity is registered twice in one copy call."""

    pass


class CallbackCopyError(CopyError, TypeError):
    """Raised when a callback is reached and the handling strategy is ERROR."""

    pass
