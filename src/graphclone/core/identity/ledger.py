"""Identity ledger: original object identity to produced clone.

Usage:
    ledger = IdentityLedger()
    ledger.register(original, clone)
    assert ledger[original] is clone
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from graphclone.errors import LedgerConflictError


class IdentityLedger:
    """Maps originals to clones by reference identity, never by equality.

    Scoped to a single top-level copy call. Entries are only ever added: an
    identity that is already registered cannot be re-registered, which is what
    guarantees one clone per original within the call.

    The original is kept alongside its clone so that its id() stays reserved
    until the ledger is dropped.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        """Initialize empty ledger."""
        self._entries: dict[int, tuple[Any, Any]] = {}

    def register(self, original: Any, clone: Any) -> None:
        """Record the clone produced for an original.

        Args:
            original: Object from the source graph.
            clone: Its duplicate in the output graph.

        Raises:
            LedgerConflictError: If original already has a clone.
        """
        key = id(original)
        if key in self._entries:
            raise LedgerConflictError(
                f"{type(original).__qualname__} at {key:#x} already has a clone in this copy"
            )
        self._entries[key] = (original, clone)

    def __contains__(self, original: object) -> bool:
        return id(original) in self._entries

    def __getitem__(self, original: Any) -> Any:
        try:
            return self._entries[id(original)][1]
        except KeyError:
            raise KeyError(f"No clone recorded for {type(original).__qualname__}") from None

    def get(self, original: Any, default: Any = None) -> Any:
        """Return the clone for original, or default if none was recorded."""
        entry = self._entries.get(id(original))
        return default if entry is None else entry[1]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        """Iterate (original, clone) pairs in registration order."""
        return iter(self._entries.values())
