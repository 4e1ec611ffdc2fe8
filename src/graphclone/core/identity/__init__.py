"""Identity tracking for a single copy call."""

from graphclone.core.identity.ledger import IdentityLedger

__all__ = [
    "IdentityLedger",
]
