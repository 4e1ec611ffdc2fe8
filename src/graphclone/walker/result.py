"""Copy result models."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(slots=True)
class CopyReport:
    """Counters collected while walking one object graph.

    Attributes:
        objects_cloned: Distinct originals that received a new clone.
        primitives_shared: Primitive values passed through unchanged.
        callbacks_handled: Callbacks resolved by the callback strategy.
        elements_visited: Array elements visited by the stepper.
        fields_copied: Fields assigned on clones.
    """

    objects_cloned: int = 0
    primitives_shared: int = 0
    callbacks_handled: int = 0
    elements_visited: int = 0
    fields_copied: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to a plain dict, e.g. for structured logging."""
        return asdict(self)
