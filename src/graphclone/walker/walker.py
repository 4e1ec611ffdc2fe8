"""Graph walker: the recursive deep copy.

Visit order for one object:
    1. None, primitives and already-copied originals short-circuit.
    2. Callbacks are resolved by the configured CallbackHandling strategy.
    3. Tuples and frozensets are rebuilt from copied items.
    4. Anything else is shallow-duplicated by the host and registered in the
       ledger, then its elements (arrays, mappings, sets) and fields are
       replaced by their copies.

Registering before step 4 recurses is what lets self-references and cycles
resolve to the clone under construction.
"""

from __future__ import annotations

from collections import OrderedDict, deque
from typing import Any, TypeVar

import numpy as np

from graphclone.config import CopySettings, get_logger
from graphclone.core.array import iter_indices
from graphclone.core.fields import declared_primitive, is_callback
from graphclone.core.identity import IdentityLedger
from graphclone.core.primitive import PrimitiveRegistry, get_registry
from graphclone.host import UNSET, Host
from graphclone.walker.result import CopyReport

T = TypeVar("T")

logger = get_logger(__name__)


def _element_shape(obj: Any) -> tuple[int, ...] | None:
    """Shape of the element space to walk, None if elements need no copying."""
    if isinstance(obj, np.ndarray):
        return obj.shape if obj.dtype.kind == "O" else None
    if isinstance(obj, (list, deque)):
        return (len(obj),)
    return None


class GraphWalker:
    """Deep-copies one object graph.

    A walker owns the identity ledger of a single top-level copy and refuses to
    run twice. Build a new one per call; copy() does this for you.

    Args:
        host: Provider of shallow duplication and field access.
        settings: Copy behaviour switches.
        registry: Primitive registry, defaults to the global one.
    """

    def __init__(
        self,
        host: Host,
        settings: CopySettings,
        registry: PrimitiveRegistry | None = None,
    ) -> None:
        """Initialize walker with a fresh ledger and report."""
        self._host = host
        self._settings = settings
        self._registry = registry or get_registry()
        self._on_callback = settings.callback_handling.get_strategy()
        self._ledger = IdentityLedger()
        self._started = False
        self.report = CopyReport()

    def run(self, root: T) -> T:
        """Copy a whole graph from its root.

        Args:
            root: Any value.

        Returns:
            The clone of root.

        Raises:
            RuntimeError: If this walker has already run.
            CopyError: Any host or callback failure, after which no clone is valid.
        """
        if self._started:
            raise RuntimeError("GraphWalker is single-use; create a new walker per copy")
        self._started = True

        root_type = type(root).__qualname__
        logger.debug("copy.started", root_type=root_type)
        try:
            clone = self.copy(root)
        except Exception as exc:
            logger.debug(
                "copy.failed",
                root_type=root_type,
                error_type=type(exc).__name__,
                error=str(exc),
                objects_cloned=self.report.objects_cloned,
            )
            raise
        logger.debug("copy.finished", root_type=root_type, **self.report.to_dict())
        return clone

    def copy(self, original: Any) -> Any:
        """Return the clone of one value within this walk."""
        if original is None:
            return None
        if self._registry.is_primitive(type(original)):
            self.report.primitives_shared += 1
            return original
        if original in self._ledger:
            return self._ledger[original]
        if is_callback(original):
            self.report.callbacks_handled += 1
            logger.debug(
                "copy.callback",
                callback_type=type(original).__qualname__,
                handling=self._settings.callback_handling.value,
            )
            return self._on_callback(original)
        if isinstance(original, (tuple, frozenset)):
            return self._copy_immutable(original)

        clone = self._host.shallow_duplicate(original)
        self._ledger.register(original, clone)
        self.report.objects_cloned += 1

        shape = _element_shape(original)
        if shape is not None:
            self._copy_elements(original, clone, shape)
        elif isinstance(original, dict):
            self._copy_mapping(original, clone)
        elif isinstance(original, set):
            self._copy_members(original, clone)
        self._copy_fields(original, clone)
        return clone

    def _copy_elements(self, original: Any, clone: Any, shape: tuple[int, ...]) -> None:
        """Replace every element of an array clone with the copy of the original's."""
        ndarray = isinstance(original, np.ndarray)
        for index in iter_indices(shape):
            key = index if ndarray else index[0]
            clone[key] = self.copy(original[key])
            self.report.elements_visited += 1

    def _copy_mapping(self, original: dict[Any, Any], clone: dict[Any, Any]) -> None:
        copy_keys = self._settings.copy_mapping_keys
        items = [
            (self.copy(key) if copy_keys else key, self.copy(value))
            for key, value in dict.items(original)
        ]
        base: type[dict[Any, Any]] = OrderedDict if isinstance(clone, OrderedDict) else dict
        base.clear(clone)
        base.update(clone, items)

    def _copy_members(self, original: set[Any], clone: set[Any]) -> None:
        members = [self.copy(member) for member in set.__iter__(original)]
        set.clear(clone)
        set.update(clone, members)

    def _copy_immutable(self, original: Any) -> Any:
        """Copy a tuple or frozenset, which can only be built from finished items.

        A cycle through the container builds it during the item walk; that
        clone is reused. A plain container whose items all copy to themselves
        is returned unchanged.
        """
        items = [self.copy(item) for item in original]
        if original in self._ledger:
            return self._ledger[original]
        if type(original) in (tuple, frozenset) and all(
            clone is item for clone, item in zip(items, original, strict=True)
        ):
            self._ledger.register(original, original)
            return original

        clone = self._host.rebuild(original, items)
        self._ledger.register(original, clone)
        self.report.objects_cloned += 1
        self._copy_fields(original, clone)
        return clone

    def _copy_fields(self, original: Any, clone: Any) -> None:
        """Copy every field declared along the MRO, plus undeclared dict entries."""
        trust_annotations = self._settings.trust_annotations
        for field in self._host.iter_fields(original):
            if trust_annotations and declared_primitive(field, self._registry):
                continue
            value = self._host.get_field(original, field)
            if value is UNSET:
                continue
            self._host.set_field(clone, field, self.copy(value))
            self.report.fields_copied += 1
