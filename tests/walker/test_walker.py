"""Tests for the graph walker.

Critical Invariants:
- One clone per original identity, so cycles and sharing survive the copy
- Primitives are shared and never enter the ledger
- Callbacks follow the configured handling strategy
- Nothing reachable from the clone is reachable from the original, except primitives
"""

from __future__ import annotations

import functools
import operator
import threading
from collections import OrderedDict, deque, namedtuple
from dataclasses import dataclass, field
from typing import ClassVar
from unittest.mock import patch

import numpy as np
import pytest

from graphclone import (
    CallbackCopyError,
    CallbackHandling,
    CopySettings,
    FieldAccessError,
    GraphWalker,
    ReflectiveHost,
    UnsupportedTargetError,
)

Pair = namedtuple("Pair", ["left", "right"])


@dataclass(frozen=True)
class Key:
    name: str


@dataclass
class Holder:
    count: int
    items: list[int] = field(default_factory=list)


class Point:
    created: ClassVar[list[tuple]] = []

    def __new__(cls, *args):
        cls.created.append(args)
        return super().__new__(cls)

    def __init__(self, x: int, tags: list[str]) -> None:
        self.x = x
        self.tags = tags


@functools.cache
def cached_lookup(key):
    return key


def run(value, host, settings):
    return GraphWalker(host, settings).run(value)


# Base cases


def test_none_and_primitives_are_returned_as_is(host, settings):
    big = 10**30
    text = "".join(["te", "xt"])

    assert run(None, host, settings) is None
    assert run(big, host, settings) is big
    assert run(text, host, settings) is text


def test_primitives_do_not_enter_ledger(host, settings):
    walker = GraphWalker(host, settings)
    walker.run([1, "a", 2.5, True])

    assert walker.report.objects_cloned == 1
    assert walker.report.primitives_shared == 4


def test_walker_is_single_use(host, settings):
    """CRITICAL: A second run would resolve originals to the first run's clones."""
    walker = GraphWalker(host, settings)
    walker.run([1])

    with pytest.raises(RuntimeError, match="single-use"):
        walker.run([1])


# Identity


def test_self_reference(host, settings, node_cls):
    """CRITICAL: A { value: 5, self: A } copies to A' { value: 5, self: A' }."""
    a = node_cls(5)
    a.link = a

    clone = run(a, host, settings)

    assert clone is not a
    assert clone.value == 5
    assert clone.link is clone


def test_two_cycle(host, settings, node_cls):
    parent = node_cls(1)
    child = node_cls(2, link=parent)
    parent.link = child

    parent_clone = run(parent, host, settings)
    child_clone = parent_clone.link

    assert child_clone is not child
    assert child_clone.link is parent_clone
    assert parent_clone is not parent


def test_shared_reference_stays_shared(host, settings, node_cls):
    """CRITICAL: Two fields pointing at one object point at one clone.

    Why: Duplicating shared state into independent copies silently changes semantics.
    """
    shared = node_cls(0)
    left = node_cls(1, link=shared)
    right = node_cls(2, link=shared)

    left_clone, right_clone = run([left, right], host, settings)

    assert left_clone.link is right_clone.link
    assert left_clone.link is not shared


def test_clone_is_independent(host, settings, node_cls):
    original = node_cls(1, children=[node_cls(2)])

    clone = run(original, host, settings)
    clone.children.append(node_cls(3))
    clone.children[0].value = 20

    assert len(original.children) == 1
    assert original.children[0].value == 2


def test_slotted_cycle(host, settings, slot_node_cls):
    a = slot_node_cls(1)
    a.link = a

    clone = run(a, host, settings)

    assert clone.link is clone


# Callbacks


def test_callbacks_are_nulled_by_default(host, settings, node_cls):
    original = node_cls(1, on_change=print)
    original.hook = functools.partial(print, "x")
    original.method = original.__repr__

    walker = GraphWalker(host, settings)
    clone = walker.run(original)

    assert clone.on_change is None
    assert clone.hook is None
    assert clone.method is None
    assert original.on_change is print
    assert walker.report.callbacks_handled == 3


def test_callbacks_inside_containers_are_nulled(host, settings):
    clone = run({"cb": len, "items": [len, 1]}, host, settings)

    assert clone == {"cb": None, "items": [None, 1]}


def test_native_callables_are_nulled(host, settings):
    original = {
        "cached": cached_lookup,
        "ufunc": np.add,
        "getter": operator.itemgetter(0),
        "attr": operator.attrgetter("value"),
        "call": operator.methodcaller("strip"),
        "data": [1],
    }

    clone = run(original, host, settings)

    assert clone == {
        "cached": None,
        "ufunc": None,
        "getter": None,
        "attr": None,
        "call": None,
        "data": [1],
    }


def test_callbacks_can_be_shared(host, node_cls):
    settings = CopySettings(_env_file=None, callback_handling=CallbackHandling.SHARE)
    original = node_cls(1, on_change=print)

    assert run(original, host, settings).on_change is print


def test_callbacks_can_abort_the_copy(host, node_cls):
    settings = CopySettings(_env_file=None, callback_handling=CallbackHandling.ERROR)

    with pytest.raises(CallbackCopyError):
        run(node_cls(1, on_change=print), host, settings)


# Containers


def test_list_containing_itself(host, settings):
    original: list = [1]
    original.append(original)

    clone = run(original, host, settings)

    assert clone is not original
    assert clone[1] is clone


def test_dict_containing_itself(host, settings):
    original: dict = {"a": [1]}
    original["self"] = original

    clone = run(original, host, settings)

    assert clone["self"] is clone
    assert clone["a"] == [1]
    assert clone["a"] is not original["a"]


def test_dict_keys_copied_or_kept(host):
    key = Key("k")
    original = {key: [1]}

    copied = run(original, host, CopySettings(_env_file=None))
    kept = run(original, host, CopySettings(_env_file=None, copy_mapping_keys=False))

    (copied_key,) = copied
    (kept_key,) = kept
    assert copied_key == key
    assert copied_key is not key
    assert kept_key is key


def test_ordered_dict_keeps_order(host, settings):
    original = OrderedDict([("z", [1]), ("a", [2])])

    clone = run(original, host, settings)

    assert type(clone) is OrderedDict
    assert list(clone) == ["z", "a"]
    assert clone["z"] is not original["z"]


def test_set_members_are_copied(host, settings):
    key = Key("k")
    clone = run({key, 1}, host, settings)

    assert clone == {key, 1}
    assert all(member is not key for member in clone if isinstance(member, Key))


def test_deque_elements_are_copied(host, settings):
    inner = [1]
    original = deque([inner, inner], maxlen=4)

    clone = run(original, host, settings)

    assert clone.maxlen == 4
    assert clone[0] is clone[1]
    assert clone[0] is not inner


def test_exception_state_is_deep_copied(host, settings):
    """CRITICAL: Exception args and chained exceptions belong to the clone alone."""
    inner = [1]
    cause = KeyError(inner)
    original = ValueError(inner, "message")
    original.__cause__ = cause

    clone = run(original, host, settings)

    assert type(clone) is ValueError
    assert clone.args == ([1], "message")
    assert clone.args[0] is not inner
    assert clone.__cause__ is not cause
    assert clone.__cause__.args[0] is clone.args[0], "Shared list stays shared"
    assert clone.__suppress_context__


def test_user_new_is_bypassed(host, settings):
    tags = ["a"]
    original = Point(1, tags)
    Point.created.clear()

    clone = run(original, host, settings)

    assert Point.created == []
    assert clone.x == 1
    assert clone.tags == ["a"]
    assert clone.tags is not tags


def test_primitive_tuple_is_shared(host, settings):
    original = (1, "a", (2, 3))
    assert run(original, host, settings) is original


def test_tuple_with_mutable_items_is_rebuilt(host, settings):
    inner = [1]
    original = (inner, inner)

    clone = run(original, host, settings)

    assert type(clone) is tuple
    assert clone is not original
    assert clone[0] is clone[1]
    assert clone[0] is not inner


def test_tuple_cycle_through_list(host, settings):
    inner: list = []
    original = (inner,)
    inner.append(original)

    clone = run(original, host, settings)

    assert clone[0][0] is clone
    assert clone[0] is not inner


def test_namedtuple_keeps_type(host, settings):
    original = Pair([1], "right")

    clone = run(original, host, settings)

    assert type(clone) is Pair
    assert clone.left == [1]
    assert clone.left is not original.left
    assert clone.right == "right"


def test_frozenset_of_primitives_is_shared(host, settings):
    original = frozenset({1, 2})
    assert run(original, host, settings) is original


# Declared types


def test_primitive_annotation_skips_field(host, settings):
    """Fields annotated with a primitive type are not visited."""
    mismatched = Holder(count=[1])  # type: ignore[arg-type]

    clone = run(mismatched, host, settings)

    assert clone.count is mismatched.count, "Trusted annotation leaves the shallow value"
    assert clone.items is not mismatched.items


def test_untrusted_annotations_follow_runtime_values(host):
    settings = CopySettings(_env_file=None, trust_annotations=False)
    mismatched = Holder(count=[1])  # type: ignore[arg-type]

    clone = run(mismatched, host, settings)

    assert clone.count == [1]
    assert clone.count is not mismatched.count


# Failures


def test_unsupported_member_aborts_copy(host, settings, node_cls):
    original = node_cls(1)
    original.lock = threading.Lock()

    with pytest.raises(UnsupportedTargetError):
        run(original, host, settings)


def test_field_access_error_propagates(settings, node_cls):
    host = ReflectiveHost()
    error = FieldAccessError(node_cls, "children", "write")

    with patch.object(ReflectiveHost, "set_field", side_effect=error):
        with pytest.raises(FieldAccessError, match="children"):
            run(node_cls(1), host, settings)


def test_report_counts(host, settings, node_cls):
    shared = node_cls(0)
    original = [shared, shared, node_cls(1, link=shared)]

    walker = GraphWalker(host, settings)
    walker.run(original)

    # list, shared node, its children list, third node, its children list
    assert walker.report.objects_cloned == 5
    assert walker.report.elements_visited == 3
