"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from graphclone import CopySettings, ReflectiveHost, get_settings


@pytest.fixture
def host():
    """Fresh ReflectiveHost with empty caches and no duplicators."""
    return ReflectiveHost()


@pytest.fixture
def settings():
    """Default settings, independent of GRAPHCLONE_* variables in the environment."""
    return CopySettings(_env_file=None)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Drop cached process settings so env changes in one test never leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@dataclass
class Node:
    value: int
    link: Node | None = None
    children: list[Node] = field(default_factory=list)
    on_change: Callable[..., Any] | None = None


@dataclass(slots=True)
class SlotNode:
    value: int
    link: SlotNode | None = None


@pytest.fixture
def node_cls():
    return Node


@pytest.fixture
def slot_node_cls():
    return SlotNode
