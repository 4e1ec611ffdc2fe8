"""Pure functions for callback handling strategies."""

from __future__ import annotations

from typing import Any

from graphclone.errors import CallbackCopyError


def callback_to_none(callback: Any) -> None:
    """Drop the callback from the clone.

    Args:
        callback: Original callback (ignored).

    Returns:
        None, so the clone field holds no callback.
    """
    return None


def callback_shared(callback: Any) -> Any:
    """Keep the very same callback in the clone.

    Args:
        callback: Original callback.

    Returns:
        The callback unchanged. Bound methods still point at the original instance.
    """
    return callback


def callback_error(callback: Any) -> Any:
    """Raise for any callback.

    Args:
        callback: Original callback.

    Returns:
        Never returns.

    Raises:
        CallbackCopyError: Always raised.
    """
    name = getattr(callback, "__qualname__", type(callback).__qualname__)
    raise CallbackCopyError(f"Callback {name} cannot be copied and strategy is ERROR")
