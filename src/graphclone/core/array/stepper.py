"""N-dimensional array stepper.

Walks every index tuple of an array of any rank in mixed-radix order, with
dimension 0 varying fastest.

Usage:
    list(iter_indices((2, 3)))
    # [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2), (1, 2)]
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence


class ArrayTraverse:
    """Mutable cursor over the index space of an array.

    Starts at the all-zero position. Each step() advances the lowest dimension
    that has room and resets every dimension below it, like an odometer read
    from the left.

    Args:
        shape: Extent of each dimension. Every extent must be at least 1.
    """

    __slots__ = ("_max_positions", "position")

    def __init__(self, shape: Sequence[int]) -> None:
        """Initialize cursor at the origin.

        Args:
            shape: Extent of each dimension.

        Raises:
            ValueError: If any extent is less than 1.
        """
        if any(extent < 1 for extent in shape):
            raise ValueError(f"ArrayTraverse needs non-empty dimensions, got {tuple(shape)}")
        self._max_positions = [extent - 1 for extent in shape]
        self.position = [0] * len(shape)

    def step(self) -> bool:
        """Advance to the next position.

        Returns:
            True if the cursor moved, False if it was on the last position.
        """
        for dim, limit in enumerate(self._max_positions):
            if self.position[dim] >= limit:
                continue
            self.position[dim] += 1
            for lower in range(dim):
                self.position[lower] = 0
            return True
        return False


def iter_indices(shape: Sequence[int]) -> Iterator[tuple[int, ...]]:
    """Yield every index tuple of an array with the given shape.

    Rank 0 yields the single empty tuple. Any zero extent yields nothing.

    Args:
        shape: Extent of each dimension.

    Yields:
        Index tuples, dimension 0 fastest-varying.

    Raises:
        ValueError: If any extent is negative.
    """
    if any(extent < 0 for extent in shape):
        raise ValueError(f"Negative array extent in shape {tuple(shape)}")
    if 0 in shape:
        return
    walker = ArrayTraverse(shape)
    yield tuple(walker.position)
    while walker.step():
        yield tuple(walker.position)
