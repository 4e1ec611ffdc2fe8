"""Core type definitions for graphclone."""

type Clone[T] = T
"""Type alias indicating a value is an independent deep copy.

When you see `Clone[T]` in a return type, the returned value shares no mutable
state with its source. Primitive leaves (numbers, text, enum members) may be
the very same objects, which is safe because they cannot be mutated.
"""
