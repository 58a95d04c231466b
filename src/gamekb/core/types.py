"""Core type definitions for gamekb."""

from enum import Enum, auto

type Snapshot[T] = T
"""Type alias indicating a value is a detached copy.

When you see `Snapshot[T]` in a return type, mutating the returned value does
NOT affect knowledge base state. To persist changes, write back through
`set_property`, `update_properties`, or a verb.
"""


class _Missing(Enum):
    MISSING = auto()


MISSING = _Missing.MISSING
"""Sentinel for an absent map key, distinct from a stored None."""

