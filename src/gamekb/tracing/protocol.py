"""Protocols for event log backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gamekb.tracing.models import EventRecord


@runtime_checkable
class EventLog(Protocol):
    """Protocol for storing and retrieving recorded events.

    Usage:
        log = InMemoryEventLog(max_events=1000)
        log.append(record)
        recent = log.records(start=40)

    Thread Safety:
        Implementations should be thread-safe for concurrent access.
    """

    def append(self, record: EventRecord) -> None:
        """Store a record.

        Note:
            Implementations may have bounded storage. Older records may be
            evicted when the limit is reached.
        """
        ...

    def records(self, start: int = 0, end: int | None = None) -> list[EventRecord]:
        """Records whose sequence lies in [start, end), oldest first."""
        ...

    def next_sequence(self) -> int:
        """Sequence number the next appended record should carry."""
        ...

    def clear(self) -> None:
        """Drop every stored record."""
        ...

    def __len__(self) -> int: ...
