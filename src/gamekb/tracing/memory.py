"""In-memory event log backed by a bounded deque."""

from __future__ import annotations

import threading
from collections import deque

from gamekb.tracing.models import EventRecord


class InMemoryEventLog:
    """Bounded ring buffer of EventRecords.

    Args:
        max_events: Maximum number of records retained. Oldest are evicted.
    """

    def __init__(self, max_events: int = 10_000) -> None:
        if max_events < 1:
            raise ValueError("max_events must be at least 1")
        self._records: deque[EventRecord] = deque(maxlen=max_events)
        self._next = 0
        self._lock = threading.Lock()

    @property
    def max_events(self) -> int:
        return self._records.maxlen or 0

    def append(self, record: EventRecord) -> None:
        with self._lock:
            self._records.append(record)
            self._next = max(self._next, record.sequence + 1)

    def records(self, start: int = 0, end: int | None = None) -> list[EventRecord]:
        with self._lock:
            return [
                record
                for record in self._records
                if record.sequence >= start and (end is None or record.sequence < end)
            ]

    def next_sequence(self) -> int:
        with self._lock:
            return self._next

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        return len(self._records)
