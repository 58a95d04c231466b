"""Event log infrastructure for recording what happened to the knowledge base.

Usage:
    from gamekb.tracing import EventLog, EventRecord, InMemoryEventLog

    log = InMemoryEventLog(max_events=500)
    kb = KnowledgeBase(event_log=log)

    # Or implement EventLog for another backend
    class MyEventLog:
        def append(self, record: EventRecord) -> None:
            ...
"""

from gamekb.tracing.memory import InMemoryEventLog
from gamekb.tracing.models import EventRecord
from gamekb.tracing.protocol import EventLog

__all__ = [
    "EventLog",
    "EventRecord",
    "InMemoryEventLog",
]
