"""Event ingestion with per-event fault isolation.

Usage:
    ingestor = EventIngestor(kb)
    ingestor.ingest(CardTapped(card=CardRef(17, "Grizzly Bears"), tapped=True))

    report = ingestor.ingest_all(events)
    report.failed  # events whose handler raised; each was logged
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog

from gamekb.events.handlers import HANDLERS, Handler
from gamekb.events.models import EventKind

if TYPE_CHECKING:
    from gamekb.world.knowledge_base import KnowledgeBase

logger = structlog.get_logger(__name__)


class IngestOutcome(Enum):
    HANDLED = "handled"
    IGNORED = "ignored"
    FAILED = "failed"


@dataclass(slots=True)
class IngestReport:
    """Tally of an ingest_all run.

    Attributes:
        handled: Events a handler applied.
        ignored: Events with no handler for their kind.
        failed: Events whose handler raised.
        errors: (event kind, message) for each failure, in order.
    """

    handled: int = 0
    ignored: int = 0
    failed: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.handled + self.ignored + self.failed


class EventIngestor:
    """Dispatches host engine events to handlers.

    A handler failure never escapes: the exception is logged with the event
    kind and message, and ingestion continues with the next event.

    Args:
        kb: Knowledge base to update.
        handlers: Dispatch table. Defaults to the built-in handlers.
    """

    def __init__(
        self, kb: KnowledgeBase, handlers: Mapping[EventKind, Handler] | None = None
    ) -> None:
        self.kb = kb
        self._handlers: dict[EventKind, Handler] = dict(HANDLERS if handlers is None else handlers)

    def register(self, kind: EventKind, handler: Handler) -> None:
        """Add or replace the handler for an event kind."""
        self._handlers[kind] = handler

    def _dispatch(self, event: Any) -> tuple[IngestOutcome, str | None]:
        kind = getattr(event, "kind", None)
        handler = self._handlers.get(kind) if isinstance(kind, EventKind) else None
        if handler is None:
            logger.debug("event_ignored", kind=str(kind))
            return IngestOutcome.IGNORED, None
        with structlog.contextvars.bound_contextvars(event_kind=kind.value):
            try:
                handler(self.kb, event)
            except Exception as exc:
                logger.warning(
                    "event_ingest_failed",
                    error=str(exc),
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                return IngestOutcome.FAILED, str(exc)
        return IngestOutcome.HANDLED, None

    def ingest(self, event: Any) -> bool:
        """Apply one event. Returns True only if a handler ran without error."""
        outcome, _ = self._dispatch(event)
        return outcome is IngestOutcome.HANDLED

    def ingest_all(self, events: Iterable[Any]) -> IngestReport:
        """Apply events in order, isolating failures."""
        report = IngestReport()
        for event in events:
            outcome, error = self._dispatch(event)
            if outcome is IngestOutcome.HANDLED:
                report.handled += 1
            elif outcome is IngestOutcome.IGNORED:
                report.ignored += 1
            else:
                report.failed += 1
                report.errors.append((str(event.kind), error or ""))
        return report
