"""Data models for the knowledge base event log.

Records are storage-agnostic and serialize to plain JSON-compatible dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class EventRecord:
    """One structured event recorded by the knowledge base.

    Attributes:
        sequence: Monotonic position in the log, starting at 0.
        event_type: Event name, e.g. "CardTapped" or a verb's emitted type.
        timestamp: Unix timestamp when the event was recorded.
        payload: JSON-serializable event data.
        metadata: Optional arbitrary annotations.

    Example:
        record = EventRecord(
            sequence=7,
            event_type="CardTapped",
            timestamp=1704067200.0,
            payload={"card": "card_17", "tapped": True},
        )
    """

    sequence: int
    event_type: str
    timestamp: float
    payload: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        result: dict[str, Any] = {
            "sequence": self.sequence,
            "event_type": self.event_type,
            "timestamp": self.timestamp,
            "payload": self.payload,
        }
        if self.metadata is not None:
            result["metadata"] = self.metadata
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventRecord:
        """Create from dictionary (for deserialization)."""
        return cls(
            sequence=data["sequence"],
            event_type=data["event_type"],
            timestamp=data["timestamp"],
            payload=data.get("payload", {}),
            metadata=data.get("metadata"),
        )
