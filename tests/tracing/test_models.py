"""Tests for event log data models.

Why these tests exist:
- EventRecord is the unit of the knowledge base's event log
- Serialization must preserve payloads for export
- Optional metadata must be handled properly
"""

import pytest

from gamekb.tracing import EventRecord


@pytest.mark.parametrize(
    ("kwargs", "expected_payload", "has_metadata"),
    [
        (
            {"sequence": 0, "event_type": "CardTapped", "timestamp": 1704067200.0},
            {},
            False,
        ),
        (
            {
                "sequence": 12,
                "event_type": "CardZoneChanged",
                "timestamp": 1704067300.0,
                "payload": {"target_id": "card_17", "to_zone": "Graveyard"},
                "metadata": {"source": "replay"},
            },
            {"target_id": "card_17", "to_zone": "Graveyard"},
            True,
        ),
    ],
    ids=["minimal", "full"],
)
def test_event_record_creation(kwargs, expected_payload, has_metadata) -> None:
    """EventRecord handles required and optional fields correctly."""
    record = EventRecord(**kwargs)
    assert record.sequence == kwargs["sequence"]
    assert record.event_type == kwargs["event_type"]
    assert record.payload == expected_payload
    assert (record.metadata is not None) == has_metadata


def test_to_dict_omits_missing_metadata() -> None:
    data = EventRecord(sequence=3, event_type="TurnBegan", timestamp=5.0).to_dict()
    assert "metadata" not in data
    assert data == {"sequence": 3, "event_type": "TurnBegan", "timestamp": 5.0, "payload": {}}


def test_event_record_round_trip() -> None:
    """EventRecord survives serialization round-trip.

    Why: exported logs must be reloadable for replay and inspection.
    """
    original = EventRecord(
        sequence=42,
        event_type="BlockersDeclared",
        timestamp=1704067200.123,
        payload={"actor_id": "player_2", "blocks": [["card_18", "card_17"]]},
        metadata={"run_id": "abc123"},
    )
    restored = EventRecord.from_dict(original.to_dict())
    assert restored == original


def test_from_dict_minimal() -> None:
    """from_dict handles missing optional fields."""
    record = EventRecord.from_dict({"sequence": 1, "event_type": "Shuffle", "timestamp": 0.5})
    assert record.payload == {}
    assert record.metadata is None
