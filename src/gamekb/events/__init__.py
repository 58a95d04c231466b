"""Event ingestion: host engine event models, handlers, and the ingestor."""

from gamekb.events.handlers import HANDLERS, Handler
from gamekb.events.ingest import EventIngestor, IngestOutcome, IngestReport
from gamekb.events.models import (
    AttackersDeclared,
    BlockersDeclared,
    CardCountersChanged,
    CardDamaged,
    CardRef,
    CardStatsChanged,
    CardTapped,
    CardZoneChanged,
    EventKind,
    GameEvent,
    GameStarted,
    GenericEvent,
    PlayerCountersChanged,
    PlayerLifeChanged,
    PlayerRef,
    TokenCreated,
    TurnBegan,
    TurnPhaseChanged,
)

__all__ = [
    # Models
    "AttackersDeclared",
    "BlockersDeclared",
    "CardCountersChanged",
    "CardDamaged",
    "CardRef",
    "CardStatsChanged",
    "CardTapped",
    "CardZoneChanged",
    "EventKind",
    "GameEvent",
    "GameStarted",
    "GenericEvent",
    "PlayerCountersChanged",
    "PlayerLifeChanged",
    "PlayerRef",
    "TokenCreated",
    "TurnBegan",
    "TurnPhaseChanged",
    # Dispatch
    "HANDLERS",
    "Handler",
    "EventIngestor",
    "IngestOutcome",
    "IngestReport",
]
