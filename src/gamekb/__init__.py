"""gamekb: typed entity/property knowledge base for card game state.

Usage:
    from gamekb import KnowledgeBase, EventIngestor, CardRef, CardTapped
    from gamekb.catalog import card_schema, register_common_verbs, register_core_schemas

    kb = KnowledgeBase()
    register_core_schemas(kb)
    register_common_verbs(kb)
    bears = card_schema("Grizzly Bears", card_types=["Creature"], power=2, toughness=2)
    kb.register_definition(bears)

    ingestor = EventIngestor(kb)
    ingestor.ingest(CardTapped(card=CardRef(17, "Grizzly Bears"), tapped=True))

    card = kb.get_instance("card_17")
    card.get_property("tapped")  # True
    kb.verb_history()[-1].name   # "Tap"
"""

__version__ = "0.1.0"

# Core primitives
from gamekb.core import (
    Condition,
    ConditionOperator,
    DomainViolationError,
    DuplicateInstanceError,
    EntityInstance,
    EntitySchema,
    PropertyCell,
    SchemaBuilder,
    SchemaError,
    UnknownDefinitionError,
    UnknownPropertyError,
)

# Verbs
from gamekb.core.verb import (
    Requirement,
    TargetSpec,
    VerbBuilder,
    VerbDefinition,
    VerbInstance,
)

# Configuration
from gamekb.config import KnowledgeBaseSettings, LoggingSettings, configure_logging

# Events
from gamekb.events import (
    CardRef,
    CardTapped,
    EventIngestor,
    EventKind,
    GenericEvent,
    IngestReport,
    PlayerRef,
)

# Tracing
from gamekb.tracing import EventLog, EventRecord, InMemoryEventLog

# World
from gamekb.world import KnowledgeBase, StateSnapshot

__all__ = [
    "__version__",
    # Core
    "Condition",
    "ConditionOperator",
    "EntityInstance",
    "EntitySchema",
    "PropertyCell",
    "SchemaBuilder",
    # Errors
    "DomainViolationError",
    "DuplicateInstanceError",
    "SchemaError",
    "UnknownDefinitionError",
    "UnknownPropertyError",
    # Verbs
    "Requirement",
    "TargetSpec",
    "VerbBuilder",
    "VerbDefinition",
    "VerbInstance",
    # Configuration
    "KnowledgeBaseSettings",
    "LoggingSettings",
    "configure_logging",
    # Events
    "CardRef",
    "CardTapped",
    "EventIngestor",
    "EventKind",
    "GenericEvent",
    "IngestReport",
    "PlayerRef",
    # Tracing
    "EventLog",
    "EventRecord",
    "InMemoryEventLog",
    # World
    "KnowledgeBase",
    "StateSnapshot",
]
