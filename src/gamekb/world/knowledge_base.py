"""KnowledgeBase: registry of schemas, instances, verbs, and recorded history.

Usage:
    kb = KnowledgeBase()
    kb.register_definition(player_schema())
    alice = kb.create_instance("Player", "player_1", {"name": "Alice"})

    # Find or create by deterministic id
    card, created = kb.get_or_create("Card_Grizzly_Bears", "card_17")

    # Query (AND of conditions)
    untapped = kb.query(
        "Card_Grizzly_Bears",
        Condition("zone", ConditionOperator.EQ, "Battlefield"),
        Condition("tapped", ConditionOperator.EQ, False),
    )

    # Run a verb and keep it in history
    kb.perform("Tap", alice, [card])
"""

from __future__ import annotations

import threading
import time
import warnings
from collections import deque
from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from gamekb.config.settings import KnowledgeBaseSettings
from gamekb.core.errors import DuplicateInstanceError, UnknownDefinitionError
from gamekb.core.schema import Condition, EntityInstance, EntitySchema
from gamekb.core.types import Snapshot
from gamekb.tracing import EventLog, EventRecord, InMemoryEventLog
from gamekb.world.snapshot import StateSnapshot

if TYPE_CHECKING:
    from gamekb.core.verb import VerbDefinition, VerbInstance

logger = structlog.get_logger(__name__)


class KnowledgeBase:
    """Central registry for modeled game state.

    Owns schema definitions, live instances (indexed by id, by class, and by
    external identity), the verb catalog, verb history, and the event log.
    Registries are guarded by a re-entrant lock; read methods return copies
    of the registries, never the registries themselves.

    Args:
        settings: Limits and behavior flags. Loaded from GAMEKB_* if omitted.
        event_log: Event log backend. Defaults to a bounded in-memory log.
    """

    def __init__(
        self,
        settings: KnowledgeBaseSettings | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        self.settings = settings or KnowledgeBaseSettings()
        self._lock = threading.RLock()
        self._definitions: dict[str, EntitySchema] = {}
        self._instances: dict[str, EntityInstance] = {}
        self._by_class: dict[str, dict[str, EntityInstance]] = {}
        self._external: dict[Hashable, str] = {}
        self._archive: dict[str, tuple[float, EntityInstance]] = {}
        self._id_locks: dict[str, threading.Lock] = {}
        self._verbs: dict[str, VerbDefinition] = {}
        self._verb_history: deque[VerbInstance] = deque(maxlen=self.settings.verb_history_limit)
        self._event_log = event_log if event_log is not None else InMemoryEventLog(
            self.settings.event_log_limit
        )

    # Definitions

    def register_definition(self, schema: EntitySchema) -> None:
        """Register or replace a schema under its class name.

        Replacing a schema that already has live instances is allowed but
        warns, since those instances keep their old schema.
        """
        with self._lock:
            existing = self._definitions.get(schema.class_name)
            if existing is not None and existing is not schema and self._by_class.get(
                schema.class_name
            ):
                warnings.warn(
                    f"register_definition() replaced '{schema.class_name}' which has live "
                    f"instances. Existing instances keep the previous schema.",
                    stacklevel=2,
                )
            self._definitions[schema.class_name] = schema
            self._by_class.setdefault(schema.class_name, {})
        logger.debug("definition_registered", class_name=schema.class_name)

    def get_definition(self, class_name: str) -> EntitySchema | None:
        with self._lock:
            return self._definitions.get(class_name)

    def has_definition(self, class_name: str) -> bool:
        with self._lock:
            return class_name in self._definitions

    def definitions(self) -> dict[str, EntitySchema]:
        with self._lock:
            return dict(self._definitions)

    # Instances

    def create_instance(
        self,
        class_name: str,
        object_id: str,
        overrides: Mapping[str, Any] | None = None,
    ) -> EntityInstance:
        """Create, populate, and index a new instance.

        Overrides are applied atomically before the instance is indexed, so a
        rejected override leaves nothing registered.

        Raises:
            UnknownDefinitionError: If class_name is not registered.
            DuplicateInstanceError: If object_id is already registered.
            UnknownPropertyError: If an override names an undeclared property.
            DomainViolationError: If an override value violates its domain.
        """
        with self._lock:
            schema = self._definitions.get(class_name)
            if schema is None:
                raise UnknownDefinitionError(class_name)
            if object_id in self._instances:
                raise DuplicateInstanceError(object_id)
            instance = schema.create_instance(object_id)
            if overrides:
                instance.update_properties(overrides)
            self._instances[object_id] = instance
            self._by_class.setdefault(class_name, {})[object_id] = instance
        logger.debug("instance_created", class_name=class_name, object_id=object_id)
        return instance

    def _id_lock(self, object_id: str) -> threading.Lock:
        with self._lock:
            return self._id_locks.setdefault(object_id, threading.Lock())

    def get_or_create(
        self,
        class_name: str,
        object_id: str,
        overrides: Mapping[str, Any] | None = None,
    ) -> tuple[EntityInstance, bool]:
        """Return the instance with object_id, creating it if absent.

        Overrides apply only when the instance is created.

        Returns:
            (instance, created)
        """
        with self._id_lock(object_id):
            existing = self.get_instance(object_id)
            if existing is not None:
                return existing, False
            return self.create_instance(class_name, object_id, overrides), True

    def get_instance(self, object_id: str) -> EntityInstance | None:
        with self._lock:
            return self._instances.get(object_id)

    def has_instance(self, object_id: str) -> bool:
        with self._lock:
            return object_id in self._instances

    def get_instances_by_class(self, class_name: str) -> list[EntityInstance]:
        with self._lock:
            return list(self._by_class.get(class_name, {}).values())

    def instances(self) -> list[EntityInstance]:
        with self._lock:
            return list(self._instances.values())

    def query(self, class_name: str, *conditions: Condition) -> list[EntityInstance]:
        """Instances of class_name matching every condition, in creation order.

        Conditions are applied left to right and evaluation stops as soon as
        the intermediate result is empty.
        """
        results = self.get_instances_by_class(class_name)
        for condition in conditions:
            if not results:
                break
            results = [instance for instance in results if instance.matches(condition)]
        return results

    def find_by_property(
        self, name: str, value: Any, class_prefix: str | None = None
    ) -> list[EntityInstance]:
        """Instances whose property equals value, optionally limited by class name prefix."""
        return [
            instance
            for instance in self.instances()
            if (class_prefix is None or instance.class_name.startswith(class_prefix))
            and instance.has_property(name)
            and instance.get_property(name) == value
        ]

    def remove_instance(self, object_id: str) -> EntityInstance | None:
        """Unindex an instance. Archived when settings.archive_removed is on.

        Returns:
            The removed instance, or None if it was not registered.
        """
        with self._lock:
            instance = self._instances.pop(object_id, None)
            if instance is None:
                return None
            self._by_class.get(instance.class_name, {}).pop(object_id, None)
            for key in [k for k, v in self._external.items() if v == object_id]:
                del self._external[key]
            self._id_locks.pop(object_id, None)
            if self.settings.archive_removed:
                self._archive[object_id] = (time.time(), instance)
        logger.debug(
            "instance_removed", object_id=object_id, archived=self.settings.archive_removed
        )
        return instance

    def get_archived(self, object_id: str) -> EntityInstance | None:
        with self._lock:
            entry = self._archive.get(object_id)
            return entry[1] if entry is not None else None

    def prune_archive(self, before: float | None = None) -> int:
        """Drop archived instances removed before a timestamp (all if None).

        Returns:
            Number of instances dropped.
        """
        with self._lock:
            doomed = [
                object_id
                for object_id, (removed_at, _) in self._archive.items()
                if before is None or removed_at < before
            ]
            for object_id in doomed:
                del self._archive[object_id]
        return len(doomed)

    # External identity

    def bind_external(self, key: Hashable, object_id: str) -> None:
        """Associate a host-engine identity with a registered instance.

        Raises:
            KeyError: If object_id is not registered.
        """
        with self._lock:
            if object_id not in self._instances:
                raise KeyError(object_id)
            self._external[key] = object_id

    def resolve_external(self, key: Hashable) -> EntityInstance | None:
        with self._lock:
            object_id = self._external.get(key)
            return self._instances.get(object_id) if object_id is not None else None

    # Verbs

    def register_verb(self, definition: VerbDefinition, replace: bool = False) -> None:
        """Add a verb to the catalog.

        Raises:
            ValueError: If the name is taken and replace is False.
        """
        with self._lock:
            if definition.name in self._verbs and not replace:
                raise ValueError(f"Verb '{definition.name}' is already registered")
            self._verbs[definition.name] = definition

    def get_verb(self, name: str) -> VerbDefinition | None:
        with self._lock:
            return self._verbs.get(name)

    def verbs(self) -> dict[str, VerbDefinition]:
        with self._lock:
            return dict(self._verbs)

    def available_verbs(
        self, source: EntityInstance, candidates: Sequence[EntityInstance] = ()
    ) -> list[VerbDefinition]:
        """Catalog verbs whose prerequisites, targets, and costs are satisfied."""
        return [
            verb for verb in self.verbs().values() if verb.is_available(source, candidates, self)
        ]

    def perform(
        self,
        verb: str | VerbDefinition,
        source: EntityInstance,
        targets: Sequence[EntityInstance] = (),
        params: Mapping[str, Any] | None = None,
    ) -> VerbInstance | None:
        """Bind and apply a verb, recording it in history.

        Args:
            verb: Catalog name or definition.
            source: Acting instance.
            targets: Candidate targets, matched positionally.
            params: Caller-supplied variables (e.g. {"to_zone": "Graveyard"}).

        Returns:
            The applied (or fizzled) VerbInstance, or None if the verb is
            unknown or not currently available.
        """
        definition = self.get_verb(verb) if isinstance(verb, str) else verb
        if definition is None:
            logger.debug("verb_unknown", verb=verb)
            return None
        if not definition.is_available(source, targets, self, params):
            logger.debug("verb_unavailable", verb=definition.name, source=source.object_id)
            return None
        instance = definition.bind(source, targets, self, params)
        instance.apply(self)
        self.record_verb(instance)
        return instance

    def record_verb(self, instance: VerbInstance) -> None:
        with self._lock:
            self._verb_history.append(instance)

    def verb_history(self) -> list[VerbInstance]:
        with self._lock:
            return list(self._verb_history)

    # Events

    def record_event(
        self, event_type: str, payload: Mapping[str, Any] | None = None
    ) -> EventRecord:
        """Append a structured event to the event log."""
        with self._lock:
            record = EventRecord(
                sequence=self._event_log.next_sequence(),
                event_type=event_type,
                timestamp=time.time(),
                payload=dict(payload or {}),
            )
            self._event_log.append(record)
        return record

    def events(self, start: int = 0, end: int | None = None) -> list[EventRecord]:
        return self._event_log.records(start, end)

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    # Snapshots

    def snapshot(self, class_names: Iterable[str] | None = None) -> Snapshot[StateSnapshot]:
        """Canonical snapshot of every instance, or of the given classes only."""
        with self._lock:
            if class_names is None:
                selected: Iterable[EntityInstance] = list(self._instances.values())
            else:
                selected = [
                    instance
                    for name in class_names
                    for instance in self._by_class.get(name, {}).values()
                ]
            return StateSnapshot.from_instances(selected)

    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)

    def __contains__(self, object_id: object) -> bool:
        return isinstance(object_id, str) and self.has_instance(object_id)

    def __repr__(self) -> str:
        return (
            f"KnowledgeBase(definitions={len(self._definitions)}, "
            f"instances={len(self._instances)}, verbs={len(self._verbs)})"
        )
