"""Tests for the KnowledgeBase registry.

Critical Invariants:
- An object id maps to at most one live instance
- A rejected create leaves nothing registered
- Class and external-identity indexes follow removals
- Snapshots are detached and compare by observable state
"""

import threading
import warnings

import pytest

from gamekb import KnowledgeBaseSettings
from gamekb.core.errors import DomainViolationError, DuplicateInstanceError, UnknownDefinitionError
from gamekb.core.schema import Condition, ConditionOperator, SchemaBuilder
from gamekb.core.verb import SetProperty, TapSource, TargetSpec, VerbBuilder
from gamekb.tracing import EventRecord, InMemoryEventLog
from gamekb.world import KnowledgeBase, StateSnapshot


@pytest.fixture
def creature_kb(kb, creature_schema):
    kb.register_definition(creature_schema)
    return kb


# Definitions


def test_register_and_lookup_definition(creature_kb, creature_schema):
    assert creature_kb.has_definition("Creature")
    assert creature_kb.get_definition("Creature") is creature_schema
    assert creature_kb.get_definition("Missing") is None
    assert list(creature_kb.definitions()) == ["Creature"]


def test_replacing_definition_with_live_instances_warns(creature_kb):
    creature_kb.create_instance("Creature", "c1")
    replacement = SchemaBuilder("Creature").add_int_property("power", 0).build()
    with pytest.warns(UserWarning, match="live instances"):
        creature_kb.register_definition(replacement)
    # Existing instances keep the schema they were created with.
    assert creature_kb.get_instance("c1").has_property("tapped")


def test_replacing_definition_without_instances_is_silent(creature_kb):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        creature_kb.register_definition(SchemaBuilder("Creature").build())


# Instances


def test_create_instance_indexes_and_applies_overrides(creature_kb):
    card = creature_kb.create_instance("Creature", "c1", {"name": "Bear", "power": 2})
    assert card.get_property("power") == 2
    assert creature_kb.get_instance("c1") is card
    assert creature_kb.get_instances_by_class("Creature") == [card]
    assert "c1" in creature_kb
    assert len(creature_kb) == 1


def test_create_instance_errors(creature_kb):
    with pytest.raises(UnknownDefinitionError):
        creature_kb.create_instance("Dragon", "d1")
    creature_kb.create_instance("Creature", "c1")
    with pytest.raises(DuplicateInstanceError):
        creature_kb.create_instance("Creature", "c1")


def test_rejected_override_registers_nothing(creature_kb):
    """CRITICAL: a failed create leaves no half-built instance behind.

    Why: a later get_or_create would otherwise return an invalid instance.
    """
    with pytest.raises(DomainViolationError):
        creature_kb.create_instance("Creature", "c1", {"power": -1})
    assert creature_kb.get_instance("c1") is None
    assert creature_kb.get_instances_by_class("Creature") == []


def test_get_or_create_is_idempotent(creature_kb):
    card, created = creature_kb.get_or_create("Creature", "c1", {"power": 2})
    again, created_again = creature_kb.get_or_create("Creature", "c1", {"power": 9})
    assert created is True
    assert created_again is False
    assert again is card
    assert card.get_property("power") == 2


def test_get_or_create_from_many_threads_creates_once(creature_kb):
    results = []

    def worker():
        results.append(creature_kb.get_or_create("Creature", "shared"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sum(created for _, created in results) == 1
    assert len({id(instance) for instance, _ in results}) == 1


def test_returned_registries_are_copies(creature_kb):
    creature_kb.create_instance("Creature", "c1")
    creature_kb.instances().clear()
    creature_kb.get_instances_by_class("Creature").clear()
    creature_kb.definitions().clear()
    assert len(creature_kb) == 1
    assert creature_kb.has_definition("Creature")


def test_query_ands_conditions(creature_kb):
    creature_kb.create_instance("Creature", "c1", {"power": 1, "zone": "Battlefield"})
    creature_kb.create_instance("Creature", "c2", {"power": 4, "zone": "Battlefield"})
    creature_kb.create_instance("Creature", "c3", {"power": 5, "zone": "Hand"})

    found = creature_kb.query(
        "Creature",
        Condition("zone", ConditionOperator.EQ, "Battlefield"),
        Condition("power", ConditionOperator.GTE, 3),
    )
    assert [card.object_id for card in found] == ["c2"]
    assert len(creature_kb.query("Creature")) == 3
    assert creature_kb.query("Dragon", Condition("power", ConditionOperator.GT, 0)) == []


def test_find_by_property(creature_kb):
    creature_kb.create_instance("Creature", "c1", {"name": "Bear"})
    creature_kb.create_instance("Creature", "c2", {"name": "Wolf"})
    assert [c.object_id for c in creature_kb.find_by_property("name", "Wolf")] == ["c2"]
    assert creature_kb.find_by_property("name", "Wolf", class_prefix="Player") == []


def test_remove_instance_unindexes_and_archives(creature_kb):
    card = creature_kb.create_instance("Creature", "c1")
    creature_kb.bind_external(("card", 1), "c1")

    assert creature_kb.remove_instance("c1") is card
    assert creature_kb.get_instance("c1") is None
    assert creature_kb.get_instances_by_class("Creature") == []
    assert creature_kb.resolve_external(("card", 1)) is None
    assert creature_kb.get_archived("c1") is card
    assert creature_kb.remove_instance("c1") is None

    # The id is free for reuse.
    creature_kb.create_instance("Creature", "c1")
    assert creature_kb.prune_archive() == 1
    assert creature_kb.get_archived("c1") is None


def test_remove_without_archive(creature_schema):
    kb = KnowledgeBase(KnowledgeBaseSettings(archive_removed=False))
    kb.register_definition(creature_schema)
    kb.create_instance("Creature", "c1")
    kb.remove_instance("c1")
    assert kb.get_archived("c1") is None


def test_prune_archive_before_timestamp(creature_kb):
    creature_kb.create_instance("Creature", "c1")
    creature_kb.remove_instance("c1")
    assert creature_kb.prune_archive(before=0.0) == 0
    assert creature_kb.get_archived("c1") is not None


# External identity


def test_bind_external_requires_registered_instance(creature_kb):
    with pytest.raises(KeyError):
        creature_kb.bind_external(("card", 7), "c7")
    card = creature_kb.create_instance("Creature", "c7")
    creature_kb.bind_external(("card", 7), "c7")
    assert creature_kb.resolve_external(("card", 7)) is card
    assert creature_kb.resolve_external(("card", 8)) is None


# Verbs


@pytest.fixture
def tap(creature_kb):
    verb = (
        VerbBuilder("Tap")
        .add_target(
            TargetSpec(class_name="Creature", filter=lambda c: not c.get_property("tapped"))
        )
        .add_effect(SetProperty("tapped", True))
        .build()
    )
    creature_kb.register_verb(verb)
    return verb


def test_register_verb_rejects_duplicates(creature_kb, tap):
    assert creature_kb.get_verb("Tap") is tap
    with pytest.raises(ValueError):
        creature_kb.register_verb(tap)
    creature_kb.register_verb(tap, replace=True)
    assert list(creature_kb.verbs()) == ["Tap"]


def test_perform_applies_and_records(creature_kb, tap):
    source = creature_kb.create_instance("Creature", "c1")
    target = creature_kb.create_instance("Creature", "c2")

    performed = creature_kb.perform("Tap", source, [target])
    assert performed is not None
    assert performed.executed
    assert target.get_property("tapped") is True
    assert creature_kb.verb_history() == [performed]

    # Already tapped: the target filter no longer matches.
    assert creature_kb.perform("Tap", source, [target]) is None
    assert creature_kb.perform("Missing", source, [target]) is None
    assert len(creature_kb.verb_history()) == 1


def test_available_verbs(creature_kb, tap):
    creature_kb.register_verb(VerbBuilder("Exert").add_cost(TapSource()).build())
    source = creature_kb.create_instance("Creature", "c1")
    target = creature_kb.create_instance("Creature", "c2")
    assert {v.name for v in creature_kb.available_verbs(source, [target])} == {"Tap", "Exert"}
    source.set_property("tapped", True)
    target.set_property("tapped", True)
    assert creature_kb.available_verbs(source, [target]) == []


def test_verb_history_is_bounded(creature_schema):
    kb = KnowledgeBase(KnowledgeBaseSettings(verb_history_limit=2))
    kb.register_definition(creature_schema)
    verb = VerbBuilder("Noop").build()
    source = kb.create_instance("Creature", "c1")
    performed = [kb.perform(verb, source) for _ in range(3)]
    assert kb.verb_history() == performed[1:]


# Events


def test_record_event_sequences(kb):
    first = kb.record_event("A", {"x": 1})
    second = kb.record_event("B")
    assert (first.sequence, second.sequence) == (0, 1)
    assert [e.event_type for e in kb.events()] == ["A", "B"]
    assert kb.events(start=1) == [second]
    assert second.payload == {}


def test_custom_event_log_backend():
    log = InMemoryEventLog(max_events=2)
    kb = KnowledgeBase(KnowledgeBaseSettings(), event_log=log)
    for name in ("A", "B", "C"):
        kb.record_event(name)
    assert kb.event_log is log
    assert [record.event_type for record in log.records()] == ["B", "C"]
    assert isinstance(log.records()[0], EventRecord)


# Snapshots


def test_snapshot_is_detached_and_comparable(creature_kb, creature_schema):
    creature_kb.create_instance("Creature", "c2", {"counters": {"P1P1": 1}})
    creature_kb.create_instance("Creature", "c1")
    snapshot = creature_kb.snapshot()
    assert isinstance(snapshot, StateSnapshot)
    assert snapshot.object_ids() == ["c1", "c2"]

    creature_kb.get_instance("c2").set_path("counters.P1P1", 5)
    assert dict(snapshot.get("c2")[2])["counters"] == {"P1P1": 1}

    other = KnowledgeBase(KnowledgeBaseSettings())
    other.register_definition(creature_schema)
    other.create_instance("Creature", "c1")
    other.create_instance("Creature", "c2", {"counters": {"P1P1": 5}})
    assert other.snapshot() == creature_kb.snapshot()
    assert hash(other.snapshot()) == hash(creature_kb.snapshot())
    assert other.snapshot() != snapshot


def test_snapshot_by_class(creature_kb):
    creature_kb.register_definition(SchemaBuilder("Marker").build())
    creature_kb.create_instance("Creature", "c1")
    creature_kb.create_instance("Marker", "m1")
    snapshot = creature_kb.snapshot(["Marker"])
    assert snapshot.object_ids() == ["m1"]
    assert len(snapshot) == 1
    assert snapshot.instances_of("Creature") == []
    assert snapshot.to_dict() == {
        "instances": [{"class_name": "Marker", "object_id": "m1", "properties": {}}]
    }
