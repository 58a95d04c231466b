"""Common verbs recorded when the host engine reports state changes.

Each factory returns a fresh VerbDefinition. Parameterized verbs read their
inputs from caller params:

    kb.perform("MoveZone", player, [card], params={"to_zone": "Graveyard"})
    kb.perform("AddCounters", player, [card], params={"counter_type": "P1P1", "amount": 2})
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gamekb.catalog.schemas import PLAYER_CLASS
from gamekb.catalog.vocabulary import ZONES
from gamekb.core.verb import (
    IncrementProperty,
    MoveZone,
    SetProperty,
    TargetSpec,
    VerbBuilder,
    VerbDefinition,
    var,
)

if TYPE_CHECKING:
    from gamekb.core.schema import EntityInstance
    from gamekb.core.verb import ExecutionContext
    from gamekb.world.knowledge_base import KnowledgeBase


def _on_battlefield(instance: EntityInstance) -> bool:
    zone = instance.get_property("zone")
    if isinstance(zone, (list, tuple)):
        return "Battlefield" in zone
    return zone == "Battlefield"


def _is_tapped(instance: EntityInstance) -> bool:
    return instance.get_property("tapped") is True


def _counter_path(ctx: ExecutionContext) -> str:
    return f"counters.{ctx.var('counter_type')}"


def tap_verb() -> VerbDefinition:
    """Tap target permanent."""
    return (
        VerbBuilder("Tap")
        .category("action")
        .description("Tap target permanent.")
        .add_target(
            TargetSpec(filter=lambda c: _on_battlefield(c) and not _is_tapped(c), min=1, max=1)
        )
        .add_effect(SetProperty("tapped", True))
        .put_meta("mtg.keyword", "Tap")
        .build()
    )


def untap_verb() -> VerbDefinition:
    """Untap target permanent."""
    return (
        VerbBuilder("Untap")
        .category("action")
        .description("Untap target permanent.")
        .add_target(TargetSpec(filter=lambda c: _on_battlefield(c) and _is_tapped(c)))
        .add_effect(SetProperty("tapped", False))
        .put_meta("mtg.keyword", "Untap")
        .build()
    )


def move_zone_verb() -> VerbDefinition:
    """Move target object to the zone named by the "to_zone" param."""

    def _valid_zone(ctx: ExecutionContext) -> Any:
        zone = ctx.var("to_zone")
        if zone not in ZONES:
            raise ValueError(f"Unknown zone {zone!r}")
        return zone

    return (
        VerbBuilder("MoveZone")
        .category("zone")
        .description("Move target object to another zone.")
        .add_target(
            TargetSpec(filter=lambda c: c.has_property("zone") and c.has_property("tapped"))
        )
        .add_variable("destination", _valid_zone)
        .add_effect(MoveZone(var("destination")))
        .add_effect(SetProperty("tapped", False))
        .build()
    )


def add_counters_verb() -> VerbDefinition:
    """Add "amount" counters of "counter_type" to target (negative amounts remove)."""
    return (
        VerbBuilder("AddCounters")
        .category("state")
        .description("Put counters on target object.")
        .add_target(TargetSpec(filter=lambda c: c.has_property("counters")))
        .add_effect(IncrementProperty(_counter_path, var("amount", 1)))
        .build()
    )


def mark_damage_verb() -> VerbDefinition:
    """Mark "amount" damage on target permanent."""
    return (
        VerbBuilder("MarkDamage")
        .category("combat")
        .description("Mark damage on target permanent.")
        .add_target(TargetSpec(filter=lambda c: c.has_property("damage_marked")))
        .add_effect(IncrementProperty("damage_marked", var("amount", 0)))
        .build()
    )


def set_life_verb() -> VerbDefinition:
    """Set target player's life total to the "life" param."""
    return (
        VerbBuilder("SetLife")
        .category("state")
        .description("Set target player's life total.")
        .add_target(TargetSpec(class_name=PLAYER_CLASS))
        .add_effect(SetProperty("life", var("life")))
        .build()
    )


COMMON_VERBS = (
    tap_verb,
    untap_verb,
    move_zone_verb,
    add_counters_verb,
    mark_damage_verb,
    set_life_verb,
)


def register_common_verbs(kb: KnowledgeBase, replace: bool = False) -> list[VerbDefinition]:
    """Register every common verb. Returns the registered definitions."""
    definitions = [factory() for factory in COMMON_VERBS]
    for definition in definitions:
        kb.register_verb(definition, replace=replace)
    return definitions
