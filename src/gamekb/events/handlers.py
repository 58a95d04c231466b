"""Event handlers: translate host engine events into knowledge base updates.

Handlers locate or create the instances an event touches, run the matching
catalog verb when it is available (falling back to a direct state sync when
the knowledge base's view disagrees with the host), keep the verb instance in
history, and record a structured event. Properties the target schema does not
declare are skipped rather than failing the event.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from gamekb.catalog.schemas import (
    GAME_STATE_CLASS,
    GAME_STATE_ID,
    PLAYER_CLASS,
    TOKEN_CLASS,
    card_class_name,
    game_state_schema,
    generic_card_schema,
    player_schema,
    token_schema,
)
from gamekb.catalog.verbs import (
    add_counters_verb,
    mark_damage_verb,
    move_zone_verb,
    set_life_verb,
    tap_verb,
    untap_verb,
)
from gamekb.core.errors import UnknownDefinitionError
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
    GameStarted,
    PlayerCountersChanged,
    PlayerLifeChanged,
    PlayerRef,
    TokenCreated,
    TurnBegan,
    TurnPhaseChanged,
)

if TYPE_CHECKING:
    from gamekb.core.schema import EntityInstance, EntitySchema
    from gamekb.core.verb import VerbDefinition, VerbInstance
    from gamekb.world.knowledge_base import KnowledgeBase

logger = structlog.get_logger(__name__)

Handler = Callable[["KnowledgeBase", Any], None]


# Identity resolution


def card_object_id(ref: CardRef) -> str:
    return f"card_{ref.external_id}"


def token_object_id(ref: CardRef) -> str:
    return f"token_{ref.external_id}"


def player_object_id(ref: PlayerRef) -> str:
    return f"player_{ref.external_id}"


def _ensure_definition(
    kb: KnowledgeBase, class_name: str, factory: Callable[[], EntitySchema]
) -> None:
    if not kb.has_definition(class_name):
        kb.register_definition(factory())


def find_player(kb: KnowledgeBase, ref: PlayerRef) -> EntityInstance | None:
    """Known player for ref, by external identity and then by display name."""
    key = ("player", ref.external_id)
    player = kb.resolve_external(key)
    if player is not None:
        return player
    named = kb.find_by_property("display_name", ref.name, class_prefix=PLAYER_CLASS)
    if not named:
        return None
    kb.bind_external(key, named[0].object_id)
    return named[0]


def resolve_player(kb: KnowledgeBase, ref: PlayerRef) -> EntityInstance:
    """Known player for ref, or a new Player instance bound to its identity."""
    player = find_player(kb, ref)
    if player is not None:
        return player
    _ensure_definition(kb, PLAYER_CLASS, player_schema)
    player, _ = kb.get_or_create(PLAYER_CLASS, player_object_id(ref), {"display_name": ref.name})
    kb.bind_external(("player", ref.external_id), player.object_id)
    return player


def resolve_card(kb: KnowledgeBase, ref: CardRef) -> EntityInstance:
    """Card (or token) for ref, creating a card instance if none is known.

    Raises:
        UnknownDefinitionError: If the card's class is not registered and
            auto registration is off.
    """
    key = ("card", ref.external_id)
    card = kb.resolve_external(key)
    if card is None:
        class_name = card_class_name(ref.name)
        if not kb.has_definition(class_name):
            if not kb.settings.auto_register_cards:
                raise UnknownDefinitionError(class_name)
            logger.debug("card_class_auto_registered", class_name=class_name)
            kb.register_definition(generic_card_schema(ref.name))
        card, _ = kb.get_or_create(class_name, card_object_id(ref))
        kb.bind_external(key, card.object_id)
    _sync(card, _control_updates(kb, ref))
    return card


def _control_updates(kb: KnowledgeBase, ref: CardRef) -> dict[str, Any]:
    """Controller and owner ids for players the knowledge base already knows."""
    updates: dict[str, Any] = {}
    for prop_name, player_ref in (("controller", ref.controller), ("owner", ref.owner)):
        player = find_player(kb, player_ref) if player_ref is not None else None
        if player is not None:
            updates[prop_name] = player.object_id
    return updates


def resolve_actor(kb: KnowledgeBase, ref: CardRef, card: EntityInstance) -> EntityInstance:
    """Acting player for a card event: controller by identity, then by name, else the card."""
    if ref.controller is None:
        return card
    return find_player(kb, ref.controller) or card


def game_state(kb: KnowledgeBase) -> EntityInstance:
    _ensure_definition(kb, GAME_STATE_CLASS, game_state_schema)
    state, _ = kb.get_or_create(GAME_STATE_CLASS, GAME_STATE_ID)
    return state


# State writes


def _sync(instance: EntityInstance, updates: Mapping[str, Any]) -> None:
    """Apply declared properties atomically; undeclared ones are skipped."""
    declared = {name: value for name, value in updates.items() if instance.has_property(name)}
    skipped = sorted(set(updates) - set(declared))
    if skipped:
        logger.debug("properties_skipped", object_id=instance.object_id, properties=skipped)
    if declared:
        instance.update_properties(declared)


def _catalog_verb(kb: KnowledgeBase, factory: Callable[[], VerbDefinition]) -> VerbDefinition:
    definition = factory()
    return kb.get_verb(definition.name) or definition


def _perform(
    kb: KnowledgeBase,
    factory: Callable[[], VerbDefinition],
    actor: EntityInstance,
    targets: Sequence[EntityInstance],
    params: Mapping[str, Any] | None = None,
    fallback: Mapping[str, Any] | None = None,
) -> VerbInstance:
    """Apply a catalog verb, or sync fallback state if the verb is unavailable.

    The verb instance is recorded in history either way.
    """
    definition = _catalog_verb(kb, factory)
    verb = definition.bind(actor, targets, kb, params)
    if definition.is_available(actor, targets, kb, params):
        verb.apply(kb)
    elif fallback:
        logger.debug("verb_unavailable_synced", verb=definition.name, actor=actor.object_id)
        for target in targets:
            _sync(target, fallback)
    kb.record_verb(verb)
    return verb


def _record(kb: KnowledgeBase, kind: EventKind, **payload: Any) -> None:
    kb.record_event(kind.value, payload)


# Handlers


def on_card_zone_changed(kb: KnowledgeBase, event: CardZoneChanged) -> None:
    card = resolve_card(kb, event.card)
    actor = resolve_actor(kb, event.card, card)
    verb = _perform(
        kb,
        move_zone_verb,
        actor,
        [card],
        params={"to_zone": event.to_zone},
        fallback={"zone": event.to_zone, "tapped": False},
    )
    if event.to_zone == "Battlefield" and event.from_zone != "Battlefield":
        _sync(card, {"summoning_sick": True})
    elif event.to_zone != "Battlefield":
        _sync(card, {"attacking": False, "blocking": False, "damage_marked": 0})
    _record(
        kb,
        event.kind,
        verb=verb.name,
        actor_id=actor.object_id,
        target_id=card.object_id,
        from_zone=event.from_zone,
        to_zone=event.to_zone,
    )


def on_card_tapped(kb: KnowledgeBase, event: CardTapped) -> None:
    card = resolve_card(kb, event.card)
    actor = resolve_actor(kb, event.card, card)
    verb = _perform(
        kb,
        tap_verb if event.tapped else untap_verb,
        actor,
        [card],
        fallback={"tapped": event.tapped},
    )
    _record(
        kb,
        event.kind,
        verb=verb.name,
        actor_id=actor.object_id,
        target_id=card.object_id,
        tapped=event.tapped,
    )


def _counters_changed(
    kb: KnowledgeBase,
    kind: EventKind,
    subject: EntityInstance,
    actor: EntityInstance,
    counter_type: str,
    old_count: int,
    new_count: int,
) -> None:
    # Incrementing is only correct when the stored count matches the host's old count.
    path = f"counters.{counter_type}"
    definition = _catalog_verb(kb, add_counters_verb)
    params = {"counter_type": counter_type, "amount": new_count - old_count}
    verb = definition.bind(actor, [subject], kb, params)
    in_sync = subject.has_property("counters") and subject.get_path(path, 0) == old_count
    if in_sync and definition.is_available(actor, [subject], kb, params):
        verb.apply(kb)
    elif subject.has_property("counters"):
        subject.set_path(path, new_count)
    kb.record_verb(verb)
    _record(
        kb,
        kind,
        verb=verb.name,
        actor_id=actor.object_id,
        target_id=subject.object_id,
        counter_type=counter_type,
        old_count=old_count,
        new_count=new_count,
    )


def on_card_counters_changed(kb: KnowledgeBase, event: CardCountersChanged) -> None:
    card = resolve_card(kb, event.card)
    actor = resolve_actor(kb, event.card, card)
    _counters_changed(
        kb, event.kind, card, actor, event.counter_type, event.old_count, event.new_count
    )


def on_player_counters_changed(kb: KnowledgeBase, event: PlayerCountersChanged) -> None:
    player = resolve_player(kb, event.player)
    _counters_changed(
        kb, event.kind, player, player, event.counter_type, event.old_count, event.new_count
    )


def on_card_stats_changed(kb: KnowledgeBase, event: CardStatsChanged) -> None:
    card = resolve_card(kb, event.card)
    _sync(card, {"power": event.power, "toughness": event.toughness})
    _record(
        kb, event.kind, target_id=card.object_id, power=event.power, toughness=event.toughness
    )


def on_card_damaged(kb: KnowledgeBase, event: CardDamaged) -> None:
    card = resolve_card(kb, event.card)
    if event.source is not None:
        actor = resolve_card(kb, event.source)
    else:
        actor = resolve_actor(kb, event.card, card)
    current = card.get_property("damage_marked", 0)
    verb = _perform(
        kb,
        mark_damage_verb,
        actor,
        [card],
        params={"amount": event.amount},
        fallback={"damage_marked": current + event.amount},
    )
    _record(
        kb,
        event.kind,
        verb=verb.name,
        actor_id=actor.object_id,
        target_id=card.object_id,
        amount=event.amount,
    )


def on_player_life_changed(kb: KnowledgeBase, event: PlayerLifeChanged) -> None:
    player = resolve_player(kb, event.player)
    verb = _perform(
        kb,
        set_life_verb,
        player,
        [player],
        params={"life": event.new_life},
        fallback={"life": event.new_life},
    )
    _record(
        kb,
        event.kind,
        verb=verb.name,
        target_id=player.object_id,
        old_life=event.old_life,
        new_life=event.new_life,
    )


def on_attackers_declared(kb: KnowledgeBase, event: AttackersDeclared) -> None:
    attackers = [resolve_card(kb, ref) for ref in event.attackers]
    for attacker in attackers:
        _sync(attacker, {"attacking": True})
    player = resolve_player(kb, event.player)
    _record(
        kb,
        event.kind,
        actor_id=player.object_id,
        attackers=[attacker.object_id for attacker in attackers],
    )


def on_blockers_declared(kb: KnowledgeBase, event: BlockersDeclared) -> None:
    blocks = []
    for blocker_ref, attacker_ref in event.blocks:
        blocker = resolve_card(kb, blocker_ref)
        attacker = resolve_card(kb, attacker_ref)
        _sync(blocker, {"blocking": True})
        blocks.append([blocker.object_id, attacker.object_id])
    player = resolve_player(kb, event.player)
    _record(
        kb,
        event.kind,
        actor_id=player.object_id,
        blocks=blocks,
    )


def on_token_created(kb: KnowledgeBase, event: TokenCreated) -> None:
    _ensure_definition(kb, TOKEN_CLASS, token_schema)
    token, created = kb.get_or_create(
        TOKEN_CLASS,
        token_object_id(event.token),
        {
            "name": event.token.name,
            "power": event.power,
            "toughness": event.toughness,
            "card_types": list(event.card_types),
        },
    )
    if created:
        kb.bind_external(("card", event.token.external_id), token.object_id)
    _sync(token, _control_updates(kb, event.token))
    _record(kb, event.kind, target_id=token.object_id, name=event.token.name)


def on_game_started(kb: KnowledgeBase, event: GameStarted) -> None:
    for class_name, factory in (
        (PLAYER_CLASS, player_schema),
        (TOKEN_CLASS, token_schema),
        (GAME_STATE_CLASS, game_state_schema),
    ):
        _ensure_definition(kb, class_name, factory)
    players = []
    for seat, ref in enumerate(event.players):
        player = resolve_player(kb, ref)
        _sync(
            player,
            {"seat_index": seat, "starting_life": event.starting_life, "life": event.starting_life},
        )
        players.append(player.object_id)
    _sync(game_state(kb), {"started": True, "turn": 0, "game_over": False})
    logger.info("game_started", players=players)
    _record(kb, event.kind, players=players)


def on_turn_began(kb: KnowledgeBase, event: TurnBegan) -> None:
    player = resolve_player(kb, event.player)
    _sync(game_state(kb), {"turn": event.turn, "active_player": player.object_id})
    _record(kb, event.kind, turn=event.turn, active_player=player.object_id)


def on_turn_phase_changed(kb: KnowledgeBase, event: TurnPhaseChanged) -> None:
    _sync(game_state(kb), {"phase": event.phase})
    _record(kb, event.kind, phase=event.phase)


HANDLERS: dict[EventKind, Handler] = {
    EventKind.CARD_ZONE_CHANGED: on_card_zone_changed,
    EventKind.CARD_TAPPED: on_card_tapped,
    EventKind.CARD_COUNTERS_CHANGED: on_card_counters_changed,
    EventKind.CARD_STATS_CHANGED: on_card_stats_changed,
    EventKind.CARD_DAMAGED: on_card_damaged,
    EventKind.PLAYER_LIFE_CHANGED: on_player_life_changed,
    EventKind.PLAYER_COUNTERS_CHANGED: on_player_counters_changed,
    EventKind.ATTACKERS_DECLARED: on_attackers_declared,
    EventKind.BLOCKERS_DECLARED: on_blockers_declared,
    EventKind.TOKEN_CREATED: on_token_created,
    EventKind.GAME_STARTED: on_game_started,
    EventKind.TURN_BEGAN: on_turn_began,
    EventKind.TURN_PHASE_CHANGED: on_turn_phase_changed,
}
"""Dispatch table. Kinds without an entry are accepted and ignored."""
