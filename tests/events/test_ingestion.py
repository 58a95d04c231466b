"""Tests for host event ingestion.

Why these tests exist:
- Ingestion is the main write path from the host engine into the knowledge base
- One bad event must never stop the rest of a batch
- Handlers prefer catalog verbs so history reflects what happened
"""

import pytest

from gamekb import KnowledgeBase, KnowledgeBaseSettings
from gamekb.catalog import GAME_STATE_ID, register_common_verbs, register_core_schemas
from gamekb.core.errors import UnknownDefinitionError
from gamekb.events import (
    AttackersDeclared,
    BlockersDeclared,
    CardCountersChanged,
    CardDamaged,
    CardRef,
    CardStatsChanged,
    CardTapped,
    CardZoneChanged,
    EventIngestor,
    EventKind,
    GameStarted,
    GenericEvent,
    PlayerCountersChanged,
    PlayerLifeChanged,
    PlayerRef,
    TokenCreated,
    TurnBegan,
    TurnPhaseChanged,
)
from gamekb.events.handlers import resolve_card

ALICE = PlayerRef(1, "Alice")
BOB = PlayerRef(2, "Bob")
BEARS = CardRef(17, "Grizzly Bears", controller=ALICE, owner=ALICE)
WOLF = CardRef(18, "Timber Wolves", controller=BOB, owner=BOB)


@pytest.fixture
def ingestor(game_kb):
    ingestor = EventIngestor(game_kb)
    ingestor.ingest(GameStarted(players=(ALICE, BOB)))
    return ingestor


def _verbs(kb):
    return [(verb.name, verb.executed) for verb in kb.verb_history()]


def test_game_started_creates_seated_players(ingestor):
    kb = ingestor.kb
    alice = kb.get_instance("player_1")
    bob = kb.get_instance("player_2")
    assert alice.get_property("display_name") == "Alice"
    assert (alice.get_property("seat_index"), bob.get_property("seat_index")) == (0, 1)
    assert bob.get_property("life") == 20
    assert kb.get_instance(GAME_STATE_ID).get_property("started") is True
    assert kb.resolve_external(("player", 2)) is bob
    assert kb.events()[-1].payload == {"players": ["player_1", "player_2"]}


def test_players_are_found_by_display_name(game_kb):
    game_kb.create_instance("Player", "seat_a", {"display_name": "Alice"})
    EventIngestor(game_kb).ingest(PlayerLifeChanged(ALICE, 20, 18))
    assert game_kb.get_instance("seat_a").get_property("life") == 18
    assert game_kb.get_instance("player_1") is None


def test_card_events_resolve_controller_and_record_verbs(ingestor):
    """A card on the battlefield is tapped through the Tap verb by its controller."""
    kb = ingestor.kb
    assert ingestor.ingest(CardZoneChanged(BEARS, "Hand", "Battlefield"))
    assert ingestor.ingest(CardTapped(BEARS, tapped=True))

    card = kb.get_instance("card_17")
    assert card.class_name == "Card_Grizzly_Bears"
    assert card.get_property("zone") == "Battlefield"
    assert card.get_property("tapped") is True
    assert card.get_property("summoning_sick") is True
    assert card.get_property("controller") == "player_1"
    assert _verbs(kb) == [("MoveZone", True), ("Tap", True)]

    tap = kb.verb_history()[-1]
    assert tap.source is kb.get_instance("player_1")
    record = kb.events()[-1]
    assert record.event_type == "CardTapped"
    assert record.payload["actor_id"] == "player_1"
    assert record.payload["target_id"] == "card_17"


def test_unavailable_verb_falls_back_to_direct_sync(ingestor):
    """Host state wins when the knowledge base's view disagrees.

    The card starts in the library, so Tap's battlefield filter rejects it;
    the tapped flag is still synced and the verb is kept in history.
    """
    kb = ingestor.kb
    assert ingestor.ingest(CardTapped(BEARS, tapped=True))
    assert kb.get_instance("card_17").get_property("tapped") is True
    assert _verbs(kb) == [("Tap", False)]


def test_leaving_battlefield_clears_combat_state(ingestor):
    kb = ingestor.kb
    ingestor.ingest_all(
        [
            CardZoneChanged(BEARS, "Hand", "Battlefield"),
            AttackersDeclared(ALICE, (BEARS,)),
            CardDamaged(BEARS, 2),
            CardZoneChanged(BEARS, "Battlefield", "Graveyard"),
        ]
    )
    card = kb.get_instance("card_17")
    assert card.get_property("zone") == "Graveyard"
    assert card.get_property("attacking") is False
    assert card.get_property("damage_marked") == 0


def test_combat_declarations(ingestor):
    kb = ingestor.kb
    report = ingestor.ingest_all(
        [
            CardZoneChanged(BEARS, "Hand", "Battlefield"),
            CardZoneChanged(WOLF, "Hand", "Battlefield"),
            AttackersDeclared(ALICE, (BEARS,)),
            BlockersDeclared(BOB, ((WOLF, BEARS),)),
            CardDamaged(BEARS, 2, source=WOLF),
        ]
    )
    assert report.handled == 5
    bears = kb.get_instance("card_17")
    wolf = kb.get_instance("card_18")
    assert bears.get_property("attacking") is True
    assert wolf.get_property("blocking") is True
    assert bears.get_property("damage_marked") == 2
    assert kb.verb_history()[-1].source is wolf
    assert kb.events()[-2].payload["blocks"] == [["card_18", "card_17"]]


def test_counter_changes(ingestor):
    """Counters go through AddCounters when the stored count matches the old count."""
    kb = ingestor.kb
    ingestor.ingest(CardCountersChanged(BEARS, "P1P1", 0, 2))
    card = kb.get_instance("card_17")
    assert card.get_path("counters.P1P1") == 2
    assert _verbs(kb)[-1] == ("AddCounters", True)

    # Out of sync with the host: the new count is written directly.
    ingestor.ingest(CardCountersChanged(BEARS, "P1P1", 5, 3))
    assert card.get_path("counters.P1P1") == 3
    assert _verbs(kb)[-1] == ("AddCounters", False)

    ingestor.ingest(PlayerCountersChanged(BOB, "Poison", 0, 1))
    assert kb.get_instance("player_2").get_path("counters.Poison") == 1


@pytest.mark.parametrize("counter_type", ["Acorn", "Aegis", "P1p2", "M2m2", "Cell", "Dread"])
def test_uncommon_counter_types_are_accepted(ingestor, counter_type):
    kb = ingestor.kb
    assert ingestor.ingest(CardCountersChanged(BEARS, counter_type, 0, 1))
    assert kb.get_instance("card_17").get_path(f"counters.{counter_type}") == 1


def test_life_and_stats(ingestor):
    kb = ingestor.kb
    ingestor.ingest_all(
        [PlayerLifeChanged(ALICE, 20, 17), CardStatsChanged(BEARS, power=3, toughness=3)]
    )
    assert kb.get_instance("player_1").get_property("life") == 17
    assert ("SetLife", True) in _verbs(kb)
    card = kb.get_instance("card_17")
    assert (card.get_property("power"), card.get_property("toughness")) == (3, 3)


def test_token_created(ingestor):
    kb = ingestor.kb
    soldier = CardRef(99, "Soldier", controller=ALICE)
    ingestor.ingest(TokenCreated(soldier, power=1, toughness=1))
    token = kb.get_instance("token_99")
    assert token.class_name == "Token"
    assert token.get_property("zone") == "Battlefield"
    assert token.get_property("controller") == "player_1"
    assert kb.resolve_external(("card", 99)) is token

    # Later card events for the same host id reach the token.
    ingestor.ingest(CardTapped(soldier, tapped=True))
    assert token.get_property("tapped") is True


def test_turn_tracking(ingestor):
    kb = ingestor.kb
    ingestor.ingest_all([TurnBegan(BOB, 3), TurnPhaseChanged("Main1", BOB)])
    state = kb.get_instance(GAME_STATE_ID)
    assert state.get_property("turn") == 3
    assert state.get_property("active_player") == "player_2"
    assert state.get_property("phase") == "Main1"


def test_unknown_cards_get_a_generic_schema(game_kb):
    ingestor = EventIngestor(game_kb)
    assert ingestor.ingest(CardTapped(CardRef(5, "Black Lotus"), tapped=True))
    card = game_kb.get_instance("card_5")
    assert card.class_name == "Card_Black_Lotus"
    assert card.get_property("tapped") is True
    # No known controller: the card acts on itself.
    assert game_kb.verb_history()[-1].source is card


def test_unknown_cards_fail_when_auto_registration_is_off():
    kb = KnowledgeBase(KnowledgeBaseSettings(auto_register_cards=False))
    register_core_schemas(kb)
    register_common_verbs(kb)
    ingestor = EventIngestor(kb)
    assert ingestor.ingest(CardTapped(CardRef(5, "Black Lotus"), tapped=True)) is False
    assert kb.get_instance("card_5") is None

    with pytest.raises(UnknownDefinitionError):
        resolve_card(kb, CardRef(5, "Black Lotus"))


def test_generic_events_are_ignored(ingestor):
    before = ingestor.kb.snapshot()
    report = ingestor.ingest_all([GenericEvent(EventKind.SHUFFLE, {"player": 1}), object()])
    assert report.ignored == 2
    assert report.total == 2
    assert ingestor.kb.snapshot() == before


def test_failing_event_does_not_stop_the_batch(ingestor):
    """CRITICAL: three events, the second raises, the first and third still apply.

    Why: one malformed host event must not desynchronize everything after it.
    """
    kb = ingestor.kb
    report = ingestor.ingest_all(
        [
            PlayerLifeChanged(ALICE, 20, 15),
            CardStatsChanged(BEARS, power=5000, toughness=1),
            PlayerLifeChanged(BOB, 20, 12),
        ]
    )
    assert (report.handled, report.failed) == (2, 1)
    assert report.errors[0][0] == "CardStatsChanged"
    assert kb.get_instance("player_1").get_property("life") == 15
    assert kb.get_instance("player_2").get_property("life") == 12


def test_custom_handlers(game_kb):
    seen = []
    ingestor = EventIngestor(game_kb, handlers={})
    assert ingestor.ingest(TurnPhaseChanged("Upkeep")) is False
    ingestor.register(EventKind.TURN_PHASE_CHANGED, lambda kb, event: seen.append(event.phase))
    assert ingestor.ingest(TurnPhaseChanged("Upkeep")) is True
    assert seen == ["Upkeep"]
