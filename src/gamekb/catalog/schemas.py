"""Catalog schemas for cards, tokens, players, zones, and game state.

Usage:
    kb = KnowledgeBase()
    register_core_schemas(kb)
    kb.register_definition(
        card_schema(
            "Grizzly Bears", card_types=["Creature"], mana_cost="{1}{G}", power=2, toughness=2
        )
    )
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from gamekb.catalog.vocabulary import (
    CARD_COUNTER_TYPES,
    CARD_TYPES,
    COLOR_BY_SYMBOL,
    COLORS,
    HIDDEN_ZONES,
    KEYWORDS,
    MANA_KEYS,
    ORDERED_ZONES,
    PHASES,
    PLAYER_COUNTER_TYPES,
    SHARED_ZONES,
    SUPERTYPES,
    VISIBILITY,
    ZONES,
)
from gamekb.core.domain import EnumDomain, IntDomain
from gamekb.core.schema import EntitySchema, SchemaBuilder

if TYPE_CHECKING:
    from gamekb.world.knowledge_base import KnowledgeBase

PLAYER_CLASS = "Player"
TOKEN_CLASS = "Token"
GAME_STATE_CLASS = "GameState"
GAME_STATE_ID = "game_state"
CARD_CLASS_PREFIX = "Card_"

_MANA_SYMBOL = re.compile(r"\{([^}]+)\}")
_OWNER_ID = r"(player_[A-Za-z0-9_:.\-]+)?"


def card_class_name(card_name: str) -> str:
    """Class name for a card: "Card_" + name with non-alphanumerics as "_"."""
    return CARD_CLASS_PREFIX + re.sub(r"[^A-Za-z0-9]", "_", card_name)


def zone_class_name(zone: str) -> str:
    return f"Zone_{zone}"


def converted_mana_cost(mana_cost: str) -> int:
    """Mana value of a braced cost string such as "{2}{G}{G}" (X counts as 0)."""
    total = 0
    for symbol in _MANA_SYMBOL.findall(mana_cost):
        if symbol.isdigit():
            total += int(symbol)
        elif symbol.startswith("2/"):
            total += 2
        elif symbol not in ("X", "Y", "Z"):
            total += 1
    return total


def color_identity(mana_cost: str) -> list[str]:
    """Colors named by the symbols of a mana cost, in WUBRG order."""
    found = {
        COLOR_BY_SYMBOL[char]
        for symbol in _MANA_SYMBOL.findall(mana_cost)
        for char in symbol
        if char in COLOR_BY_SYMBOL
    }
    return [color for color in COLORS if color in found]


def _add_permanent_state(builder: SchemaBuilder, zone: str = "Library") -> SchemaBuilder:
    """Mutable game state shared by cards and tokens."""
    return (
        builder.add_enum_property("zone", zone, ZONES)
        .add_text_property("owner", "", max_length=64, pattern=_OWNER_ID)
        .add_text_property("controller", "", max_length=64, pattern=_OWNER_ID)
        .add_bool_property("tapped", False)
        .add_bool_property("summoning_sick", False)
        .add_bool_property("attacking", False)
        .add_bool_property("blocking", False)
        .add_int_property("damage_marked", 0, min=0, max=9999)
        .add_map_property(
            "counters",
            key_domain=EnumDomain(frozenset(CARD_COUNTER_TYPES)),
            value_domain=IntDomain(min=0, max=999),
            max_size=128,
        )
    )


def card_schema(
    name: str,
    *,
    card_types: Sequence[str] = (),
    supertypes: Sequence[str] = (),
    subtypes: Sequence[str] = (),
    mana_cost: str = "",
    power: int | None = None,
    toughness: int | None = None,
    loyalty: int | None = None,
    keywords: Sequence[str] = (),
    oracle_text: str = "",
) -> EntitySchema:
    """Schema for one named card.

    Power and toughness are declared only for creatures (or when given),
    loyalty only for planeswalkers (or when given).
    """
    builder = (
        SchemaBuilder(card_class_name(name))
        .description(f"Card: {name}")
        .add_text_property("name", name, min_length=1, max_length=200)
        .add_text_property("mana_cost", mana_cost, max_length=100)
        .add_int_property("converted_mana_cost", converted_mana_cost(mana_cost), min=0, max=9999)
        .add_list_property(
            "color_identity", color_identity(mana_cost), COLORS, max_size=5, allow_duplicates=False
        )
        .add_list_property(
            "card_types", card_types, CARD_TYPES, max_size=16, allow_duplicates=False
        )
        .add_list_property(
            "supertypes", supertypes, SUPERTYPES, max_size=16, allow_duplicates=False
        )
        .add_property("subtypes", list(subtypes))
        .add_list_property("keywords", keywords, KEYWORDS, max_size=16, allow_duplicates=False)
        .add_text_property("oracle_text", oracle_text, max_length=5000)
    )
    if "Creature" in card_types or power is not None or toughness is not None:
        builder.add_int_property("power", power or 0, min=-999, max=999)
        builder.add_int_property("toughness", toughness or 0, min=-999, max=999)
    if "Planeswalker" in card_types or loyalty is not None:
        builder.add_int_property("loyalty", loyalty or 0, min=0, max=999)
    _add_permanent_state(builder)
    return builder.require("name", "card_types", "zone").build()


def generic_card_schema(name: str) -> EntitySchema:
    """Permissive card schema used when ingestion meets an unregistered card."""
    return card_schema(name, power=0, toughness=0, loyalty=0)


def token_schema() -> EntitySchema:
    builder = (
        SchemaBuilder(TOKEN_CLASS)
        .description("Token permanent created during the game")
        .add_text_property("name", "Token", min_length=1, max_length=200)
        .add_list_property("card_types", ["Creature"], CARD_TYPES, max_size=16)
        .add_property("subtypes", [])
        .add_list_property("colors", [], COLORS, max_size=5, allow_duplicates=False)
        .add_list_property("keywords", [], KEYWORDS, max_size=16, allow_duplicates=False)
        .add_int_property("power", 0, min=-999, max=999)
        .add_int_property("toughness", 0, min=-999, max=999)
    )
    _add_permanent_state(builder, zone="Battlefield")
    return builder.require("name", "zone").build()


def player_schema() -> EntitySchema:
    return (
        SchemaBuilder(PLAYER_CLASS)
        .description("Player entity: identity, life and hand, mana pool, and player counters.")
        .add_text_property("display_name", "", max_length=60)
        .add_int_property("starting_life", 20, min=0, max=200)
        .add_int_property("life", 20, min=-1000, max=1000)
        .add_int_property("starting_hand_size", 7, min=0, max=14)
        .add_int_property("max_hand_size", 7, min=0, max=99)
        .add_int_property("deck_min_size", 60, min=0, max=500)
        .add_map_property(
            "mana_pool",
            dict.fromkeys(MANA_KEYS, 0),
            key_domain=EnumDomain(frozenset(MANA_KEYS)),
            value_domain=IntDomain(min=0, max=999),
            max_size=len(MANA_KEYS),
        )
        .add_bool_property("empty_mana_pool_each_step", True)
        .add_map_property(
            "counters",
            key_domain=EnumDomain(frozenset(PLAYER_COUNTER_TYPES)),
            value_domain=IntDomain(min=0, max=999),
            max_size=128,
        )
        .add_int_property("seat_index", 0, min=0, max=63)
        .add_bool_property("has_lost", False)
        .require("display_name", "life")
        .build()
    )


def zone_schema(zone: str) -> EntitySchema:
    """Schema for one zone kind, e.g. zone_schema("Graveyard") -> "Zone_Graveyard"."""
    if zone not in ZONES:
        raise ValueError(f"Unknown zone {zone!r}; expected one of {list(ZONES)}")
    return (
        SchemaBuilder(zone_class_name(zone))
        .description(f"{zone} zone")
        .add_enum_property("zone_type", zone, ZONES)
        .add_enum_property("visibility", "Hidden" if zone in HIDDEN_ZONES else "Public", VISIBILITY)
        .add_text_property("owner", "", max_length=64, pattern=_OWNER_ID)
        .add_bool_property("shared", zone in SHARED_ZONES)
        .add_bool_property("ordered", zone in ORDERED_ZONES)
        .add_property("contents", [])
        .require("zone_type", "visibility")
        .build()
    )


def game_state_schema() -> EntitySchema:
    return (
        SchemaBuilder(GAME_STATE_CLASS)
        .description("Match-wide state: turn, phase, and active player")
        .add_int_property("turn", 0, min=0, max=100_000)
        .add_enum_property("phase", "Untap", PHASES)
        .add_text_property("active_player", "", max_length=64, pattern=_OWNER_ID)
        .add_bool_property("started", False)
        .add_bool_property("game_over", False)
        .add_text_property("winner", "", max_length=64, pattern=_OWNER_ID)
        .require("turn", "phase")
        .build()
    )


def register_core_schemas(
    kb: KnowledgeBase, zones: Iterable[str] = ZONES
) -> list[EntitySchema]:
    """Register player, token, game state, and zone schemas. Returns them in order."""
    schemas = [player_schema(), token_schema(), game_state_schema()]
    schemas.extend(zone_schema(zone) for zone in zones)
    for schema in schemas:
        kb.register_definition(schema)
    return schemas
