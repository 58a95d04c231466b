"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from gamekb import KnowledgeBase, KnowledgeBaseSettings, SchemaBuilder
from gamekb.catalog import card_schema, register_common_verbs, register_core_schemas
from gamekb.core.domain import IntDomain, TextDomain


@pytest.fixture
def settings():
    """Settings independent of the GAMEKB_* environment."""
    return KnowledgeBaseSettings(
        event_log_limit=1000,
        verb_history_limit=1000,
        auto_register_cards=True,
        archive_removed=True,
    )


@pytest.fixture
def kb(settings):
    """Fresh KnowledgeBase with no definitions."""
    return KnowledgeBase(settings)


@pytest.fixture
def creature_schema():
    return (
        SchemaBuilder("Creature")
        .description("Minimal creature for tests")
        .add_text_property("name", "Unnamed", min_length=1)
        .add_int_property("power", 0, min=0, max=999)
        .add_int_property("toughness", 1, min=0, max=999)
        .add_bool_property("tapped", False)
        .add_enum_property("zone", "Hand", {"Hand", "Battlefield", "Graveyard"})
        .add_map_property(
            "counters",
            key_domain=TextDomain(min_length=1),
            value_domain=IntDomain(min=0),
            max_size=2,
        )
        .require("name")
        .build()
    )


@pytest.fixture
def game_kb(kb):
    """KnowledgeBase with the catalog schemas, common verbs, and one creature card."""
    register_core_schemas(kb)
    register_common_verbs(kb)
    kb.register_definition(
        card_schema(
            "Grizzly Bears",
            card_types=["Creature"],
            subtypes=["Bear"],
            mana_cost="{1}{G}",
            power=2,
            toughness=2,
        )
    )
    return kb
