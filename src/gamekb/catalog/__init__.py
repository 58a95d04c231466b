"""Game catalog: vocabulary, core schemas, and common verbs."""

from gamekb.catalog.schemas import (
    CARD_CLASS_PREFIX,
    GAME_STATE_CLASS,
    GAME_STATE_ID,
    PLAYER_CLASS,
    TOKEN_CLASS,
    card_class_name,
    card_schema,
    color_identity,
    converted_mana_cost,
    game_state_schema,
    generic_card_schema,
    player_schema,
    register_core_schemas,
    token_schema,
    zone_class_name,
    zone_schema,
)
from gamekb.catalog.verbs import (
    COMMON_VERBS,
    add_counters_verb,
    mark_damage_verb,
    move_zone_verb,
    register_common_verbs,
    set_life_verb,
    tap_verb,
    untap_verb,
)

__all__ = [
    # Schemas
    "CARD_CLASS_PREFIX",
    "GAME_STATE_CLASS",
    "GAME_STATE_ID",
    "PLAYER_CLASS",
    "TOKEN_CLASS",
    "card_class_name",
    "card_schema",
    "color_identity",
    "converted_mana_cost",
    "game_state_schema",
    "generic_card_schema",
    "player_schema",
    "register_core_schemas",
    "token_schema",
    "zone_class_name",
    "zone_schema",
    # Verbs
    "COMMON_VERBS",
    "add_counters_verb",
    "mark_damage_verb",
    "move_zone_verb",
    "register_common_verbs",
    "set_life_verb",
    "tap_verb",
    "untap_verb",
]
