"""Host engine events consumed by the knowledge base.

Each modeled event is a frozen dataclass carrying a class-level `kind`.
Anything else travels as a GenericEvent and is accepted without effect.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar


class EventKind(StrEnum):
    """Every event kind the host engine can report."""

    ANTE_CARDS_SELECTED = "AnteCardsSelected"
    ATTACKERS_DECLARED = "AttackersDeclared"
    BLOCKERS_DECLARED = "BlockersDeclared"
    CARD_ATTACHMENT = "CardAttachment"
    CARD_COUNTERS_CHANGED = "CardCountersChanged"
    CARD_DAMAGED = "CardDamaged"
    CARD_DESTROYED = "CardDestroyed"
    CARD_FORETOLD = "CardForetold"
    CARD_MODE_CHOSEN = "CardModeChosen"
    CARD_PHASED = "CardPhased"
    CARD_PLOTTED = "CardPlotted"
    CARD_REGENERATED = "CardRegenerated"
    CARD_SACRIFICED = "CardSacrificed"
    CARD_STATS_CHANGED = "CardStatsChanged"
    CARD_TAPPED = "CardTapped"
    CARD_ZONE_CHANGED = "CardZoneChanged"
    COMBAT_CHANGED = "CombatChanged"
    COMBAT_ENDED = "CombatEnded"
    COMBAT_UPDATE = "CombatUpdate"
    DAY_TIME_CHANGED = "DayTimeChanged"
    DOOR_CHANGED = "DoorChanged"
    FLIP_COIN = "FlipCoin"
    GAME_FINISHED = "GameFinished"
    GAME_OUTCOME = "GameOutcome"
    GAME_RESTARTED = "GameRestarted"
    GAME_STARTED = "GameStarted"
    LAND_PLAYED = "LandPlayed"
    MANA_BURN = "ManaBurn"
    MANA_POOL = "ManaPool"
    MULLIGAN = "Mulligan"
    PLAYER_CONTROL = "PlayerControl"
    PLAYER_COUNTERS_CHANGED = "PlayerCountersChanged"
    PLAYER_DAMAGED = "PlayerDamaged"
    PLAYER_LIFE_CHANGED = "PlayerLifeChanged"
    PLAYER_POISONED = "PlayerPoisoned"
    PLAYER_PRIORITY = "PlayerPriority"
    PLAYER_RADIATION = "PlayerRadiation"
    PLAYER_SHARDS_CHANGED = "PlayerShardsChanged"
    PLAYER_STATS_CHANGED = "PlayerStatsChanged"
    RANDOM_LOG = "RandomLog"
    ROLL_DIE = "RollDie"
    SCRY = "Scry"
    SHUFFLE = "Shuffle"
    SPEED_CHANGED = "SpeedChanged"
    SPELL_ABILITY_CAST = "SpellAbilityCast"
    SPELL_REMOVED_FROM_STACK = "SpellRemovedFromStack"
    SPELL_RESOLVED = "SpellResolved"
    SPROCKET_UPDATE = "SprocketUpdate"
    SUBGAME_END = "SubgameEnd"
    SUBGAME_START = "SubgameStart"
    SURVEIL = "Surveil"
    TOKEN_CREATED = "TokenCreated"
    TURN_BEGAN = "TurnBegan"
    TURN_ENDED = "TurnEnded"
    TURN_PHASE_CHANGED = "TurnPhaseChanged"
    ZONE = "Zone"


@dataclass(frozen=True, slots=True)
class PlayerRef:
    """Host engine identity of a player."""

    external_id: int | str
    name: str


@dataclass(frozen=True, slots=True)
class CardRef:
    """Host engine identity of a card, with its current controller and owner."""

    external_id: int | str
    name: str
    controller: PlayerRef | None = None
    owner: PlayerRef | None = None


@dataclass(frozen=True, slots=True)
class CardZoneChanged:
    kind: ClassVar[EventKind] = EventKind.CARD_ZONE_CHANGED

    card: CardRef
    from_zone: str | None
    to_zone: str


@dataclass(frozen=True, slots=True)
class CardTapped:
    kind: ClassVar[EventKind] = EventKind.CARD_TAPPED

    card: CardRef
    tapped: bool


@dataclass(frozen=True, slots=True)
class CardCountersChanged:
    kind: ClassVar[EventKind] = EventKind.CARD_COUNTERS_CHANGED

    card: CardRef
    counter_type: str
    old_count: int
    new_count: int


@dataclass(frozen=True, slots=True)
class CardStatsChanged:
    kind: ClassVar[EventKind] = EventKind.CARD_STATS_CHANGED

    card: CardRef
    power: int
    toughness: int


@dataclass(frozen=True, slots=True)
class CardDamaged:
    kind: ClassVar[EventKind] = EventKind.CARD_DAMAGED

    card: CardRef
    amount: int
    source: CardRef | None = None


@dataclass(frozen=True, slots=True)
class PlayerLifeChanged:
    kind: ClassVar[EventKind] = EventKind.PLAYER_LIFE_CHANGED

    player: PlayerRef
    old_life: int
    new_life: int


@dataclass(frozen=True, slots=True)
class PlayerCountersChanged:
    kind: ClassVar[EventKind] = EventKind.PLAYER_COUNTERS_CHANGED

    player: PlayerRef
    counter_type: str
    old_count: int
    new_count: int


@dataclass(frozen=True, slots=True)
class AttackersDeclared:
    kind: ClassVar[EventKind] = EventKind.ATTACKERS_DECLARED

    player: PlayerRef
    attackers: tuple[CardRef, ...]


@dataclass(frozen=True, slots=True)
class BlockersDeclared:
    """Blocks as (blocker, attacker) pairs."""

    kind: ClassVar[EventKind] = EventKind.BLOCKERS_DECLARED

    player: PlayerRef
    blocks: tuple[tuple[CardRef, CardRef], ...]


@dataclass(frozen=True, slots=True)
class TokenCreated:
    kind: ClassVar[EventKind] = EventKind.TOKEN_CREATED

    token: CardRef
    power: int = 0
    toughness: int = 0
    card_types: tuple[str, ...] = ("Creature",)


@dataclass(frozen=True, slots=True)
class GameStarted:
    kind: ClassVar[EventKind] = EventKind.GAME_STARTED

    players: tuple[PlayerRef, ...]
    starting_life: int = 20


@dataclass(frozen=True, slots=True)
class TurnBegan:
    kind: ClassVar[EventKind] = EventKind.TURN_BEGAN

    player: PlayerRef
    turn: int


@dataclass(frozen=True, slots=True)
class TurnPhaseChanged:
    kind: ClassVar[EventKind] = EventKind.TURN_PHASE_CHANGED

    phase: str
    player: PlayerRef | None = None


@dataclass(frozen=True, slots=True)
class GenericEvent:
    """Any event kind without a dedicated model."""

    kind: EventKind
    data: Mapping[str, Any] = field(default_factory=dict)


GameEvent = (
    CardZoneChanged
    | CardTapped
    | CardCountersChanged
    | CardStatsChanged
    | CardDamaged
    | PlayerLifeChanged
    | PlayerCountersChanged
    | AttackersDeclared
    | BlockersDeclared
    | TokenCreated
    | GameStarted
    | TurnBegan
    | TurnPhaseChanged
    | GenericEvent
)
