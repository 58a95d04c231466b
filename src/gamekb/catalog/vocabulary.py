"""Fixed game vocabulary used by catalog schemas and verbs."""

from __future__ import annotations

ZONES: tuple[str, ...] = (
    "Ante",
    "Battlefield",
    "Command",
    "Exile",
    "Graveyard",
    "Hand",
    "Library",
    "Stack",
)

HIDDEN_ZONES: frozenset[str] = frozenset({"Hand", "Library"})
SHARED_ZONES: frozenset[str] = frozenset({"Battlefield", "Command", "Stack", "Ante"})
ORDERED_ZONES: frozenset[str] = frozenset({"Library", "Graveyard", "Stack"})

COLORS: tuple[str, ...] = ("White", "Blue", "Black", "Red", "Green")

COLOR_BY_SYMBOL: dict[str, str] = {
    "W": "White",
    "U": "Blue",
    "B": "Black",
    "R": "Red",
    "G": "Green",
}

MANA_KEYS: tuple[str, ...] = ("W", "U", "B", "R", "G", "C")

SUPERTYPES: tuple[str, ...] = ("Basic", "Legendary", "Ongoing", "Snow", "World")

CARD_TYPES: tuple[str, ...] = (
    "Artifact",
    "Battle",
    "Conspiracy",
    "Creature",
    "Dungeon",
    "Enchantment",
    "Instant",
    "Kindred",
    "Land",
    "Phenomenon",
    "Plane",
    "Planeswalker",
    "Scheme",
    "Sorcery",
    "Vanguard",
)

PERMANENT_TYPES: frozenset[str] = frozenset(
    {"Artifact", "Battle", "Creature", "Enchantment", "Land", "Planeswalker"}
)

PHASES: tuple[str, ...] = (
    "Untap",
    "Upkeep",
    "Draw",
    "Main1",
    "BeginCombat",
    "DeclareAttackers",
    "DeclareBlockers",
    "FirstStrikeDamage",
    "CombatDamage",
    "EndCombat",
    "Main2",
    "End",
    "Cleanup",
)

KEYWORDS: tuple[str, ...] = (
    "Absorb", "Affinity", "Afflict", "Afterlife", "Aftermath", "Amplify", "Annihilator",
    "Assist", "Awaken", "Backup", "Battle Cry", "Bestow", "Blitz", "Bloodthirst", "Bushido",
    "Buyback", "Cascade", "Casualty", "Cipher", "Cleave", "Companion", "Conspire", "Convoke",
    "Crew", "Cumulative Upkeep", "Cycling", "Dash", "Deathtouch", "Decayed", "Defender",
    "Delve", "Dethrone", "Devour", "Discover", "Disguise", "Disturb", "Double Strike",
    "Dredge", "Echo", "Embalm", "Emerge", "Enchant", "Encore", "Enlist", "Entwine", "Epic",
    "Equip", "Escalate", "Escape", "Eternalize", "Evoke", "Evolve", "Exalted", "Exploit",
    "Extort", "Fabricate", "Fading", "Fear", "First Strike", "Flanking", "Flash",
    "Flashback", "Flying", "Forecast", "Foretell", "Fortify", "Frenzy", "Fuse", "Graft",
    "Gravestorm", "Haste", "Haunt", "Hexproof", "Hideaway", "Horsemanship", "Improvise",
    "Indestructible", "Infect", "Ingest", "Intimidate", "Jump-Start", "Level Up", "Lifelink",
    "Living Weapon", "Madness", "Melee", "Mentor", "Miracle", "Modular", "Morph", "Ninjutsu",
    "Offering", "Outlast", "Overload", "Persist", "Phasing", "Plot", "Poisonous",
    "Protection", "Provoke", "Prowess", "Prowl", "Rampage", "Reach", "Rebound", "Reconfigure",
    "Recover", "Reinforce", "Renown", "Replicate", "Retrace", "Riot", "Ripple", "Scavenge",
    "Shadow", "Shroud", "Skulk", "Soulbond", "Soulshift", "Spectacle", "Splice",
    "Split Second", "Squad", "Storm", "Sunburst", "Surge", "Suspend", "Toxic", "Training",
    "Trample", "Transfigure", "Transmute", "Tribute", "Undaunted", "Undying", "Unearth",
    "Unleash", "Vanishing", "Vigilance", "Wither",
)

CARD_COUNTER_TYPES: tuple[str, ...] = (
    "M1M1", "P1P1", "Loyalty", "Acorn", "Aegis", "Age", "Aim", "Arrow", "Arrowhead", "Awakening",
    "Bait", "Blaze", "Blessing", "Blight", "Blood", "Bloodline", "Bloodstain", "Bore", "Bounty",
    "Brain", "Bribery", "Brick", "Burden", "Cage", "Carrion", "Cell", "Charge", "Chorus", "Coin",
    "Collection", "Component", "Contested", "Corpse", "Corruption", "Croak", "Credit", "Crystal",
    "Cube", "Currency", "Death", "Defense", "Delay", "Depletion", "Descent", "Despair", "Devotion",
    "Discovery", "Divinity", "Doom", "Dread", "Dream", "Duty", "Echo", "Egg", "Elixir", "Ember",
    "Eon", "Eruption", "Exposure", "Eyeball", "Eyestalk", "Everything", "Fade", "Fate", "Feather",
    "Feeding", "Fellowship", "Fetch", "Filibuster", "Finality", "Fire", "Flame", "Flavor", "Flood",
    "Foreshadow", "Fungus", "Funk", "Fury", "Fuse", "Gem", "Ghostform", "Glyph", "Gold", "Growth",
    "Harmony", "Hatching", "Hatchling", "Healing", "Hit", "Hone", "Hope", "Hoofprint", "Hour",
    "Hourglass", "Hunger", "Husk", "Ice", "Impostor", "Incarnation", "Incubation", "Ingredient",
    "Infection", "Influence", "Ingenuity", "Intel", "Intervention", "Invitation", "Isolation",
    "Javelin", "Judgment", "Ki", "Kick", "Knowledge", "Landmark", "Level", "Loot", "Lore", "Luck",
    "Manabond", "M0m1", "M0m2", "M1m0", "M2m1", "M2m2", "Magnet", "Mana", "Manifestation",
    "Mannequin", "Matrix", "Memory", "Midway", "Mine", "Mining", "Mire", "Music", "Muster",
    "Necrodermis", "Net", "Nest", "Oil", "Omen", "Ore", "Page", "Pain", "Paralyzation", "Petal",
    "Petrification", "Pin", "Plague", "Plot", "Pressure", "Phylactery", "Phyresis", "Point",
    "Polyp", "Possession", "Prey", "Pupa", "P0p1", "P0p2", "P1p0", "P1p2", "P2p0", "P2p2", "Quest",
    "Rally", "Release", "Reprieve", "Rejection", "Rev", "Revival", "Ribbon", "Ritual", "Rope",
    "Rust", "Scream", "Scroll", "Shell", "Shield", "Shred", "Silver", "Skewer", "Sleep", "Slumber",
    "Sleight", "Slime", "Soul", "Soot", "Spite", "Spore", "Stash", "Storage", "Story", "Strife",
    "Study", "Stun", "Supply", "Takeover", "Task", "Theft", "Tide", "Time", "Tower", "Training",
    "Trap", "Treasure", "Unity", "Unlock", "Valor", "Velocity", "Verse", "Vitality", "Vortex",
    "Voyage", "Wage", "Winch", "Wind", "Wish", "Wreck", "Energy",
)

PLAYER_COUNTER_TYPES: tuple[str, ...] = ("Energy", "Experience", "Poison", "Rad", "Ticket")

VISIBILITY: tuple[str, ...] = ("Public", "Hidden")
