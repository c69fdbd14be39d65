"""
Lookup tables for line special codes and thing type codes.

Membership tests are set lookups over small integers; labels and marker
radii are plain dicts keyed by type code.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional


# Line special codes
DOOR_SPECIALS: FrozenSet[int] = frozenset({1, 2, 3, 4, 16})
TELEPORTER_SPECIALS: FrozenSet[int] = frozenset({
    39, 97, 125, 126, 174, 195, 207, 208, 209, 210,
    243, 244, 262, 263, 264, 265, 266, 267, 268, 269,
})
LIFT_SPECIALS: FrozenSet[int] = frozenset({10, 21, 62, 88, 120, 121, 123})
EXIT_SPECIALS: FrozenSet[int] = frozenset({11, 51, 52, 124, 197, 198})

# Region types
SECRET_REGION_TYPE = 9
DAMAGE_REGION_TYPES: FrozenSet[int] = frozenset({4, 5, 7, 16})


class ThingCategory(str, Enum):
    """Display categories for placed things."""
    AMMO = "ammo"
    ARTIFACT = "artifacts"
    KEY = "keys"
    MONSTER = "monsters"
    POWERUP = "powerups"
    WEAPON = "weapons"


AMMO_LABELS: Dict[int, str] = {
    17: "Energy cell pack",
    2007: "Clip",
    2008: "4 shotgun shells",
    2010: "Rocket",
    2046: "Box of rockets",
    2047: "Energy cell",
    2048: "Box of bullets",
    2049: "Box of shotgun shells",
}

ARTIFACT_LABELS: Dict[int, str] = {
    83: "Megasphere",
    2013: "Supercharge",
    2014: "Health bonus",
    2015: "Armor bonus",
    2022: "Invulnerability",
    2023: "Berserk",
    2024: "Partial invisibility",
    2026: "Computer area map",
    2045: "Light amplification visor",
}

KEY_LABELS: Dict[int, str] = {
    5: "Blue keycard",
    6: "Yellow keycard",
    13: "Red keycard",
    38: "Red skull key",
    39: "Yellow skull key",
    40: "Blue skull key",
}

# Keys are coloured by the key itself, not by category
KEY_COLOURS: Dict[int, str] = {
    5: "blue",
    6: "yellow",
    13: "red",
    38: "red",
    39: "yellow",
    40: "blue",
}

MONSTER_LABELS: Dict[int, str] = {
    7: "Spiderdemon",
    9: "Shotgun guy",
    16: "Cyberdemon",
    58: "Spectre",
    64: "Arch-vile",
    65: "Heavy weapon dude",
    66: "Revenant",
    67: "Mancubus",
    68: "Arachnotron",
    69: "Hell knight",
    71: "Pain elemental",
    72: "Commander Keen",
    84: "Wolfenstein SS",
    3001: "Imp",
    3002: "Demon",
    3003: "Baron of Hell",
    3004: "Zombieman",
    3005: "Cacodemon",
    3006: "Lost soul",
}

MONSTER_RADII: Dict[int, int] = {
    7: 128,
    9: 20,
    16: 40,
    58: 30,
    64: 20,
    65: 20,
    66: 20,
    67: 48,
    68: 64,
    69: 24,
    71: 31,
    72: 16,
    84: 20,
    3001: 20,
    3002: 30,
    3003: 24,
    3004: 20,
    3005: 31,
    3006: 16,
}

POWERUP_LABELS: Dict[int, str] = {
    8: "Backpack",
    2011: "Stimpack",
    2012: "Medikit",
    2018: "Armor",
    2019: "Megaarmor",
    2025: "Radiation shielding suit",
}

WEAPON_LABELS: Dict[int, str] = {
    82: "Super shotgun",
    2001: "Shotgun",
    2002: "Chaingun",
    2003: "Rocket launcher",
    2004: "Plasma gun",
    2005: "Chainsaw",
    2006: "BFG9000",
}

CATEGORY_LABELS: Dict[ThingCategory, Dict[int, str]] = {
    ThingCategory.AMMO: AMMO_LABELS,
    ThingCategory.ARTIFACT: ARTIFACT_LABELS,
    ThingCategory.KEY: KEY_LABELS,
    ThingCategory.MONSTER: MONSTER_LABELS,
    ThingCategory.POWERUP: POWERUP_LABELS,
    ThingCategory.WEAPON: WEAPON_LABELS,
}


def thing_category(thing_type: int) -> Optional[ThingCategory]:
    """Return the display category of a thing type, or None if it has none."""
    for category, labels in CATEGORY_LABELS.items():
        if thing_type in labels:
            return category
    return None


def thing_label(thing_type: int) -> Optional[str]:
    """Return the human-readable name of a thing type."""
    category = thing_category(thing_type)
    if category is None:
        return None
    return CATEGORY_LABELS[category][thing_type]
