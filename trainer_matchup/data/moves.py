"""Move classification tables: setup moves, impractical moves, ability tokens."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Optional


def normalize_token(raw: str, prefix: str = "") -> str:
    """Turn ``"Swords Dance"``, ``"swords-dance"`` or ``"MOVE_SWORDS_DANCE"`` into ``SWORDS_DANCE``."""

    slug = raw.strip().upper()
    slug = slug.replace("'", "").replace(".", "")
    slug = re.sub(r"[^A-Z0-9]+", "_", slug).strip("_")
    if prefix and slug.startswith(prefix + "_"):
        slug = slug[len(prefix) + 1:]
    return slug


def normalize_move(raw: str) -> str:
    return normalize_token(raw, "MOVE")


def normalize_ability(raw: Optional[str]) -> str:
    if not raw:
        return ""
    return normalize_token(raw, "ABILITY")


@dataclass(frozen=True, slots=True)
class SetupProfile:
    """Stat stages a setup move grants per use."""

    boosts: Dict[str, int] = field(default_factory=dict)
    all_in: bool = False

    @property
    def offensive_stats(self) -> tuple[str, ...]:
        return tuple(k for k in ("atk", "spa") if self.boosts.get(k, 0) > 0)

    @property
    def defensive_stats(self) -> tuple[str, ...]:
        return tuple(k for k in ("def", "spd") if self.boosts.get(k, 0) > 0)

    @property
    def grants_bulk(self) -> bool:
        return bool(self.defensive_stats)


SETUP_MOVES: Dict[str, SetupProfile] = {
    "SWORDS_DANCE": SetupProfile({"atk": 2}),
    "BELLY_DRUM": SetupProfile({"atk": 6}, all_in=True),
    "DRAGON_DANCE": SetupProfile({"atk": 1, "spe": 1}),
    "CALM_MIND": SetupProfile({"spa": 1, "spd": 1}),
    "BULK_UP": SetupProfile({"atk": 1, "def": 1}),
    "CURSE": SetupProfile({"atk": 1, "def": 1, "spe": -1}),
    "TAIL_GLOW": SetupProfile({"spa": 2}),
    "GROWTH": SetupProfile({"spa": 1}),
    "HOWL": SetupProfile({"atk": 1}),
    "MEDITATE": SetupProfile({"atk": 1}),
    "SHARPEN": SetupProfile({"atk": 1}),
}

# Charge turns and moves that depend on an earlier turn are not modelled.
IMPRACTICAL_MOVES = frozenset(
    {
        "SOLAR_BEAM",
        "SKY_ATTACK",
        "RAZOR_WIND",
        "SKULL_BASH",
        "FOCUS_PUNCH",
        "FUTURE_SIGHT",
        "DOOM_DESIRE",
        "SPIT_UP",
        "DREAM_EATER",
        "SNORE",
        "SLEEP_TALK",
        "BIDE",
        "COUNTER",
        "MIRROR_COAT",
    }
)


def setup_profile(token: str) -> Optional[SetupProfile]:
    """Return the setup profile for a move token, or None for any other move."""

    return SETUP_MOVES.get(normalize_move(token))


def is_impractical(token: str) -> bool:
    return normalize_move(token) in IMPRACTICAL_MOVES


# Defender abilities that nullify a whole attacking type.
TYPE_IMMUNITY_ABILITIES: Dict[str, str] = {
    "LEVITATE": "ground",
    "VOLT_ABSORB": "electric",
    "WATER_ABSORB": "water",
    "FLASH_FIRE": "fire",
}
WONDER_GUARD = "WONDER_GUARD"
THICK_FAT = "THICK_FAT"
THICK_FAT_TYPES = frozenset({"fire", "ice"})
ATTACK_DOUBLING_ABILITIES = frozenset({"HUGE_POWER", "PURE_POWER"})
GUTS = "GUTS"
