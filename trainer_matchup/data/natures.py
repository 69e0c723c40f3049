"""The 25 natures: each neutral or boosting one stat by 10% and lowering another."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

# name -> (boosted stat, lowered stat); None for the five neutral natures.
NATURES: Dict[str, Optional[Tuple[str, str]]] = {
    "hardy": None,
    "lonely": ("atk", "def"),
    "brave": ("atk", "spe"),
    "adamant": ("atk", "spa"),
    "naughty": ("atk", "spd"),
    "bold": ("def", "atk"),
    "docile": None,
    "relaxed": ("def", "spe"),
    "impish": ("def", "spa"),
    "lax": ("def", "spd"),
    "timid": ("spe", "atk"),
    "hasty": ("spe", "def"),
    "serious": None,
    "jolly": ("spe", "spa"),
    "naive": ("spe", "spd"),
    "modest": ("spa", "atk"),
    "mild": ("spa", "def"),
    "quiet": ("spa", "spe"),
    "bashful": None,
    "rash": ("spa", "spd"),
    "calm": ("spd", "atk"),
    "gentle": ("spd", "def"),
    "sassy": ("spd", "spe"),
    "careful": ("spd", "spa"),
    "quirky": None,
}


def nature_effect(nature: Optional[str]) -> Optional[Tuple[str, str]]:
    """Return ``(boosted, lowered)`` for a nature name; unknown names are neutral."""

    if not nature:
        return None
    key = nature.strip().lower().replace("nature", "").strip()
    return NATURES.get(key)
