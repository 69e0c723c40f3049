"""Gen-3 stat derivation and stat-stage arithmetic."""

from __future__ import annotations

from typing import Mapping, Optional

from ..data.natures import nature_effect
from ..models import FinalStats

DEFAULT_IV = 31
DEFAULT_EV = 0

MIN_STAGE = -6
MAX_STAGE = 6


def clamp_int(value: float, low: int, high: int) -> int:
    """Truncate toward zero, then clamp into ``[low, high]``."""

    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        number = low
    return max(low, min(high, number))


def calc_hp(base: int, iv: int, ev: int, level: int) -> int:
    base = clamp_int(base, 1, 255)
    iv = clamp_int(iv, 0, 31)
    ev = clamp_int(ev, 0, 255)
    level = clamp_int(level, 1, 100)
    core = ((2 * base + iv + ev // 4) * level) // 100
    return core + level + 10


def calc_other_stat(base: int, iv: int, ev: int, level: int, nature_percent: int = 100) -> int:
    """Non-HP stat. ``nature_percent`` is 110, 100 or 90."""

    base = clamp_int(base, 1, 255)
    iv = clamp_int(iv, 0, 31)
    ev = clamp_int(ev, 0, 255)
    level = clamp_int(level, 1, 100)
    stat = ((2 * base + iv + ev // 4) * level) // 100 + 5
    return (stat * nature_percent) // 100


def derive_stats(
    base_stats: Mapping[str, int],
    ivs: Optional[Mapping[str, int]],
    evs: Optional[Mapping[str, int]],
    level: int,
    nature: Optional[str],
) -> FinalStats:
    """Final battle stats for one creature.

    Missing IV entries default to 31 and missing EV entries to 0. Out-of-range
    numbers are clamped, never rejected.
    """

    ivs = ivs or {}
    evs = evs or {}
    effect = nature_effect(nature)

    def _percent(key: str) -> int:
        if effect is None:
            return 100
        boosted, lowered = effect
        if key == boosted:
            return 110
        if key == lowered:
            return 90
        return 100

    def _other(key: str) -> int:
        return calc_other_stat(
            base_stats.get(key, 1),
            ivs.get(key, DEFAULT_IV),
            evs.get(key, DEFAULT_EV),
            level,
            _percent(key),
        )

    return FinalStats(
        hp=calc_hp(base_stats.get("hp", 1), ivs.get("hp", DEFAULT_IV), evs.get("hp", DEFAULT_EV), level),
        atk=_other("atk"),
        defense=_other("def"),
        spa=_other("spa"),
        spd=_other("spd"),
        spe=_other("spe"),
    )


def stage_ratio(stage: int) -> tuple[int, int]:
    """Numerator/denominator for a stat stage: +1 is 15/10, +6 is 40/10, -6 is 10/40."""

    stage = clamp_int(stage, MIN_STAGE, MAX_STAGE)
    if stage >= 0:
        return 10 + 5 * stage, 10
    return 10, 10 - 5 * stage


def apply_stage(stat: int, stage: int) -> int:
    numerator, denominator = stage_ratio(stage)
    return (stat * numerator) // denominator


def badge_boosted(stat: int) -> int:
    return (stat * 110) // 100
