"""Tunable heuristics for pair scoring and roster aggregation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScoringOptions:
    """Heuristic constants.

    None of these come from the game itself; they are judgement calls about
    how risky a setup turn is and how much a reused answer should be trusted.
    """

    # setup-then-sweep safety: worst-case hit as a fraction of our HP
    safe_fraction: float = 1 / 3
    risky_fraction: float = 1 / 2
    all_in_safe_fraction: float = 1 / 4
    all_in_risky_fraction: float = 1 / 2
    safe_score: float = 10.0
    risky_score: float = 9.0
    unsafe_score: float = 8.0
    extra_use_penalty: float = 1.0

    # boosts assumed to persist into later opponents after a safe setup (+6 = x4)
    assume_carry_over: bool = False
    carry_over_stage: int = 6

    # fatigue
    enable_fatigue: bool = False
    fatigue_penalty: float = 1.0
    fatigue_hp_loss_threshold: float = 0.15

    critical: bool = False
