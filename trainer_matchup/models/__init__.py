"""Shared dataclasses for trainer matchup analysis."""

from .battle import (
    STAT_KEYS,
    BattleContext,
    Creature,
    DamageResult,
    EvolutionEdge,
    FinalStats,
    LearnsetEntry,
    Move,
    OpponentAnswer,
    PairScore,
    RosterScore,
    SetupPlan,
    Species,
)
from .team import PokemonSet, Team, TrainerParty

__all__ = [
    "STAT_KEYS",
    "BattleContext",
    "Creature",
    "DamageResult",
    "EvolutionEdge",
    "FinalStats",
    "LearnsetEntry",
    "Move",
    "OpponentAnswer",
    "PairScore",
    "RosterScore",
    "SetupPlan",
    "Species",
    "PokemonSet",
    "Team",
    "TrainerParty",
]
