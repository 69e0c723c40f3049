"""Gen-3 trainer matchup scoring: stats, damage, movesets and roster scores."""

from .analysis import (
    DamageCalculator,
    MatchupScorer,
    MoveSelector,
    RosterAggregator,
    ScoringOptions,
    derive_stats,
)
from .data.tables import StaticTables, load_tables
from .models import BattleContext, Creature

__all__ = [
    "BattleContext",
    "Creature",
    "DamageCalculator",
    "MatchupScorer",
    "MoveSelector",
    "RosterAggregator",
    "ScoringOptions",
    "StaticTables",
    "derive_stats",
    "load_tables",
]
