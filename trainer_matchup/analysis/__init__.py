"""Battle math and matchup scoring."""

from .damage_calc import DamageCalculator
from .evolution import EvolutionGraph
from .matchup import MatchupScorer, hits_to_ko
from .move_selector import MoveSelector
from .options import ScoringOptions
from .roster import RosterAggregator
from .stats import apply_stage, derive_stats

__all__ = [
    "DamageCalculator",
    "EvolutionGraph",
    "MatchupScorer",
    "MoveSelector",
    "RosterAggregator",
    "ScoringOptions",
    "apply_stage",
    "derive_stats",
    "hits_to_ko",
]
