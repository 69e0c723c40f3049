"""Service layer orchestrating roster evaluation."""

from .matchup_pipeline import MatchupPipeline, creature_to_dict, evaluation_to_dict

__all__ = ["MatchupPipeline", "creature_to_dict", "evaluation_to_dict"]
