"""Roster-versus-roster aggregation over pairwise matchup scores."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from ..data.moves import setup_profile
from ..models import Creature, OpponentAnswer, PairScore, RosterScore
from .matchup import MatchupScorer
from .options import ScoringOptions


class RosterAggregator:
    """Scores our roster against one opponent roster.

    Every opponent member is scored against every resolved member of our
    roster; the best pair total is that member's answer and the roster score
    is the mean of the answers.
    """

    def __init__(
        self,
        scorer: MatchupScorer,
        *,
        options: Optional[ScoringOptions] = None,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.scorer = scorer
        self.options = options or scorer.options
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    def score_roster(
        self,
        ours: Sequence[Creature],
        theirs: Sequence[Creature],
        *,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> RosterScore:
        skipped = [creature.species for creature in ours if not creature.resolved]
        usable = [index for index, creature in enumerate(ours) if creature.resolved]
        if skipped:
            self._debug(f"Skipping unresolved roster members: {', '.join(skipped)}")
        if not usable or not theirs:
            self._debug("No resolvable roster or empty opponent roster; no result")
            return RosterScore(score=None, skipped=skipped)

        result = RosterScore(score=None, skipped=skipped)
        carried: Dict[int, Dict[str, int]] = {}
        reuse_counts: Dict[int, int] = {}

        for opponent in theirs:
            if should_cancel is not None and should_cancel():
                self._debug("Roster scoring cancelled")
                result.cancelled = True
                break

            row = [
                self.scorer.score_pair(ours[index], opponent, carried_stages=carried.get(index))
                for index in usable
            ]
            result.matrix.append(row)
            position = _best_position(row)
            chosen = usable[position]
            best = row[position]
            answer = OpponentAnswer(opponent=opponent.species, best=best, chosen_index=chosen)

            reuse_counts[chosen] = reuse_counts.get(chosen, 0) + 1
            if self.options.enable_fatigue:
                answer.fatigue_penalty = self._fatigue_penalty(reuse_counts[chosen], best)
            result.answers.append(answer)
            self._debug(
                f"{opponent.species}: best answer {best.ours} ({best.route}) "
                f"score={answer.score:.2f}"
            )

            if self.options.assume_carry_over and chosen not in carried:
                boosts = self._carried_boosts(best)
                if boosts:
                    self._debug(f"Assuming {best.ours} keeps {boosts} into later opponents")
                    carried[chosen] = boosts

        if result.answers:
            result.score = sum(answer.score for answer in result.answers) / len(result.answers)
        return result

    def _fatigue_penalty(self, uses: int, best: PairScore) -> float:
        if uses < 2 or best.hp_loss_pct < self.options.fatigue_hp_loss_threshold:
            return 0.0
        return self.options.fatigue_penalty * (uses - 1)

    def _carried_boosts(self, best: PairScore) -> Dict[str, int]:
        plan = best.setup
        if best.route != "setup" or plan is None or plan.safety != "safe":
            return {}
        profile = setup_profile(plan.move)
        if profile is None:
            return {}
        return {stat: self.options.carry_over_stage for stat in profile.offensive_stats}


def _best_position(row: List[PairScore]) -> int:
    """Index of the highest total; ties keep the earliest roster slot."""

    position = 0
    for index, pair in enumerate(row):
        if pair.total > row[position].total:
            position = index
    return position
