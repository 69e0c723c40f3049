"""Pairwise matchup scoring: direct exchange and setup-then-sweep routes."""

from __future__ import annotations

import math
from typing import Callable, Dict, Mapping, Optional, Tuple

from ..data.moves import SetupProfile, normalize_move, setup_profile
from ..models import BattleContext, Creature, DamageResult, Move, PairScore, SetupPlan
from .damage_calc import DamageCalculator
from .options import ScoringOptions
from .stats import MAX_STAGE, apply_stage, badge_boosted

MAX_SCORE = 10.0
MIN_SCORE = 1.0

Hit = Tuple[Move, DamageResult]


def hits_to_ko(attacker_expected: float, defender_max_hp: int) -> Optional[int]:
    """Hits needed at the expected roll; ``None`` when the attacker cannot KO."""

    if attacker_expected <= 0:
        return None
    return max(1, math.ceil(defender_max_hp / attacker_expected))


def offense_points(our_hits: Optional[int]) -> int:
    return {1: 3, 2: 2, 3: 1}.get(our_hits or 0, 0)


def defense_points(their_hits: Optional[int]) -> int:
    if their_hits is None or their_hits >= 6:
        return 6
    return max(1, min(6, their_hits))


def speed_points(our_speed: int, their_speed: int) -> float:
    if our_speed > their_speed:
        return 1.0
    if our_speed == their_speed:
        return 0.5
    return 0.0


def accuracy_tier(accuracy: int) -> float:
    if accuracy >= 100:
        return 10.0
    if accuracy >= 90:
        return 9.0
    if accuracy >= 80:
        return 8.0
    return 7.0


def estimate_hp_loss(
    our_hits: Optional[int], outspeeds: bool, their_expected: float, our_hp: int
) -> float:
    """Fraction of our HP lost before we finish the opponent, clamped to [0, 1]."""

    if their_expected <= 0:
        return 0.0
    if our_hits is None or our_hp <= 0:
        return 1.0
    hits_taken = our_hits - 1 if outspeeds else our_hits
    return max(0.0, min(1.0, hits_taken * their_expected / our_hp))


class MatchupScorer:
    """Turns two creatures and their movesets into a bounded 1..10 pair score."""

    def __init__(
        self,
        move_lookup: Callable[[str], Optional[Move]],
        *,
        calculator: Optional[DamageCalculator] = None,
        options: Optional[ScoringOptions] = None,
        context: Optional[BattleContext] = None,
    ) -> None:
        self.move_lookup = move_lookup
        self.calculator = calculator or DamageCalculator()
        self.options = options or ScoringOptions()
        self.context = context or BattleContext()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def score_pair(
        self,
        ours: Creature,
        theirs: Creature,
        *,
        carried_stages: Optional[Mapping[str, int]] = None,
    ) -> PairScore:
        if ours.stats is None:
            return PairScore(ours=ours.species, theirs=theirs.species, total=MIN_SCORE)

        direct = self._score_direct(ours, theirs, dict(carried_stages or {}))
        if carried_stages:
            direct.assumed_boost = True
            return direct

        plan = self._best_setup_plan(ours, theirs)
        if plan is None:
            return direct
        direct.setup = plan
        if plan.score > direct.total or (plan.score == direct.total == MAX_SCORE):
            direct.total = plan.score
            direct.route = "setup"
            direct.short_circuit = None
            direct.hp_loss_pct = self._setup_hp_loss(ours, theirs, plan)
        return direct

    def best_hit(
        self,
        attacker: Creature,
        defender: Creature,
        *,
        attacker_stages: Optional[Mapping[str, int]] = None,
        defender_stages: Optional[Mapping[str, int]] = None,
    ) -> Optional[Hit]:
        """Moveset entry with the highest expected damage.

        Non-damaging and unresolvable moves are skipped. On equal expected
        damage a move the defender is not immune to wins.
        """

        best: Optional[Hit] = None
        best_key: Optional[tuple[float, bool]] = None
        for token in attacker.moves:
            move = self.move_lookup(token)
            if move is None or not move.is_damaging:
                continue
            result = self.calculator.compute_damage(
                attacker,
                defender,
                move,
                critical=self.options.critical,
                context=self.context,
                attacker_stages=attacker_stages,
                defender_stages=defender_stages,
            )
            key = (result.expected, result.effectiveness > 0)
            if best_key is None or key > best_key:
                best, best_key = (move, result), key
        return best

    # ------------------------------------------------------------------
    # Direct route
    # ------------------------------------------------------------------
    def _score_direct(
        self, ours: Creature, theirs: Creature, attacker_stages: Dict[str, int]
    ) -> PairScore:
        our_hit = self.best_hit(ours, theirs, attacker_stages=attacker_stages)
        their_hit = self.best_hit(theirs, ours)
        our_expected = our_hit[1].expected if our_hit else 0.0
        their_expected = their_hit[1].expected if their_hit else 0.0

        our_hp = ours.stats.hp
        their_hp = theirs.stats.hp if theirs.stats else 0
        our_hits = hits_to_ko(our_expected, their_hp)
        their_hits = hits_to_ko(their_expected, our_hp)

        offense = offense_points(our_hits)
        defense = defense_points(their_hits)
        speed = speed_points(self._speed(ours, attacker_stages), self._speed(theirs, {}))

        short_circuit: Optional[str] = None
        if speed == 1.0 and our_hits == 1:
            short_circuit = "outspeed_ohko"
        elif their_expected == 0 and our_expected > 0:
            short_circuit = "opponent_cannot_damage"
        total = MAX_SCORE if short_circuit else min(MAX_SCORE, offense + defense + speed)

        return PairScore(
            ours=ours.species,
            theirs=theirs.species,
            total=float(total),
            offense=offense,
            defense=defense,
            speed=speed,
            short_circuit=short_circuit,
            our_best_move=our_hit[0].token if our_hit else None,
            their_best_move=their_hit[0].token if their_hit else None,
            our_expected=our_expected,
            their_expected=their_expected,
            our_hits_to_ko=our_hits,
            their_hits_to_ko=their_hits,
            hp_loss_pct=estimate_hp_loss(our_hits, speed == 1.0, their_expected, our_hp),
        )

    def _speed(self, creature: Creature, stages: Mapping[str, int]) -> int:
        if creature.stats is None:
            return 0
        speed = creature.stats.spe
        if creature.player_owned and "spe" in self.context.badge_boosts:
            speed = badge_boosted(speed)
        return apply_stage(speed, stages.get("spe", 0))

    # ------------------------------------------------------------------
    # Setup-then-sweep route
    # ------------------------------------------------------------------
    def _best_setup_plan(self, ours: Creature, theirs: Creature) -> Optional[SetupPlan]:
        best: Optional[SetupPlan] = None
        for token in ours.moves:
            profile = setup_profile(token)
            if profile is None:
                continue
            plan = self._plan_setup(ours, theirs, token, profile)
            if plan is not None and (best is None or plan.score > best.score):
                best = plan
        return best

    def _plan_setup(
        self, ours: Creature, theirs: Creature, token: str, profile: SetupProfile
    ) -> Optional[SetupPlan]:
        options = self.options
        hp = ours.stats.hp
        current = self.best_hit(theirs, ours)
        worst = current[1].max if current else 0
        if worst >= hp:
            return None

        if profile.all_in:
            safe_t, risky_t = options.all_in_safe_fraction, options.all_in_risky_fraction
        else:
            safe_t, risky_t = options.safe_fraction, options.risky_fraction

        uses = 1
        stages = _stages_after(profile, uses)
        fraction = worst / hp
        if profile.grants_bulk:
            fraction = self._worst_fraction(ours, theirs, stages)

        if fraction < safe_t:
            safety, safety_score = "safe", options.safe_score
        elif fraction < risky_t:
            safety, safety_score = "risky", options.risky_score
        else:
            safety, safety_score = "unsafe", options.unsafe_score
            if profile.grants_bulk:
                uses, stages, fraction, reached = self._uses_until_safe(
                    ours, theirs, profile, safe_t, worst
                )
                penalty = options.extra_use_penalty * (uses - 1)
                if not reached:
                    penalty += options.extra_use_penalty
                safety_score = max(MIN_SCORE, safety_score - penalty)

        plan = SetupPlan(
            move=normalize_move(token),
            safety=safety,
            uses=uses,
            worst_case_fraction=fraction,
            stages=stages,
        )
        plan.score = float(min(safety_score, self._ko_cap(ours, theirs, stages, plan)))
        return plan

    def _worst_fraction(
        self, ours: Creature, theirs: Creature, stages: Mapping[str, int]
    ) -> float:
        defensive = {k: v for k, v in stages.items() if k in ("def", "spd")}
        hit = self.best_hit(theirs, ours, defender_stages=defensive)
        return (hit[1].max if hit else 0) / ours.stats.hp

    def _uses_until_safe(
        self,
        ours: Creature,
        theirs: Creature,
        profile: SetupProfile,
        safe_t: float,
        first_hit: int,
    ) -> tuple[int, Dict[str, int], float, bool]:
        """Keep setting up while we survive; stop once the worst hit drops below ``safe_t``."""

        hp = ours.stats.hp
        taken = first_hit
        uses = 1
        stages = _stages_after(profile, uses)
        fraction = self._worst_fraction(ours, theirs, stages)
        for next_uses in range(2, _max_uses(profile) + 1):
            if taken + fraction * hp >= hp:
                break
            taken += int(fraction * hp)
            uses = next_uses
            stages = _stages_after(profile, uses)
            fraction = self._worst_fraction(ours, theirs, stages)
            if fraction < safe_t:
                return uses, stages, fraction, True
        return uses, stages, fraction, fraction < safe_t

    def _ko_cap(
        self, ours: Creature, theirs: Creature, stages: Dict[str, int], plan: SetupPlan
    ) -> float:
        """Cap on the setup score: the accuracy tier of a guaranteed one-hit KO, if any."""

        their_hp = theirs.stats.hp if theirs.stats else 0
        ko: Optional[Tuple[Move, DamageResult]] = None
        for token in ours.moves:
            move = self.move_lookup(token)
            if move is None or not move.is_damaging:
                continue
            result = self.calculator.compute_damage(
                ours, theirs, move, critical=self.options.critical, context=self.context,
                attacker_stages=stages,
            )
            if their_hp and result.min >= their_hp:
                if ko is None or (move.accuracy, result.min) > (ko[0].accuracy, ko[1].min):
                    ko = (move, result)
        if ko is not None:
            plan.ko_move = ko[0].token
            plan.ko_accuracy = ko[0].accuracy
            return accuracy_tier(ko[0].accuracy)
        return MAX_SCORE

    def _setup_hp_loss(self, ours: Creature, theirs: Creature, plan: SetupPlan) -> float:
        hit = self.best_hit(theirs, ours)
        if hit is None or hit[1].expected <= 0:
            return 0.0
        return max(0.0, min(1.0, plan.uses * hit[1].expected / ours.stats.hp))


def _stages_after(profile: SetupProfile, uses: int) -> Dict[str, int]:
    return {
        stat: max(-MAX_STAGE, min(MAX_STAGE, boost * uses))
        for stat, boost in profile.boosts.items()
    }


def _max_uses(profile: SetupProfile) -> int:
    positive = [boost for boost in profile.boosts.values() if boost > 0]
    if not positive:
        return 1
    return max(math.ceil(MAX_STAGE / boost) for boost in positive)
