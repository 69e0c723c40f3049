"""Core dataclasses for battle math and matchup scoring."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from ..data.type_chart import is_physical_type

STAT_KEYS: Tuple[str, ...] = ("hp", "atk", "def", "spa", "spd", "spe")

BURN_STATUSES = {"burned", "burn", "brn"}
HEALTHY_STATUSES = {"", "none", "healthy", "ok"}


@dataclass(frozen=True, slots=True)
class Species:
    """Static species entry: base stats keyed by ``STAT_KEYS``, one or two types."""

    id: str
    base_stats: Dict[str, int]
    types: Tuple[str, ...]
    abilities: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Move:
    """Catalog entry for a move. ``power == 0`` marks a non-damaging move."""

    token: str
    power: int
    type: str
    accuracy: int = 100
    pp: int = 1

    @property
    def category(self) -> str:
        return "physical" if is_physical_type(self.type) else "special"

    @property
    def is_damaging(self) -> bool:
        return self.power > 0


@dataclass(frozen=True, slots=True)
class LearnsetEntry:
    level: int
    move: str


@dataclass(frozen=True, slots=True)
class EvolutionEdge:
    """Directed edge ``source -> target``; ``param`` is a level for level-like methods."""

    method: str
    param: Optional[int | str]
    target: str


@dataclass(frozen=True, slots=True)
class FinalStats:
    hp: int
    atk: int
    defense: int
    spa: int
    spd: int
    spe: int

    def get(self, key: str) -> int:
        if key == "def":
            return self.defense
        return getattr(self, key)

    def as_dict(self) -> Dict[str, int]:
        return {key: self.get(key) for key in STAT_KEYS}


@dataclass(frozen=True, slots=True)
class BattleContext:
    """Progression-dependent inputs that would otherwise be ambient state.

    ``segment`` is the TM availability constraint handed to the move selector,
    ``badge_boosts`` lists stat keys that get the x1.1 badge bonus on the
    player's side.
    """

    segment: Optional[str] = None
    badge_boosts: FrozenSet[str] = frozenset()


@dataclass(frozen=True, slots=True)
class Creature:
    """A battle-ready instance.

    ``stats`` is derived from the other fields when the instance is created.
    Use :meth:`with_changes` to edit an input; it returns a new creature with
    freshly derived stats. ``base_stats`` is ``None`` when the species could not
    be resolved, in which case ``stats`` is ``None`` as well.
    """

    species: str
    level: int
    base_stats: Optional[Dict[str, int]] = None
    types: Tuple[str, ...] = ()
    ivs: Dict[str, int] = field(default_factory=dict)
    evs: Dict[str, int] = field(default_factory=dict)
    nature: Optional[str] = None
    ability: Optional[str] = None
    status: Optional[str] = None
    moves: Tuple[str, ...] = ()
    player_owned: bool = False
    stats: Optional[FinalStats] = field(init=False, default=None, compare=False)

    def __post_init__(self) -> None:
        # Imported here because the stat deriver depends on FinalStats above.
        from ..analysis.stats import derive_stats

        if self.base_stats is None:
            return
        derived = derive_stats(self.base_stats, self.ivs, self.evs, self.level, self.nature)
        object.__setattr__(self, "stats", derived)

    @property
    def resolved(self) -> bool:
        return self.stats is not None

    @property
    def is_burned(self) -> bool:
        return (self.status or "").strip().lower() in BURN_STATUSES

    @property
    def has_status(self) -> bool:
        return (self.status or "").strip().lower() not in HEALTHY_STATUSES

    def with_changes(self, **changes) -> "Creature":
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True, slots=True)
class DamageResult:
    """Sixteen-roll damage distribution for one attacker/defender/move triple."""

    rolls: Tuple[int, ...]
    move: Optional[str] = None
    power: int = 0
    move_type: Optional[str] = None
    category: Optional[str] = None
    stab: bool = False
    effectiveness: float = 1.0
    raw_base: int = 0
    critical: bool = False
    notes: Tuple[str, ...] = ()

    @property
    def min(self) -> int:
        return self.rolls[0] if self.rolls else 0

    @property
    def max(self) -> int:
        return self.rolls[-1] if self.rolls else 0

    @property
    def expected(self) -> float:
        if not self.rolls:
            return 0.0
        return sum(self.rolls) / len(self.rolls)

    @property
    def is_zero(self) -> bool:
        return self.max == 0

    def ko_class(self, defender_hp: int) -> str:
        """Bucket this result against a defender's HP the way the route planner reads it."""

        if self.max == 0:
            return "NO_DAMAGE"
        if self.min >= defender_hp:
            return "OHKO_GUAR"
        if self.max >= defender_hp:
            return "OHKO_LIKELY"
        if self.min * 2 >= defender_hp:
            return "TWOHKO_GUAR"
        if self.max * 2 >= defender_hp:
            return "TWOHKO_LIKELY"
        return "THREEPLUS"

    def as_dict(self) -> Dict[str, object]:
        return {
            "move": self.move,
            "rolls": list(self.rolls),
            "min": self.min,
            "max": self.max,
            "expected": self.expected,
            "power": self.power,
            "type": self.move_type,
            "category": self.category,
            "stab": self.stab,
            "effectiveness": self.effectiveness,
            "raw_base": self.raw_base,
            "critical": self.critical,
            "notes": list(self.notes),
        }


@dataclass(slots=True)
class SetupPlan:
    """Evidence for the setup-then-sweep route of a pairing."""

    move: str
    safety: str  # "safe", "risky", "unsafe"
    uses: int
    worst_case_fraction: float
    stages: Dict[str, int] = field(default_factory=dict)
    ko_move: Optional[str] = None
    ko_accuracy: Optional[int] = None
    score: float = 0.0


@dataclass(slots=True)
class PairScore:
    """Score for one (ours, theirs) ordered pair."""

    ours: str
    theirs: str
    total: float
    offense: int = 0
    defense: int = 0
    speed: float = 0.0
    route: str = "direct"
    short_circuit: Optional[str] = None
    our_best_move: Optional[str] = None
    their_best_move: Optional[str] = None
    our_expected: float = 0.0
    their_expected: float = 0.0
    our_hits_to_ko: Optional[int] = None
    their_hits_to_ko: Optional[int] = None
    hp_loss_pct: float = 0.0
    setup: Optional[SetupPlan] = None
    assumed_boost: bool = False


@dataclass(slots=True)
class OpponentAnswer:
    """Best answer from our roster to one opponent member."""

    opponent: str
    best: Optional[PairScore]
    chosen_index: Optional[int] = None
    fatigue_penalty: float = 0.0

    @property
    def score(self) -> float:
        if self.best is None:
            return 0.0
        return max(1.0, min(10.0, self.best.total - self.fatigue_penalty))


@dataclass(slots=True)
class RosterScore:
    """Aggregate for one opponent roster. ``score is None`` means no result."""

    score: Optional[float]
    answers: List[OpponentAnswer] = field(default_factory=list)
    matrix: List[List[PairScore]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def has_result(self) -> bool:
        return self.score is not None
