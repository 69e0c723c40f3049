"""High-level pipeline turning parsed rosters into creatures and scoring them."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..analysis import (
    DamageCalculator,
    EvolutionGraph,
    MatchupScorer,
    MoveSelector,
    RosterAggregator,
    ScoringOptions,
)
from ..data.tables import normalize_species
from ..models import BattleContext, Creature, PokemonSet, Team, TrainerParty


class MatchupPipeline:
    """Coordinates species resolution, moveset fill and roster scoring.

    ``tables`` is anything implementing the lookup interface of
    :class:`trainer_matchup.data.tables.StaticTables` (the PokeAPI client
    qualifies).
    """

    def __init__(
        self,
        tables,
        *,
        options: Optional[ScoringOptions] = None,
        context: Optional[BattleContext] = None,
        selector: Optional[MoveSelector] = None,
        devolve: bool = True,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.tables = tables
        self.options = options or ScoringOptions()
        self.context = context or BattleContext()
        self.selector = selector or MoveSelector(tables)
        self.devolve = devolve
        self._graph: Optional[EvolutionGraph] = None
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def build_creature(
        self,
        pokemon: PokemonSet,
        *,
        level: Optional[int] = None,
        player_owned: bool = False,
        constraint: Optional[str] = None,
        devolve: bool = False,
    ) -> Creature:
        level = pokemon.level or level or 1
        species_id = pokemon.species or pokemon.name
        if devolve:
            legal = self._evolution_graph().legal_species_at_level(species_id, level)
            if legal != normalize_species(species_id):
                self._debug(f"{species_id} is not obtainable by level {level}; using {legal}")
                species_id = legal

        species = self.tables.species(species_id)
        if species is None:
            self._debug(f"Unresolved species {species_id}; it will be scored as inactive")
            return Creature(
                species=species_id,
                level=level,
                moves=tuple(pokemon.moves),
                player_owned=player_owned,
            )

        moves = list(pokemon.moves)
        if not moves:
            moves = self.selector.select_moveset(species.id, level, constraint)
            self._debug(f"Selected moves for {species.id} L{level}: {', '.join(moves) or 'none'}")

        return Creature(
            species=species.id,
            level=level,
            base_stats=dict(species.base_stats),
            types=species.types,
            ivs=dict(pokemon.ivs),
            evs=dict(pokemon.evs),
            nature=pokemon.nature,
            ability=pokemon.ability or (species.abilities[0] if species.abilities else None),
            status=pokemon.status,
            moves=tuple(moves),
            player_owned=player_owned,
        )

    def make_scorer(self, context: Optional[BattleContext] = None) -> MatchupScorer:
        return MatchupScorer(
            self.tables.move,
            calculator=DamageCalculator(self.tables.effectiveness),
            options=self.options,
            context=context or self.context,
        )

    def evaluate(
        self,
        team: Team,
        trainer: TrainerParty,
        *,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> Dict[str, Any]:
        battle_level = trainer.battle_level()
        context = BattleContext(
            segment=trainer.segment or self.context.segment,
            badge_boosts=self.context.badge_boosts,
        )
        self._debug(f"Evaluating {trainer.name} at battle level {battle_level}")
        if team.is_empty():
            self._debug("Team is empty; the trainer scores as no result")

        ours = [
            self.build_creature(
                pokemon,
                level=battle_level,
                player_owned=True,
                constraint=context.segment,
                devolve=self.devolve,
            )
            for pokemon in team.pokemon
        ]
        theirs = [
            self.build_creature(pokemon, level=battle_level, constraint=context.segment)
            for pokemon in trainer.pokemon
        ]

        aggregator = RosterAggregator(self.make_scorer(context), debug_logger=self._debug_logger)
        result = aggregator.score_roster(ours, theirs, should_cancel=should_cancel)
        return {
            "trainer": trainer.name,
            "battle_level": battle_level,
            "ours": ours,
            "theirs": theirs,
            "result": result,
        }

    def evaluate_many(
        self,
        team: Team,
        trainers: Iterable[TrainerParty],
        *,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> Dict[str, Any]:
        evaluations: List[Dict[str, Any]] = []
        for trainer in trainers:
            if should_cancel is not None and should_cancel():
                self._debug("Evaluation cancelled before all trainers were scored")
                break
            evaluations.append(self.evaluate(team, trainer, should_cancel=should_cancel))
        scores = [e["result"].score for e in evaluations if e["result"].score is not None]
        return {
            "evaluations": evaluations,
            "average": sum(scores) / len(scores) if scores else None,
        }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _evolution_graph(self) -> EvolutionGraph:
        if self._graph is None:
            self._debug("Building evolution graph")
            self._graph = EvolutionGraph.from_tables(self.tables)
        return self._graph


def creature_to_dict(creature: Creature) -> Dict[str, Any]:
    return {
        "species": creature.species,
        "level": creature.level,
        "types": list(creature.types),
        "ability": creature.ability,
        "moves": list(creature.moves),
        "stats": creature.stats.as_dict() if creature.stats else None,
    }


def evaluation_to_dict(evaluation: Dict[str, Any]) -> Dict[str, Any]:
    """JSON-ready view of one :meth:`MatchupPipeline.evaluate` result."""

    result = evaluation["result"]
    return {
        "trainer": evaluation["trainer"],
        "battle_level": evaluation["battle_level"],
        "score": result.score,
        "cancelled": result.cancelled,
        "skipped": list(result.skipped),
        "answers": [
            {
                "opponent": answer.opponent,
                "answer": answer.best.ours if answer.best else None,
                "score": answer.score,
                "fatigue_penalty": answer.fatigue_penalty,
                "pair": asdict(answer.best) if answer.best else None,
            }
            for answer in result.answers
        ],
        "matrix": [[asdict(pair) for pair in row] for row in result.matrix],
        "ours": [creature_to_dict(c) for c in evaluation["ours"]],
        "theirs": [creature_to_dict(c) for c in evaluation["theirs"]],
    }
