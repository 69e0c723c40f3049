"""Representative moveset selection from learnsets and TM availability."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..data.moves import is_impractical, normalize_move, setup_profile
from ..models import Move

MAX_MOVES = 4
STAB_BONUS = 50
SETUP_BONUS = 1000


class MoveSelector:
    """Picks moves for a species at a level when no explicit moveset is given.

    ``tables`` must provide ``species``, ``move``, ``learnset`` and ``tm_moves``
    (see :class:`trainer_matchup.data.tables.StaticTables`).
    """

    def __init__(self, tables) -> None:
        self.tables = tables

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def select_moveset(
        self, species_id: str, level: int, constraint: Optional[str] = None
    ) -> List[str]:
        legal = self._legal_moves(species_id, level, constraint)
        candidates = [token for token in legal if not is_impractical(token)]
        types = self._species_types(species_id)
        resolved = {token: self.tables.move(token) for token in candidates}

        chosen: List[str] = []

        setups = [token for token in candidates if setup_profile(token) is not None]
        if setups:
            chosen.append(_best(setups, lambda t: self._score(resolved[t], types) + SETUP_BONUS))

        damaging = [
            token for token in candidates
            if token not in chosen and resolved[token] is not None and resolved[token].is_damaging
        ]
        stab_moves = [t for t in damaging if resolved[t].type in types]
        stab_type: Optional[str] = None
        if stab_moves:
            pick = _best(stab_moves, lambda t: resolved[t].power)
            chosen.append(pick)
            stab_type = resolved[pick].type

        coverage = [
            t for t in damaging
            if t not in chosen and resolved[t].type != stab_type
        ]
        if coverage and len(chosen) < MAX_MOVES:
            chosen.append(_best(coverage, lambda t: resolved[t].power))

        remaining = [t for t in candidates if t not in chosen]
        remaining.sort(key=lambda t: self._score(resolved[t], types), reverse=True)
        for token in remaining:
            if len(chosen) >= MAX_MOVES:
                break
            chosen.append(token)

        return chosen

    def select_best_damaging_move(
        self, species_id: str, level: int, constraint: Optional[str] = None
    ) -> Optional[str]:
        legal = self._legal_moves(species_id, level, constraint)
        candidates = [token for token in legal if not is_impractical(token)]
        types = self._species_types(species_id)
        resolved = {token: self.tables.move(token) for token in candidates}
        damaging = [t for t in candidates if resolved[t] is not None and resolved[t].is_damaging]
        if damaging:
            return _best(damaging, lambda t: self._score(resolved[t], types))
        return candidates[0] if candidates else None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _legal_moves(self, species_id: str, level: int, constraint: Optional[str]) -> List[str]:
        """Level-up moves learnable by ``level`` followed by available TM moves, deduplicated."""

        ordered: Dict[str, None] = {}
        for entry in self.tables.learnset(species_id):
            if entry.level <= level:
                ordered.setdefault(normalize_move(entry.move), None)
        for token in sorted(self.tables.tm_moves(species_id, constraint)):
            ordered.setdefault(normalize_move(token), None)
        return list(ordered)

    def _species_types(self, species_id: str) -> Sequence[str]:
        species = self.tables.species(species_id)
        if species is None:
            return ()
        return species.types

    @staticmethod
    def _score(move: Optional[Move], types: Sequence[str]) -> int:
        if move is None:
            return 0
        return move.power + (STAB_BONUS if move.type in types else 0)


def _best(tokens: Sequence[str], key) -> str:
    """Highest-keyed token; ties keep the earliest candidate."""

    best = tokens[0]
    best_key = key(best)
    for token in tokens[1:]:
        value = key(token)
        if value > best_key:
            best, best_key = token, value
    return best
