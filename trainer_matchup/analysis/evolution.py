"""Evolution graph and the legal-species-at-level traversal."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..data.evolutions import LEVEL, NON_LEVEL_MIN_LEVELS, method_kind
from ..data.tables import normalize_species
from ..models import EvolutionEdge


class EvolutionGraph:
    """Directed graph ``pre-evolution -> evolution`` with typed edges.

    A species' minimum level is the lowest level at which any route can
    produce it: a level edge needs its threshold (and whatever its source
    needs), other edges inherit their source's minimum unless
    ``overrides`` names the target.
    """

    def __init__(
        self,
        edges: Mapping[str, Sequence[EvolutionEdge]],
        *,
        overrides: Optional[Mapping[str, int]] = None,
    ) -> None:
        self._predecessors: Dict[str, List[Tuple[str, EvolutionEdge]]] = {}
        for source, targets in edges.items():
            source_id = normalize_species(source)
            for edge in targets:
                target_id = normalize_species(edge.target)
                self._predecessors.setdefault(target_id, []).append((source_id, edge))
        self._overrides = {
            normalize_species(k): v
            for k, v in (NON_LEVEL_MIN_LEVELS if overrides is None else overrides).items()
        }
        self._memo: Dict[str, int] = {}

    @classmethod
    def from_tables(cls, tables, *, overrides: Optional[Mapping[str, int]] = None) -> "EvolutionGraph":
        edges = {species_id: tables.evolution_edges(species_id) for species_id in tables.species_ids()}
        return cls(edges, overrides=overrides)

    def min_level(self, species_id: str) -> int:
        return self._min_level(normalize_species(species_id), frozenset())

    def ancestors(self, species_id: str) -> List[str]:
        """``species_id`` followed by every species it can evolve from."""

        start = normalize_species(species_id)
        seen: Dict[str, None] = {start: None}
        stack = [start]
        while stack:
            current = stack.pop()
            for source, _ in self._predecessors.get(current, []):
                if source not in seen:
                    seen[source] = None
                    stack.append(source)
        return list(seen)

    def legal_species_at_level(self, species_id: str, level: int) -> str:
        """Latest stage of ``species_id``'s line obtainable by ``level``.

        Returns the species itself when it is already legal, and falls back to
        it when nothing in the line is (which only happens for ``level < 1``).
        """

        start = normalize_species(species_id)
        chosen = start
        chosen_level: Optional[int] = None
        for candidate in self.ancestors(start):
            candidate_level = self.min_level(candidate)
            if candidate_level > level:
                continue
            if chosen_level is None or candidate_level > chosen_level:
                chosen, chosen_level = candidate, candidate_level
        return chosen

    def _min_level(self, species_id: str, visiting: frozenset) -> int:
        if species_id in self._memo:
            return self._memo[species_id]
        predecessors = self._predecessors.get(species_id, [])
        if not predecessors or species_id in visiting:
            return 1
        visiting = visiting | {species_id}
        best: Optional[int] = None
        for source, edge in predecessors:
            inherited = self._min_level(source, visiting)
            if method_kind(edge.method) == LEVEL and _as_level(edge.param) is not None:
                level = max(inherited, _as_level(edge.param))
            else:
                level = max(inherited, self._overrides.get(species_id, inherited))
            if best is None or level < best:
                best = level
        self._memo[species_id] = best or 1
        return self._memo[species_id]


def _as_level(param) -> Optional[int]:
    try:
        return int(param)
    except (TypeError, ValueError):
        return None
