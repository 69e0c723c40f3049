"""In-memory lookup tables consumed by the battle-math core."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Collection, Dict, Iterable, List, Mapping, Optional, Sequence, Set

from ..models import EvolutionEdge, LearnsetEntry, Move, Species
from .moves import normalize_move, normalize_token
from .type_chart import type_effectiveness


def normalize_species(raw: str) -> str:
    return normalize_token(raw, "SPECIES")


class StaticTables:
    """Read-only game data built once by the loading layer and passed to the core.

    Every query normalises its identifier first, so ``"Mudkip"``,
    ``"SPECIES_MUDKIP"`` and ``"mudkip"`` hit the same entry. Misses return
    ``None`` or an empty collection.
    """

    def __init__(
        self,
        *,
        species: Optional[Mapping[str, Species]] = None,
        moves: Optional[Mapping[str, Move]] = None,
        learnsets: Optional[Mapping[str, Sequence[LearnsetEntry]]] = None,
        tm_learnsets: Optional[Mapping[str, Iterable[str]]] = None,
        tm_availability: Optional[Mapping[str, Collection[str]]] = None,
        evolutions: Optional[Mapping[str, Sequence[EvolutionEdge]]] = None,
        effectiveness_lookup: Callable[[str, str], float] = type_effectiveness,
    ) -> None:
        self._species = {normalize_species(k): v for k, v in (species or {}).items()}
        self._moves = {normalize_move(k): v for k, v in (moves or {}).items()}
        self._learnsets = {
            normalize_species(k): sorted(v, key=lambda entry: entry.level)
            for k, v in (learnsets or {}).items()
        }
        self._tm_learnsets = {
            normalize_species(k): [normalize_move(m) for m in v]
            for k, v in (tm_learnsets or {}).items()
        }
        self._tm_availability = {
            k: {normalize_move(m) for m in v} for k, v in (tm_availability or {}).items()
        }
        self._evolutions = {
            normalize_species(k): list(v) for k, v in (evolutions or {}).items()
        }
        self._effectiveness = effectiveness_lookup

    # ------------------------------------------------------------------
    # Lookup interface
    # ------------------------------------------------------------------
    def species(self, species_id: str) -> Optional[Species]:
        return self._species.get(normalize_species(species_id))

    def move(self, token: str) -> Optional[Move]:
        return self._moves.get(normalize_move(token))

    def learnset(self, species_id: str) -> List[LearnsetEntry]:
        return list(self._learnsets.get(normalize_species(species_id), []))

    def tm_moves(self, species_id: str, constraint: Optional[str] = None) -> Set[str]:
        learnable = self._tm_learnsets.get(normalize_species(species_id), [])
        available = self._tm_availability.get(constraint) if constraint else None
        if available is None:
            return set(learnable)
        return {move for move in learnable if move in available}

    def evolution_edges(self, species_id: str) -> List[EvolutionEdge]:
        return list(self._evolutions.get(normalize_species(species_id), []))

    def species_ids(self) -> List[str]:
        return list(self._species)

    def effectiveness(self, attack_type: str, defender_type: str) -> float:
        return self._effectiveness(attack_type, defender_type)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "StaticTables":
        species = {
            key: Species(
                id=normalize_species(key),
                base_stats={k.lower(): int(v) for k, v in entry.get("base_stats", {}).items()},
                types=tuple(t.lower() for t in entry.get("types", []) if t),
                abilities=tuple(entry.get("abilities", [])),
            )
            for key, entry in payload.get("species", {}).items()
        }
        moves = {
            key: Move(
                token=normalize_move(key),
                power=int(entry.get("power") or 0),
                type=(entry.get("type") or "normal").lower(),
                accuracy=int(entry.get("accuracy") or 100),
                pp=int(entry.get("pp") or 1),
            )
            for key, entry in payload.get("moves", {}).items()
        }
        learnsets = {
            key: [LearnsetEntry(level=int(e["level"]), move=normalize_move(e["move"])) for e in entries]
            for key, entries in payload.get("learnsets", {}).items()
        }
        evolutions = {
            key: [
                EvolutionEdge(
                    method=str(e.get("method", "")),
                    param=e.get("param"),
                    target=normalize_species(e["target"]),
                )
                for e in entries
            ]
            for key, entries in payload.get("evolutions", {}).items()
        }
        return cls(
            species=species,
            moves=moves,
            learnsets=learnsets,
            tm_learnsets=payload.get("tm_learnsets", {}),
            tm_availability=payload.get("tm_availability", {}),
            evolutions=evolutions,
        )


def load_tables(path: str | Path) -> StaticTables:
    """Load a tables JSON document from disk."""

    file_path = Path(path)
    with file_path.open(encoding="utf-8") as stream:
        payload: Dict[str, Any] = json.load(stream)
    return StaticTables.from_dict(payload)
