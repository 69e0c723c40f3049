"""Input-side dataclasses: rosters as the user or a trainer file describes them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(slots=True)
class PokemonSet:
    """A single roster entry before it is resolved against the data tables."""

    name: str
    species: Optional[str] = None
    level: Optional[int] = None
    ability: Optional[str] = None
    nature: Optional[str] = None
    status: Optional[str] = None
    evs: Dict[str, int] = field(default_factory=dict)
    ivs: Dict[str, int] = field(default_factory=dict)
    moves: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


@dataclass(slots=True)
class Team:
    """The planned roster being evaluated."""

    name: Optional[str] = None
    pokemon: List[PokemonSet] = field(default_factory=list)

    def add_pokemon(self, pokemon: PokemonSet) -> None:
        self.pokemon.append(pokemon)

    def is_empty(self) -> bool:
        return not self.pokemon


@dataclass(slots=True)
class TrainerParty:
    """A fixed opponent roster, optionally tagged with a progression segment."""

    name: str
    pokemon: List[PokemonSet] = field(default_factory=list)
    segment: Optional[str] = None

    def battle_level(self) -> int:
        """Highest level in the party; parties without levels count as level 1."""

        levels = [p.level for p in self.pokemon if p.level]
        return max([1, *levels])
