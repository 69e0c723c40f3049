"""Roster parsers."""

from .showdown import parse_team
from .trainers import (
    load_trainers,
    normalize_trainer_iv,
    parse_pokemon_set,
    parse_trainer,
    parse_trainers,
)

__all__ = [
    "load_trainers",
    "normalize_trainer_iv",
    "parse_pokemon_set",
    "parse_team",
    "parse_trainer",
    "parse_trainers",
]
