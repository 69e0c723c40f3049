"""Shared game-data fixtures: a small Gen-3 table set built in memory."""

from __future__ import annotations

import copy
from typing import Callable

import pytest

from trainer_matchup.data.tables import StaticTables
from trainer_matchup.models import Creature

TABLES_PAYLOAD = {
    "species": {
        "SPECIES_MUDKIP": {
            "base_stats": {"hp": 50, "atk": 70, "def": 50, "spa": 50, "spd": 50, "spe": 40},
            "types": ["water"],
            "abilities": ["TORRENT"],
        },
        "SPECIES_MARSHTOMP": {
            "base_stats": {"hp": 70, "atk": 85, "def": 70, "spa": 60, "spd": 70, "spe": 50},
            "types": ["water", "ground"],
            "abilities": ["TORRENT"],
        },
        "SPECIES_SWAMPERT": {
            "base_stats": {"hp": 100, "atk": 110, "def": 90, "spa": 85, "spd": 90, "spe": 60},
            "types": ["water", "ground"],
            "abilities": ["TORRENT"],
        },
        "SPECIES_MACHOP": {
            "base_stats": {"hp": 70, "atk": 80, "def": 50, "spa": 35, "spd": 35, "spe": 35},
            "types": ["fighting"],
            "abilities": ["GUTS"],
        },
        "SPECIES_GASTLY": {
            "base_stats": {"hp": 30, "atk": 35, "def": 30, "spa": 100, "spd": 35, "spe": 80},
            "types": ["ghost", "poison"],
            "abilities": ["LEVITATE"],
        },
        "SPECIES_GEODUDE": {
            "base_stats": {"hp": 40, "atk": 80, "def": 100, "spa": 30, "spd": 30, "spe": 20},
            "types": ["rock", "ground"],
            "abilities": ["ROCK_HEAD"],
        },
        "SPECIES_SHEDINJA": {
            "base_stats": {"hp": 1, "atk": 90, "def": 45, "spa": 30, "spd": 30, "spe": 40},
            "types": ["bug", "ghost"],
            "abilities": ["WONDER_GUARD"],
        },
        "SPECIES_SPHEAL": {
            "base_stats": {"hp": 70, "atk": 40, "def": 50, "spa": 55, "spd": 50, "spe": 25},
            "types": ["ice", "water"],
            "abilities": ["THICK_FAT"],
        },
        "SPECIES_MAGIKARP": {
            "base_stats": {"hp": 20, "atk": 10, "def": 55, "spa": 15, "spd": 20, "spe": 80},
            "types": ["water"],
            "abilities": ["SWIFT_SWIM"],
        },
    },
    "moves": {
        "MOVE_TACKLE": {"power": 35, "type": "normal", "accuracy": 95, "pp": 35},
        "MOVE_WATER_GUN": {"power": 40, "type": "water", "accuracy": 100, "pp": 25},
        "MOVE_MUD_SHOT": {"power": 55, "type": "ground", "accuracy": 95, "pp": 15},
        "MOVE_SURF": {"power": 95, "type": "water", "accuracy": 100, "pp": 15},
        "MOVE_EARTHQUAKE": {"power": 100, "type": "ground", "accuracy": 100, "pp": 10},
        "MOVE_SHADOW_BALL": {"power": 80, "type": "ghost", "accuracy": 100, "pp": 15},
        "MOVE_KARATE_CHOP": {"power": 50, "type": "fighting", "accuracy": 100, "pp": 25},
        "MOVE_ICE_BEAM": {"power": 95, "type": "ice", "accuracy": 100, "pp": 10},
        "MOVE_FLAMETHROWER": {"power": 95, "type": "fire", "accuracy": 100, "pp": 15},
        "MOVE_ROCK_THROW": {"power": 50, "type": "rock", "accuracy": 90, "pp": 15},
        "MOVE_SOLAR_BEAM": {"power": 120, "type": "grass", "accuracy": 100, "pp": 10},
        "MOVE_SWORDS_DANCE": {"power": 0, "type": "normal", "accuracy": 0, "pp": 30},
        "MOVE_BULK_UP": {"power": 0, "type": "fighting", "accuracy": 0, "pp": 20},
        "MOVE_GROWL": {"power": 0, "type": "normal", "accuracy": 100, "pp": 40},
        "MOVE_SPLASH": {"power": 0, "type": "normal", "accuracy": 0, "pp": 40},
    },
    "learnsets": {
        "SPECIES_MUDKIP": [
            {"level": 1, "move": "MOVE_TACKLE"},
            {"level": 1, "move": "MOVE_GROWL"},
            {"level": 6, "move": "MOVE_WATER_GUN"},
            {"level": 15, "move": "MOVE_MUD_SHOT"},
        ],
        "SPECIES_MACHOP": [
            {"level": 13, "move": "MOVE_BULK_UP"},
            {"level": 1, "move": "MOVE_TACKLE"},
            {"level": 7, "move": "MOVE_KARATE_CHOP"},
        ],
        "SPECIES_MAGIKARP": [{"level": 1, "move": "MOVE_SPLASH"}],
    },
    "tm_learnsets": {
        "SPECIES_MUDKIP": ["MOVE_ICE_BEAM", "MOVE_EARTHQUAKE"],
        "SPECIES_MACHOP": ["MOVE_SOLAR_BEAM", "MOVE_ROCK_THROW"],
    },
    "tm_availability": {
        "early": [],
        "mid": ["MOVE_ROCK_THROW", "MOVE_ICE_BEAM"],
    },
    "evolutions": {
        "SPECIES_MUDKIP": [{"method": "EVO_LEVEL", "param": 16, "target": "SPECIES_MARSHTOMP"}],
        "SPECIES_MARSHTOMP": [{"method": "EVO_LEVEL", "param": 36, "target": "SPECIES_SWAMPERT"}],
    },
}


@pytest.fixture
def tables_payload() -> dict:
    return copy.deepcopy(TABLES_PAYLOAD)


@pytest.fixture
def tables(tables_payload) -> StaticTables:
    return StaticTables.from_dict(tables_payload)


@pytest.fixture
def make_creature(tables) -> Callable[..., Creature]:
    """Factory building a creature straight from the fixture tables (IVs 31, EVs 0)."""

    def _make(species: str, level: int, moves=(), **fields) -> Creature:
        entry = tables.species(species)
        return Creature(
            species=entry.id,
            level=level,
            base_stats=dict(entry.base_stats),
            types=entry.types,
            moves=tuple(moves),
            **fields,
        )

    return _make
