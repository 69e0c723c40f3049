"""Tests for the roster and trainer parsers."""

import json

import pytest

from trainer_matchup.parsers import (
    load_trainers,
    normalize_trainer_iv,
    parse_pokemon_set,
    parse_team,
    parse_trainer,
    parse_trainers,
)

SAMPLE_TEAM = """Swampert @ Leftovers
Ability: Torrent
Level: 40
EVs: 252 HP / 4 Atk / 252 SpD
Adamant Nature
IVs: 0 Spe
- Earthquake
- Surf
- Ice Beam
- Protect

Spike (Machop) (M)
Level: 20
Status: Burned
- Karate Chop
- Bulk Up
"""


def test_parse_team_extracts_pokemon_sets() -> None:
    team = parse_team(SAMPLE_TEAM, name="Hoenn run")

    assert team.name == "Hoenn run"
    assert len(team.pokemon) == 2
    swampert = team.pokemon[0]
    assert swampert.species == "Swampert"
    assert swampert.level == 40
    assert swampert.ability == "Torrent"
    assert swampert.nature == "Adamant"
    assert swampert.evs == {"hp": 252, "atk": 4, "spd": 252}
    assert swampert.ivs == {"spe": 0}
    assert swampert.moves == ["Earthquake", "Surf", "Ice Beam", "Protect"]
    assert swampert.notes == ["Item: Leftovers"]

    machop = team.pokemon[1]
    assert machop.name == "Spike (Machop) (M)"
    assert machop.species == "Machop"
    assert machop.status == "Burned"
    assert machop.moves[-1] == "Bulk Up"


def test_parse_team_rejects_empty_text() -> None:
    with pytest.raises(ValueError):
        parse_team("   \n  ")


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 31), (255, 31), (128, 15), (31, 31), (12, 12), (0, 0), ("bogus", 31)],
)
def test_trainer_ivs_are_normalised(raw, expected) -> None:
    assert normalize_trainer_iv(raw) == expected


def test_parse_pokemon_set_from_trainer_entry() -> None:
    pokemon = parse_pokemon_set(
        {
            "species": "SPECIES_MACHOP",
            "lvl": 17,
            "iv": 255,
            "heldItem": "ITEM_ORAN_BERRY",
            "moves": ["MOVE_KARATE_CHOP", "MOVE_NONE", "MOVE_NONE", "MOVE_NONE"],
        }
    )

    assert pokemon.level == 17
    assert set(pokemon.ivs.values()) == {31}
    assert len(pokemon.ivs) == 6
    assert pokemon.moves == ["MOVE_KARATE_CHOP"]
    assert pokemon.notes == ["Item: ITEM_ORAN_BERRY"]


def test_parse_pokemon_set_accepts_explicit_spreads() -> None:
    pokemon = parse_pokemon_set(
        {"species": "Mudkip", "level": 12, "ivs": {"ATK": 20}, "evs": {"spe": 8}, "status": "burn"}
    )

    assert pokemon.level == 12
    assert pokemon.ivs == {"atk": 20}
    assert pokemon.evs == {"spe": 8}
    assert pokemon.status == "burn"
    assert pokemon.moves == []


def test_parse_pokemon_set_requires_species() -> None:
    with pytest.raises(ValueError):
        parse_pokemon_set({"lvl": 5})


def test_parse_trainer_reports_bad_members() -> None:
    with pytest.raises(ValueError, match="Roxanne"):
        parse_trainer({"name": "Roxanne", "pokemons": [{"lvl": 12}]})
    with pytest.raises(ValueError):
        parse_trainer({"name": "Roxanne"})


def test_parse_trainers_accepts_every_container_shape() -> None:
    trainer = {"name": "Roxanne", "segment": "early", "pokemons": [{"species": "Geodude", "lvl": 12}]}

    assert [t.name for t in parse_trainers(trainer)] == ["Roxanne"]
    assert len(parse_trainers([trainer, trainer])) == 2
    parsed = parse_trainers({"trainers": [trainer]})
    assert parsed[0].segment == "early"
    assert parsed[0].battle_level() == 12
    with pytest.raises(ValueError):
        parse_trainers([])


def test_load_trainers_reads_json(tmp_path) -> None:
    path = tmp_path / "trainers.json"
    path.write_text(
        json.dumps({"trainers": [{"name": "Brawly", "pokemon": [{"species": "Machop", "lvl": 16}]}]}),
        encoding="utf-8",
    )

    trainers = load_trainers(path)

    assert trainers[0].name == "Brawly"
    assert trainers[0].pokemon[0].species == "Machop"
