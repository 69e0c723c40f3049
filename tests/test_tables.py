import json

from trainer_matchup.analysis.damage_calc import DamageCalculator
from trainer_matchup.data.tables import StaticTables, load_tables
from trainer_matchup.data.type_chart import type_effectiveness


def test_identifiers_are_normalised(tables):
    assert tables.species("Mudkip") is tables.species("SPECIES_MUDKIP")
    assert tables.species("mudkip").types == ("water",)
    assert tables.move("Swords Dance") == tables.move("MOVE_SWORDS_DANCE") == tables.move("swords-dance")
    assert tables.move("Swords Dance").power == 0


def test_misses_return_none_or_empty(tables):
    assert tables.species("Missingno") is None
    assert tables.move("Hyper Beam") is None
    assert tables.learnset("Missingno") == []
    assert tables.tm_moves("Missingno") == set()
    assert tables.evolution_edges("Swampert") == []


def test_learnsets_are_sorted_by_level(tables):
    levels = [entry.level for entry in tables.learnset("Machop")]
    assert levels == sorted(levels)


def test_tm_constraints(tables):
    assert tables.tm_moves("Machop") == {"SOLAR_BEAM", "ROCK_THROW"}
    assert tables.tm_moves("Machop", "mid") == {"ROCK_THROW"}
    assert tables.tm_moves("Machop", "early") == set()
    assert tables.tm_moves("Machop", "no-such-segment") == {"SOLAR_BEAM", "ROCK_THROW"}


def test_load_tables_from_disk(tmp_path, tables_payload):
    path = tmp_path / "tables.json"
    path.write_text(json.dumps(tables_payload), encoding="utf-8")

    loaded = load_tables(path)

    assert set(loaded.species_ids()) >= {"MUDKIP", "MACHOP", "SWAMPERT"}
    assert loaded.evolution_edges("Mudkip")[0].target == "MARSHTOMP"


def test_gen3_type_chart():
    assert type_effectiveness("ghost", "normal") == 0
    assert type_effectiveness("ghost", "steel") == 0.5
    assert type_effectiveness("dark", "steel") == 0.5
    assert type_effectiveness("ground", "flying") == 0
    assert type_effectiveness("fire", "grass") == 2
    assert type_effectiveness("fairy", "dragon") == 1
    calc = DamageCalculator()
    assert calc.get_type_effectiveness("ice", ["ice", "water"]) == 0.25
    assert calc.get_type_effectiveness("electric", ["water", "flying"]) == 4


def test_custom_effectiveness_lookup():
    tables = StaticTables(effectiveness_lookup=lambda attack, defender: 0.5)
    assert tables.effectiveness("fire", "grass") == 0.5
