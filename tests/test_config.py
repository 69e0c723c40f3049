import pytest

from trainer_matchup.analysis import ScoringOptions
from trainer_matchup.clients import PokeAPIClient
from trainer_matchup.config import load_options_from_env, make_tables
from trainer_matchup.data.tables import StaticTables

ENV_VARS = (
    "TRAINER_MATCHUP_FATIGUE",
    "TRAINER_MATCHUP_FATIGUE_PENALTY",
    "TRAINER_MATCHUP_FATIGUE_THRESHOLD",
    "TRAINER_MATCHUP_CARRY_OVER",
    "TRAINER_MATCHUP_TABLES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_come_from_the_base_options():
    assert load_options_from_env() == ScoringOptions()
    assert load_options_from_env(ScoringOptions(enable_fatigue=True)).enable_fatigue


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TRAINER_MATCHUP_FATIGUE", "yes")
    monkeypatch.setenv("TRAINER_MATCHUP_FATIGUE_PENALTY", "2.5")
    monkeypatch.setenv("TRAINER_MATCHUP_CARRY_OVER", "0")

    options = load_options_from_env(ScoringOptions(assume_carry_over=True))

    assert options.enable_fatigue
    assert options.fatigue_penalty == 2.5
    assert not options.assume_carry_over


def test_bad_numbers_are_rejected(monkeypatch):
    monkeypatch.setenv("TRAINER_MATCHUP_FATIGUE_THRESHOLD", "lots")

    with pytest.raises(ValueError, match="TRAINER_MATCHUP_FATIGUE_THRESHOLD"):
        load_options_from_env()


def test_make_tables_prefers_a_tables_file(monkeypatch, tmp_path):
    path = tmp_path / "tables.json"
    path.write_text('{"species": {"SPECIES_MUDKIP": {"types": ["water"]}}}', encoding="utf-8")

    assert isinstance(make_tables(str(path)), StaticTables)
    monkeypatch.setenv("TRAINER_MATCHUP_TABLES", str(path))
    assert make_tables().species("Mudkip").types == ("water",)
    monkeypatch.delenv("TRAINER_MATCHUP_TABLES")
    assert isinstance(make_tables(), PokeAPIClient)
