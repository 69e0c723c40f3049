import json

import pytest

import main

TEAM = """Machop
Level: 100
- Karate Chop
"""

TRAINERS = {
    "trainers": [
        {"name": "Fisherman Ned", "pokemons": [{"species": "Magikarp", "lvl": 5, "moves": ["MOVE_SPLASH"]}]}
    ]
}


@pytest.fixture
def files(tmp_path, tables_payload, monkeypatch):
    for name in ("TRAINER_MATCHUP_FATIGUE", "TRAINER_MATCHUP_CARRY_OVER", "TRAINER_MATCHUP_TABLES"):
        monkeypatch.delenv(name, raising=False)
    team = tmp_path / "team.txt"
    team.write_text(TEAM, encoding="utf-8")
    trainers = tmp_path / "trainers.json"
    trainers.write_text(json.dumps(TRAINERS), encoding="utf-8")
    tables = tmp_path / "tables.json"
    tables.write_text(json.dumps(tables_payload), encoding="utf-8")
    return str(team), str(trainers), str(tables)


def test_cli_prints_a_summary(files, capsys):
    team, trainers, tables = files

    assert main.main([team, "--trainers", trainers, "--tables", tables]) == 0

    out = capsys.readouterr().out
    assert "Fisherman Ned (battle level 5): 10.00 / 10" in out
    assert "vs MAGIKARP: MACHOP scores 10.0" in out
    assert "Average: 10.00 / 10" in out


def test_cli_emits_json(files, capsys):
    team, trainers, tables = files

    main.main([team, "--trainers", trainers, "--tables", tables, "--json", "--no-fatigue"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["average"] == 10.0
    assert payload["trainers"][0]["answers"][0]["answer"] == "MACHOP"


def test_cli_debug_goes_to_stderr(files, capsys):
    team, trainers, tables = files

    main.main([team, "--trainers", trainers, "--tables", tables, "--debug"])

    captured = capsys.readouterr()
    assert "[debug] Running matchup pipeline" in captured.err
    assert "[debug]" not in captured.out


def test_cli_reports_missing_files(files):
    team, _, tables = files

    with pytest.raises(SystemExit, match="File not found"):
        main.main([team, "--trainers", "nope.json", "--tables", tables])
