from trainer_matchup.models import BattleContext, PokemonSet, Team, TrainerParty
from trainer_matchup.parsers import parse_team
from trainer_matchup.services import MatchupPipeline, evaluation_to_dict


def _trainer(*members, segment=None) -> TrainerParty:
    return TrainerParty(name="Brawly", pokemon=list(members), segment=segment)


def test_evaluate_devolves_our_roster_to_the_battle_level(tables):
    logs = []
    pipeline = MatchupPipeline(tables, debug_logger=logs.append)
    team = parse_team("Swampert\n- Surf\n- Tackle")
    trainer = _trainer(PokemonSet(name="Machop", species="Machop", level=20, moves=["Karate Chop"]))

    evaluation = pipeline.evaluate(team, trainer)

    assert evaluation["battle_level"] == 20
    ours = evaluation["ours"][0]
    assert ours.species == "MARSHTOMP"
    assert ours.level == 20
    assert ours.player_owned
    assert ours.ability == "TORRENT"
    assert evaluation["theirs"][0].player_owned is False
    assert evaluation["result"].has_result
    assert any("MARSHTOMP" in line for line in logs)


def test_evaluate_keeps_a_legal_species_as_is(tables):
    pipeline = MatchupPipeline(tables)
    team = Team(pokemon=[PokemonSet(name="Swampert", species="Swampert", moves=["Surf"])])
    trainer = _trainer(PokemonSet(name="Machop", species="Machop", level=40, moves=["Karate Chop"]))

    assert pipeline.evaluate(team, trainer)["ours"][0].species == "SWAMPERT"
    assert MatchupPipeline(tables, devolve=False).evaluate(
        team, _trainer(PokemonSet(name="Machop", species="Machop", level=5))
    )["ours"][0].species == "SWAMPERT"


def test_missing_movesets_are_filled_for_the_segment(tables):
    pipeline = MatchupPipeline(tables)
    team = Team(pokemon=[PokemonSet(name="Mudkip", species="Mudkip")])
    trainer = _trainer(PokemonSet(name="Machop", species="Machop", level=20), segment="early")

    evaluation = pipeline.evaluate(team, trainer)

    mudkip_moves = set(evaluation["ours"][0].moves)
    assert mudkip_moves
    assert mudkip_moves <= {"TACKLE", "GROWL", "WATER_GUN", "MUD_SHOT"}
    machop_moves = set(evaluation["theirs"][0].moves)
    assert "KARATE_CHOP" in machop_moves
    assert "SOLAR_BEAM" not in machop_moves


def test_unresolved_species_are_reported_and_skipped(tables):
    logs = []
    pipeline = MatchupPipeline(tables, debug_logger=logs.append)
    team = parse_team("Missingno\n- Tackle\n\nMachop\nLevel: 100\n- Karate Chop")
    trainer = _trainer(PokemonSet(name="Magikarp", species="Magikarp", level=5, moves=["Splash"]))

    payload = evaluation_to_dict(pipeline.evaluate(team, trainer))

    assert payload["skipped"] == ["Missingno"]
    assert payload["score"] == 10.0
    assert payload["answers"][0]["answer"] == "MACHOP"
    assert payload["ours"][0]["stats"] is None
    assert any("Unresolved species Missingno" in line for line in logs)


def test_evaluate_many_averages_scored_trainers(tables):
    pipeline = MatchupPipeline(tables, context=BattleContext())
    team = parse_team("Machop\nLevel: 100\n- Karate Chop")
    trainers = [
        _trainer(PokemonSet(name="Magikarp", species="Magikarp", level=5, moves=["Splash"])),
        TrainerParty(name="Empty"),
    ]

    summary = pipeline.evaluate_many(team, trainers)

    assert len(summary["evaluations"]) == 2
    assert summary["evaluations"][1]["result"].score is None
    assert summary["average"] == 10.0


def test_evaluate_many_stops_when_cancelled(tables):
    pipeline = MatchupPipeline(tables)
    team = parse_team("Machop\n- Karate Chop")
    trainer = _trainer(PokemonSet(name="Magikarp", species="Magikarp", level=5, moves=["Splash"]))

    summary = pipeline.evaluate_many(team, [trainer, trainer], should_cancel=lambda: True)

    assert summary["evaluations"] == []
    assert summary["average"] is None


def test_empty_team_is_logged_and_scores_no_result(tables):
    logs = []
    pipeline = MatchupPipeline(tables, debug_logger=logs.append)
    trainer = _trainer(PokemonSet(name="Machop", species="Machop", level=20, moves=["Karate Chop"]))

    evaluation = pipeline.evaluate(Team(), trainer)

    assert evaluation["ours"] == []
    assert evaluation["result"].score is None
    assert any("Team is empty" in line for line in logs)
