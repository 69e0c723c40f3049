"""Command-line interface for scoring a planned roster against trainer parties."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from trainer_matchup.analysis import ScoringOptions
from trainer_matchup.config import load_options_from_env, make_tables
from trainer_matchup.parsers import load_trainers, parse_team
from trainer_matchup.services import MatchupPipeline, evaluation_to_dict


def _read_team_text(path: str) -> str:
    if path == "-":
        data = sys.stdin.read()
        if not data.strip():
            raise SystemExit("No team text provided on stdin.")
        return data
    file_path = Path(path)
    if not file_path.exists():
        raise SystemExit(f"File not found: {file_path}")
    return file_path.read_text(encoding="utf-8")


def _humanize_evaluation(payload: dict[str, object]) -> str:
    score = payload.get("score")
    header = f"{payload['trainer']} (battle level {payload['battle_level']}): "
    header += "no result" if score is None else f"{score:.2f} / 10"
    lines: list[str] = [header]
    if payload.get("cancelled"):
        lines.append("  (cancelled before every opponent was scored)")

    skipped = payload.get("skipped") or []
    if skipped:
        lines.append(f"  Unresolved roster members: {', '.join(skipped)}")

    for answer in payload.get("answers", []) or []:
        pair = answer.get("pair") or {}
        route = pair.get("route", "direct")
        detail = f"{pair.get('our_best_move') or 'no damaging move'}"
        if route == "setup" and pair.get("setup"):
            detail = f"{pair['setup']['move']} then {pair['setup'].get('ko_move') or detail}"
        flags = []
        if pair.get("short_circuit"):
            flags.append(pair["short_circuit"])
        if pair.get("assumed_boost"):
            flags.append("assumed boost")
        if answer.get("fatigue_penalty"):
            flags.append(f"fatigue -{answer['fatigue_penalty']:g}")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        lines.append(
            f"  - vs {answer['opponent']}: {answer['answer']} scores {answer['score']:.1f}"
            f" via {route} ({detail}){suffix}"
        )
    return "\n".join(lines)


def _debug_print(enabled: bool, message: str) -> None:
    if enabled:
        sys.stderr.write(f"[debug] {message}\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Score a planned Gen-3 roster against fixed trainer parties"
    )
    parser.add_argument(
        "team_file",
        help="Path to a Showdown-style roster export or '-' to read from stdin",
    )
    parser.add_argument(
        "--trainers",
        required=True,
        help="Path to a trainer JSON file (one trainer, a list, or {\"trainers\": [...]})",
    )
    parser.add_argument(
        "--tables",
        help="Path to a game-data tables JSON file (default: $TRAINER_MATCHUP_TABLES or PokeAPI)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the evaluation as JSON",
    )
    parser.add_argument(
        "--no-fatigue",
        action="store_true",
        help="Disable the penalty for reusing the same answer",
    )
    parser.add_argument(
        "--carry-over",
        action="store_true",
        help="Assume boosts from a safe setup persist into later opponents",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print debug progress information to stderr",
    )
    args = parser.parse_args(argv)

    _debug_print(args.debug, f"Arguments parsed: {args}")
    team_text = _read_team_text(args.team_file)
    team = parse_team(team_text)
    _debug_print(args.debug, f"Parsed team with {len(team.pokemon)} Pokémon")

    trainers_path = Path(args.trainers)
    if not trainers_path.exists():
        raise SystemExit(f"File not found: {trainers_path}")
    trainers = load_trainers(trainers_path)
    _debug_print(args.debug, f"Loaded {len(trainers)} trainer parties")

    if args.tables and not Path(args.tables).exists():
        raise SystemExit(f"File not found: {args.tables}")
    tables = make_tables(args.tables)
    _debug_print(args.debug, f"Using tables from {type(tables).__name__}")

    # fatigue is on by default for the CLI; the env var can still turn it off
    options = load_options_from_env(ScoringOptions(enable_fatigue=True))
    if args.no_fatigue:
        options = replace(options, enable_fatigue=False)
    if args.carry_over:
        options = replace(options, assume_carry_over=True)

    pipeline = MatchupPipeline(
        tables,
        options=options,
        debug_logger=(lambda msg: _debug_print(args.debug, msg)),
    )
    _debug_print(args.debug, "Running matchup pipeline")
    summary = pipeline.evaluate_many(team, trainers)
    _debug_print(args.debug, "Pipeline finished")
    payloads = [evaluation_to_dict(e) for e in summary["evaluations"]]

    if args.json:
        json.dump({"average": summary["average"], "trainers": payloads}, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        for payload in payloads:
            print(_humanize_evaluation(payload))
            print()
        average = summary["average"]
        print("Average: " + ("no result" if average is None else f"{average:.2f} / 10"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
