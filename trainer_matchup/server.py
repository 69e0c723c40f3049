"""FastMCP server exposing trainer matchup tools."""

from __future__ import annotations

from dataclasses import asdict
from typing import Annotated, Any, Dict, List, Optional

from fastmcp import FastMCP

from .analysis import DamageCalculator, derive_stats as derive_final_stats
from .clients import PokeAPIClientError
from .config import load_options_from_env, make_tables
from .parsers import parse_pokemon_set, parse_team, parse_trainer
from .services import MatchupPipeline, creature_to_dict, evaluation_to_dict

app = FastMCP("trainer-matchup", version="0.1.0")
_pipeline = MatchupPipeline(make_tables(), options=load_options_from_env())


@app.tool()
def derive_stats(
    base_stats: Annotated[Dict[str, int], "Base stats keyed hp/atk/def/spa/spd/spe"],
    level: Annotated[int, "Level 1-100"],
    nature: Annotated[Optional[str], "Nature name, e.g. 'Adamant'"] = None,
    ivs: Annotated[Optional[Dict[str, int]], "IVs per stat (missing -> 31)"] = None,
    evs: Annotated[Optional[Dict[str, int]], "EVs per stat (missing -> 0)"] = None,
) -> Dict[str, int]:
    """Compute Gen-3 battle stats from base stats, IVs, EVs, level and nature."""

    return derive_final_stats(base_stats, ivs, evs, level, nature).as_dict()


@app.tool()
def select_moveset(
    species: Annotated[str, "Species name or token (e.g. 'Mudkip')"],
    level: Annotated[int, "Level the moveset should be legal at"],
    constraint: Annotated[Optional[str], "TM availability segment"] = None,
) -> List[str] | str:
    """Pick a representative moveset: setup move, best STAB, coverage, then fill."""

    try:
        return _pipeline.selector.select_moveset(species, level, constraint)
    except PokeAPIClientError as exc:  # pragma: no cover - network failure
        return f"Error fetching data for {species}: {exc}"


@app.tool()
def compute_damage(
    attacker: Annotated[Dict[str, Any], "Attacker set: species, level, nature, ivs, evs, ability, status"],
    defender: Annotated[Dict[str, Any], "Defender set in the same shape"],
    move: Annotated[str, "Move name or token"],
    critical: Annotated[bool, "Apply the flat critical-hit multiplier"] = False,
) -> Dict[str, Any] | str:
    """Sixteen-roll damage distribution for one attack."""

    try:
        ours = _pipeline.build_creature(parse_pokemon_set(attacker), player_owned=True)
        theirs = _pipeline.build_creature(parse_pokemon_set(defender))
        result = DamageCalculator(_pipeline.tables.effectiveness).compute_damage(
            ours, theirs, _pipeline.tables.move(move), critical=critical, context=_pipeline.context
        )
    except PokeAPIClientError as exc:  # pragma: no cover - network failure
        return f"Error fetching data: {exc}"
    payload = result.as_dict()
    if theirs.stats is not None:
        payload["ko_class"] = result.ko_class(theirs.stats.hp)
    return payload


@app.tool()
def score_matchup(
    ours: Annotated[Dict[str, Any], "Our set: species, level, moves, nature, ivs, evs, ability"],
    theirs: Annotated[Dict[str, Any], "Opponent set in the same shape"],
) -> Dict[str, Any] | str:
    """Score one pairing on the 1-10 scale with its offense/defense/speed breakdown."""

    try:
        our_creature = _pipeline.build_creature(parse_pokemon_set(ours), player_owned=True)
        their_creature = _pipeline.build_creature(parse_pokemon_set(theirs))
    except PokeAPIClientError as exc:  # pragma: no cover - network failure
        return f"Error fetching data: {exc}"
    pair = _pipeline.make_scorer().score_pair(our_creature, their_creature)
    return {
        "pair": asdict(pair),
        "ours": creature_to_dict(our_creature),
        "theirs": creature_to_dict(their_creature),
    }


@app.tool()
def score_trainer(
    team_text: Annotated[str, "Showdown export of the planned roster"],
    trainer: Annotated[Dict[str, Any], "Trainer JSON: name, pokemons[species, lvl, iv, moves]"],
) -> Dict[str, Any] | str:
    """Score the planned roster against one trainer party."""

    team = parse_team(team_text)
    party = parse_trainer(trainer)
    try:
        evaluation = _pipeline.evaluate(team, party)
    except PokeAPIClientError as exc:  # pragma: no cover - network failure
        return f"Error fetching data: {exc}"
    return evaluation_to_dict(evaluation)


def run() -> None:
    """Entry point for `python -m trainer_matchup.server` or console script."""

    print("[trainer-matchup] Starting MCP server. Press Ctrl+C to stop.")
    app.run()


if __name__ == "__main__":
    run()
