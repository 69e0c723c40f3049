"""FastAPI web server exposing trainer matchup tools via REST API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .analysis import DamageCalculator, derive_stats as derive_final_stats
from .clients import PokeAPIClientError
from .config import load_options_from_env, make_tables
from .parsers import parse_pokemon_set, parse_team, parse_trainers
from .services import MatchupPipeline, evaluation_to_dict

app = FastAPI(
    title="Trainer Matchup Web API",
    description="REST API for scoring planned rosters against trainer parties",
    version="0.1.0",
)

# Shared with the MCP server: one pipeline over one set of tables
_pipeline = MatchupPipeline(make_tables(), options=load_options_from_env())


# Pydantic models for request/response
class DeriveStatsRequest(BaseModel):
    """Request model for stat derivation."""

    base_stats: Dict[str, int]
    level: int
    nature: Optional[str] = None
    ivs: Dict[str, int] = Field(default_factory=dict)
    evs: Dict[str, int] = Field(default_factory=dict)


class ComputeDamageRequest(BaseModel):
    """Request model for a single damage calculation."""

    attacker: Dict[str, Any]
    defender: Dict[str, Any]
    move: str
    critical: bool = False


class ScoreTrainerRequest(BaseModel):
    """Request model for scoring a roster against one or more trainers."""

    team_text: str
    trainers: List[Dict[str, Any]]


class ResultResponse(BaseModel):
    """Response wrapper shared by every endpoint."""

    result: Any


@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve a short landing page."""
    return (
        "<html><body><h1>Trainer Matchup Web API</h1>"
        "<p>See <a href=\"/docs\">/docs</a> for the available endpoints.</p></body></html>"
    )


@app.post("/api/derive_stats", response_model=ResultResponse)
async def derive_stats(request: DeriveStatsRequest) -> ResultResponse:
    """Compute Gen-3 battle stats."""
    stats = derive_final_stats(
        request.base_stats, request.ivs, request.evs, request.level, request.nature
    )
    return ResultResponse(result=stats.as_dict())


@app.get("/api/select_moveset", response_model=ResultResponse)
async def select_moveset(
    species: str = Query(..., description="Species name (e.g., 'Mudkip')"),
    level: int = Query(..., ge=1, le=100, description="Level the moveset must be legal at"),
    constraint: Optional[str] = Query(None, description="TM availability segment"),
) -> ResultResponse:
    """Pick a representative moveset for a species at a level."""
    try:
        moves = _pipeline.selector.select_moveset(species, level, constraint)
    except PokeAPIClientError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to fetch data: {exc}")
    return ResultResponse(result=moves)


@app.post("/api/compute_damage", response_model=ResultResponse)
async def compute_damage(request: ComputeDamageRequest) -> ResultResponse:
    """Sixteen-roll damage distribution for one attack."""
    try:
        attacker = _pipeline.build_creature(parse_pokemon_set(request.attacker), player_owned=True)
        defender = _pipeline.build_creature(parse_pokemon_set(request.defender))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid roster entry: {exc}")
    tables = _pipeline.tables
    result = DamageCalculator(tables.effectiveness).compute_damage(
        attacker,
        defender,
        tables.move(request.move),
        critical=request.critical,
        context=_pipeline.context,
    )
    payload = result.as_dict()
    if defender.stats is not None:
        payload["ko_class"] = result.ko_class(defender.stats.hp)
    return ResultResponse(result=payload)


@app.post("/api/score_trainer", response_model=ResultResponse)
async def score_trainer(request: ScoreTrainerRequest) -> ResultResponse:
    """Score the planned roster against each trainer and report the average."""
    try:
        team = parse_team(request.team_text)
        trainers = parse_trainers(request.trainers)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Failed to parse input: {exc}")
    summary = _pipeline.evaluate_many(team, trainers)
    return ResultResponse(
        result={
            "average": summary["average"],
            "trainers": [evaluation_to_dict(e) for e in summary["evaluations"]],
        }
    )


def run(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Entry point for running the web server."""
    import uvicorn

    print(f"[trainer-matchup-web] Starting web server at http://{host}:{port}")
    print("[trainer-matchup-web] Press Ctrl+C to stop.")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
