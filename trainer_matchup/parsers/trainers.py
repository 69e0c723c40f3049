"""Loader for trainer party JSON as produced by the trainer-table extractor."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from ..models import STAT_KEYS, PokemonSet, TrainerParty

MAX_IV = 31
MAX_IV_BYTE = 255


def byte_iv_to_31(value: Any) -> int:
    """Scale a 0-255 stored IV to the 0-31 per-stat range."""

    try:
        number = int(value)
    except (TypeError, ValueError):
        return 0
    number = max(0, min(MAX_IV_BYTE, number))
    return (number * MAX_IV) // MAX_IV_BYTE


def normalize_trainer_iv(value: Any) -> int:
    """Bytes above 31 are rescaled, small values clamped, missing values become 31."""

    if value is None:
        return MAX_IV
    try:
        number = int(value)
    except (TypeError, ValueError):
        return MAX_IV
    if number > MAX_IV:
        return byte_iv_to_31(number)
    return max(0, number)


def parse_pokemon_set(raw: Mapping[str, Any]) -> PokemonSet:
    """Build a roster entry from a JSON object.

    Accepts the trainer-table keys (``lvl``, a scalar ``iv``, ``heldItem``)
    as well as ``level`` and per-stat ``ivs`` / ``evs`` mappings.
    """

    species = raw.get("species")
    if not species:
        raise ValueError("Roster entry is missing a species")
    level = raw.get("lvl", raw.get("level"))
    if "ivs" in raw:
        ivs = {str(k).lower(): int(v) for k, v in (raw.get("ivs") or {}).items()}
    else:
        iv = normalize_trainer_iv(raw.get("iv"))
        ivs = {stat: iv for stat in STAT_KEYS}
    return PokemonSet(
        name=str(raw.get("name") or species),
        species=str(species),
        level=int(level) if level is not None else None,
        ability=raw.get("ability"),
        nature=raw.get("nature"),
        status=raw.get("status"),
        evs={str(k).lower(): int(v) for k, v in (raw.get("evs") or {}).items()},
        ivs=ivs,
        moves=[m for m in raw.get("moves", []) if m and m != "MOVE_NONE"],
        notes=[f"Item: {raw['heldItem']}"] if raw.get("heldItem") else [],
    )


def parse_trainer(payload: Mapping[str, Any]) -> TrainerParty:
    name = payload.get("name")
    members = payload.get("pokemons", payload.get("pokemon"))
    if not name or not isinstance(members, list):
        raise ValueError("Trainer entry needs a name and a pokemons list")

    party = TrainerParty(name=str(name), segment=payload.get("segment"))
    for raw in members:
        try:
            party.pokemon.append(parse_pokemon_set(raw))
        except ValueError as exc:
            raise ValueError(f"Trainer {name}: {exc}") from exc
    return party


def parse_trainers(payload: Any) -> List[TrainerParty]:
    """Accept a single trainer object, a list of them, or ``{"trainers": [...]}``."""

    if isinstance(payload, Mapping) and "trainers" in payload:
        payload = payload["trainers"]
    if isinstance(payload, Mapping):
        payload = [payload]
    if not isinstance(payload, list) or not payload:
        raise ValueError("Trainer data is empty")
    return [parse_trainer(entry) for entry in payload]


def load_trainers(path: str | Path) -> List[TrainerParty]:
    with Path(path).open(encoding="utf-8") as stream:
        payload: Dict[str, Any] | Iterable[Any] = json.load(stream)
    return parse_trainers(payload)
