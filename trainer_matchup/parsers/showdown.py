"""Parser for Showdown-style roster exports."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

from ..models import PokemonSet, Team

STAT_ALIASES = {
    "HP": "hp",
    "ATK": "atk",
    "DEF": "def",
    "SPA": "spa",
    "SPD": "spd",
    "SPE": "spe",
}


def parse_team(raw_text: str, *, name: str | None = None) -> Team:
    """Parse a Showdown-format roster export into a Team object."""

    cleaned = raw_text.strip()
    if not cleaned:
        raise ValueError("Team text is empty")

    team = Team(name=name)
    for entry in _split_entries(cleaned):
        team.add_pokemon(_parse_entry(entry))

    return team


def _split_entries(text: str) -> List[str]:
    return [chunk.strip() for chunk in re.split(r"\n\s*\n", text) if chunk.strip()]


def _parse_entry(chunk: str) -> PokemonSet:
    lines = [line.strip() for line in chunk.splitlines() if line.strip()]
    if not lines:
        raise ValueError("Pokemon entry is empty")

    name, item = _parse_header(lines[0])
    pokemon = PokemonSet(name=name, species=_infer_species(name))
    if item:
        pokemon.notes.append(f"Item: {item}")

    for line in lines[1:]:
        if line.startswith("Ability:"):
            pokemon.ability = _value_after_colon(line)
        elif line.startswith("Level:"):
            pokemon.level = _parse_level(_value_after_colon(line))
        elif line.startswith("Status:"):
            pokemon.status = _value_after_colon(line)
        elif line.startswith("EVs:"):
            pokemon.evs = _parse_stat_spread(_value_after_colon(line))
        elif line.startswith("IVs:"):
            pokemon.ivs = _parse_stat_spread(_value_after_colon(line))
        elif line.endswith("Nature"):
            pokemon.nature = line.replace("Nature", "").strip()
        elif line.startswith("-"):
            pokemon.moves.append(line.lstrip("- ").strip())
        else:
            pokemon.notes.append(line)

    return pokemon


def _parse_header(line: str) -> tuple[str, str | None]:
    if "@" not in line:
        return line.strip(), None
    name_part, item_part = line.split("@", 1)
    return name_part.strip(), item_part.strip()


def _parse_level(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def _parse_stat_spread(spread: str) -> Dict[str, int]:
    return {stat: value for value, stat in _split_stat_tokens(spread)}


def _split_stat_tokens(spread: str) -> Iterable[tuple[int, str]]:
    for raw in spread.split("/"):
        parts = raw.split()
        if len(parts) < 2:
            continue
        try:
            value = int(parts[0])
        except ValueError:
            continue
        stat = STAT_ALIASES.get(parts[1].upper().replace(".", ""))
        if stat:
            yield value, stat


def _value_after_colon(line: str) -> str:
    return line.split(":", 1)[1].strip()


def _infer_species(name: str) -> str:
    # "Nickname (Species) (M)": the first parenthesised group that is not a gender
    for candidate in re.findall(r"\(([^)]*)\)", name):
        candidate = candidate.strip()
        if candidate and candidate.upper() not in {"M", "F"}:
            return candidate
    cleaned = re.sub(r"\([^)]*\)", "", name).strip()
    return cleaned or name.strip()
