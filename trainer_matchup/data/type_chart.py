"""Static Gen-3 type chart utilities for battle calculations."""

from __future__ import annotations

TYPES: tuple[str, ...] = (
    "normal",
    "fighting",
    "flying",
    "poison",
    "ground",
    "rock",
    "bug",
    "ghost",
    "steel",
    "fire",
    "water",
    "grass",
    "electric",
    "psychic",
    "ice",
    "dragon",
    "dark",
)

# Before the physical/special split moved onto individual moves, the category
# was a property of the type.
PHYSICAL_TYPES = frozenset(
    {"normal", "fighting", "flying", "poison", "ground", "rock", "bug", "ghost", "steel"}
)

TYPE_CHART: dict[str, dict[str, tuple[str, ...]]] = {
    "normal": {"double": (), "half": ("rock", "steel"), "zero": ("ghost",)},
    "fire": {
        "double": ("grass", "ice", "bug", "steel"),
        "half": ("fire", "water", "rock", "dragon"),
        "zero": (),
    },
    "water": {
        "double": ("fire", "ground", "rock"),
        "half": ("water", "grass", "dragon"),
        "zero": (),
    },
    "electric": {
        "double": ("water", "flying"),
        "half": ("electric", "grass", "dragon"),
        "zero": ("ground",),
    },
    "grass": {
        "double": ("water", "ground", "rock"),
        "half": ("fire", "grass", "poison", "flying", "bug", "dragon", "steel"),
        "zero": (),
    },
    "ice": {
        "double": ("grass", "ground", "flying", "dragon"),
        "half": ("fire", "water", "ice", "steel"),
        "zero": (),
    },
    "fighting": {
        "double": ("normal", "ice", "rock", "dark", "steel"),
        "half": ("poison", "flying", "psychic", "bug"),
        "zero": ("ghost",),
    },
    "poison": {
        "double": ("grass",),
        "half": ("poison", "ground", "rock", "ghost"),
        "zero": ("steel",),
    },
    "ground": {
        "double": ("fire", "electric", "poison", "rock", "steel"),
        "half": ("grass", "bug"),
        "zero": ("flying",),
    },
    "flying": {
        "double": ("grass", "fighting", "bug"),
        "half": ("electric", "rock", "steel"),
        "zero": (),
    },
    "psychic": {
        "double": ("fighting", "poison"),
        "half": ("psychic", "steel"),
        "zero": ("dark",),
    },
    "bug": {
        "double": ("grass", "psychic", "dark"),
        "half": ("fire", "fighting", "poison", "flying", "ghost", "steel"),
        "zero": (),
    },
    "rock": {
        "double": ("fire", "ice", "flying", "bug"),
        "half": ("fighting", "ground", "steel"),
        "zero": (),
    },
    "ghost": {
        "double": ("psychic", "ghost"),
        "half": ("dark", "steel"),
        "zero": ("normal",),
    },
    "dragon": {
        "double": ("dragon",),
        "half": ("steel",),
        "zero": (),
    },
    "dark": {
        "double": ("psychic", "ghost"),
        "half": ("fighting", "dark", "steel"),
        "zero": (),
    },
    "steel": {
        "double": ("ice", "rock"),
        "half": ("fire", "water", "electric", "steel"),
        "zero": (),
    },
}


def is_physical_type(move_type: str | None) -> bool:
    """Return True when moves of ``move_type`` use Attack/Defense."""

    return (move_type or "").lower() in PHYSICAL_TYPES


def type_effectiveness(attack_type: str, defender_type: str) -> float:
    """Single-type lookup: one of 0, 0.5, 1 or 2. Unknown types are neutral."""

    chart = TYPE_CHART.get((attack_type or "").lower())
    if chart is None:
        return 1.0
    defender = (defender_type or "").lower()
    if defender in chart["zero"]:
        return 0.0
    if defender in chart["double"]:
        return 2.0
    if defender in chart["half"]:
        return 0.5
    return 1.0
