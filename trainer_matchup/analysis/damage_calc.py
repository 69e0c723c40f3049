"""Gen-3 damage calculation producing the sixteen-roll distribution."""

from __future__ import annotations

import math
from typing import Callable, Iterable, Mapping, Optional

from ..data.moves import (
    ATTACK_DOUBLING_ABILITIES,
    GUTS,
    THICK_FAT,
    THICK_FAT_TYPES,
    TYPE_IMMUNITY_ABILITIES,
    WONDER_GUARD,
    normalize_ability,
)
from ..data.type_chart import is_physical_type, type_effectiveness
from ..models import BattleContext, Creature, DamageResult, Move
from .stats import apply_stage, badge_boosted

ROLL_PERCENTAGES = tuple(range(85, 101))


class DamageCalculator:
    """Calculates damage using the Gen-3 integer damage formula.

    Formula: floor(floor(floor(2L/5 + 2) * P * A / D) / 50) + 2, then burn,
    critical, STAB x type effectiveness, and one roll per percentage 85..100.
    """

    def __init__(self, effectiveness_lookup: Optional[Callable[[str, str], float]] = None) -> None:
        self._effectiveness_lookup = effectiveness_lookup or type_effectiveness

    def get_type_effectiveness(self, attack_type: str, defender_types: Iterable[str]) -> float:
        """Product of single-type lookups over the defender's one or two types."""

        multiplier = 1.0
        for defender_type in defender_types:
            multiplier *= self._effectiveness_lookup(attack_type, defender_type)
        return multiplier

    def compute_damage(
        self,
        attacker: Creature,
        defender: Creature,
        move: Optional[Move],
        *,
        critical: bool = False,
        context: Optional[BattleContext] = None,
        attacker_stages: Optional[Mapping[str, int]] = None,
        defender_stages: Optional[Mapping[str, int]] = None,
    ) -> DamageResult:
        """Damage distribution for ``attacker`` hitting ``defender`` with ``move``.

        Never raises for missing data: unresolved combatants or a missing or
        non-damaging move yield an all-zero result with an explanatory note.
        """

        if move is None:
            return _zero(None, notes=("unknown move",))
        if attacker.stats is None or defender.stats is None:
            return _zero(move, notes=("unresolved species",))
        if move.power <= 0:
            return _zero(move, notes=("non-damaging move",))

        context = context or BattleContext()
        physical = is_physical_type(move.type)
        category = "physical" if physical else "special"
        attack_key, defense_key = ("atk", "def") if physical else ("spa", "spd")
        attacker_ability = normalize_ability(attacker.ability)
        defender_ability = normalize_ability(defender.ability)
        notes: list[str] = []

        immune_type = TYPE_IMMUNITY_ABILITIES.get(defender_ability)
        if immune_type is not None and immune_type == move.type.lower():
            return _zero(move, category=category, notes=(f"{defender_ability} blocks {move.type}",))

        attack = attacker.stats.get(attack_key)
        if attacker.player_owned and attack_key in context.badge_boosts:
            attack = badge_boosted(attack)
        if physical and attacker_ability in ATTACK_DOUBLING_ABILITIES:
            attack *= 2
            notes.append(f"{attacker_ability} doubles attack")
        if physical and attacker_ability == GUTS and attacker.has_status:
            attack = (attack * 150) // 100
            notes.append("GUTS boosts attack")
        attack = apply_stage(attack, (attacker_stages or {}).get(attack_key, 0))

        defense = defender.stats.get(defense_key)
        if defender.player_owned and defense_key in context.badge_boosts:
            defense = badge_boosted(defense)
        defense = max(1, apply_stage(defense, (defender_stages or {}).get(defense_key, 0)))

        level_term = (2 * attacker.level) // 5 + 2
        raw_base = (level_term * move.power * attack) // defense
        raw_base = raw_base // 50 + 2

        if physical and attacker.is_burned and attacker_ability != GUTS:
            raw_base //= 2
            notes.append("burn halves physical damage")
        if critical:
            raw_base *= 2

        effectiveness = self.get_type_effectiveness(move.type, defender.types)
        stab = move.type.lower() in {t.lower() for t in attacker.types}
        if effectiveness == 0:
            return _zero(
                move,
                category=category,
                stab=stab,
                effectiveness=0.0,
                raw_base=raw_base,
                critical=critical,
                notes=(*notes, "type immunity"),
            )
        if defender_ability == WONDER_GUARD and effectiveness <= 1:
            return _zero(
                move,
                category=category,
                stab=stab,
                effectiveness=effectiveness,
                raw_base=raw_base,
                critical=critical,
                notes=(*notes, "WONDER_GUARD blocks non-super-effective hits"),
            )

        modifier = (1.5 if stab else 1.0) * effectiveness
        true_base = max(1, math.floor(raw_base * modifier))
        if defender_ability == THICK_FAT and move.type.lower() in THICK_FAT_TYPES:
            true_base = max(1, true_base // 2)
            notes.append("THICK_FAT halves damage")

        rolls = tuple(max(1, (true_base * pct) // 100) for pct in ROLL_PERCENTAGES)
        return DamageResult(
            rolls=rolls,
            move=move.token,
            power=move.power,
            move_type=move.type,
            category=category,
            stab=stab,
            effectiveness=effectiveness,
            raw_base=raw_base,
            critical=critical,
            notes=tuple(notes),
        )


def _zero(
    move: Optional[Move],
    *,
    category: Optional[str] = None,
    stab: bool = False,
    effectiveness: float = 1.0,
    raw_base: int = 0,
    critical: bool = False,
    notes: tuple[str, ...] = (),
) -> DamageResult:
    return DamageResult(
        rolls=(0,) * len(ROLL_PERCENTAGES),
        move=move.token if move else None,
        power=move.power if move else 0,
        move_type=move.type if move else None,
        category=category or (move.category if move else None),
        stab=stab,
        effectiveness=effectiveness,
        raw_base=raw_base,
        critical=critical,
        notes=notes,
    )
