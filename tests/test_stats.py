from trainer_matchup.analysis.stats import (
    apply_stage,
    badge_boosted,
    calc_hp,
    calc_other_stat,
    derive_stats,
    stage_ratio,
)
from trainer_matchup.models import Creature

SCENARIO_BASE = {"hp": 50, "atk": 70, "def": 50, "spa": 50, "spd": 50, "spe": 40}
IVS_15 = {key: 15 for key in SCENARIO_BASE}


def test_adamant_raises_attack_and_lowers_special_attack():
    adamant = derive_stats(SCENARIO_BASE, IVS_15, {}, 15, "Adamant")
    neutral = derive_stats(SCENARIO_BASE, IVS_15, {}, 15, "Hardy")

    assert adamant.atk == 30
    assert neutral.atk == 28
    assert adamant.spa == 19 < neutral.spa == 22
    assert adamant.defense == neutral.defense == 22
    assert adamant.hp == neutral.hp == 42


def test_nature_ordering_for_attack():
    boosting = derive_stats(SCENARIO_BASE, IVS_15, {}, 50, "Adamant").atk
    neutral = derive_stats(SCENARIO_BASE, IVS_15, {}, 50, "Serious").atk
    lowering = derive_stats(SCENARIO_BASE, IVS_15, {}, 50, "Modest").atk
    assert boosting >= neutral >= lowering
    assert boosting > lowering


def test_level_100_max_investment_values():
    assert calc_hp(100, 31, 252, 100) == 404
    assert calc_other_stat(100, 31, 252, 100) == 299
    assert calc_other_stat(100, 31, 252, 100, 110) == 328
    assert calc_other_stat(100, 31, 252, 100, 90) == 269


def test_missing_ivs_default_to_31_and_evs_to_0():
    implicit = derive_stats(SCENARIO_BASE, None, None, 30, None)
    explicit = derive_stats(
        SCENARIO_BASE,
        {key: 31 for key in SCENARIO_BASE},
        {key: 0 for key in SCENARIO_BASE},
        30,
        None,
    )
    assert implicit == explicit


def test_out_of_range_inputs_are_clamped():
    assert calc_other_stat(100, 99, 0, 50) == calc_other_stat(100, 31, 0, 50)
    assert calc_other_stat(100, -4, 0, 50) == calc_other_stat(100, 0, 0, 50)
    assert calc_other_stat(100, 31, 400, 50) == calc_other_stat(100, 31, 255, 50)
    assert calc_hp(100, 31, 0, 0) == calc_hp(100, 31, 0, 1)
    assert calc_hp(100, 31, 0, 150) == calc_hp(100, 31, 0, 100)
    assert calc_hp(0, 31, 0, 50) == calc_hp(1, 31, 0, 50)


def test_stats_are_monotonic_in_iv_and_level():
    previous = None
    for iv in range(0, 32):
        stats = derive_stats(SCENARIO_BASE, {key: iv for key in SCENARIO_BASE}, {}, 40, "Jolly")
        if previous is not None:
            assert all(stats.get(k) >= previous.get(k) for k in SCENARIO_BASE)
        previous = stats

    previous = None
    for level in range(1, 101):
        stats = derive_stats(SCENARIO_BASE, IVS_15, {}, level, "Jolly")
        if previous is not None:
            assert all(stats.get(k) >= previous.get(k) for k in SCENARIO_BASE)
        previous = stats


def test_unknown_nature_is_neutral():
    assert derive_stats(SCENARIO_BASE, None, None, 50, "Grumpy") == derive_stats(
        SCENARIO_BASE, None, None, 50, None
    )


def test_stage_ratios_and_caps():
    assert stage_ratio(0) == (10, 10)
    assert stage_ratio(2) == (20, 10)
    assert stage_ratio(-1) == (10, 15)
    assert apply_stage(100, 6) == 400
    assert apply_stage(100, 9) == 400
    assert apply_stage(100, -6) == 25
    assert apply_stage(101, 1) == 151


def test_badge_boost_floors():
    assert badge_boosted(100) == 110
    assert badge_boosted(57) == 62


def test_creature_derives_stats_and_rederives_on_change():
    creature = Creature(species="TEST", level=15, base_stats=SCENARIO_BASE, ivs=IVS_15, nature="Adamant")
    assert creature.stats.atk == 30

    neutral = creature.with_changes(nature="Hardy")
    assert neutral.stats.atk == 28
    assert creature.stats.atk == 30


def test_unresolved_creature_has_no_stats():
    creature = Creature(species="MISSINGNO", level=10)
    assert creature.stats is None
    assert not creature.resolved
