import random

import pytest

from battle.core.types import Faction
from battle.entities import Tank, get_preset
from battle.mechanics.combat import (
    base_damage_at,
    damage_bounds,
    hit_rate,
    hit_rate_at,
    roll_damage,
    single_shot_kill_pct,
    single_shot_kill_pct_from,
    two_draw_tail,
    two_shot_kill_pct,
    two_shot_kill_pct_from,
)


class FixedRandom:
    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


def _pair(distance: float, attacker_preset: str = "medium", target_preset: str = "medium"):
    attacker = Tank(Faction.BLUE, (0, 0), stats=get_preset(attacker_preset))
    target = Tank(Faction.RED, (distance, 0), stats=get_preset(target_preset))
    return attacker, target


# ----------------------------------------------------------------------
# Hit rate
# ----------------------------------------------------------------------
def test_hit_rate_midpoint_is_half():
    assert hit_rate_at(7.0, 12.0, 2.0) == pytest.approx(0.5)


@pytest.mark.parametrize("distance", [0.0, 1.0, 1.5, 2.0])
def test_hit_rate_inside_no_miss_radius_is_certain(distance):
    assert hit_rate_at(distance, 12.0, 2.0) == 1.0


@pytest.mark.parametrize("distance", [12.0, 12.5, 30.0])
def test_hit_rate_at_or_beyond_max_range_is_zero(distance):
    assert hit_rate_at(distance, 12.0, 2.0) == 0.0


def test_no_miss_radius_past_max_range_still_misses_out_of_range():
    stats = get_preset("medium").with_overrides(max_range=3.0, no_miss_radius=4.0)
    attacker = Tank(Faction.BLUE, (0, 0), stats=stats)
    target = Tank(Faction.RED, (3.5, 0), stats=get_preset("medium"))

    assert hit_rate(attacker, target) == 0.0
    assert hit_rate_at(2.5, 3.0, 4.0) == 1.0


def test_hit_rate_is_non_increasing_between_radius_and_range():
    previous = hit_rate_at(2.0, 12.0, 2.0)
    d = 2.0
    while d < 12.0:
        current = hit_rate_at(d, 12.0, 2.0)
        assert current <= previous
        assert 0.0 <= current <= 1.0
        previous = current
        d += 0.1
    assert hit_rate_at(11.999, 12.0, 2.0) < 1e-4


def test_hit_rate_uses_attacker_weapon():
    attacker, target = _pair(7.0)
    assert hit_rate(attacker, target) == pytest.approx(0.5)


# ----------------------------------------------------------------------
# Damage
# ----------------------------------------------------------------------
def test_base_damage_example():
    assert base_damage_at(10.0, 20) == pytest.approx(1000.0)


@pytest.mark.parametrize("distance", [20.0, 25.0])
def test_base_damage_is_zero_past_engagement_scale(distance):
    assert base_damage_at(distance, 20) == 0.0


def test_damage_bounds_follow_variance():
    attacker, target = _pair(10.0)
    assert damage_bounds(attacker, target) == pytest.approx((750.0, 1250.0))


def test_roll_damage_stays_within_bounds():
    attacker, target = _pair(10.0)
    rng = random.Random(42)
    for _ in range(200):
        assert 750 <= roll_damage(attacker, target, rng) <= 1250


def test_roll_damage_extremes():
    attacker, target = _pair(10.0)
    assert roll_damage(attacker, target, FixedRandom(0.0)) == 750
    assert roll_damage(attacker, target, FixedRandom(0.5)) == 1000


# ----------------------------------------------------------------------
# Kill odds
# ----------------------------------------------------------------------
def test_single_shot_zero_when_max_damage_cannot_kill():
    assert single_shot_kill_pct_from(1.0, 1250, 750, 1250) == 0
    assert single_shot_kill_pct_from(1.0, 5000, 750, 1250) == 0


def test_single_shot_formula():
    # (900 - 750) / (2 * 500) = 0.15
    assert single_shot_kill_pct_from(1.0, 900, 750, 1250) == 15
    assert single_shot_kill_pct_from(0.5, 900, 750, 1250) == 7


def test_single_shot_fraction_is_clamped():
    assert single_shot_kill_pct_from(1.0, 100, 750, 1250) == 0


def test_two_draw_tail_regions():
    assert two_draw_tail(0.0, 500.0) == 1.0
    assert two_draw_tail(250.0, 500.0) == pytest.approx(0.875)
    assert two_draw_tail(750.0, 500.0) == pytest.approx(0.125)
    assert two_draw_tail(1000.0, 500.0) == 0.0


def test_two_shot_certain_below_two_minimum_hits():
    assert two_shot_kill_pct_from(0, 750, 1250) == 100
    assert two_shot_kill_pct_from(1499, 750, 1250) == 100


def test_two_shot_at_zero_hp_even_without_damage():
    assert two_shot_kill_pct_from(0, 0, 0) == 100


def test_two_shot_tail_value():
    assert two_shot_kill_pct_from(1500, 750, 1250) == 12


def test_two_shot_non_increasing_in_target_hp():
    previous = 100
    for hp in range(0, 3001, 25):
        current = two_shot_kill_pct_from(hp, 750, 1250)
        assert current <= previous
        previous = current


@pytest.mark.parametrize("distance", [0.0, 1.0, 3.0, 7.0, 10.0, 11.5, 15.0, 25.0])
@pytest.mark.parametrize("target_preset", ["light", "medium", "heavy"])
def test_kill_pct_are_bounded_integers(distance, target_preset):
    attacker, target = _pair(distance, target_preset=target_preset)
    for value in (single_shot_kill_pct(attacker, target), two_shot_kill_pct(attacker, target)):
        assert isinstance(value, int)
        assert 0 <= value <= 100


def test_point_blank_overkill():
    attacker, target = _pair(1.0, target_preset="light")
    # minimum roll 2707 already exceeds 800 hp, so the single-shot fraction clamps to 0
    assert single_shot_kill_pct(attacker, target) == 0
    assert two_shot_kill_pct(attacker, target) == 100
