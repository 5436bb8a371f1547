import pytest

from battle.core.types import Stance
from controllers.battle_state import BattleStateSnapshot
from controllers.config import ScoringConfig
from controllers.threat_evaluator import (
    distance_opportunity,
    distance_threat,
    evaluate_opportunity,
    evaluate_threat,
    hp_threat,
    rank_threat,
    select_stance,
)

CONFIG = ScoringConfig()


def snapshot(**overrides) -> BattleStateSnapshot:
    fields = dict(
        self_hp_ratio=1.0,
        self_action_points=8,
        self_range=12.0,
        self_position=(0.0, 0.0),
        self_turret_angle=0.0,
        has_target=True,
        target_hp_ratio=1.0,
        target_distance=6.0,
        target_bearing=0.0,
        target_in_range=True,
        allies_alive=0,
        distance_rank=1,
        nearest_ally_distance=0.0,
        ally_mean_hp_ratio=0.0,
        turn_number=1,
        total_enemies=1,
        enemies_alive=1,
    )
    fields.update(overrides)
    return BattleStateSnapshot(**fields)


def test_threat_worked_example():
    state = snapshot(target_distance=3.0, self_hp_ratio=0.5, distance_rank=1)
    assert distance_threat(state, CONFIG) == 100.0
    assert hp_threat(state, CONFIG) == pytest.approx(25.0)
    assert rank_threat(state, CONFIG) == 100.0
    assert evaluate_threat(state, CONFIG) == pytest.approx(77.5)


@pytest.mark.parametrize(
    "distance, expected",
    [(3.0, 100.0), (6.0, 50.0), (9.0, 25.0), (12.0, 0.0), (20.0, 0.0)],
)
def test_distance_threat_decays_outside_danger_band(distance, expected):
    assert distance_threat(snapshot(target_distance=distance), CONFIG) == pytest.approx(expected)


@pytest.mark.parametrize("rank, expected", [(1, 100.0), (2, 50.0), (3, 20.0), (4, 10.0), (7, 10.0)])
def test_rank_threat_table(rank, expected):
    assert rank_threat(snapshot(distance_rank=rank), CONFIG) == expected


@pytest.mark.parametrize(
    "distance, expected",
    [
        (6.0, 100.0),   # ratio 0.5, band start
        (8.4, 100.0),   # ratio 0.7, band end
        (3.0, 50.0),    # ratio 0.25, ramp
        (10.2, 50.0),   # ratio 0.85, decay
        (12.0, 0.0),
        (15.0, 0.0),
    ],
)
def test_distance_opportunity_band(distance, expected):
    assert distance_opportunity(snapshot(target_distance=distance), CONFIG) == pytest.approx(expected)


def test_distance_opportunity_band_reaching_full_range():
    config = ScoringConfig(optimal_range_max=1.0)
    assert distance_opportunity(snapshot(target_distance=13.0), config) == 0.0


def test_opportunity_total():
    state = snapshot(target_distance=6.0, self_hp_ratio=0.5)
    # 100 * 0.6 + 25 * 0.4
    assert evaluate_opportunity(state, CONFIG) == pytest.approx(70.0)


def test_zero_range_contributes_nothing_from_distance():
    state = snapshot(self_range=0.0, target_distance=3.0, self_hp_ratio=0.5)
    assert distance_threat(state, CONFIG) == 0.0
    assert distance_opportunity(state, CONFIG) == 0.0
    assert evaluate_threat(state, CONFIG) == pytest.approx(25.0 * 0.3 + 100.0 * 0.3)


def test_absent_target_scores_zero():
    state = snapshot(has_target=False, target_distance=1.0)
    assert evaluate_threat(state, CONFIG) == 0.0
    assert evaluate_opportunity(state, CONFIG) == 0.0


def test_threat_total_is_not_clamped():
    config = ScoringConfig(threat_weight_distance=1.0, threat_weight_hp=1.0, threat_weight_rank=1.0)
    state = snapshot(target_distance=1.0, self_hp_ratio=0.0, distance_rank=1)
    assert evaluate_threat(state, config) == pytest.approx(300.0)


def test_hp_curve_exponent_is_configurable():
    linear = ScoringConfig(hp_curve_exponent=1.0)
    assert hp_threat(snapshot(self_hp_ratio=0.5), linear) == pytest.approx(50.0)


@pytest.mark.parametrize(
    "threat, opportunity, expected",
    [
        (80.0, 20.0, Stance.DEFENSIVE),
        (30.0, 20.0, Stance.BALANCED),     # +10 is not above the defense threshold
        (20.0, 30.0, Stance.BALANCED),     # -10 is not below the attack threshold
        (10.0, 90.0, Stance.OFFENSIVE),
    ],
)
def test_select_stance(threat, opportunity, expected):
    assert select_stance(threat, opportunity, CONFIG) == expected
