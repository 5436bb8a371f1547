import pytest

from battle.core.types import Faction
from battle.entities import Tank, get_preset
from battle.mechanics import hit_rate, project_engagement, simulate_approach
from battle.world import Grid


@pytest.fixture
def grid():
    return Grid(20, 20)


def test_simulated_approach_leaves_the_unit_alone(grid):
    unit = Tank(Faction.RED, (0, 0), stats=get_preset("medium"))
    ghost = simulate_approach(unit, (10, 0), grid)

    assert ghost.pos == (4.0, 0.0)
    assert ghost.action_points == 4
    assert unit.pos == (0.0, 0.0)
    assert unit.action_points == 8


def test_simulated_approach_stops_at_destination(grid):
    unit = Tank(Faction.RED, (0, 0), stats=get_preset("medium"))
    ghost = simulate_approach(unit, (2, 0), grid, reserve=0)
    assert ghost.pos == (2.0, 0.0)
    assert ghost.action_points == 6


def test_project_engagement_reports_odds_from_new_position(grid):
    attacker = Tank(Faction.RED, (0, 10), stats=get_preset("medium"))
    target = Tank(Faction.BLUE, (11, 10), stats=get_preset("light"))

    projection = project_engagement(attacker, target, grid)

    assert projection.position == (4.0, 10.0)
    assert projection.distance == pytest.approx(7.0)
    assert projection.hit_rate == pytest.approx(0.5)
    assert 0 <= projection.single_shot_kill_pct <= 100
    assert projection.two_shot_kill_pct == 100
    assert hit_rate(attacker, target) < projection.hit_rate
    assert attacker.pos == (0.0, 10.0)
