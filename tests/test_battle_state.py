import pytest

from battle.core.types import Faction
from battle.entities import Tank, get_preset
from controllers.battle_state import NO_TARGET_DISTANCE, analyze, distance_rank, relative_bearing


def _tank(pos, faction=Faction.RED, preset="medium", **kwargs) -> Tank:
    return Tank(faction, pos, stats=get_preset(preset), **kwargs)


def test_target_fields():
    me = _tank((0, 0), hp=1000)
    enemy = _tank((6, 8), faction=Faction.BLUE, hp=500)
    state = analyze(me, enemy, allies=[], enemies=[enemy], turn_number=3)

    assert state.has_target
    assert state.self_hp_ratio == pytest.approx(0.5)
    assert state.target_hp_ratio == pytest.approx(0.25)
    assert state.target_distance == pytest.approx(10.0)
    assert state.target_in_range
    assert state.self_range == 12.0
    assert state.turn_number == 3
    assert state.total_enemies == 1
    assert state.enemies_alive == 1


def test_no_target_uses_neutral_values():
    me = _tank((0, 0))
    state = analyze(me, None, allies=[], enemies=[], turn_number=1)
    assert not state.has_target
    assert state.target_hp_ratio == 0.0
    assert state.target_distance == NO_TARGET_DISTANCE
    assert not state.target_in_range
    assert state.distance_rank == 1


def test_ally_aggregates_skip_dead_and_self():
    me = _tank((0, 0))
    near = _tank((3, 4), hp=1000)
    far = _tank((10, 0), hp=2000)
    dead = _tank((1, 0))
    dead.take_damage(99999)
    enemy = _tank((20, 0), faction=Faction.BLUE)

    state = analyze(me, enemy, allies=[me, near, far, dead], enemies=[enemy], turn_number=1)
    assert state.allies_alive == 2
    assert state.nearest_ally_distance == pytest.approx(5.0)
    assert state.ally_mean_hp_ratio == pytest.approx(0.75)


def test_no_allies_gives_zero_sentinels():
    me = _tank((0, 0))
    enemy = _tank((5, 0), faction=Faction.BLUE)
    state = analyze(me, enemy, allies=[], enemies=[enemy], turn_number=1)
    assert state.allies_alive == 0
    assert state.nearest_ally_distance == 0.0
    assert state.ally_mean_hp_ratio == 0.0


def test_enemy_counts_include_dead():
    me = _tank((0, 0))
    alive = _tank((5, 0), faction=Faction.BLUE)
    gone = _tank((6, 0), faction=Faction.BLUE)
    gone.take_damage(99999)
    state = analyze(me, alive, allies=[], enemies=[alive, gone], turn_number=1)
    assert state.total_enemies == 2
    assert state.enemies_alive == 1


def test_distance_rank_counts_strictly_closer_living_allies():
    enemy = _tank((0, 0), faction=Faction.BLUE)
    me = _tank((5, 0))
    closer = _tank((2, 0))
    tied = _tank((0, 5))
    farther = _tank((9, 0))
    dead_closer = _tank((1, 0))
    dead_closer.take_damage(99999)

    assert distance_rank(me, enemy, [closer, tied, farther, dead_closer]) == 2


@pytest.mark.parametrize("ally_positions", [[], [(1, 0)], [(1, 0), (2, 0), (3, 0)], [(8, 0), (9, 0)], [(0, 4), (4, 0)]])
def test_distance_rank_bounds(ally_positions):
    enemy = _tank((0, 0), faction=Faction.BLUE)
    me = _tank((4, 3))
    allies = [_tank(p) for p in ally_positions]
    state = analyze(me, enemy, allies=allies, enemies=[enemy], turn_number=1)
    assert 1 <= state.distance_rank <= state.allies_alive + 1


@pytest.mark.parametrize(
    "observer, turret, expected",
    [
        ((5, 0), 0.0, 0.0),      # straight ahead of the turret
        ((5, 10), 0.0, 180.0),   # directly behind
        ((10, 5), 0.0, 90.0),    # right flank
        ((0, 5), 0.0, -90.0),    # left flank
        ((5, 10), 90.0, 90.0),
        ((5, 0), 180.0, 180.0),  # -180 normalizes to +180
    ],
)
def test_relative_bearing(observer, turret, expected):
    target = _tank((5, 5), faction=Faction.BLUE, turret_angle=turret)
    me = _tank(observer)
    bearing = relative_bearing(target, me)
    assert bearing == pytest.approx(expected)
    assert -180.0 < bearing <= 180.0


def test_snapshot_is_frozen():
    me = _tank((0, 0))
    state = analyze(me, None, allies=[], enemies=[], turn_number=1)
    with pytest.raises(AttributeError):
        state.self_hp_ratio = 0.1


def test_distance_ratio_guards_zero_range():
    me = Tank(Faction.RED, (0, 0), stats=get_preset("medium").with_overrides(max_range=0.0, no_miss_radius=0.0))
    enemy = _tank((3, 0), faction=Faction.BLUE)
    state = analyze(me, enemy, allies=[], enemies=[enemy], turn_number=1)
    assert state.distance_ratio == 0.0
