import pytest

from battle.core.actions import Action
from battle.core.types import ActionType, Faction
from battle.entities import Tank, get_preset
from battle.mechanics import apply_action
from battle.world import Battlefield
from controllers import ManualController, resolve_controller_class


@pytest.fixture
def battlefield():
    field = Battlefield(20, 20, seed=11)
    field.add_tank(Tank(Faction.BLUE, (5, 5), stats=get_preset("heavy"), name="Tiger"))
    field.add_tank(Tank(Faction.RED, (10, 5), stats=get_preset("medium")))
    return field


def test_manual_is_registered():
    assert resolve_controller_class("manual") is ManualController


def test_orders_run_in_sequence(battlefield):
    tiger = battlefield.get_tank(1)
    controller = ManualController(Faction.BLUE)
    controller.queue(tiger.id, Action.move(6, 5), Action.rotate(90), Action.attack(2))

    outcome = controller.take_turn(battlefield, tiger)

    assert len(outcome.actions) == 3
    assert outcome.target_id == 2
    assert tiger.pos == (6.0, 5.0)
    assert tiger.turret_angle == pytest.approx(90.0)
    assert tiger.ammo == 49
    assert tiger.action_points == 2
    assert controller.pending(tiger.id) == 0


def test_first_refusal_ends_the_turn(battlefield):
    tiger = battlefield.get_tank(1)
    controller = ManualController(Faction.BLUE)
    controller.queue(tiger.id, Action.attack(2), Action.attack(2), Action.attack(2), Action.move(6, 5))

    outcome = controller.take_turn(battlefield, tiger)

    # two shots use the whole budget; the third is refused and the move is dropped
    assert len(outcome.actions) == 2
    assert tiger.ammo == 48
    assert tiger.pos == (5.0, 5.0)
    assert controller.pending(tiger.id) == 0


def test_orders_accept_dicts(battlefield):
    tiger = battlefield.get_tank(1)
    controller = ManualController(Faction.BLUE)
    controller.queue(tiger.id, {"type": "REPAIR", "params": {}})
    assert controller.orders_for(tiger.id)[0].type == ActionType.REPAIR

    tiger.take_damage(1000)
    controller.take_turn(battlefield, tiger)
    assert tiger.hp == 2500
    assert tiger.action_points == 0


def test_no_orders_means_no_actions(battlefield):
    tiger = battlefield.get_tank(1)
    outcome = ManualController(Faction.BLUE).take_turn(battlefield, tiger)
    assert outcome.actions == []
    assert not outcome.opponents_eliminated
    assert tiger.action_points == 8


def test_reset_clears_queues(battlefield):
    controller = ManualController(Faction.BLUE)
    controller.queue(1, Action.repair())
    controller.reset()
    assert controller.pending(1) == 0


def test_attack_on_unknown_unit(battlefield):
    tiger = battlefield.get_tank(1)
    result = apply_action(battlefield, tiger, Action.attack(99))
    assert result.error_code == "UNKNOWN_UNIT"
    assert tiger.ammo == 50


def test_reload_order(battlefield):
    tiger = battlefield.get_tank(1)
    tiger.ammo = 10
    assert apply_action(battlefield, tiger, Action.reload(5))
    assert tiger.ammo == 15
    assert tiger.action_points == 6
