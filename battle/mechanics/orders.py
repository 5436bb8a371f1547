"""
Order dispatch - applies an ``Action`` command to a tank.

Commands arrive from outside the decision core (the manual controller,
scripted scenarios). Each command maps onto exactly one unit operation,
and the operation's ``ActionResult`` is passed straight back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.actions import Action
from ..core.types import ActionResult, ActionType

if TYPE_CHECKING:
    from ..entities.tank import Tank
    from ..world.battlefield import Battlefield


def apply_action(battlefield: Battlefield, tank: Tank, action: Action) -> ActionResult:
    """
    Carry out ``action`` for ``tank`` on ``battlefield``.

    Returns:
        The unit operation's result; an attack on an id that is not on the
        battlefield fails with UNKNOWN_UNIT.
    """
    if action.type == ActionType.MOVE:
        return tank.move(action.params["x"], action.params["y"], battlefield.grid)

    if action.type == ActionType.ROTATE:
        return tank.rotate(action.params["degrees"])

    if action.type == ActionType.ATTACK:
        target_id = action.params["target_id"]
        target = battlefield.get_tank(target_id)
        if target is None:
            return ActionResult.fail("UNKNOWN_UNIT", f"{tank.label()} has no unit {target_id} to attack")
        return tank.attack(target, battlefield.rng)

    if action.type == ActionType.REPAIR:
        return tank.repair()

    if action.type == ActionType.RELOAD:
        return tank.reload(action.params["amount"])

    raise ValueError(f"Unsupported action type: {action.type}")
