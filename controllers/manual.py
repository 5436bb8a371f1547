"""
Manual controller - plays back externally issued orders.

Whatever front end collects player input (keyboard, UI, script) turns it
into ``Action`` commands and queues them here per unit. On the unit's
turn the queue is drained in order; the first refused order ends the turn
and discards the rest.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, Iterable

from battle.core.actions import Action
from battle.core.types import Faction
from battle.entities.tank import Tank
from battle.mechanics.orders import apply_action
from battle.world.battlefield import Battlefield
from infra.logger import get_logger
from .base_controller import BaseController, TurnOutcome
from .registry import register_controller

log = get_logger(__name__)


@register_controller("manual")
class ManualController(BaseController):
    """Applies queued orders for each unit, in order, without retries."""

    def __init__(self, faction: Faction, name: str | None = None, **_: Any):
        super().__init__(faction, name)
        self._orders: Dict[int, Deque[Action]] = {}

    def queue(self, unit_id: int, *actions: Action | Dict[str, Any]) -> None:
        """Append orders for ``unit_id``; dicts are parsed with ``Action.from_dict``."""
        pending = self._orders.setdefault(unit_id, deque())
        for action in actions:
            pending.append(action if isinstance(action, Action) else Action.from_dict(action))

    def pending(self, unit_id: int) -> int:
        return len(self._orders.get(unit_id, ()))

    def take_turn(self, battlefield: Battlefield, tank: Tank) -> TurnOutcome:
        outcome = TurnOutcome(unit_id=tank.id)
        pending = self._orders.pop(tank.id, deque())

        while pending and tank.alive:
            action = pending.popleft()
            result = apply_action(battlefield, tank, action)
            if not result:
                log.info("%s order %s refused: %s", tank.label(), action, result.message)
                if pending:
                    log.debug("%s dropping %d remaining orders", tank.label(), len(pending))
                break
            outcome.actions.append(result.message)
            if action.params.get("target_id") is not None:
                outcome.target_id = action.params["target_id"]

        outcome.opponents_eliminated = not battlefield.opponents_of(tank, alive_only=True)
        return outcome

    def reset(self) -> None:
        self._orders.clear()

    def orders_for(self, unit_id: int) -> Iterable[Action]:
        return tuple(self._orders.get(unit_id, ()))
