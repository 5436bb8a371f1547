"""
Battle runner - the headless turn loop.

Each round BLUE plays, then RED. A faction's turn refills every living
unit's action points and hands the unit to that faction's controller.
The battle ends on elimination, or as a draw at the scenario's round limit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from battle.core.types import BattleResult, Faction
from battle.mechanics.victory import VictoryResult, check_elimination, check_round_limit
from controllers import BaseController, TurnOutcome
from infra.logger import get_logger
from .scenario import Scenario

log = get_logger(__name__)

TURN_ORDER = (Faction.BLUE, Faction.RED)


@dataclass
class BattleReport:
    """Final result plus the per-unit turn history."""
    result: VictoryResult
    rounds: int
    outcomes: List[TurnOutcome] = field(default_factory=list)
    units: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.to_dict(),
            "rounds": self.rounds,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "units": self.units,
        }


class BattleRunner:
    """
    Headless turn loop.

    Each round BLUE acts, then RED. Every living unit of the acting faction
    gets a full action-point budget and is handed to that faction's
    controller. The battle stops as soon as one side is wiped out, or as a
    draw once the round limit is passed.
    """

    def __init__(
        self,
        scenario: Scenario,
        controllers: Optional[Dict[Faction, BaseController]] = None,
    ):
        self.scenario = scenario.clone()
        self.battlefield = self.scenario.build_battlefield()
        self.controllers = controllers or self.scenario.build_controllers()
        missing = [f.name for f in TURN_ORDER if f not in self.controllers]
        if missing:
            raise ValueError(f"No controller for faction(s): {', '.join(missing)}")

        self.history: List[TurnOutcome] = []
        self.rounds_played = 0
        self._result = VictoryResult(BattleResult.IN_PROGRESS, "Not started")

        log.info(
            "BattleRunner initialized: %dx%d grid, %d units, seed=%s",
            self.scenario.grid_width, self.scenario.grid_height, len(self.battlefield), self.scenario.seed,
        )

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    @property
    def done(self) -> bool:
        return self._result.is_over

    @property
    def result(self) -> VictoryResult:
        return self._result

    def play_faction(self, faction: Faction) -> VictoryResult:
        """Give every living unit of ``faction`` its turn, in deployment order."""
        controller = self.controllers[faction]
        for unit_id in self.battlefield.unit_ids(faction):
            tank = self.battlefield.get_tank(unit_id)
            if tank is None or not tank.alive:
                continue
            tank.reset_action_points()
            outcome = controller.take_turn(self.battlefield, tank)
            self.history.append(outcome)
            if outcome.opponents_eliminated:
                break
        return check_elimination(self.battlefield)

    def step(self) -> VictoryResult:
        """Play one full round (both factions) unless the battle is already over."""
        if self.done:
            return self._result

        limit = check_round_limit(self.battlefield.turn, self.scenario.max_rounds)
        if limit.is_over:
            self._finish(limit)
            return self._result

        log.info("=== Round %d ===", self.battlefield.turn)
        self.rounds_played += 1
        for faction in TURN_ORDER:
            outcome = self.play_faction(faction)
            if outcome.is_over:
                self._finish(outcome)
                return self._result

        self.battlefield.turn += 1
        return self._result

    def run(self) -> BattleReport:
        """Play rounds until the battle ends."""
        while not self.done:
            self.step()
        return self.report()

    def report(self) -> BattleReport:
        return BattleReport(
            result=self._result,
            rounds=self.rounds_played,
            outcomes=list(self.history),
            units=[t.to_dict() for t in self.battlefield],
        )

    def reset(self) -> None:
        """Rebuild the battlefield from the scenario and reset controllers."""
        self.battlefield = self.scenario.build_battlefield()
        for controller in self.controllers.values():
            controller.reset()
        self.history.clear()
        self.rounds_played = 0
        self._result = VictoryResult(BattleResult.IN_PROGRESS, "Not started")

    # ------------------------------------------------------------------#
    # Internals
    # ------------------------------------------------------------------#
    def _finish(self, outcome: VictoryResult) -> None:
        self._result = outcome
        log.info("Battle over after round %d: %s", self.battlefield.turn, outcome)
