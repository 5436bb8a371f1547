"""
Rule-based turn controller.

Each unit turn runs a small phase machine, recomputed from scratch every
turn (nothing is carried over):

- CRITICAL   (hp < hp_low):             back away from the threat, then repair
- CAUTIOUS   (hp_low <= hp < hp_high):  hold the optimal range band, then fire
- AGGRESSIVE (hp >= hp_high):           close in, then fire

With ``phase_policy="scored"`` the phase comes from the threat/opportunity
stance instead of the raw HP buckets.

Refused unit operations are not errors here: a failed step or shot simply
ends that loop for the turn.
"""

from __future__ import annotations

import random
from typing import Any, Dict, Iterable, List, Optional, Sequence

from battle.core.types import ActionResult, Faction, Phase, Stance
from battle.entities.tank import Tank
from battle.mechanics.movement import project_engagement
from battle.world.battlefield import Battlefield
from battle.world.grid import Grid
from infra.logger import get_logger
from .base_controller import BaseController, TurnOutcome
from .battle_state import analyze
from .config import ScoringConfig, TacticsConfig
from .registry import register_controller
from .threat_evaluator import evaluate_opportunity, evaluate_threat, select_stance

log = get_logger(__name__)

PHASE_POLICIES = ("hp", "scored")

STANCE_PHASES: Dict[Stance, Phase] = {
    Stance.DEFENSIVE: Phase.CRITICAL,
    Stance.BALANCED: Phase.CAUTIOUS,
    Stance.OFFENSIVE: Phase.AGGRESSIVE,
}


def classify_phase(hp_ratio: float, tactics: TacticsConfig) -> Phase:
    """Bucket an HP ratio; lower bounds are inclusive."""
    if hp_ratio < tactics.hp_low:
        return Phase.CRITICAL
    if hp_ratio < tactics.hp_high:
        return Phase.CAUTIOUS
    return Phase.AGGRESSIVE


def select_target(unit: Tank, opponents: Iterable[Tank], hp_weight: float = 5.0) -> Optional[Tank]:
    """
    Pick the living opponent with the lowest ``hp_ratio * hp_weight + distance``.

    Ties keep the earliest candidate in ``opponents`` order.
    """
    best: Optional[Tank] = None
    best_score = float("inf")
    for candidate in opponents:
        if not candidate.alive:
            continue
        score = candidate.hp_ratio * hp_weight + unit.distance_to(candidate)
        if score < best_score:
            best_score = score
            best = candidate
    return best


@register_controller("rule_based")
class RuleBasedController(BaseController):
    """
    HP-phase state machine driving one unit at a time.
    """

    def __init__(
        self,
        faction: Faction,
        name: str | None = None,
        *,
        scoring: ScoringConfig | Dict[str, Any] | None = None,
        tactics: TacticsConfig | Dict[str, Any] | None = None,
        phase_policy: str = "hp",
        lookahead: bool = True,
        **_: Any,
    ):
        """
        Initialize the controller.

        Args:
            faction: Faction to control
            name: Optional controller name
            scoring: Threat/opportunity weights (used by the "scored" policy)
            tactics: Phase thresholds and movement constants
            phase_policy: "hp" (HP buckets) or "scored" (stance-driven)
            lookahead: Attach projected kill odds to each TurnOutcome
        """
        super().__init__(faction, name)
        if phase_policy not in PHASE_POLICIES:
            raise ValueError(f"phase_policy must be one of {PHASE_POLICIES}, got '{phase_policy}'")
        self.scoring = scoring if isinstance(scoring, ScoringConfig) else ScoringConfig.from_dict(scoring)
        self.tactics = tactics if isinstance(tactics, TacticsConfig) else TacticsConfig.from_dict(tactics)
        self.phase_policy = phase_policy
        self.lookahead = lookahead

    def take_turn(self, battlefield: Battlefield, tank: Tank) -> TurnOutcome:
        return self.run_unit_turn(
            tank,
            battlefield.opponents_of(tank, alive_only=True),
            grid=battlefield.grid,
            rng=battlefield.rng,
            allies=battlefield.allies_of(tank),
            enemies=battlefield.opponents_of(tank, alive_only=False),
            turn=battlefield.turn,
        )

    def run_unit_turn(
        self,
        tank: Tank,
        opponents: Sequence[Tank],
        *,
        grid: Grid,
        rng: Optional[random.Random] = None,
        allies: Iterable[Tank] = (),
        enemies: Optional[Iterable[Tank]] = None,
        turn: int = 1,
    ) -> TurnOutcome:
        """
        Execute one full turn for ``tank`` against ``opponents``.

        Returns:
            TurnOutcome whose ``opponents_eliminated`` flag tells the caller
            whether the opposing side has been wiped out.
        """
        outcome = TurnOutcome(unit_id=tank.id)
        if not tank.alive:
            outcome.opponents_eliminated = self._all_down(opponents)
            return outcome

        target = select_target(tank, opponents, self.tactics.target_hp_weight)
        if target is None:
            outcome.opponents_eliminated = True
            return outcome

        phase = self.choose_phase(tank, target, allies, opponents if enemies is None else enemies, turn)
        outcome.phase = phase
        outcome.target_id = target.id
        if self.lookahead:
            outcome.lookahead = project_engagement(tank, target, grid)

        log.info("%s phase %s, target %s (d=%.1f)", tank.label(), phase, target.label(), tank.distance_to(target))

        if phase == Phase.CRITICAL:
            self._critical(tank, target, grid, outcome.actions)
        elif phase == Phase.CAUTIOUS:
            self._cautious(tank, target, grid, rng, outcome.actions)
        else:
            self._aggressive(tank, target, grid, rng, outcome.actions)

        outcome.opponents_eliminated = self._all_down(opponents)
        return outcome

    def choose_phase(
        self,
        tank: Tank,
        target: Tank,
        allies: Iterable[Tank],
        enemies: Iterable[Tank],
        turn: int,
    ) -> Phase:
        if self.phase_policy == "hp":
            return classify_phase(tank.hp_ratio, self.tactics)

        state = analyze(tank, target, allies, enemies, turn)
        threat = evaluate_threat(state, self.scoring)
        opportunity = evaluate_opportunity(state, self.scoring)
        stance = select_stance(threat, opportunity, self.scoring)
        log.debug("%s threat=%.1f opportunity=%.1f -> %s", tank.label(), threat, opportunity, stance)
        return STANCE_PHASES[stance]

    # ------------------------------------------------------------------
    # Phase handlers
    # ------------------------------------------------------------------
    def _critical(self, tank: Tank, threat: Tank, grid: Grid, actions: List[str]) -> None:
        if tank.distance_to(threat) <= self.tactics.danger_distance and tank.action_points > 0:
            self._retreat(tank, threat, grid, actions)
        if tank.action_points > 0:
            self._record(tank.repair(), actions)

    def _cautious(
        self, tank: Tank, target: Tank, grid: Grid, rng: Optional[random.Random], actions: List[str]
    ) -> None:
        self._hold_optimal_band(tank, target, grid, actions)
        if self.in_firing_range(tank, target):
            self._attack_repeatedly(tank, target, rng, actions)

    def _aggressive(
        self, tank: Tank, target: Tank, grid: Grid, rng: Optional[random.Random], actions: List[str]
    ) -> None:
        self._approach(tank, target, grid, actions)
        if self.in_firing_range(tank, target):
            self._attack_repeatedly(tank, target, rng, actions)

    # ------------------------------------------------------------------
    # Movement and fire loops
    # ------------------------------------------------------------------
    def in_firing_range(self, tank: Tank, target: Tank) -> bool:
        return tank.distance_to(target) <= tank.max_range - self.tactics.firing_range_margin

    def _hold_optimal_band(self, tank: Tank, target: Tank, grid: Grid, actions: List[str]) -> None:
        band_min = tank.max_range * self.tactics.optimal_band_min
        band_max = tank.max_range * self.tactics.optimal_band_max
        distance = tank.distance_to(target)
        if tank.action_points < tank.stats.costs.move:
            return

        if distance < band_min:
            log.debug("%s backing off (%.1f < %.1f)", tank.label(), distance, band_min)
            self._back_off(tank, target, band_min, grid, actions)
        elif distance > band_max:
            log.debug("%s closing in (%.1f > %.1f)", tank.label(), distance, band_max)
            self._approach(tank, target, grid, actions)

    def _approach(self, tank: Tank, target: Tank, grid: Grid, actions: List[str]) -> None:
        """Step toward the target until it is in firing range."""
        while tank.action_points >= tank.stats.costs.move and not self.in_firing_range(tank, target):
            destination = grid.clamp(target.pos)
            if not self._record(tank.move(destination[0], destination[1], grid), actions):
                break

    def _back_off(self, tank: Tank, target: Tank, band_min: float, grid: Grid, actions: List[str]) -> None:
        """Step away from ``target`` until it is at least ``band_min`` away."""
        while tank.action_points >= tank.stats.costs.move and tank.distance_to(target) < band_min:
            if not self._step_away(tank, target, grid, actions):
                break

    def _retreat(self, tank: Tank, threat: Tank, grid: Grid, actions: List[str]) -> None:
        """
        Step away from ``threat`` along the mirrored threat vector.

        Stops after ``max_retreat_steps`` steps, once outside the danger
        distance, or when a step is refused. Destinations stay
        ``edge_margin`` cells inside the grid.
        """
        steps = 0
        while (tank.action_points >= tank.stats.costs.move
               and tank.distance_to(threat) <= self.tactics.danger_distance
               and steps < self.tactics.max_retreat_steps):
            if not self._step_away(tank, threat, grid, actions):
                break
            steps += 1
        log.debug("%s after retreat at %s", tank.label(), tank.pos)

    def _step_away(self, tank: Tank, threat: Tank, grid: Grid, actions: List[str]) -> ActionResult:
        """One step along the mirrored threat vector, kept ``edge_margin`` inside the grid."""
        escape = (tank.x - (threat.x - tank.x), tank.y - (threat.y - tank.y))
        escape = grid.clamp(escape, margin=self.tactics.edge_margin)
        return self._record(tank.move(escape[0], escape[1], grid), actions)

    def _attack_repeatedly(
        self, tank: Tank, target: Tank, rng: Optional[random.Random], actions: List[str]
    ) -> None:
        while tank.action_points >= tank.stats.costs.attack and tank.ammo > 0 and target.alive:
            if not self._record(tank.attack(target, rng), actions):
                break

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _record(result: ActionResult, actions: List[str]) -> ActionResult:
        if result:
            actions.append(result.message)
        else:
            log.debug("refused: %s (%s)", result.message, result.error_code)
        return result

    @staticmethod
    def _all_down(opponents: Iterable[Tank]) -> bool:
        return not any(o.alive for o in opponents)
