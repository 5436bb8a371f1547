"""
Movement lookahead.

Projects where a unit would end up if it spent its budget walking toward a
point, without touching the real unit. The rule-based controller uses the
projection to report kill odds for the coming engagement.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from .combat import hit_rate, single_shot_kill_pct, two_shot_kill_pct
from ..core.types import Position

if TYPE_CHECKING:
    from ..entities.tank import Tank
    from ..world.grid import Grid


@dataclass(frozen=True)
class EngagementProjection:
    """
    Combat odds after a simulated approach.

    Attributes:
        position: Where the attacker would stand
        action_points: Budget the attacker would have left
        distance: Distance to the target from the projected position
        hit_rate: Single-shot hit probability from there
        single_shot_kill_pct: Odds (0-100) of a one-shot kill
        two_shot_kill_pct: Odds (0-100) of a kill within two shots
    """
    position: Position
    action_points: int
    distance: float
    hit_rate: float
    single_shot_kill_pct: int
    two_shot_kill_pct: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": list(self.position),
            "action_points": self.action_points,
            "distance": self.distance,
            "hit_rate": self.hit_rate,
            "single_shot_kill_pct": self.single_shot_kill_pct,
            "two_shot_kill_pct": self.two_shot_kill_pct,
        }


def simulate_approach(
    unit: Tank,
    destination: Position,
    grid: Grid,
    reserve: Optional[int] = None,
) -> Tank:
    """
    Walk a disposable copy of ``unit`` toward ``destination``.

    Steps one cell at a time until the copy's action points drop to
    ``reserve`` (default: the attack cost, so a shot is still affordable)
    or a step is refused.

    Returns:
        The moved copy; ``unit`` itself is never modified.
    """
    ghost = unit.clone()
    floor = ghost.stats.costs.attack if reserve is None else reserve
    while ghost.action_points > floor:
        if not ghost.move(destination[0], destination[1], grid):
            break
    return ghost


def project_engagement(
    attacker: Tank,
    target: Tank,
    grid: Grid,
    reserve: Optional[int] = None,
) -> EngagementProjection:
    """Kill odds for ``attacker`` after closing in on ``target``."""
    ghost = simulate_approach(attacker, target.pos, grid, reserve)
    return EngagementProjection(
        position=ghost.pos,
        action_points=ghost.action_points,
        distance=ghost.distance_to(target),
        hit_rate=hit_rate(ghost, target),
        single_shot_kill_pct=single_shot_kill_pct(ghost, target),
        two_shot_kill_pct=two_shot_kill_pct(ghost, target),
    )
