"""
Battle state snapshot - what one unit knows at a decision point.

``analyze`` flattens the unit model into a frozen record that the scoring
functions read. A snapshot is built fresh for every evaluation and thrown
away afterwards.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional

from battle.core.types import Position
from battle.entities.tank import Tank
from battle.world.grid import Grid

# Distance reported when there is no target to measure against
NO_TARGET_DISTANCE = 1.0


@dataclass(frozen=True)
class BattleStateSnapshot:
    """
    Read-only view of self, target, allies and scenario for one decision.

    Target fields are neutral defaults when ``has_target`` is False and must
    not be read as real measurements in that case.
    """

    # Self
    self_hp_ratio: float
    self_action_points: int
    self_range: float
    self_position: Position
    self_turret_angle: float

    # Target
    has_target: bool
    target_hp_ratio: float
    target_distance: float
    target_bearing: float
    target_in_range: bool

    # Allies (living, excluding self)
    allies_alive: int
    distance_rank: int
    nearest_ally_distance: float
    ally_mean_hp_ratio: float

    # Scenario
    turn_number: int
    total_enemies: int
    enemies_alive: int

    @property
    def distance_ratio(self) -> float:
        """Target distance as a fraction of own weapon range (0 when range <= 0)."""
        if self.self_range <= 0:
            return 0.0
        return self.target_distance / self.self_range

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["self_position"] = list(self.self_position)
        return data


def _hp_ratio(unit: Tank) -> float:
    return unit.hp / unit.max_hp if unit.max_hp > 0 else 0.0


def relative_bearing(target: Tank, observer: Tank) -> float:
    """
    Angle between ``target``'s turret and the line from ``target`` to ``observer``.

    Returned in (-180, 180]; 0 means the observer sits dead ahead of the
    turret, 180 means directly behind it.
    """
    toward_observer = Grid.heading(target.pos, observer.pos)
    bearing = (toward_observer - target.turret_angle) % 360.0
    if bearing > 180.0:
        bearing -= 360.0
    return bearing


def distance_rank(self_unit: Tank, target: Optional[Tank], allies: Iterable[Tank]) -> int:
    """1 + number of living allies strictly closer to ``target`` than self."""
    if target is None:
        return 1
    own = self_unit.distance_to(target)
    closer = sum(
        1 for ally in allies
        if ally is not self_unit and ally.alive and ally.distance_to(target) < own
    )
    return 1 + closer


def analyze(
    self_unit: Tank,
    target: Optional[Tank],
    allies: Iterable[Tank],
    enemies: Iterable[Tank],
    turn_number: int,
) -> BattleStateSnapshot:
    """
    Build a snapshot for ``self_unit`` facing ``target``.

    Args:
        self_unit: The deciding unit
        target: Selected opponent, or None
        allies: Friendly units (self is ignored if present; dead ones are skipped)
        enemies: Every opposing unit, living or dead
        turn_number: Current round
    """
    living_allies = [a for a in allies if a is not self_unit and a.alive]
    enemies = list(enemies)

    if target is not None:
        distance = self_unit.distance_to(target)
        target_fields = dict(
            has_target=True,
            target_hp_ratio=_hp_ratio(target),
            target_distance=distance,
            target_bearing=relative_bearing(target, self_unit),
            target_in_range=distance <= self_unit.max_range,
        )
    else:
        target_fields = dict(
            has_target=False,
            target_hp_ratio=0.0,
            target_distance=NO_TARGET_DISTANCE,
            target_bearing=0.0,
            target_in_range=False,
        )

    if living_allies:
        nearest = min(self_unit.distance_to(a) for a in living_allies)
        rated = [_hp_ratio(a) for a in living_allies if a.max_hp > 0]
        mean_hp = sum(rated) / len(rated) if rated else 0.0
    else:
        nearest = 0.0
        mean_hp = 0.0

    return BattleStateSnapshot(
        self_hp_ratio=_hp_ratio(self_unit),
        self_action_points=self_unit.action_points,
        self_range=self_unit.max_range,
        self_position=self_unit.pos,
        self_turret_angle=self_unit.turret_angle,
        allies_alive=len(living_allies),
        distance_rank=distance_rank(self_unit, target, living_allies),
        nearest_ally_distance=nearest,
        ally_mean_hp_ratio=mean_hp,
        turn_number=turn_number,
        total_enemies=len(enemies),
        enemies_alive=sum(1 for e in enemies if e.alive),
        **target_fields,
    )
