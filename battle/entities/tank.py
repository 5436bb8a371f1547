"""
Tank - the single combat unit type.

A tank is mutated exclusively through its own operations (move, rotate,
attack, repair, reload). Every operation returns an ``ActionResult``;
refused operations leave the tank untouched and cost nothing.

Invariants:
- hp stays within [0, max_hp]; reaching 0 destroys the tank exactly once
- action_points and ammo never go negative
- a destroyed tank accepts no further mutating operations
"""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from infra.logger import get_logger
from .presets import TankStats, get_preset
from ..core.types import ActionResult, Faction, Position
from ..mechanics.combat import hit_rate, roll_damage
from ..utils.ids import next_unit_id
from ..world.grid import Grid

log = get_logger(__name__)


@dataclass(eq=False)
class Tank:
    """
    A tank on the battlefield.

    Attributes:
        faction: Owning faction
        pos: Current (x, y) cell
        stats: Class stat block (HP, attack, range, costs, ...)
        name: Display name (defaults to "<class>#<id>")
        id: Stable unique id
        hp: Current hit points (defaults to max)
        ammo: Rounds left (defaults to max)
        action_points: Budget left this turn (defaults to max)
        turret_angle: Turret heading in compass degrees, [0, 360)
        alive: False once destroyed
    """

    faction: Faction
    pos: Position
    stats: TankStats = field(default_factory=lambda: get_preset("medium"))
    name: str = ""
    id: int = field(default_factory=next_unit_id)
    hp: Optional[int] = None
    ammo: Optional[int] = None
    action_points: Optional[int] = None
    turret_angle: float = 0.0
    alive: bool = True

    def __post_init__(self):
        self.pos = (float(self.pos[0]), float(self.pos[1]))
        if self.hp is None:
            self.hp = self.stats.max_hp
        if self.ammo is None:
            self.ammo = self.stats.max_ammo
        if self.action_points is None:
            self.action_points = self.stats.max_action_points
        if not self.name:
            self.name = f"{self.stats.class_name}#{self.id}"
        if not 0 <= self.hp <= self.stats.max_hp:
            raise ValueError(f"hp must be within [0, {self.stats.max_hp}]: {self.hp}")
        if self.ammo < 0 or self.action_points < 0:
            raise ValueError("ammo and action_points cannot be negative")
        if self.hp == 0:
            self.alive = False
        self.turret_angle %= 360.0

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------
    @property
    def x(self) -> float:
        return self.pos[0]

    @property
    def y(self) -> float:
        return self.pos[1]

    @property
    def max_hp(self) -> int:
        return self.stats.max_hp

    @property
    def hp_ratio(self) -> float:
        return self.hp / self.stats.max_hp if self.stats.max_hp > 0 else 0.0

    @property
    def max_range(self) -> float:
        return self.stats.max_range

    def label(self) -> str:
        return f"{self.name}({self.faction})"

    def distance_to(self, other: Tank | Position) -> float:
        point = other.pos if isinstance(other, Tank) else other
        return Grid.distance(self.pos, point)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def move(self, target_x: float, target_y: float, grid: Grid) -> ActionResult:
        """
        Advance exactly one cell toward (target_x, target_y).

        The axis with the larger remaining distance is stepped first; ties
        step along X.
        """
        cost = self.stats.costs.move
        if not self.alive:
            return ActionResult.fail("UNIT_DEAD", f"{self.label()} is destroyed")
        if self.action_points < cost:
            return ActionResult.fail(
                "INSUFFICIENT_BUDGET",
                f"{self.label()} cannot move ({self.action_points} < {cost} AP)",
            )

        dx = target_x - self.x
        dy = target_y - self.y
        if dx == 0 and dy == 0:
            return ActionResult.fail("ALREADY_AT_TARGET", f"{self.label()} already at {self.pos}")

        if abs(dx) >= abs(dy):
            new_pos = (self.x + (1.0 if dx >= 0 else -1.0), self.y)
        else:
            new_pos = (self.x, self.y + (1.0 if dy >= 0 else -1.0))

        if not grid.in_bounds(new_pos):
            return ActionResult.fail("OUT_OF_BOUNDS", f"{self.label()} cannot leave the grid at {new_pos}")

        self.pos = new_pos
        self.action_points -= cost
        log.debug("%s moves to %s (AP %d)", self.label(), self.pos, self.action_points)
        return ActionResult.ok(f"{self.label()} moves to {self.pos}")

    def rotate(self, degrees: float) -> ActionResult:
        """Turn the turret by ``degrees``; a zero turn is free."""
        if degrees == 0:
            return ActionResult.ok(f"{self.label()} holds turret at {self.turret_angle:.0f}")
        cost = self.stats.costs.rotate
        if not self.alive:
            return ActionResult.fail("UNIT_DEAD", f"{self.label()} is destroyed")
        if self.action_points < cost:
            return ActionResult.fail(
                "INSUFFICIENT_BUDGET",
                f"{self.label()} cannot rotate ({self.action_points} < {cost} AP)",
            )

        self.turret_angle = (self.turret_angle + degrees) % 360.0
        self.action_points -= cost
        log.debug("%s turret now %.1f deg", self.label(), self.turret_angle)
        return ActionResult.ok(f"{self.label()} turret to {self.turret_angle:.0f}")

    def face(self, point: Position) -> ActionResult:
        """Rotate the turret so it points at ``point``."""
        desired = Grid.heading(self.pos, point)
        return self.rotate(desired - self.turret_angle)

    def attack(self, target: Optional[Tank], rng: Optional[random.Random] = None) -> ActionResult:
        """
        Fire one round at ``target``.

        Ammo is spent before the hit roll, and the action-point cost is paid
        whether the shot hits or misses.
        """
        cost = self.stats.costs.attack
        if not self.alive:
            return ActionResult.fail("UNIT_DEAD", f"{self.label()} is destroyed")
        if target is None or not target.alive:
            return ActionResult.fail("INVALID_TARGET", f"{self.label()} target missing or destroyed")
        if self.action_points < cost:
            return ActionResult.fail(
                "INSUFFICIENT_BUDGET",
                f"{self.label()} cannot attack ({self.action_points} < {cost} AP)",
            )
        if self.ammo <= 0:
            return ActionResult.fail("RESOURCE_EXHAUSTED", f"{self.label()} is out of ammo")

        rng = rng or random.Random()
        self.ammo -= 1

        probability = hit_rate(self, target)
        landed = rng.random() < probability
        damage = 0
        if landed:
            damage = roll_damage(self, target, rng)
            target.take_damage(damage)
        self.action_points -= cost

        log.debug(
            "%s fires at %s: p=%.2f %s dmg=%d",
            self.label(), target.label(), probability, "HIT" if landed else "miss", damage,
        )
        outcome = f"hits for {damage}" if landed else "misses"
        return ActionResult.ok(f"{self.label()} fires at {target.label()} and {outcome}", hit=landed, damage=damage)

    def take_damage(self, amount: int) -> None:
        """Apply damage; HP floors at 0 and destroys the tank."""
        if not self.alive or amount <= 0:
            return
        self.hp -= amount
        if self.hp <= 0:
            self.hp = 0
            self.alive = False
            log.info("%s destroyed", self.label())

    def repair(self) -> ActionResult:
        """
        Spend every remaining action point on repairs.

        A full budget (``costs.repair_budget`` points) restores half of max HP;
        smaller budgets heal proportionally.
        """
        if not self.alive:
            return ActionResult.fail("UNIT_DEAD", f"{self.label()} is destroyed")

        amount = self.action_points / self.stats.costs.repair_budget * self.stats.max_hp / 2
        self.hp = int(min(self.stats.max_hp, self.hp + amount))
        self.action_points = 0
        log.debug("%s repaired to %d/%d", self.label(), self.hp, self.stats.max_hp)
        return ActionResult.ok(f"{self.label()} repaired to {self.hp}/{self.stats.max_hp}")

    def reload(self, amount: int) -> ActionResult:
        """Take on ``amount`` rounds, capped at magazine capacity."""
        cost = self.stats.costs.reload
        if not self.alive:
            return ActionResult.fail("UNIT_DEAD", f"{self.label()} is destroyed")
        if self.action_points < cost:
            return ActionResult.fail(
                "INSUFFICIENT_BUDGET",
                f"{self.label()} cannot reload ({self.action_points} < {cost} AP)",
            )

        self.ammo = min(self.stats.max_ammo, self.ammo + max(0, amount))
        self.action_points -= cost
        log.debug("%s reloaded (ammo %d)", self.label(), self.ammo)
        return ActionResult.ok(f"{self.label()} reloaded to {self.ammo}")

    def reset_action_points(self) -> None:
        """Refill the turn budget (called by the turn loop at turn start)."""
        if self.alive:
            self.action_points = self.stats.max_action_points

    # ------------------------------------------------------------------
    # Copies and serialization
    # ------------------------------------------------------------------
    def clone(self) -> Tank:
        """Disposable deep copy with the same id, for lookahead."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Read-only snapshot for rendering and logs."""
        return {
            "id": self.id,
            "name": self.name,
            "faction": self.faction.name,
            "class_name": self.stats.class_name,
            "pos": list(self.pos),
            "hp": self.hp,
            "max_hp": self.stats.max_hp,
            "ammo": self.ammo,
            "max_ammo": self.stats.max_ammo,
            "action_points": self.action_points,
            "turret_angle": self.turret_angle,
            "alive": self.alive,
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Tank:
        return cls(
            faction=Faction[data["faction"]],
            pos=tuple(data["pos"]),
            stats=TankStats.from_dict(data["stats"]),
            name=data["name"],
            id=data["id"],
            hp=data["hp"],
            ammo=data["ammo"],
            action_points=data["action_points"],
            turret_angle=data["turret_angle"],
            alive=data["alive"],
        )

    def __str__(self) -> str:
        state = "active" if self.alive else "destroyed"
        return (f"{self.label()} HP {self.hp}/{self.stats.max_hp} AP {self.action_points} "
                f"ammo {self.ammo} at {self.pos} [{state}]")
