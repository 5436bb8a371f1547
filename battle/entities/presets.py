"""
Tank stat records and named presets.

Every tank class differs only by data, so a single ``Tank`` type is
parameterized by a ``TankStats`` record instead of one subclass per model.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict


@dataclass(frozen=True)
class ActionCosts:
    """Action-point price of each unit operation."""
    move: int = 1
    rotate: int = 1
    attack: int = 4
    reload: int = 2
    repair_budget: int = 8  # spending this many points repairs 50% of max HP

    def __post_init__(self):
        for name in ("move", "rotate", "attack", "reload", "repair_budget"):
            if getattr(self, name) <= 0:
                raise ValueError(f"Action cost '{name}' must be positive: {getattr(self, name)}")


@dataclass(frozen=True)
class TankStats:
    """
    Immutable stat block shared by every tank of a class.

    Attributes:
        class_name: Display name of the tank class
        max_hp: Hit points at full health
        attack: Attack power fed into the damage model
        defense: Defense rating (reserved, not used by the damage model)
        max_range: Weapon maximum range in cells
        no_miss_radius: Distance at or below which every shot hits
        max_ammo: Magazine capacity
        max_action_points: Per-turn action budget
        damage_variance: Fractional spread applied to base damage
        costs: Action-point prices
    """
    class_name: str
    max_hp: int
    attack: int
    defense: int
    max_range: float = 12.0
    no_miss_radius: float = 2.0
    max_ammo: int = 50
    max_action_points: int = 8
    damage_variance: float = 0.25
    costs: ActionCosts = field(default_factory=ActionCosts)

    def __post_init__(self):
        if self.max_hp <= 0:
            raise ValueError(f"max_hp must be positive: {self.max_hp}")
        if self.attack < 0:
            raise ValueError(f"attack cannot be negative: {self.attack}")
        if self.max_range < 0:
            raise ValueError(f"max_range cannot be negative: {self.max_range}")
        if self.no_miss_radius < 0:
            raise ValueError(f"no_miss_radius cannot be negative: {self.no_miss_radius}")
        if self.max_ammo < 0:
            raise ValueError(f"max_ammo cannot be negative: {self.max_ammo}")
        if self.max_action_points < 0:
            raise ValueError(f"max_action_points cannot be negative: {self.max_action_points}")
        if not 0.0 <= self.damage_variance <= 1.0:
            raise ValueError(f"damage_variance must be within [0, 1]: {self.damage_variance}")

    def with_overrides(self, **overrides: Any) -> TankStats:
        """Return a copy with some stats replaced (e.g. a longer gun)."""
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class_name": self.class_name,
            "max_hp": self.max_hp,
            "attack": self.attack,
            "defense": self.defense,
            "max_range": self.max_range,
            "no_miss_radius": self.no_miss_radius,
            "max_ammo": self.max_ammo,
            "max_action_points": self.max_action_points,
            "damage_variance": self.damage_variance,
            "costs": {
                "move": self.costs.move,
                "rotate": self.costs.rotate,
                "attack": self.costs.attack,
                "reload": self.costs.reload,
                "repair_budget": self.costs.repair_budget,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TankStats:
        data = dict(data)
        costs = ActionCosts(**data.pop("costs", {}))
        return cls(costs=costs, **data)


PRESETS: Dict[str, TankStats] = {
    "light": TankStats(class_name="Light Tank", max_hp=800, attack=15, defense=5),
    "medium": TankStats(class_name="Medium Tank", max_hp=2000, attack=20, defense=10),
    "heavy": TankStats(class_name="Heavy Tank", max_hp=2500, attack=7, defense=15),
}


def get_preset(name: str) -> TankStats:
    """
    Look up a named stat preset.

    Raises:
        ValueError: If the preset does not exist
    """
    key = name.lower()
    if key not in PRESETS:
        raise ValueError(f"Unknown tank preset '{name}'. Available: {sorted(PRESETS)}")
    return PRESETS[key]
