"""
Scenario description - grid, seed, unit placements and controllers.

A scenario is plain data that round-trips through JSON. ``build_battlefield``
turns it into a live ``Battlefield``; ``build_controllers`` instantiates
one controller per faction through the registry.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from battle.core.types import Faction, Position
from battle.entities.presets import get_preset
from battle.entities.tank import Tank
from battle.world.battlefield import Battlefield
from controllers import BaseController, ControllerSpec, create_controller_from_spec

DEFAULT_CONTROLLER = "rule_based"


@dataclass
class UnitPlacement:
    """
    One tank to deploy.

    Attributes:
        preset: Stat preset name (light, medium, heavy)
        faction: Owning faction
        pos: Starting cell
        name: Display name (defaults to "<class>#<id>")
        overrides: TankStats fields to replace on top of the preset
    """
    preset: str
    faction: Faction
    pos: Position
    name: str = ""
    overrides: Dict[str, Any] = field(default_factory=dict)

    def build(self) -> Tank:
        stats = get_preset(self.preset)
        if self.overrides:
            stats = stats.with_overrides(**self.overrides)
        return Tank(faction=self.faction, pos=self.pos, stats=stats, name=self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "preset": self.preset,
            "faction": self.faction.name,
            "pos": list(self.pos),
            "name": self.name,
            "overrides": dict(self.overrides),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> UnitPlacement:
        return cls(
            preset=data["preset"],
            faction=Faction[data["faction"]],
            pos=tuple(data["pos"]),
            name=data.get("name", ""),
            overrides=data.get("overrides", {}) or {},
        )


@dataclass
class Scenario:
    """
    Everything needed to start a battle.

    Attributes:
        grid_width: Grid width in cells
        grid_height: Grid height in cells
        max_rounds: Round limit before a draw (None = unlimited)
        seed: Seed for the battlefield's random source
        units: Tanks to deploy, in order
        controllers: At most one controller spec per faction
    """
    grid_width: int = 20
    grid_height: int = 20
    max_rounds: Optional[int] = 100
    seed: Optional[int] = None
    units: List[UnitPlacement] = field(default_factory=list)
    controllers: List[ControllerSpec] = field(default_factory=list)

    def controller_spec(self, faction: Faction) -> ControllerSpec:
        """Spec for ``faction``; factions without one get the rule-based controller."""
        for spec in self.controllers:
            if spec.faction == faction:
                return spec
        return ControllerSpec(type=DEFAULT_CONTROLLER, faction=faction)

    def apply_phase_policy(self, policy: str) -> None:
        """
        Give every rule-based controller without its own ``phase_policy``
        the given one. Factions with no spec get a rule-based spec carrying it.
        """
        specs = []
        for faction in Faction:
            spec = self.controller_spec(faction)
            if spec.type == DEFAULT_CONTROLLER:
                spec.init_params.setdefault("phase_policy", policy)
            specs.append(spec)
        self.controllers = specs

    def build_battlefield(self) -> Battlefield:
        battlefield = Battlefield(self.grid_width, self.grid_height, seed=self.seed)
        for placement in self.units:
            battlefield.add_tank(placement.build())
        return battlefield

    def build_controllers(self) -> Dict[Faction, BaseController]:
        return {faction: create_controller_from_spec(self.controller_spec(faction)) for faction in Faction}

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid_width": self.grid_width,
            "grid_height": self.grid_height,
            "max_rounds": self.max_rounds,
            "seed": self.seed,
            "units": [u.to_dict() for u in self.units],
            "controllers": [c.to_dict() for c in self.controllers],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Scenario:
        return cls(
            grid_width=data.get("grid_width", 20),
            grid_height=data.get("grid_height", 20),
            max_rounds=data.get("max_rounds", 100),
            seed=data.get("seed"),
            units=[UnitPlacement.from_dict(u) for u in data.get("units", [])],
            controllers=[ControllerSpec.from_dict(c) for c in data.get("controllers", [])],
        )

    def save_json(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_json(cls, path: str | Path) -> Scenario:
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def clone(self) -> Scenario:
        return copy.deepcopy(self)


def default_skirmish(
    seed: Optional[int] = None,
    max_rounds: Optional[int] = 100,
    phase_policy: str = "hp",
) -> Scenario:
    """
    One BLUE heavy against three RED tanks in the corners of a 20x20 grid.

    BLUE plays under the manual controller when driven by a UI; headless
    runs give both sides the rule-based controller.
    """
    params = {"phase_policy": phase_policy}
    return Scenario(
        grid_width=20,
        grid_height=20,
        max_rounds=max_rounds,
        seed=seed,
        units=[
            UnitPlacement("heavy", Faction.BLUE, (3, 3), name="Tiger"),
            UnitPlacement("medium", Faction.RED, (16, 3), name="Sherman-1"),
            UnitPlacement("heavy", Faction.RED, (3, 16), name="Sherman-2"),
            UnitPlacement("medium", Faction.RED, (16, 16), name="Sherman-3"),
        ],
        controllers=[
            ControllerSpec(type="rule_based", faction=Faction.BLUE, name="Blue Rules", init_params=dict(params)),
            ControllerSpec(type="rule_based", faction=Faction.RED, name="Red Rules", init_params=dict(params)),
        ],
    )
