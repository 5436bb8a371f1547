from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from battle.core.types import Faction


@dataclass
class ControllerSpec:
    """
    Serializable description of a controller.

    Scenario files carry one spec per faction so that controllers can be
    instantiated dynamically through the registry.
    """
    type: str
    faction: Faction
    name: Optional[str] = None
    init_params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "type": self.type,
            "faction": self.faction.name,
            "name": self.name,
            "init_params": self.init_params,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ControllerSpec":
        """Construct from a dict (e.g., loaded from JSON)."""
        faction_raw = data.get("faction")
        if faction_raw is None:
            raise ValueError("ControllerSpec requires 'faction'")
        faction = Faction[faction_raw] if isinstance(faction_raw, str) else faction_raw
        return cls(
            type=data["type"],
            faction=faction,
            name=data.get("name"),
            init_params=data.get("init_params", {}) or {},
        )
