"""
Base controller interface for the tank battle simulation.

A controller decides and executes one unit's turn. The runner hands it the
battlefield and the unit whose turn it is; the controller mutates units
only through their own operations and reports back with a ``TurnOutcome``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from battle.core.types import Faction, Phase
from battle.entities.tank import Tank
from battle.mechanics.movement import EngagementProjection
from battle.world.battlefield import Battlefield


@dataclass
class TurnOutcome:
    """
    What happened during one unit's turn.

    Attributes:
        unit_id: The unit that acted
        phase: Behaviour phase used (None for controllers without phases)
        target_id: Selected target, if any
        actions: Human-readable log of executed operations
        opponents_eliminated: True when no opposing unit is left alive
        lookahead: Projected engagement odds against the target, if computed
    """
    unit_id: int
    phase: Optional[Phase] = None
    target_id: Optional[int] = None
    actions: List[str] = field(default_factory=list)
    opponents_eliminated: bool = False
    lookahead: Optional[EngagementProjection] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_id": self.unit_id,
            "phase": self.phase.value if self.phase else None,
            "target_id": self.target_id,
            "actions": list(self.actions),
            "opponents_eliminated": self.opponents_eliminated,
            "lookahead": self.lookahead.to_dict() if self.lookahead else None,
        }


class BaseController(ABC):
    """
    Abstract base class for all controllers.

    Subclasses must implement:
    - take_turn(): Decide and execute one unit's turn

    Attributes:
        faction: The faction this controller plays for
        name: Controller name for logging/identification
    """

    def __init__(self, faction: Faction, name: str = None):
        self.faction = faction
        self.name = name or self.__class__.__name__

    @abstractmethod
    def take_turn(self, battlefield: Battlefield, tank: Tank) -> TurnOutcome:
        """
        Run ``tank``'s turn on ``battlefield``.

        The runner has already refilled the unit's action points. The
        controller keeps acting until it has nothing left to do or the
        budget runs out, then returns.
        """
        pass

    def reset(self) -> None:
        """
        Reset controller state between battles.

        Override if the controller keeps state across turns.
        """
        pass

    def __str__(self) -> str:
        return f"{self.name} ({self.faction.name})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(faction={self.faction.name}, name='{self.name}')"
