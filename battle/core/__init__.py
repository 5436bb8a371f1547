"""
Core types and commands for the tank battle simulation.
"""

from .types import (
    Position,
    Faction,
    ActionType,
    Phase,
    Stance,
    BattleResult,
    ActionResult,
)
from .actions import Action


__all__ = [
    "Position",
    "Faction",
    "ActionType",
    "Phase",
    "Stance",
    "BattleResult",
    "ActionResult",
    "Action",
]
