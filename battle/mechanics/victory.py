"""
Victory condition checking.

Pure logic for determining battle outcomes:
- Faction elimination (every tank of a side destroyed)
- Round limit (the battle is called a draw)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..core.types import BattleResult, Faction

if TYPE_CHECKING:
    from ..world.battlefield import Battlefield


@dataclass
class VictoryResult:
    """
    Result of a victory condition check.

    Attributes:
        result: Battle outcome (IN_PROGRESS, BLUE_WINS, RED_WINS, DRAW)
        reason: Human-readable explanation of the outcome
        winner: Winning faction (None if draw or in progress)
    """
    result: BattleResult
    reason: str
    winner: Optional[Faction] = None

    @property
    def is_over(self) -> bool:
        return self.result != BattleResult.IN_PROGRESS

    def __str__(self) -> str:
        if self.result == BattleResult.IN_PROGRESS:
            return "Battle in progress"
        return f"{self.result}: {self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.name,
            "reason": self.reason,
            "winner": self.winner.name if self.winner else None,
        }


def is_eliminated(battlefield: Battlefield, faction: Faction) -> bool:
    """True when ``faction`` has no living tanks left."""
    return not battlefield.get_faction_tanks(faction, alive_only=True)


def check_elimination(battlefield: Battlefield) -> VictoryResult:
    """
    Check whether either side has been wiped out.

    Both sides gone is a draw; one side gone hands victory to the other.
    """
    blue_out = is_eliminated(battlefield, Faction.BLUE)
    red_out = is_eliminated(battlefield, Faction.RED)

    if blue_out and red_out:
        return VictoryResult(BattleResult.DRAW, "Both sides destroyed")
    if blue_out:
        return VictoryResult(BattleResult.RED_WINS, "BLUE eliminated - RED WINS", Faction.RED)
    if red_out:
        return VictoryResult(BattleResult.BLUE_WINS, "RED eliminated - BLUE WINS", Faction.BLUE)
    return VictoryResult(BattleResult.IN_PROGRESS, "Both sides fighting")


def check_round_limit(round_number: int, max_rounds: Optional[int]) -> VictoryResult:
    """Call a draw once ``round_number`` exceeds ``max_rounds``."""
    if max_rounds is not None and round_number > max_rounds:
        return VictoryResult(BattleResult.DRAW, f"Round limit reached ({max_rounds})")
    return VictoryResult(BattleResult.IN_PROGRESS, "Within round limit")
