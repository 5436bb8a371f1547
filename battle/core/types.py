"""
Core type definitions for the tank battle simulation.

This module contains the fundamental types, enums, and result records used
throughout the system. No logic, just pure data structures.
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Tuple
from dataclasses import dataclass

# ============================================================================
# SPATIAL TYPES
# ============================================================================

# Position: (x, y) on an integer grid, stored as floats.
# - X increases to the RIGHT
# - Y increases DOWNWARD (screen convention, row 0 at the top)
Position = Tuple[float, float]


class Faction(Enum):
    """Faction affiliation for units."""
    BLUE = "BLUE"
    RED = "RED"

    def __str__(self) -> str:
        return self.value

    @property
    def opponent(self) -> Faction:
        """Get the opposing faction."""
        return Faction.RED if self == Faction.BLUE else Faction.BLUE


# ============================================================================
# ACTIONS
# ============================================================================

class ActionType(Enum):
    """Types of operations a unit can perform."""
    MOVE = auto()  # Step one cell toward a point
    ROTATE = auto()  # Turn the turret
    ATTACK = auto()  # Fire at a target
    REPAIR = auto()  # Spend the remaining budget on repairs
    RELOAD = auto()  # Take on ammunition

    def __str__(self) -> str:
        return self.name


# ============================================================================
# BEHAVIOUR
# ============================================================================

class Phase(Enum):
    """HP-derived behaviour bucket for one unit turn. Never persisted."""
    CRITICAL = "critical"
    CAUTIOUS = "cautious"
    AGGRESSIVE = "aggressive"

    def __str__(self) -> str:
        return self.value


class Stance(Enum):
    """Score-derived posture (threat minus opportunity)."""
    DEFENSIVE = "defensive"
    BALANCED = "balanced"
    OFFENSIVE = "offensive"

    def __str__(self) -> str:
        return self.value


# ============================================================================
# BATTLE RESULT
# ============================================================================

class BattleResult(Enum):
    """Possible battle outcomes."""
    IN_PROGRESS = "in_progress"
    BLUE_WINS = "blue_wins"
    RED_WINS = "red_wins"
    DRAW = "draw"

    def __str__(self) -> str:
        return self.value.replace("_", " ").title()


# ============================================================================
# ACTION RESULTS
# ============================================================================

@dataclass
class ActionResult:
    """
    Structured result of a unit operation.

    Gameplay failures are reported through this record instead of being
    raised, so turn loops can simply stop when an operation is refused.

    Attributes:
        success: Whether the operation was applied
        error_code: Machine-readable error code (None on success)
        message: Human-readable message explaining the result
        hit: For attacks that were carried out, whether the shot landed
        damage: Damage dealt by a successful hit (0 otherwise)

    Error codes:
        - "UNIT_DEAD": Acting unit is destroyed
        - "INSUFFICIENT_BUDGET": Not enough action points for the operation
        - "INVALID_TARGET": Attack target is missing or destroyed
        - "RESOURCE_EXHAUSTED": No ammunition left
        - "OUT_OF_BOUNDS": Step would leave the grid
        - "ALREADY_AT_TARGET": Move requested onto the current cell
        - "UNKNOWN_UNIT": Command refers to an id not on the battlefield
    """
    success: bool
    error_code: str | None = None
    message: str = ""
    hit: bool | None = None
    damage: int = 0

    def __bool__(self) -> bool:
        return self.success

    @staticmethod
    def ok(message: str = "", *, hit: bool | None = None, damage: int = 0) -> ActionResult:
        """Create a success result."""
        return ActionResult(success=True, error_code=None, message=message, hit=hit, damage=damage)

    @staticmethod
    def fail(error_code: str, message: str) -> ActionResult:
        """Create a failure result."""
        return ActionResult(success=False, error_code=error_code, message=message)
