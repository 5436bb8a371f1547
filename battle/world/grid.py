"""
Grid - Spatial logic for the battle simulation.

The Grid handles:
- Coordinate validation
- Distance and heading calculations
- Clamping points into the playable area

Coordinate System:
- X increases to the RIGHT
- Y increases DOWNWARD (row 0 is the top edge)
- Headings are compass degrees: 0 points up (toward -Y), 90 points right
"""

from __future__ import annotations
import math
from ..core.types import Position


class Grid:
    """
    A square-celled battlefield grid.

    Provides spatial queries and calculations without game logic or state.

    Attributes:
        width: Grid width (X dimension, in cells)
        height: Grid height (Y dimension, in cells)
    """

    def __init__(self, width: int, height: int):
        """
        Initialize a grid.

        Args:
            width: Grid width (must be positive)
            height: Grid height (must be positive)

        Raises:
            ValueError: If dimensions are invalid
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive: {width}x{height}")

        self.width = width
        self.height = height

    @property
    def max_x(self) -> int:
        """Largest valid X coordinate."""
        return self.width - 1

    @property
    def max_y(self) -> int:
        """Largest valid Y coordinate."""
        return self.height - 1

    def in_bounds(self, pos: Position) -> bool:
        """
        Check if a position is within grid boundaries.

        Args:
            pos: Position to check (x, y)

        Returns:
            True if position is valid, False otherwise
        """
        x, y = pos
        return 0 <= x <= self.max_x and 0 <= y <= self.max_y

    def clamp(self, pos: Position, margin: float = 0.0) -> Position:
        """
        Clamp a point into the grid, keeping ``margin`` cells from every edge.

        Args:
            pos: Point to clamp (may lie outside the grid)
            margin: Cells to keep clear of each boundary

        Returns:
            The clamped point
        """
        x, y = pos
        x = max(margin, min(self.max_x - margin, x))
        y = max(margin, min(self.max_y - margin, y))
        return (x, y)

    @staticmethod
    def distance(a: Position, b: Position) -> float:
        """
        Calculate Euclidean distance between two positions.

        Args:
            a: First position (x, y)
            b: Second position (x, y)

        Returns:
            Euclidean distance as a float
        """
        return math.hypot(a[0] - b[0], a[1] - b[1])

    @staticmethod
    def heading(origin: Position, toward: Position) -> float:
        """
        Compass heading from ``origin`` to ``toward`` in [0, 360).

        Uses atan2, so coincident points and vertical lines are safe
        (coincident points yield 0).
        """
        dx = toward[0] - origin[0]
        dy = toward[1] - origin[1]
        if dx == 0 and dy == 0:
            return 0.0
        return math.degrees(math.atan2(dx, -dy)) % 360.0

    def __str__(self) -> str:
        """String representation."""
        return f"Grid({self.width}x{self.height})"

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"Grid(width={self.width}, height={self.height})"
