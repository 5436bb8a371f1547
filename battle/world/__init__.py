"""
World state for the tank battle simulation.

This module provides:
- Grid: Spatial logic and geometry
- Battlefield: The unit arena
"""

from .grid import Grid
from .battlefield import Battlefield

__all__ = [
    "Grid",
    "Battlefield",
]
