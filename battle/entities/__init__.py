"""
Unit definitions for the tank battle simulation.

- Tank: the single unit type
- TankStats / ActionCosts: stat records
- PRESETS / get_preset: named stat blocks (light, medium, heavy)
"""

from .presets import ActionCosts, TankStats, PRESETS, get_preset
from .tank import Tank

__all__ = [
    "ActionCosts",
    "TankStats",
    "PRESETS",
    "get_preset",
    "Tank",
]
