"""
Utility helpers for the tank battle simulation.
"""

from .ids import (
    UnitIdGenerator,
    next_unit_id,
    reset_unit_ids,
)

__all__ = [
    "UnitIdGenerator",
    "next_unit_id",
    "reset_unit_ids",
]
