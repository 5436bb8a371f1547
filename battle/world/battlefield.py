"""
Battlefield - the unit arena.

The Battlefield:
- Owns the grid and every deployed tank, keyed by stable id
- Answers faction / ally / opponent queries for controllers
- Holds the seeded random source used to resolve attacks
- Tracks the round counter

It does NOT decide anything: turn logic lives in controllers and the
runtime runner. Iteration always goes through ids, so a tank dying during
a turn never shifts anyone else's handle.
"""

from __future__ import annotations

import random
from typing import Any, Dict, Iterator, List, Optional, TYPE_CHECKING

from .grid import Grid
from ..core.types import Faction

if TYPE_CHECKING:
    from ..entities.tank import Tank


class Battlefield:
    """
    The central battle state.

    Attributes:
        grid: Spatial grid
        rng: Random source for attack resolution
        turn: Current round number (starts at 1)
    """

    def __init__(self, width: int, height: int, seed: Optional[int] = None):
        """
        Initialize an empty battlefield.

        Args:
            width: Grid width
            height: Grid height
            seed: Random seed for reproducible attack rolls
        """
        self.grid = Grid(width, height)
        self._units: Dict[int, Tank] = {}
        self.rng = random.Random(seed)
        self.turn: int = 1

    # ========================================================================
    # UNIT MANAGEMENT
    # ========================================================================

    def add_tank(self, tank: Tank) -> int:
        """
        Deploy a tank.

        Returns:
            The tank's id

        Raises:
            ValueError: If the position is out of bounds or the id is taken
        """
        if not self.grid.in_bounds(tank.pos):
            raise ValueError(f"Tank position out of bounds: {tank.pos}")
        if tank.id in self._units:
            raise ValueError(f"Duplicate unit id: {tank.id}")
        self._units[tank.id] = tank
        return tank.id

    def get_tank(self, unit_id: int) -> Optional[Tank]:
        return self._units.get(unit_id)

    def unit_ids(self, faction: Optional[Faction] = None) -> List[int]:
        """Ids in deployment order, optionally filtered by faction."""
        return [uid for uid, t in self._units.items() if faction is None or t.faction == faction]

    def get_faction_tanks(self, faction: Faction, alive_only: bool = True) -> List[Tank]:
        tanks = [t for t in self._units.values() if t.faction == faction]
        if alive_only:
            tanks = [t for t in tanks if t.alive]
        return tanks

    def allies_of(self, tank: Tank, alive_only: bool = False) -> List[Tank]:
        """Same-faction tanks, excluding ``tank`` itself."""
        return [t for t in self.get_faction_tanks(tank.faction, alive_only) if t.id != tank.id]

    def opponents_of(self, tank: Tank, alive_only: bool = True) -> List[Tank]:
        return self.get_faction_tanks(tank.faction.opponent, alive_only)

    def __iter__(self) -> Iterator[Tank]:
        return iter(list(self._units.values()))

    def __len__(self) -> int:
        return len(self._units)

    # ========================================================================
    # SNAPSHOTS
    # ========================================================================

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view for renderers: grid size, round and every tank."""
        return {
            "grid": {"width": self.grid.width, "height": self.grid.height},
            "turn": self.turn,
            "units": [tank.to_dict() for tank in self._units.values()],
        }

    def clone(self) -> Battlefield:
        """Independent copy (tanks and random state included)."""
        from ..entities.tank import Tank

        copy = Battlefield(self.grid.width, self.grid.height)
        copy.rng.setstate(self.rng.getstate())
        copy.turn = self.turn
        for tank in self._units.values():
            copy._units[tank.id] = Tank.from_dict(tank.to_dict())
        return copy

    def __str__(self) -> str:
        alive = sum(1 for t in self._units.values() if t.alive)
        return f"Battlefield(turn={self.turn}, units={alive}/{len(self._units)}, grid={self.grid})"
